"""Command-line client for the Person Service HTTP API."""

__version__ = "0.1.0"
