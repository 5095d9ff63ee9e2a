"""
Person Service - In-memory person registry exposed over HTTP.

This package provides:
- A reader/writer locked in-memory person store
- CRUD endpoints for person records
- Health, landing page and metrics endpoints
"""

__version__ = "0.1.0"
