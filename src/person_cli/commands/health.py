"""
Health check command.

Implements 'person-cli ping' against the service health endpoint.
"""

from ..http import HTTPClient
from ..render import Renderer


def ping_command(http_client: HTTPClient, renderer: Renderer) -> int:
    """Ping the Person Service health endpoint."""
    try:
        response = http_client.get("/health")
        response.raise_for_status()
    except Exception as e:
        renderer.print_error(f"Health check failed: {e}")
        return 2

    if renderer.json_output:
        renderer.print_json({"status": response.text})
    else:
        renderer.print_success(f"Person Service is healthy ({response.text})")
    return 0
