"""Landing page endpoint."""

from datetime import datetime, timezone

from fastapi import APIRouter, Request
from fastapi.responses import HTMLResponse

router = APIRouter()


def render_landing_page(greeting_text: str, now: datetime) -> str:
    """Render the landing page HTML for ``greeting_text`` at ``now``."""
    return f"Python-FastAPI {greeting_text} <br> Current UTC time: {now.isoformat()}"


@router.get("/", response_class=HTMLResponse)
def landing_page(request: Request) -> HTMLResponse:
    """Greeting with the current UTC time."""
    greeting_text = request.app.state.config.greeting_text
    return HTMLResponse(render_landing_page(greeting_text, datetime.now(timezone.utc)))
