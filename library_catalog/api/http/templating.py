"""Jinja2 template setup and error page rendering."""

from pathlib import Path

from fastapi import Request
from fastapi.templating import Jinja2Templates
from starlette.responses import Response

from library_catalog.runtime.config.config_data import ConfigData

TEMPLATES_DIR = Path(__file__).parent / "templates"
STATIC_DIR = Path(__file__).parent / "static"


def create_templates(config: ConfigData) -> Jinja2Templates:
    templates = Jinja2Templates(directory=str(TEMPLATES_DIR))
    templates.env.globals["site_title"] = config.app.title
    return templates


def render_error_page(
    request: Request,
    status_code: int,
    message: str,
    headers: dict[str, str] | None = None,
) -> Response:
    """Render the shared error page for ``status_code``."""
    templates: Jinja2Templates = request.app.state.templates
    template = "page-not-found.html" if status_code == 404 else "error.html"
    if status_code == 404:
        title = "Page Not Found"
    elif status_code >= 500:
        title = "Server Error"
    else:
        title = "Error"
    return templates.TemplateResponse(
        request,
        template,
        {
            "title": title,
            "error": {"status": status_code, "message": message},
        },
        status_code=status_code,
        headers=headers,
    )
