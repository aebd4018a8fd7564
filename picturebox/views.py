from pathlib import Path

from fastapi import Request
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates

from picturebox.models.upload import GalleryImage
from picturebox.services.storage import UPLOAD_FIELD

EMPTY_GALLERY_MESSAGE = "No pictures uploaded yet. Upload your first picture above!"

# Autoescaping is on for every template Jinja2Templates loads.
templates = Jinja2Templates(directory=Path(__file__).parent / "templates")


def render_home(request: Request, app_name: str) -> HTMLResponse:
    return templates.TemplateResponse(request, "home.html", {"app_name": app_name})


def render_pictures(
    request: Request,
    app_name: str,
    images: list[GalleryImage],
    error: str | None = None,
    status_code: int = 200,
) -> HTMLResponse:
    return templates.TemplateResponse(
        request,
        "pictures.html",
        {
            "app_name": app_name,
            "images": images,
            "error": error,
            "upload_field": UPLOAD_FIELD,
            "empty_message": EMPTY_GALLERY_MESSAGE,
        },
        status_code=status_code,
    )
