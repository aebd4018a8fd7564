from fastapi import APIRouter, Request
from fastapi.responses import HTMLResponse, RedirectResponse, Response
from loguru import logger
from starlette.concurrency import run_in_threadpool

from picturebox.services.gallery import list_images
from picturebox.services.storage import UPLOAD_FIELD, UploadRejected, has_file, save_upload
from picturebox.views import render_pictures

router = APIRouter(prefix="/pictures", tags=["pictures"])


async def _render_page(request: Request, error: str | None = None, status_code: int = 200) -> HTMLResponse:
    app_settings = request.app.state.settings
    images = await run_in_threadpool(list_images, app_settings.upload_path)
    return render_pictures(request, app_settings.app_name, images, error=error, status_code=status_code)


@router.get("", response_class=HTMLResponse)
async def pictures_page(request: Request) -> HTMLResponse:
    return await _render_page(request)


@router.post("/upload")
async def upload_picture(request: Request) -> Response:
    # A text value under the file field counts as a missing file.
    async with request.form() as form:
        picture = form.get(UPLOAD_FIELD)
        try:
            saved = await save_upload(picture, request.app.state.settings)
        except UploadRejected as exc:
            logger.warning(
                "Upload rejected filename={} content_type={} error={}",
                picture.filename if has_file(picture) else None,
                picture.content_type if has_file(picture) else None,
                str(exc),
            )
            return await _render_page(request, error=str(exc), status_code=400)

    logger.info(
        "Upload stored file_id={} filename={} content_type={} size_bytes={}",
        saved.id,
        saved.filename,
        saved.content_type,
        saved.size_bytes,
    )
    return RedirectResponse(url="/pictures", status_code=302)
