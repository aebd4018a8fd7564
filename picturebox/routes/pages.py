from fastapi import APIRouter, Request
from fastapi.responses import HTMLResponse

from picturebox.views import render_home

router = APIRouter(tags=["pages"])


@router.get("/", response_class=HTMLResponse)
async def home(request: Request) -> HTMLResponse:
    return render_home(request, request.app.state.settings.app_name)
