from fastapi import APIRouter, Depends
from fastapi.responses import FileResponse

from landing_site.api.deps import get_app_settings
from landing_site.core.config import Settings

router = APIRouter()

LANDING_PAGE = "index.html"
CONTACT_PAGE = "contact.html"


def landing_page_response(settings: Settings, status_code: int = 200) -> FileResponse:
    return FileResponse(settings.effective_static_dir / LANDING_PAGE, status_code=status_code)


@router.get("/")
async def landing_page(settings: Settings = Depends(get_app_settings)):
    return landing_page_response(settings)


@router.get("/contact")
async def contact_page(settings: Settings = Depends(get_app_settings)):
    return FileResponse(settings.effective_static_dir / CONTACT_PAGE)
