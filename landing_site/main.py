#run it with: landing-site   (or uvicorn landing_site.main:create_app --factory --reload)
from fastapi import FastAPI, Request
from fastapi.exception_handlers import http_exception_handler
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException
from contextlib import asynccontextmanager
from dotenv import load_dotenv
from typing import Optional
import asyncio
import logging
import sys
import uvicorn

from landing_site.api.api_router import api_router
from landing_site.api.endpoints import pages
from landing_site.core.config import Settings, get_settings
from landing_site.core.errors import ConfigurationError
from landing_site.core.mailer import SmtpMailer

logger = logging.getLogger(__name__)

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Check the mail server in the background; routes are served regardless of the result."""
    logger.info("🔧 Verifying email transport...")
    app.state.verify_task = asyncio.create_task(app.state.mailer.verify())
    yield
    if not app.state.verify_task.done():
        app.state.verify_task.cancel()


async def not_found_handler(request: Request, exc: StarletteHTTPException):
    """Unknown paths and methods fall back to the landing page with a 404."""
    if exc.status_code in (404, 405):
        logger.info(f"No route for {request.method} {request.url.path}, serving landing page")
        return pages.landing_page_response(request.app.state.settings, status_code=404)
    return await http_exception_handler(request, exc)


def create_app(settings: Optional[Settings] = None, mailer: Optional[SmtpMailer] = None) -> FastAPI:
    """
    Build the application.

    Args:
        settings: validated settings (loaded from the environment when omitted)
        mailer: mail transport shared by all requests (built from settings when omitted)
    """
    if settings is None:
        settings = get_settings().require()
    if mailer is None:
        mailer = SmtpMailer.from_settings(settings)

    app = FastAPI(title="Landing Site", version="1.0.0", lifespan=lifespan)
    app.state.settings = settings
    app.state.mailer = mailer

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins,
        allow_methods=["GET", "POST"],
        allow_headers=["Content-Type", "Accept"],
    )

    app.include_router(pages.router)
    app.include_router(api_router)
    app.mount(
        "/static",
        StaticFiles(directory=settings.effective_static_dir / "assets", check_dir=False),
        name="static",
    )
    app.add_exception_handler(StarletteHTTPException, not_found_handler)

    return app


def main() -> None:
    # Load environment variables from .env file
    load_dotenv()
    get_settings.cache_clear()
    settings = get_settings()

    logging.basicConfig(format=LOG_FORMAT)
    logging.getLogger().setLevel(settings.log_level)

    try:
        settings.require()
    except ConfigurationError as e:
        # Shown at every log level
        logger.critical(f"❌ {e}")
        sys.exit(1)

    # Never log the password itself
    logger.info(f"Email configuration: user={settings.email_user}, "
                f"admin_email={settings.admin_email}, has_password={bool(settings.email_pass)}")

    app = create_app(settings, SmtpMailer.from_settings(settings))

    logger.info(f"🚀 Starting server on port {settings.port}")
    uvicorn.run(app, host=settings.host, port=settings.port, log_level=settings.log_level.lower())


if __name__ == "__main__":
    main()
