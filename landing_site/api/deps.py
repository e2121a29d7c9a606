from fastapi import Request

from landing_site.core.config import Settings
from landing_site.core.mailer import SmtpMailer


def get_app_settings(request: Request) -> Settings:
    """Settings the app was created with"""
    return request.app.state.settings


def get_mailer(request: Request) -> SmtpMailer:
    """Process-wide mailer injected at startup"""
    return request.app.state.mailer
