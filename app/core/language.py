"""
UI language negotiation.

The resolved language is request-scoped: it is stored on request.state and
echoed back in the x-language header. A missing or unsupported preference
cookie is replaced by the best Accept-Language match.
"""

import logging
from typing import List, Optional, Tuple

from starlette.datastructures import MutableHeaders
from starlette.requests import HTTPConnection
from starlette.responses import Response

from app.config import settings

logger = logging.getLogger(__name__)

SUPPORTED_LANGUAGES = ("en", "ko", "zh")
DEFAULT_LANGUAGE = "en"
LANGUAGE_COOKIE = "wonlink-language"
LANGUAGE_COOKIE_MAX_AGE = 60 * 60 * 24 * 365


def parse_accept_language(header: Optional[str]) -> List[str]:
    """Primary language subtags from an Accept-Language header, highest quality first."""
    if not header:
        return []
    weighted: List[Tuple[str, float]] = []
    for part in header.split(","):
        part = part.strip()
        if not part:
            continue
        code, _, q = part.partition(";q=")
        try:
            quality = float(q) if q else 1.0
        except ValueError:
            quality = 0.0
        weighted.append((code.split("-")[0].strip().lower(), quality))
    # sorted() is stable, so equal weights keep header order
    return [code for code, _ in sorted(weighted, key=lambda item: item[1], reverse=True)]


def negotiate_language(accept_language: Optional[str]) -> str:
    for code in parse_accept_language(accept_language):
        if code in SUPPORTED_LANGUAGES:
            return code
    return DEFAULT_LANGUAGE


def _language_cookie_header(language: str) -> str:
    cookie = Response()
    cookie.set_cookie(
        LANGUAGE_COOKIE,
        language,
        max_age=LANGUAGE_COOKIE_MAX_AGE,
        path="/",
        samesite="lax",
        secure=settings.is_production,
        httponly=False,
    )
    return cookie.headers["set-cookie"]


class LanguageMiddleware:
    def __init__(self, app):
        self.app = app

    async def __call__(self, scope, receive, send):
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        connection = HTTPConnection(scope)
        language = connection.cookies.get(LANGUAGE_COOKIE)
        set_cookie = None
        if language not in SUPPORTED_LANGUAGES:
            language = negotiate_language(connection.headers.get("accept-language"))
            set_cookie = _language_cookie_header(language)
        scope.setdefault("state", {})["language"] = language

        async def send_with_language(message):
            if message["type"] == "http.response.start":
                headers = MutableHeaders(scope=message)
                headers.append("x-language", language)
                if set_cookie:
                    headers.append("set-cookie", set_cookie)
            await send(message)

        await self.app(scope, receive, send_with_language)
