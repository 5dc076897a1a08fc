"""
Language negotiation middleware tests (en / ko / zh).
"""
from __future__ import annotations

import pytest
from httpx import AsyncClient

from app.core.language import negotiate_language, parse_accept_language


@pytest.mark.parametrize("header, expected", [
    (None, "en"),
    ("", "en"),
    ("ko-KR,ko;q=0.9,en;q=0.8", "ko"),
    ("fr-FR;q=0.9, zh-CN;q=0.8", "zh"),
    ("en;q=0.2, ko;q=0.7", "ko"),
    ("de, fr", "en"),
])
def test_negotiate_language(header, expected) -> None:
    assert negotiate_language(header) == expected


def test_parse_accept_language_keeps_header_order_for_equal_weights() -> None:
    assert parse_accept_language("zh-TW, ko, en;q=bogus") == ["zh", "ko", "en"]


@pytest.mark.asyncio
async def test_language_detected_from_header_and_cookie_set(client: AsyncClient, fake_supabase) -> None:
    response = await client.get("/health", headers={"Accept-Language": "ko-KR,ko;q=0.9"})

    assert response.headers["x-language"] == "ko"
    set_cookie = response.headers["set-cookie"]
    assert set_cookie.startswith("wonlink-language=ko")
    assert "Max-Age=31536000" in set_cookie
    assert "SameSite=lax" in set_cookie
    assert "HttpOnly" not in set_cookie


@pytest.mark.asyncio
async def test_language_cookie_wins_over_header(client: AsyncClient, fake_supabase) -> None:
    response = await client.get("/health", headers={"Accept-Language": "ko", "Cookie": "wonlink-language=zh"})

    assert response.headers["x-language"] == "zh"
    assert "set-cookie" not in response.headers


@pytest.mark.asyncio
async def test_unsupported_cookie_is_replaced(client: AsyncClient, fake_supabase) -> None:
    response = await client.get("/health", headers={"Cookie": "wonlink-language=fr"})

    assert response.headers["x-language"] == "en"
    assert response.headers["set-cookie"].startswith("wonlink-language=en")


@pytest.mark.asyncio
async def test_security_headers_present(client: AsyncClient, fake_supabase) -> None:
    response = await client.get("/")
    assert response.headers["x-content-type-options"] == "nosniff"
    assert response.headers["x-frame-options"] == "DENY"
