"""
Supabase clients.

Store queries share one anon client and one service-role client for the
process. Anything that signs a user in (code exchange, password sign-in,
sign-up, OAuth start) gets its own short-lived client instead: supabase-py
keeps the resulting session on the client and rewrites its Authorization
header, so a shared client would run every later query as the last user
who signed in.
"""
from typing import Dict, Optional

from fastapi import Depends, Request
from supabase import create_client, Client, ClientOptions
from supabase_auth import SyncSupportedStorage
from app.config import settings

CODE_VERIFIER_SUFFIX = "-code-verifier"


class SupabaseClient:
    _client: Client = None
    _service_client: Client = None

    @classmethod
    def get_client(cls) -> Client:
        if cls._client is None:
            cls._client = create_client(settings.supabase_url, settings.supabase_key)
        return cls._client

    @classmethod
    def get_service_client(cls) -> Client:
        """Client with service_role key; bypasses RLS. Used for profile reads and writes."""
        if cls._service_client is None and settings.supabase_service_role_key:
            cls._service_client = create_client(
                settings.supabase_url, settings.supabase_service_role_key
            )
        return cls._service_client or cls.get_client()

    @classmethod
    def reset_client(cls):
        cls._client = None
        cls._service_client = None


class RequestAuthStorage(SyncSupportedStorage):
    """
    Auth storage scoped to one request.

    Only the PKCE code verifier outlives the request: the OAuth start route
    writes it to a cookie and the callback route seeds it back from there.
    """

    def __init__(self, code_verifier: Optional[str] = None):
        self.code_verifier = code_verifier
        self.items: Dict[str, str] = {}

    def get_item(self, key: str) -> Optional[str]:
        if key.endswith(CODE_VERIFIER_SUFFIX):
            return self.code_verifier
        return self.items.get(key)

    def set_item(self, key: str, value: str) -> None:
        if key.endswith(CODE_VERIFIER_SUFFIX):
            self.code_verifier = value
        else:
            self.items[key] = value

    def remove_item(self, key: str) -> None:
        if key.endswith(CODE_VERIFIER_SUFFIX):
            self.code_verifier = None
        else:
            self.items.pop(key, None)


def create_auth_client(storage: RequestAuthStorage) -> Client:
    """Fresh anon client that never persists or refreshes a session"""
    return create_client(
        settings.supabase_url,
        settings.supabase_key,
        options=ClientOptions(
            storage=storage,
            persist_session=False,
            auto_refresh_token=False,
        ),
    )


def get_supabase() -> Client:
    return SupabaseClient.get_client()


def get_service_supabase() -> Client:
    return SupabaseClient.get_service_client()


def get_auth_storage(request: Request) -> RequestAuthStorage:
    return RequestAuthStorage(request.cookies.get(settings.pkce_cookie_name))


def get_auth_supabase(storage: RequestAuthStorage = Depends(get_auth_storage)) -> Client:
    return create_auth_client(storage)
