"""
Profile listing and owner-only profile update tests.
"""
from __future__ import annotations

import pytest
from httpx import AsyncClient


def _seed_profiles(fake):
    fake.seed("profiles", id="b1", email="acme@brands.io", name="Acme", role="brand", verified=True)
    fake.seed("profiles", id="i1", email="mina@example.com", name="Mina", role="influencer", verified=True)
    fake.seed("profiles", id="i2", email="leo@example.com", name="Leo", role="influencer", verified=False)


@pytest.mark.asyncio
async def test_list_profiles_newest_first(client: AsyncClient, fake_supabase) -> None:
    _seed_profiles(fake_supabase)

    response = await client.get("/api/profiles")

    assert response.status_code == 200
    assert [p["id"] for p in response.json()["profiles"]] == ["i2", "i1", "b1"]
    (select,) = fake_supabase.calls_for("profiles", "select")
    assert select["filters"] == {}


@pytest.mark.asyncio
async def test_list_profiles_filters_by_role_and_verified(client: AsyncClient, fake_supabase) -> None:
    _seed_profiles(fake_supabase)

    response = await client.get("/api/profiles", params={"role": "influencer", "verified": "true"})

    assert [p["id"] for p in response.json()["profiles"]] == ["i1"]
    (select,) = fake_supabase.calls_for("profiles", "select")
    assert select["filters"] == {"role": "influencer", "verified": True}


@pytest.mark.asyncio
async def test_list_profiles_verified_other_than_true_means_false(client: AsyncClient, fake_supabase) -> None:
    _seed_profiles(fake_supabase)

    response = await client.get("/api/profiles", params={"verified": "no"})

    assert [p["id"] for p in response.json()["profiles"]] == ["i2"]


@pytest.mark.asyncio
async def test_list_profiles_unknown_role_is_literal_filter(client: AsyncClient, fake_supabase) -> None:
    _seed_profiles(fake_supabase)

    response = await client.get("/api/profiles", params={"role": "agency"})

    assert response.status_code == 200
    assert response.json() == {"profiles": []}


@pytest.mark.asyncio
async def test_list_profiles_store_error_is_bad_request(client: AsyncClient, fake_supabase) -> None:
    fake_supabase.fail("profiles", "select", 'column profiles.verified does not exist', code="42703")

    response = await client.get("/api/profiles", params={"verified": "true"})

    assert response.status_code == 400
    assert response.json() == {"error": "column profiles.verified does not exist"}


@pytest.mark.asyncio
async def test_list_profiles_unexpected_error_is_internal(client: AsyncClient, fake_supabase, monkeypatch) -> None:
    def broken(name):
        raise RuntimeError("connection reset")

    monkeypatch.setattr(fake_supabase, "table", broken)

    response = await client.get("/api/profiles")

    assert response.status_code == 500
    assert "error" in response.json()


@pytest.mark.asyncio
async def test_update_profile_requires_session(client: AsyncClient, fake_supabase) -> None:
    response = await client.put("/api/profiles", json={"name": "Jane"})

    assert response.status_code == 401
    assert response.json() == {"error": "Unauthorized"}
    assert fake_supabase.calls == []


@pytest.mark.asyncio
async def test_update_profile_with_invalid_token_performs_no_mutation(client: AsyncClient, fake_supabase) -> None:
    response = await client.put("/api/profiles", json={"name": "Jane"}, headers={"Authorization": "Bearer forged"})

    assert response.status_code == 401
    assert fake_supabase.calls_for("profiles", "update") == []


@pytest.mark.asyncio
async def test_update_profile_scopes_to_caller(client: AsyncClient, fake_supabase, signed_in) -> None:
    fake_supabase.seed("profiles", id="u1", email="jane@example.com", name="J", role="influencer")
    fake_supabase.seed("profiles", id="u2", email="other@example.com", name="Other", role="brand")

    response = await client.post("/api/profiles", json={"name": "Jane"}, headers=signed_in("u1"))

    assert response.status_code == 200
    profile = response.json()["profile"]
    assert profile["id"] == "u1"
    assert profile["name"] == "Jane"
    (update,) = fake_supabase.calls_for("profiles", "update")
    assert update["filters"] == {"id": "u1"}
    assert update["payload"] == {"name": "Jane"}
    assert fake_supabase.rows("profiles")[1]["name"] == "Other"


@pytest.mark.asyncio
async def test_update_profile_applies_all_mutable_fields(client: AsyncClient, fake_supabase, signed_in) -> None:
    fake_supabase.seed("profiles", id="u1", email="jane@example.com", name="Jane", role="influencer")
    patch = {
        "bio": "Food & travel",
        "website": "https://jane.example",
        "avatar_url": "https://cdn.example/jane.png",
        "social_links": {"instagram": "@jane"},
    }

    response = await client.put("/api/profiles", json=patch, headers=signed_in("u1"))

    assert response.status_code == 200
    profile = response.json()["profile"]
    for key, value in patch.items():
        assert profile[key] == value
    assert profile["role"] == "influencer"


@pytest.mark.asyncio
async def test_update_profile_ignores_non_mutable_fields(client: AsyncClient, fake_supabase, signed_in) -> None:
    fake_supabase.seed("profiles", id="u1", email="jane@example.com", name="Jane", role="influencer")

    await client.put("/api/profiles", json={"name": "Jane", "role": "brand", "verified": True}, headers=signed_in("u1"))

    (update,) = fake_supabase.calls_for("profiles", "update")
    assert update["payload"] == {"name": "Jane"}
    assert fake_supabase.rows("profiles")[0]["role"] == "influencer"


@pytest.mark.asyncio
async def test_update_profile_store_error_is_bad_request(client: AsyncClient, fake_supabase, signed_in) -> None:
    fake_supabase.seed("profiles", id="u1", email="jane@example.com", name="Jane", role="influencer")
    fake_supabase.fail("profiles", "update", 'null value in column "name" violates not-null constraint', code="23502")

    response = await client.put("/api/profiles", json={"name": None}, headers=signed_in("u1"))

    assert response.status_code == 400
    assert "not-null" in response.json()["error"]


@pytest.mark.asyncio
async def test_update_profile_without_row_is_not_found(client: AsyncClient, fake_supabase, signed_in) -> None:
    response = await client.put("/api/profiles", json={"name": "Ghost"}, headers=signed_in("u9"))
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_get_profile_by_id(client: AsyncClient, fake_supabase) -> None:
    _seed_profiles(fake_supabase)

    found = await client.get("/api/profiles/b1")
    missing = await client.get("/api/profiles/nope")

    assert found.json()["profile"]["name"] == "Acme"
    assert missing.status_code == 404
    assert missing.json() == {"error": "Profile not found"}
