"""
tests.test_api

End-to-end tests through the HTTP surface.

Responsibilities:
- Signup -> login -> authorized chirp creation.
- 401 for missing/expired/forged tokens with nothing persisted.
- Status taxonomy and `{"error": ...}` bodies for every failure kind.
"""

from __future__ import annotations

import asyncio
import time
import uuid
from datetime import timedelta

import httpx
import jwt
import pytest
from fastapi import FastAPI

from chirpy.api.app import create_app
from chirpy.auth.jwt import JwtConfig, issue_token
from chirpy.settings import Settings

EMAIL = "walt@breakingbad.com"
PASSWORD = "04234"


async def _signup(client: httpx.AsyncClient, email: str = EMAIL) -> dict:
    r = await client.post("/api/users", json={"email": email, "password": PASSWORD})
    assert r.status_code == 201, r.text
    return r.json()


async def _login(client: httpx.AsyncClient, **extra) -> dict:
    r = await client.post("/api/login", json={"email": EMAIL, "password": PASSWORD, **extra})
    assert r.status_code == 200, r.text
    return r.json()


def _bearer(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


@pytest.mark.asyncio
async def test_signup_login_and_chirp(client: httpx.AsyncClient) -> None:
    user = await _signup(client)
    assert user["email"] == EMAIL
    assert set(user) == {"id", "created_at", "updated_at", "email"}

    login = await _login(client)
    assert login["id"] == user["id"]
    assert login["token"]

    r = await client.post(
        "/api/chirps",
        json={"body": "this is a kerfuffle opinion"},
        headers=_bearer(login["token"]),
    )
    assert r.status_code == 201, r.text
    chirp = r.json()
    assert chirp["body"] == "this is a **** opinion"
    assert chirp["user_id"] == user["id"]
    assert set(chirp) == {"id", "created_at", "updated_at", "body", "user_id"}

    r = await client.get(f"/api/chirps/{chirp['id']}")
    assert r.status_code == 200
    assert r.json() == chirp

    r = await client.get("/api/chirps")
    assert r.status_code == 200
    assert r.json() == [chirp]


@pytest.mark.asyncio
@pytest.mark.parametrize(
    ("requested", "expected"),
    [({"expires_in_seconds": 7200}, 3600), ({}, 3600), ({"expires_in_seconds": 0}, 3600),
     ({"expires_in_seconds": 60}, 60)],
)
async def test_login_token_lifetime_is_clamped(
    client: httpx.AsyncClient, app: FastAPI, requested: dict, expected: int
) -> None:
    await _signup(client)
    token = (await _login(client, **requested))["token"]

    claims = jwt.decode(token, app.state.jwt_config.secret, algorithms=["HS256"])
    assert claims["exp"] - claims["iat"] == expected


@pytest.mark.asyncio
async def test_login_failures_are_401(client: httpx.AsyncClient) -> None:
    await _signup(client)

    r = await client.post("/api/login", json={"email": EMAIL, "password": "nope"})
    assert r.status_code == 401
    assert r.json() == {"error": "Incorrect email or password"}

    r = await client.post("/api/login", json={"email": "who@example.com", "password": PASSWORD})
    assert r.status_code == 401
    assert r.json() == {"error": "Incorrect email or password"}


@pytest.mark.asyncio
async def test_malformed_account_bodies_are_400(client: httpx.AsyncClient) -> None:
    r = await client.post(
        "/api/users", content=b"{not json", headers={"content-type": "application/json"}
    )
    assert r.status_code == 400
    assert "error" in r.json()

    r = await client.post("/api/login", json={"email": EMAIL})
    assert r.status_code == 400
    assert "error" in r.json()


@pytest.mark.asyncio
async def test_duplicate_signup_is_500(client: httpx.AsyncClient) -> None:
    await _signup(client)
    r = await client.post("/api/users", json={"email": EMAIL, "password": "again"})
    assert r.status_code == 500
    assert r.json() == {"error": "Could not create user"}


@pytest.mark.asyncio
async def test_chirp_length_boundary(client: httpx.AsyncClient) -> None:
    await _signup(client)
    headers = _bearer((await _login(client))["token"])

    r = await client.post("/api/chirps", json={"body": "a" * 140}, headers=headers)
    assert r.status_code == 201

    r = await client.post("/api/chirps", json={"body": "a" * 141}, headers=headers)
    assert r.status_code == 400
    assert r.json() == {"error": "Chirp is too long"}

    assert len((await client.get("/api/chirps")).json()) == 1


@pytest.mark.asyncio
async def test_punctuation_glued_word_is_not_redacted(client: httpx.AsyncClient) -> None:
    await _signup(client)
    headers = _bearer((await _login(client))["token"])

    r = await client.post("/api/chirps", json={"body": "Sharbert!"}, headers=headers)
    assert r.status_code == 201
    assert r.json()["body"] == "Sharbert!"


@pytest.mark.asyncio
async def test_malformed_chirp_body_is_400(client: httpx.AsyncClient) -> None:
    await _signup(client)
    headers = {**_bearer((await _login(client))["token"]), "content-type": "application/json"}

    r = await client.post("/api/chirps", content=b"{oops", headers=headers)
    assert r.status_code == 400
    assert r.json() == {"error": "Something went wrong"}

    r = await client.post("/api/chirps", json={"text": "wrong field"}, headers=headers)
    assert r.status_code == 400


@pytest.mark.asyncio
async def test_authorization_runs_before_body_decoding(client: httpx.AsyncClient) -> None:
    r = await client.post(
        "/api/chirps", content=b"{oops", headers={"content-type": "application/json"}
    )
    assert r.status_code == 401


@pytest.mark.asyncio
async def test_bad_tokens_are_401_and_persist_nothing(
    client: httpx.AsyncClient, app: FastAPI
) -> None:
    user = await _signup(client)
    user_id = uuid.UUID(user["id"])
    cfg: JwtConfig = app.state.jwt_config

    expired = issue_token(cfg=cfg, subject=user_id, ttl=timedelta(seconds=-1))
    forged = issue_token(
        cfg=JwtConfig(secret=b"attacker-" + b"x" * 55), subject=user_id, ttl=timedelta(hours=1)
    )
    cases = [
        {},
        {"Authorization": "Basic abc123"},
        {"Authorization": "Bearer a b"},
        _bearer("garbage"),
        _bearer(expired),
        _bearer(forged),
    ]

    for headers in cases:
        r = await client.post("/api/chirps", json={"body": "hello"}, headers=headers)
        assert r.status_code == 401, headers
        # Same body whatever went wrong.
        assert r.json() == {"error": "Unauthorized"}

    assert (await client.get("/api/chirps")).json() == []


@pytest.mark.asyncio
async def test_token_for_deleted_user_is_unauthorized(client: httpx.AsyncClient) -> None:
    await _signup(client)
    token = (await _login(client))["token"]
    r = await client.post("/admin/reset")
    assert r.status_code == 200

    # Signature and expiry are still fine; the owner row is gone.
    r = await client.post("/api/chirps", json={"body": "hello"}, headers=_bearer(token))
    assert r.status_code == 401
    assert r.json() == {"error": "Unauthorized"}
    assert (await client.get("/api/chirps")).json() == []


@pytest.mark.asyncio
async def test_get_chirp_errors(client: httpx.AsyncClient) -> None:
    r = await client.get(f"/api/chirps/{uuid.uuid4()}")
    assert r.status_code == 404
    assert r.json()["error"].startswith("No Chirp by")

    r = await client.get("/api/chirps/not-a-uuid")
    assert r.status_code == 400
    assert "error" in r.json()


@pytest.mark.asyncio
async def test_chirps_are_listed_oldest_first(client: httpx.AsyncClient) -> None:
    await _signup(client)
    headers = _bearer((await _login(client))["token"])
    for body in ("first", "second", "third"):
        r = await client.post("/api/chirps", json={"body": body}, headers=headers)
        assert r.status_code == 201

    bodies = [c["body"] for c in (await client.get("/api/chirps")).json()]
    assert bodies == ["first", "second", "third"]


@pytest.mark.asyncio
async def test_file_server_hits_and_reset(client: httpx.AsyncClient) -> None:
    for _ in range(3):
        r = await client.get("/app/")
        assert r.status_code == 200
        assert "Welcome to Chirpy" in r.text
    await client.get("/api/healthz")

    r = await client.get("/admin/metrics")
    assert r.status_code == 200
    assert r.headers["content-type"].startswith("text/html")
    assert "Chirpy has been visited 3 times!" in r.text

    await _signup(client)
    r = await client.post("/admin/reset")
    assert r.status_code == 200

    assert "visited 0 times!" in (await client.get("/admin/metrics")).text
    r = await client.post("/api/login", json={"email": EMAIL, "password": PASSWORD})
    assert r.status_code == 401


@pytest.mark.asyncio
async def test_reset_is_hidden_in_prod(settings: Settings) -> None:
    prod = settings.model_copy(update={"env": "prod"})
    app = create_app(settings=prod)
    async with app.router.lifespan_context(app):
        transport = httpx.ASGITransport(app=app)
        async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
            r = await client.post("/admin/reset")
            assert r.status_code == 404
            assert r.json() == {"error": "Not Found"}


@pytest.mark.asyncio
async def test_password_hashing_keeps_the_loop_responsive(settings: Settings) -> None:
    # At 13 rounds each bcrypt call takes hundreds of milliseconds.
    app = create_app(settings=settings.model_copy(update={"bcrypt_rounds": 13}))
    gaps: list[float] = []
    done = asyncio.Event()

    async def tick() -> None:
        last = time.perf_counter()
        while not done.is_set():
            await asyncio.sleep(0.005)
            now = time.perf_counter()
            gaps.append(now - last)
            last = now

    async with app.router.lifespan_context(app):
        transport = httpx.ASGITransport(app=app)
        async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
            ticker = asyncio.create_task(tick())
            try:
                r = await client.post("/api/users", json={"email": EMAIL, "password": PASSWORD})
                assert r.status_code == 201
                r = await client.post("/api/login", json={"email": EMAIL, "password": PASSWORD})
                assert r.status_code == 200
            finally:
                done.set()
                await ticker

    assert gaps
    assert max(gaps) < 0.15
