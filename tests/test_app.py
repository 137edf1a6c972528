import time

import pytest
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import rsa
from jose import jwt

from spendwise import main
from spendwise.core.cache import TTLCache
from spendwise.core.config import settings
from spendwise.core.rate_limit import FixedWindowRateLimiter
from spendwise.core.security import AuthError, get_current_user_id, verify_session_token


class FakeClock:
    def __init__(self):
        self.now = 1000.0

    def __call__(self):
        return self.now


def test_health(client):
    data = client.get("/health").json()
    assert data["status"] == "ok"
    assert data["database"] == "connected"
    assert data["version"] == settings.PROJECT_VERSION


def test_missing_token_is_unauthorized(anonymous_client):
    main.app.dependency_overrides.pop(get_current_user_id)

    response = anonymous_client.get("/api/accounts")
    assert response.status_code == 401
    assert response.json() == {"error": "Unauthorized"}


def test_rate_limit_answers_429(client, monkeypatch):
    monkeypatch.setattr(main, "rate_limiter", FixedWindowRateLimiter(max_requests=2, window=60))

    assert client.get("/api/accounts").headers["RateLimit-Remaining"] == "1"
    assert client.get("/api/accounts").status_code == 200
    response = client.get("/api/accounts")
    assert response.status_code == 429
    assert response.json() == {"error": "Too many requests, please try again later"}
    assert response.headers["RateLimit-Limit"] == "2"

    # Only /api/ paths are limited
    assert client.get("/health").status_code == 200


def test_body_too_large(client, monkeypatch):
    monkeypatch.setattr(settings, "MAX_BODY_BYTES", 10)
    response = client.post("/api/categories", json={"name": "A category with a long name"})
    assert response.status_code == 413
    assert response.json() == {"error": "Request body too large"}


def test_cors_allows_preview_origins(client):
    response = client.get("/health", headers={"Origin": "https://spendwise-git-main.vercel.app"})
    assert response.headers["access-control-allow-origin"] == "https://spendwise-git-main.vercel.app"

    response = client.get("/health", headers={"Origin": "https://evil.example.com"})
    assert "access-control-allow-origin" not in response.headers


def test_rate_limiter_window_resets():
    clock = FakeClock()
    limiter = FixedWindowRateLimiter(max_requests=1, window=60, clock=clock)

    assert limiter.hit("1.2.3.4") == (True, 0, 60)
    assert limiter.hit("1.2.3.4")[0] is False
    assert limiter.hit("5.6.7.8")[0] is True

    clock.now += 60
    assert limiter.hit("1.2.3.4")[0] is True


def test_ttl_cache_evicts_expired_then_oldest():
    clock = FakeClock()
    cache = TTLCache(maxsize=2, ttl=10, clock=clock)

    cache.set("a", 1)
    cache.set("b", 2, ttl=1)
    clock.now += 5
    cache.set("c", 3)
    assert cache.get("a") == 1
    assert cache.get("b") is None

    cache.set("d", 4)
    assert cache.get("a") is None
    assert len(cache) == 2


@pytest.fixture
def signing_key(monkeypatch):
    key = rsa.generate_private_key(public_exponent=65537, key_size=2048)
    private_pem = key.private_bytes(
        serialization.Encoding.PEM,
        serialization.PrivateFormat.PKCS8,
        serialization.NoEncryption(),
    ).decode()
    public_pem = key.public_key().public_bytes(
        serialization.Encoding.PEM,
        serialization.PublicFormat.SubjectPublicKeyInfo,
    ).decode()
    monkeypatch.setattr(settings, "CLERK_JWT_KEY", public_pem)
    monkeypatch.setattr(settings, "CLERK_AUTHORIZED_PARTIES", ["http://localhost:3000"])
    return private_pem


def make_token(private_pem, **claims):
    now = int(time.time())
    payload = {"sub": "user_abc", "azp": "http://localhost:3000", "iat": now, "exp": now + 60}
    payload.update(claims)
    return jwt.encode(payload, private_pem, algorithm="RS256")


def test_valid_session_token(signing_key):
    assert verify_session_token(make_token(signing_key)) == "user_abc"


def test_expired_session_token(signing_key):
    with pytest.raises(AuthError):
        verify_session_token(make_token(signing_key, exp=int(time.time()) - 10))


def test_foreign_authorized_party(signing_key):
    with pytest.raises(AuthError):
        verify_session_token(make_token(signing_key, azp="https://evil.example.com"))


def test_token_without_subject(signing_key):
    with pytest.raises(AuthError):
        verify_session_token(make_token(signing_key, sub=None))


def test_chunked_body_too_large(client, monkeypatch):
    monkeypatch.setattr(settings, "MAX_BODY_BYTES", 10)

    def chunks():
        yield b'{"name": '
        yield b'"A category with a long name"}'

    response = client.post("/api/categories", content=chunks(), headers={"Content-Type": "application/json"})
    assert response.status_code == 413
    assert response.json() == {"error": "Request body too large"}
