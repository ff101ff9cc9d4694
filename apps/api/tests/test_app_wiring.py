"""Application factory wiring: real lifespan, no injected cache."""

from __future__ import annotations

import httpx
import pytest

from airport_finder_api import main
from airport_finder_api.config import ApiSettings
from airport_finder_api.main import LOAD_ERROR_MESSAGE, create_app


def _settings(**overrides) -> ApiSettings:
    values = {
        "aviationstack_api_key": "",
        "use_sample_data": True,
        "redis_url": "",
        "log_level": "WARNING",
    }
    values.update(overrides)
    return ApiSettings(_env_file=None, **values)


async def _get(app, path: str) -> httpx.Response:
    async with app.router.lifespan_context(app):
        async with httpx.AsyncClient(
            transport=httpx.ASGITransport(app=app), base_url="http://testserver"
        ) as client:
            return await client.get(path)


async def test_production_never_serves_sample_data():
    app = create_app(_settings(environment="production"))

    resp = await _get(app, "/api/airports")

    assert resp.status_code == 500
    assert resp.json() == {"error": LOAD_ERROR_MESSAGE}


async def test_development_serves_bundled_sample_without_key():
    app = create_app(_settings(environment="development"))

    resp = await _get(app, "/api/airports")

    assert resp.status_code == 200
    body = resp.json()
    assert body["total"] == 1
    assert [a["iataCode"] for a in body["airports"]] == ["AAA"]


async def test_sample_data_disabled_in_development_returns_500():
    app = create_app(_settings(environment="development", use_sample_data=False))

    resp = await _get(app, "/api/airports")

    assert resp.status_code == 500


async def test_lifespan_builds_cache_and_skips_redis_without_url(monkeypatch):
    urls: list[str] = []

    async def _init_redis(url: str):
        urls.append(url)
        return None

    monkeypatch.setattr(main, "init_redis", _init_redis)
    app = create_app(_settings())

    async with app.router.lifespan_context(app):
        assert app.state.airport_cache is not None
        async with httpx.AsyncClient(
            transport=httpx.ASGITransport(app=app), base_url="http://testserver"
        ) as client:
            health = await client.get("/health")

    assert urls == [""]
    assert health.json() == {"status": "ok", "cache": "empty"}
    assert app.state.airport_cache is None


def test_run_serves_app_with_configured_host_and_port(monkeypatch):
    calls: list[tuple[str, dict]] = []
    monkeypatch.setattr(main, "settings", _settings(host="0.0.0.0", port=9001, log_level="DEBUG"))
    monkeypatch.setattr(main.uvicorn, "run", lambda target, **kw: calls.append((target, kw)))

    main.run()

    assert calls == [
        (
            "airport_finder_api.main:app",
            {"host": "0.0.0.0", "port": 9001, "log_level": "debug"},
        )
    ]


@pytest.mark.parametrize(
    ("environment", "use_sample_data", "expected"),
    [
        ("development", True, True),
        ("test", True, True),
        ("production", True, False),
        ("development", False, False),
    ],
)
def test_sample_fallback_policy(environment, use_sample_data, expected):
    cfg = _settings(environment=environment, use_sample_data=use_sample_data)

    assert cfg.allow_sample_fallback is expected
