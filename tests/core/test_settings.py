import pytest
import fakeredis
from pathrouter.config.routes import ROUTE_DEFINITIONS
from pathrouter.config.settings import Settings, build_route_provider
from pathrouter.core.route_provider import ModuleRouteProvider, RedisRouteProvider, StaticRouteProvider
from pathrouter.core.routing_table import Router
from tests.fixtures.mock_endpoints import FIXTURE_ENTRY_PATH


def test_defaults_when_environment_is_empty(monkeypatch):
    for name in ("ROUTES_SOURCE", "ROUTES_ENTRY_PATH", "REDIS_HOST", "REDIS_PORT",
                 "ROUTES_REDIS_KEY", "LOG_LEVEL", "HOST", "PORT"):
        monkeypatch.delenv(name, raising=False)

    settings = Settings.from_env()

    assert settings == Settings()
    assert settings.routes_source == "static"
    assert settings.redis_port == 6379


def test_settings_read_from_environment(monkeypatch):
    monkeypatch.setenv("ROUTES_SOURCE", "Module")
    monkeypatch.setenv("ROUTES_ENTRY_PATH", FIXTURE_ENTRY_PATH)
    monkeypatch.setenv("REDIS_PORT", "6380")
    monkeypatch.setenv("PORT", "9000")

    settings = Settings.from_env()

    assert settings.routes_source == "module"
    assert settings.entry_path == FIXTURE_ENTRY_PATH
    assert settings.redis_port == 6380
    assert settings.port == 9000


def test_static_source_serves_bundled_definitions():
    provider = build_route_provider(Settings(routes_source="static"))

    assert isinstance(provider, StaticRouteProvider)
    assert provider.get_routes() == [tuple(d) for d in ROUTE_DEFINITIONS]

    router = Router(provider=provider)
    router.build_routes()
    assert router.match("/users/login")[0] == "/users/login"
    assert router.match("/users/5/edit")[1]["role"] == "admin"


def test_module_source_uses_entry_path():
    provider = build_route_provider(Settings(routes_source="module", entry_path=FIXTURE_ENTRY_PATH))

    assert isinstance(provider, ModuleRouteProvider)
    assert len(provider.get_routes()) == 3


def test_redis_source_uses_given_client():
    fake_redis = fakeredis.FakeRedis(decode_responses=True)
    provider = build_route_provider(Settings(routes_source="redis", routes_redis_key="routes"),
                                    redis_client=fake_redis)

    assert isinstance(provider, RedisRouteProvider)
    assert provider.key == "routes"
    assert provider.redis is fake_redis


def test_unknown_source_is_rejected():
    with pytest.raises(ValueError):
        build_route_provider(Settings(routes_source="yaml"))
