import os
from dataclasses import dataclass
from typing import Optional
from redis import Redis

from pathrouter.config.routes import ROUTE_DEFINITIONS
from pathrouter.core.route_provider import (
    ModuleRouteProvider,
    RedisRouteProvider,
    RouteProvider,
    StaticRouteProvider,
)

ROUTE_SOURCES = ("static", "module", "redis")


@dataclass(frozen=True)
class Settings:
    routes_source: str = "static"
    entry_path: str = "."
    redis_host: str = "localhost"
    redis_port: int = 6379
    routes_redis_key: str = "route_config"
    log_level: str = "INFO"
    host: str = "0.0.0.0"
    port: int = 8080

    @classmethod
    def from_env(cls) -> "Settings":
        """Read settings from the environment; call ``load_dotenv()`` first to pick up a .env file."""
        return cls(
            routes_source=os.getenv("ROUTES_SOURCE", cls.routes_source).lower(),
            entry_path=os.getenv("ROUTES_ENTRY_PATH", cls.entry_path),
            redis_host=os.getenv("REDIS_HOST", cls.redis_host),
            redis_port=int(os.getenv("REDIS_PORT", cls.redis_port)),
            routes_redis_key=os.getenv("ROUTES_REDIS_KEY", cls.routes_redis_key),
            log_level=os.getenv("LOG_LEVEL", cls.log_level),
            host=os.getenv("HOST", cls.host),
            port=int(os.getenv("PORT", cls.port)),
        )


def build_route_provider(settings: Settings, redis_client: Optional[Redis] = None) -> RouteProvider:
    if settings.routes_source == "static":
        return StaticRouteProvider(ROUTE_DEFINITIONS)
    if settings.routes_source == "module":
        return ModuleRouteProvider(settings.entry_path)
    if settings.routes_source == "redis":
        client = redis_client or Redis(host=settings.redis_host, port=settings.redis_port,
                                       decode_responses=True)
        return RedisRouteProvider(client, key=settings.routes_redis_key)
    raise ValueError(f"Unknown ROUTES_SOURCE {settings.routes_source!r}, expected one of {ROUTE_SOURCES}")
