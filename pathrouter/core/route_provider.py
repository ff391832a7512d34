"""Sources of route definitions for ``Router.build_routes``.

A provider returns an ordered list of ``(pattern, target)`` or
``(pattern, target, extra)`` definitions. The order it returns is the
order routes are matched in.
"""

import os
import json
import logging
import importlib.util
from typing import Any, Optional, Protocol
from redis import Redis

from .errors import RouteProviderError

logger = logging.getLogger(__name__)

RouteDefinition = tuple[Any, ...]


def as_definition(item: Any) -> Any:
    """Tuple-ize list and tuple items; anything else is left for build_routes to reject."""
    return tuple(item) if isinstance(item, (list, tuple)) else item


class RouteProvider(Protocol):
    def get_routes(self) -> list[RouteDefinition]:
        ...


class StaticRouteProvider:
    def __init__(self, definitions: list[RouteDefinition]):
        self.definitions = [as_definition(d) for d in definitions]

    def get_routes(self) -> list[RouteDefinition]:
        return list(self.definitions)

    def __repr__(self) -> str:
        return f"StaticRouteProvider({len(self.definitions)} definitions)"


class RouteCollector:
    """The ``match`` callback handed to a routes file's ``routes(match)``."""

    def __init__(self):
        self.definitions: list[RouteDefinition] = []

    def __call__(self, pattern: str, target: Any, extra: Optional[dict] = None) -> None:
        if extra is None:
            self.definitions.append((pattern, target))
        else:
            self.definitions.append((pattern, target, extra))


class ModuleRouteProvider:
    """Loads route definitions from a Python routes file under ``entry_path``.

    The file either defines ``routes(match)``, which calls ``match`` once per
    route, or a ``ROUTES`` list of definitions.
    """

    def __init__(self, entry_path: str, routes_file: str = os.path.join("app", "routes.py")):
        self.entry_path = entry_path
        self.routes_file = routes_file

    @property
    def path(self) -> str:
        return os.path.join(self.entry_path, self.routes_file)

    def get_routes(self) -> list[RouteDefinition]:
        module = self._load_module()

        if callable(getattr(module, "routes", None)):
            collector = RouteCollector()
            module.routes(collector)
            return collector.definitions

        if hasattr(module, "ROUTES"):
            if not isinstance(module.ROUTES, (list, tuple)):
                raise RouteProviderError(f"ROUTES in {self.path} must be a list of route definitions")
            return [as_definition(d) for d in module.ROUTES]

        raise RouteProviderError(f"{self.path} defines neither routes(match) nor ROUTES")

    def _load_module(self):
        if not os.path.isfile(self.path):
            raise RouteProviderError(f"Routes file not found: {self.path}")

        spec = importlib.util.spec_from_file_location("_routes", self.path)
        module = importlib.util.module_from_spec(spec)
        spec.loader.exec_module(module)
        logger.info(f"Loaded routes file {self.path}")
        return module

    def __repr__(self) -> str:
        return f"ModuleRouteProvider({self.path!r})"


class RedisRouteProvider:
    """Reads a JSON array of route definitions stored under one Redis key."""

    def __init__(self, redis: Redis, key: str = "route_config"):
        self.redis = redis
        self.key = key

    def get_routes(self) -> list[RouteDefinition]:
        raw_json = self.redis.get(self.key)
        if raw_json is None:
            logger.warning(f"No route definitions stored at redis key {self.key!r}")
            return []

        try:
            data = json.loads(raw_json)
        except ValueError as e:
            raise RouteProviderError(f"Invalid route JSON at redis key {self.key!r}: {e}") from e

        if not isinstance(data, list):
            raise RouteProviderError(f"Redis key {self.key!r} must hold a JSON array of routes")
        return [as_definition(d) for d in data]

    def __repr__(self) -> str:
        return f"RedisRouteProvider(key={self.key!r})"
