import copy
import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Optional, Union
from starlette.types import ASGIApp

from .errors import InvalidTargetError, RouteProviderError
from .path_pattern import CompiledPattern, compile_pattern
from .route_handler import RouteHandler
from .route_provider import RouteProvider

logger = logging.getLogger(__name__)

Target = Union[str, Mapping[str, Any]]
RouteInfo = tuple[str, dict[str, Any], RouteHandler]


def resolve_target(target: Target, extra: Optional[Mapping[str, Any]] = None) -> dict[str, Any]:
    """Turn ``"controller#action"`` or a target mapping into a target dict.

    Keys from ``extra`` override keys from ``target``.
    """
    if isinstance(target, str):
        controller, sep, action = target.partition("#")
        if not sep or "#" in action or not controller or not action:
            raise InvalidTargetError(f"Expected 'controller#action', got {target!r}")
        resolved: dict[str, Any] = {"controller": controller, "action": action}
    elif isinstance(target, Mapping):
        missing = [key for key in ("controller", "action") if key not in target]
        if missing:
            raise InvalidTargetError(f"Route target {dict(target)!r} is missing {', '.join(missing)}")
        resolved = copy.deepcopy(dict(target))
    else:
        raise InvalidTargetError(f"Unsupported route target type: {type(target).__name__}")

    if extra is not None:
        if not isinstance(extra, Mapping):
            raise InvalidTargetError(f"Route options must be a mapping, got {type(extra).__name__}")
        resolved.update(copy.deepcopy(dict(extra)))
    return resolved


@dataclass(frozen=True)
class RouteEntry:
    pattern: str
    target: dict[str, Any]
    matcher: CompiledPattern


class Router:
    """Ordered route table. The first registered pattern that fits a path wins."""

    def __init__(self, provider: Optional[RouteProvider] = None, endpoint: Optional[ASGIApp] = None):
        self.provider = provider
        self.endpoint = endpoint
        self._routes: list[RouteEntry] = []

    def __len__(self) -> int:
        return len(self._routes)

    def route(self, pattern: str, target: Target, extra: Optional[Mapping[str, Any]] = None) -> RouteInfo:
        resolved = resolve_target(target, extra)
        matcher = compile_pattern(pattern)
        entry = RouteEntry(pattern=matcher.pattern, target=resolved, matcher=matcher)
        self._routes.append(entry)
        logger.debug(f"Registered route {entry.pattern} -> {resolved['controller']}#{resolved['action']}")
        return self._route_info(entry)

    def routes(self) -> list[RouteInfo]:
        return [self._route_info(entry) for entry in self._routes]

    def build_routes(self) -> None:
        if self.provider is None:
            raise RouteProviderError("No route provider configured")

        definitions = self.provider.get_routes()
        logger.info(f"Loading {len(definitions)} route(s) from {self.provider!r}")
        for definition in definitions:
            if not isinstance(definition, (list, tuple)) or len(definition) not in (2, 3):
                raise RouteProviderError(f"Malformed route definition: {definition!r}")
            self.route(*definition)

    def match(self, path: str) -> Optional[RouteInfo]:
        for entry in self._routes:
            params = entry.matcher.test(path)
            if params is not None:
                logger.debug(f"Matched {path} to {entry.pattern}")
                return self._route_info(entry, params)
        logger.debug(f"No route match for {path}")
        return None

    def _route_info(self, entry: RouteEntry, params: Optional[dict[str, str]] = None) -> RouteInfo:
        target = copy.deepcopy(entry.target)
        target.update(params or {})
        return entry.pattern, target, RouteHandler(entry.pattern, target, self.endpoint)
