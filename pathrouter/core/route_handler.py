import copy
import logging
import contextvars
from typing import Any, Optional
from starlette.types import ASGIApp, Scope, Receive, Send
from starlette.responses import PlainTextResponse

logger = logging.getLogger(__name__)

current_route_var = contextvars.ContextVar("current_route", default=None)


class RouteHandler:
    """ASGI callable bound to one route entry.

    Publishes the matched pattern and target on the scope, then hands the
    request to the endpoint the router was built with.
    """

    def __init__(self, pattern: str, target: dict[str, Any], endpoint: Optional[ASGIApp] = None) -> None:
        self.pattern = pattern
        self.target = copy.deepcopy(target)
        self.endpoint = endpoint

    @property
    def action(self) -> str:
        return f"{self.target.get('controller')}#{self.target.get('action')}"

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        scope["route"] = self.pattern
        scope["path_params"] = copy.deepcopy(self.target)

        token = current_route_var.set(self.pattern)
        try:
            if self.endpoint is None:
                logger.warning(f"No endpoint configured for {self.action}")
                await PlainTextResponse(
                    f"No endpoint configured for {self.action}",
                    status_code=501
                )(scope, receive, send)
                return

            logger.info(f"Dispatching {scope.get('path')} to {self.action}")
            await self.endpoint(scope, receive, send)
        finally:
            current_route_var.reset(token)

    def __repr__(self) -> str:
        return f"RouteHandler({self.pattern!r}, {self.action!r})"
