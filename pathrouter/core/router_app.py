import asyncio
import logging
from starlette.types import Scope, Receive, Send
from starlette.responses import PlainTextResponse
from pathrouter.core.metrics import ROUTE_MATCHES, ROUTE_MISSES, REGISTERED_ROUTES
from .routing_table import Router


logger = logging.getLogger(__name__)


class RouterApp:
    """ASGI front for a Router: matches the request path and awaits the route's handler."""

    def __init__(self, router: Router):
        self.router = router
        self.cleanup_callbacks: list[callable] = []

    async def __call__(self, scope: Scope, receive: Receive, send: Send):
        if scope["type"] == "lifespan":
            await self._handle_lifespan(scope, receive, send)
            return

        if scope["type"] != "http":
            await PlainTextResponse("Unsupported", status_code=400)(scope, receive, send)
            return

        await self._handle_http(scope, receive, send)

    async def _handle_http(self, scope: Scope, receive: Receive, send: Send):
        path = scope["path"]
        method = scope["method"]
        logger.info(f"Incoming request: {method} {path}")

        matched = self.router.match(path)
        if matched is None:
            ROUTE_MISSES.inc()
            logger.warning(f"No route match for {path}")
            await PlainTextResponse("Route not found", status_code=404)(scope, receive, send)
            return

        pattern, target, handler = matched
        ROUTE_MATCHES.labels(pattern=pattern).inc()
        await handler(scope, receive, send)

    def add_cleanup_callback(self, cb: callable) -> None:
        self.cleanup_callbacks.append(cb)

    async def _handle_lifespan(self, scope: Scope, receive: Receive, send: Send):
        while True:
            message = await receive()
            if message["type"] == "lifespan.startup":
                REGISTERED_ROUTES.set(len(self.router))
                logger.info(f"[router] Serving {len(self.router)} route(s)")
                await send({"type": "lifespan.startup.complete"})
            elif message["type"] == "lifespan.shutdown":
                for cb in self.cleanup_callbacks:
                    result = cb()
                    if asyncio.iscoroutine(result): await result
                logger.info("[router] Shutdown complete. All resources closed.")
                await send({"type": "lifespan.shutdown.complete"})
                return
