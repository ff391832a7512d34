from starlette.types import ASGIApp, Scope, Receive, Send
from starlette.requests import Request
from starlette.responses import PlainTextResponse, JSONResponse, Response
from pathrouter.core.metrics import render_prometheus_metrics
from pathrouter.core.routing_table import Router

ADMIN_PREFIX = "/__"


class AdminRouter:
    """Introspection endpoints over a Router's table."""

    def __init__(self, router: Router) -> None:
        self.router = router

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        path = scope.get("path", "")
        if path == "/__health":
            await self.health(scope, receive, send)
        elif path == "/__routes":
            await self.routes(scope, receive, send)
        elif path == "/__match":
            await self.match(scope, receive, send)
        elif path == "/__metrics":
            await self.metrics(scope, receive, send)
        else:
            await PlainTextResponse("Not Found", status_code=404)(scope, receive, send)

    async def health(self, scope: Scope, receive: Receive, send: Send) -> None:
        await PlainTextResponse("OK")(scope, receive, send)

    async def routes(self, scope: Scope, receive: Receive, send: Send) -> None:
        data = [
            {"pattern": pattern, "target": target}
            for pattern, target, _ in self.router.routes()
        ]
        await JSONResponse(data)(scope, receive, send)

    async def match(self, scope: Scope, receive: Receive, send: Send) -> None:
        path = Request(scope).query_params.get("path")
        if path is None:
            return await JSONResponse({"error": "Missing 'path' query parameter"},
                                      status_code=400)(scope, receive, send)

        matched = self.router.match(path)
        if matched is None:
            return await JSONResponse({"path": path, "matched": False},
                                      status_code=404)(scope, receive, send)

        pattern, target, _ = matched
        await JSONResponse({"path": path, "matched": True,
                            "pattern": pattern, "target": target})(scope, receive, send)

    async def metrics(self, scope: Scope, receive: Receive, send: Send) -> None:
        data, content_type = render_prometheus_metrics()
        await Response(content=data, media_type=content_type)(scope, receive, send)


class AdminMount:
    """Routes HTTP requests under ``prefix`` to the admin app; everything else,
    lifespan included, goes to the main app."""

    def __init__(self, admin_app: ASGIApp, main_app: ASGIApp, prefix: str = ADMIN_PREFIX) -> None:
        self.admin_app = admin_app
        self.main_app = main_app
        self.prefix = prefix

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] == "http" and scope["path"].startswith(self.prefix):
            await self.admin_app(scope, receive, send)
            return
        await self.main_app(scope, receive, send)
