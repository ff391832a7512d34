import logging
from pathrouter.core.route_handler import current_route_var

LOG_FORMAT = "%(asctime)s [%(levelname)s] [route=%(route)s] %(name)s: %(message)s"
HANDLER_NAME = "pathrouter"

class RouteLogFilter(logging.Filter):
    def filter(self, record):
        record.route = current_route_var.get() or "-"
        return True

def configure_logging(level: str = "INFO", stream=None) -> logging.Handler:
    """Install the route-tagging root handler, replacing one from an earlier call."""
    root = logging.getLogger()
    for handler in list(root.handlers):
        if handler.get_name() == HANDLER_NAME:
            root.removeHandler(handler)

    handler = logging.StreamHandler(stream)
    handler.set_name(HANDLER_NAME)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    handler.addFilter(RouteLogFilter())
    root.addHandler(handler)
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    return handler
