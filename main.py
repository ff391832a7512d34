import uvicorn
from dotenv import load_dotenv
from pathrouter.config.settings import Settings, build_route_provider
from pathrouter.core.logging_setup import configure_logging
from pathrouter.core.routing_table import Router
from pathrouter.core.router_app import RouterApp
from pathrouter.core.admin_router import AdminRouter, AdminMount

# Load environment variables from .env file
load_dotenv()
settings = Settings.from_env()
configure_logging(settings.log_level)

router = Router(provider=build_route_provider(settings))
router.build_routes()

# Admin endpoints read the same table the router app serves
app = AdminMount(AdminRouter(router), RouterApp(router))

if __name__ == "__main__":
    uvicorn.run(app, host=settings.host, port=settings.port)
