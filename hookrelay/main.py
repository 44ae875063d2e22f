"""hookrelay - FastAPI application relaying webhooks to a chat bot."""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

import httpx
import uvicorn
from fastapi import FastAPI, Request, Response, status
from fastapi.responses import JSONResponse

from hookrelay.config import VERSION, Settings
from hookrelay.errors import EmptyBodyError, MethodNotAllowedError, RelayError
from hookrelay.router import Relay
from hookrelay.utils import external_ip

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

HOOK_METHODS = ["GET", "POST", "PUT", "PATCH", "DELETE", "HEAD", "OPTIONS"]


def _dropped(settings: Settings, error: Exception) -> Response:
    """Response for a request that was logged and dropped."""
    if not settings.surface_errors:
        return Response(status_code=status.HTTP_200_OK)
    code = getattr(error, "status_code", status.HTTP_500_INTERNAL_SERVER_ERROR)
    return JSONResponse(
        status_code=code,
        content={"status": "error", "message": str(error)},
    )


def log_startup(settings: Settings) -> None:
    """Log where the webhook can be reached."""
    try:
        gate_ip = external_ip()
    except OSError as e:
        logger.error(f"Failed to resolve external IP: {e}")
        gate_ip = ""

    logger.info(f"hookIP: {gate_ip}")
    logger.info(f"hookPort: {settings.port}")
    logger.info(f"hookPath: {settings.hook_path}")
    logger.info(f"target: {settings.target}")
    logger.info(f"robotUrl: {settings.robot_url}")
    logger.info(f"webhook listenAddr: http://{gate_ip}:{settings.port}{settings.hook_path}")


def create_app(
    settings: Settings | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> FastAPI:
    """Build the application around one immutable ``Settings``."""
    settings = settings or Settings()
    relay = Relay(settings, transport=transport)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        """Application lifespan handler for startup/shutdown."""
        logging.getLogger().setLevel(settings.log_level.upper())
        log_startup(settings)
        logger.info("hookrelay started")

        yield

        logger.info("hookrelay stopped")

    app = FastAPI(
        title="hookrelay",
        description="Relays Grafana alerts and GitLab events to WeChat Work / Feishu robots",
        version=VERSION.lstrip("v"),
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.relay = relay

    @app.get("/health")
    async def health_check() -> dict[str, str]:
        """Health check endpoint."""
        return {"status": "healthy"}

    @app.api_route(settings.hook_path, methods=HOOK_METHODS)
    async def webhook(request: Request) -> Response:
        """Receive one webhook and forward it to the robot."""
        try:
            if request.method != "POST":
                raise MethodNotAllowedError(request.method)

            body = await request.body()
            if not body:
                raise EmptyBodyError()

            result = await relay.dispatch(body, request.headers)
            if result.error is not None:
                return _dropped(settings, result.error)
        except RelayError as e:
            logger.warning(f"Parse error: {e}")
            return _dropped(settings, e)
        except Exception as e:
            logger.exception(f"Recovered from unexpected error: {e}")
            return _dropped(settings, e)

        return Response(status_code=status.HTTP_200_OK)

    return app


def run(settings: Settings) -> None:
    """Run the application using uvicorn."""
    uvicorn.run(
        create_app(settings),
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )
