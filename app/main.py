from fastapi import FastAPI
import logging

from app.api.routes import router
from app.config import settings_from_env
from app.runtime import init_runtime, shutdown_runtime

APP_NAME = "interaction-bot"
APP_VERSION = "0.1.0"

app = FastAPI(title=APP_NAME, version=APP_VERSION)
app.include_router(router)
# Configure logging
logging.basicConfig(level=settings_from_env().log_level.upper())
logger = logging.getLogger(__name__)


@app.on_event("startup")
async def _startup() -> None:
    runtime = init_runtime()
    logger.info("Listening for interactions; commands: %s", ", ".join(runtime.dispatcher.command_names))


@app.on_event("shutdown")
async def _shutdown() -> None:
    await shutdown_runtime()


@app.get("/info")
async def info() -> dict[str, str]:
    return {"name": APP_NAME, "version": APP_VERSION}
