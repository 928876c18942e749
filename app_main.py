from __future__ import annotations

import logging
import sys
from pathlib import Path

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles


PROJECT_ROOT = Path(__file__).resolve().parent
API_CODE_PATH = PROJECT_ROOT / "api-code"
if str(API_CODE_PATH) not in sys.path:
    sys.path.insert(0, str(API_CODE_PATH))

from env_loader import load_local_env  # noqa: E402
from routers import build_chat_router  # noqa: E402
from services import EchoBotService  # noqa: E402
from settings import Settings, get_settings  # noqa: E402


logger = logging.getLogger("echobot")


def create_app(settings: Settings) -> FastAPI:
    app = FastAPI(
        title="EchoBot 9000 API",
        version="0.1.0",
        description="Stateless demo chatbot that greets or shouts back.",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins,
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    chat_service = EchoBotService(bot_name=settings.bot_name)
    app.include_router(build_chat_router(chat_service))

    static_path = Path(settings.static_dir)
    if not static_path.is_absolute():
        static_path = PROJECT_ROOT / static_path
    if settings.serve_static and static_path.is_dir():
        app.mount("/", StaticFiles(directory=str(static_path), html=True), name="client")
    elif settings.serve_static:
        logger.warning("Static client directory %s not found; serving API only.", static_path)

    return app


load_local_env(PROJECT_ROOT / ".env")
settings = get_settings()

logging.basicConfig(level=settings.log_level)

app = create_app(settings)


if __name__ == "__main__":
    import uvicorn

    logger.info("%s listening on http://%s:%d", settings.bot_name, settings.host, settings.port)
    uvicorn.run("app_main:app", host=settings.host, port=settings.port, reload=True)
