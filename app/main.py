from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Optional

import uvicorn
from fastapi import APIRouter, Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from pydantic import BaseModel, ConfigDict, Field

from assistant.core.errors import DeclutterError, ValidationError
from assistant.providers import ProviderAdapter, build_provider
from config.settings import Settings, get_settings


logging.basicConfig(level=logging.INFO, format="[%(asctime)s] %(levelname)s - %(message)s")
logger = logging.getLogger("declutter")


class ApiJSONResponse(JSONResponse):
    media_type = "application/json; charset=utf-8"

    def __init__(self, content: Any, status_code: int = 200, **kwargs: Any) -> None:
        super().__init__(content, status_code=status_code, **kwargs)
        self.headers["cache-control"] = "no-store"


class AnalyzeRequest(BaseModel):
    model_config = ConfigDict(extra="ignore")

    # Loosely typed so a wrong type gets the same answer as a missing field.
    imageBase64: Any = Field(None, description="Room photo as a data:image/...;base64 URL")


class ChatRequest(BaseModel):
    model_config = ConfigDict(extra="ignore")

    messages: Any = Field(
        None,
        description="Full chat transcript of {role: 'user'|'model', text} turns (frontend-managed)",
    )


async def _json_object(request: Request) -> dict:
    """Request body as a dict; anything that is not a JSON object reads as ``{}``."""
    try:
        data = await request.json()
    except ValueError:
        return {}
    return data if isinstance(data, dict) else {}


async def analyze_request(request: Request) -> AnalyzeRequest:
    return AnalyzeRequest.model_validate(await _json_object(request))


async def chat_request(request: Request) -> ChatRequest:
    return ChatRequest.model_validate(await _json_object(request))


def get_provider(request: Request) -> ProviderAdapter:
    return request.app.state.provider


router = APIRouter(prefix="/api", default_response_class=ApiJSONResponse)


@router.post("/analyze")
async def analyze(
    req: AnalyzeRequest = Depends(analyze_request),
    provider: ProviderAdapter = Depends(get_provider),
):
    image = req.imageBase64
    if not isinstance(image, str) or not image:
        raise ValidationError("imageBase64 is required")

    logger.info("Incoming analyze: provider=%s image_chars=%s", provider.name, len(image))
    text = await provider.analyze(image)
    logger.info("Analysis ready: %s chars", len(text))
    return ApiJSONResponse({"text": text})


@router.post("/chat")
async def chat(
    req: ChatRequest = Depends(chat_request),
    provider: ProviderAdapter = Depends(get_provider),
):
    messages = req.messages
    if not isinstance(messages, list) or not messages:
        raise ValidationError("messages is required")

    logger.info("Incoming chat: provider=%s history_turns=%s", provider.name, len(messages))
    text = await provider.chat(messages)
    logger.info("Chat reply ready: %s chars", len(text))
    return ApiJSONResponse({"text": text})


async def health(request: Request) -> ApiJSONResponse:
    provider: ProviderAdapter = request.app.state.provider
    return ApiJSONResponse({"status": "ok", "provider": provider.name, "model": provider.model})


async def _declutter_error_handler(request: Request, exc: DeclutterError) -> ApiJSONResponse:
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    else:
        logger.warning("%s %s rejected: %s", request.method, request.url.path, exc.message)
    return ApiJSONResponse({"error": exc.message}, status_code=exc.status_code)


def create_app(
    settings: Optional[Settings] = None,
    provider: Optional[ProviderAdapter] = None,
) -> FastAPI:
    settings = settings or get_settings()
    logging.getLogger().setLevel(settings.log_level)

    app = FastAPI(title="Room Declutter Assistant", version="1.0.0")
    app.state.settings = settings
    app.state.provider = provider or build_provider(settings)

    logger.info(
        "Config: provider=%s model=%s key_set=%s",
        app.state.provider.name,
        app.state.provider.model,
        bool(app.state.provider.api_key),
    )

    # CORS: allow local frontend during development
    if settings.app_env.lower() in {"dev", "development", "local"}:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=["*"],
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    @app.middleware("http")
    async def last_resort(request: Request, call_next):
        try:
            return await call_next(request)
        except Exception as e:
            logger.exception("Request processing failed: %s", e)
            return ApiJSONResponse({"error": str(e) or "Internal server error"}, status_code=500)

    app.add_exception_handler(DeclutterError, _declutter_error_handler)
    app.include_router(router)
    app.add_api_route("/health", health, methods=["GET"])

    # Everything outside /api/analyze and /api/chat is the built frontend.
    static_dir = Path(settings.static_dir)
    if static_dir.is_dir():
        app.mount("/", StaticFiles(directory=static_dir, html=True), name="static")
    else:
        logger.warning("Static directory %s not found; serving API routes only", static_dir)

    return app


app = create_app()


def main() -> None:
    settings = get_settings()
    uvicorn.run("app.main:app", host=settings.host, port=settings.port)


if __name__ == "__main__":
    main()
