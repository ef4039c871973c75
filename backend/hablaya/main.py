# hablaya/main.py
import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.encoders import jsonable_encoder
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from hablaya.config import settings
from hablaya.api.routers import chat, speak, transcribe, health

logger = logging.getLogger("uvicorn.error")

logging.getLogger("hablaya").setLevel(settings.log_level.upper())

app = FastAPI(title=settings.APP_NAME)

# CORS (browser front end on another origin during development)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=["X-Voice-Used", "X-Speed-Used", "X-Emphasis-Used"],
)

@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    """Malformed payloads are client errors (400), not 422"""
    logger.info("[request] %s %s rejected: %s", request.method, request.url.path, exc.errors())
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": "INVALID_REQUEST", "errors": jsonable_encoder(exc.errors())},
    )

@app.on_event("startup")
async def on_startup():
    if not settings.openai_api_key:
        logger.warning("[config] OPENAI_API_KEY not set: chat, speech and transcription will fail")
    logger.info("[config] env=%s chat_model=%s prompt_style=%s",
                settings.env, settings.chat_model, settings.prompt_style)

# REST
app.include_router(chat.router, prefix="/api")
app.include_router(speak.router, prefix="/api")
app.include_router(transcribe.router, prefix="/api")
app.include_router(health.router, prefix="/api")

@app.get("/healthz")
def healthz():
    return {"ok": True}
