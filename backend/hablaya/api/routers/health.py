import datetime as dt

from fastapi import APIRouter

from hablaya.config import settings
from hablaya.services.openai_probe import probe_service

router = APIRouter(tags=["health"])

@router.get("/test")
async def diagnostics():
    """
    Deployment self-test.

    Reports whether the OpenAI key is configured and, when it is, whether
    the models endpoint is reachable with it. A missing key is reported,
    not treated as a failure.

    Example response:
        {
            "timestamp": "2025-01-01T12:00:00+00:00",
            "environment": {"hasOpenAIKey": True, "openAIKeyLength": 51, "runtime": "uvicorn"},
            "openaiTest": {"status": 200, "ok": True},
            "status": "healthy"
        }
    """
    key = settings.openai_api_key
    results = {
        "timestamp": dt.datetime.now(dt.timezone.utc).isoformat(),
        "environment": {
            "hasOpenAIKey": bool(key),
            "openAIKeyLength": len(key) if key else 0,
            "runtime": settings.runtime,
        },
        "status": "healthy",
    }
    if key:
        results["openaiTest"] = await probe_service.probe()
    return results
