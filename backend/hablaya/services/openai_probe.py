"""
OpenAI reachability probe used by the health endpoint
"""
import logging
from typing import Dict

import httpx

from .provider_base import OpenAIService
from ..config import settings

logger = logging.getLogger(__name__)


class OpenAIProbeService(OpenAIService):
    """Lists models to check the key and the network path"""

    @property
    def name(self) -> str:
        return "OpenAI Models API"

    async def probe(self) -> Dict:
        """
        Returns {"status": int, "ok": bool}, or {"error": str} when the
        request could not be made at all. Never raises for transport errors.
        """
        try:
            async with self._client(timeout=10) as client:
                resp = await client.get(settings.models_api_url, headers=self._auth_headers())
        except httpx.HTTPError as e:
            logger.warning("[Health] OpenAI probe failed: %s", e)
            return {"error": str(e) or e.__class__.__name__}
        return {"status": resp.status_code, "ok": resp.is_success}


# Global singleton
probe_service = OpenAIProbeService()
