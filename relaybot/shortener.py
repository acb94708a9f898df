import asyncio
import json
import logging

import aiohttp

from relaybot.constants import SHORTENER_API_URL
from relaybot.results import Resolved

logger = logging.getLogger(__name__)


class LinkShortener:
    """Client de l'API de raccourcissement x.gd.

    En cas d'échec (réseau, statut HTTP, réponse illisible), le lien d'origine
    est renvoyé tel quel : la notification part quand même.
    """

    def __init__(self, session: aiohttp.ClientSession, api_key: str, api_url: str = SHORTENER_API_URL):
        self._session = session
        self._api_key = api_key
        self._api_url = api_url

    async def shorten(self, url: str) -> Resolved:
        params = {"url": url, "key": self._api_key}
        try:
            async with self._session.get(self._api_url, params=params) as resp:
                if not 200 <= resp.status < 300:
                    return self._fallback(url, f"HTTP {resp.status}")
                body = await resp.read()
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            return self._fallback(url, str(e) or type(e).__name__)

        try:
            # UnicodeDecodeError (octets non UTF-8) est une ValueError
            short_url = json.loads(body)["shorturl"]
        except (ValueError, KeyError, TypeError):
            return self._fallback(url, "malformed response")

        if not isinstance(short_url, str) or not short_url:
            return self._fallback(url, "malformed response")

        return Resolved(short_url)

    def _fallback(self, url: str, reason: str) -> Resolved:
        logger.warning("[Shortener] Lien non raccourci (%s): %s", reason, url)
        return Resolved(url, reason)
