import asyncio
import logging

import aiohttp

from relaybot.constants import NOTIFY_API_URL

logger = logging.getLogger(__name__)


class PushNotifier:
    """Envoie un texte à l'API LINE Notify.

    Un seul essai par notification. Les erreurs sont loggées puis ignorées.
    """

    def __init__(self, session: aiohttp.ClientSession, token: str, api_url: str = NOTIFY_API_URL):
        self._session = session
        self._token = token
        self._api_url = api_url

    async def notify(self, text: str) -> bool:
        headers = {"Authorization": f"Bearer {self._token}"}
        try:
            async with self._session.post(self._api_url, headers=headers, data={"message": text}) as resp:
                status = resp.status
        except (aiohttp.ClientError, asyncio.TimeoutError, ValueError) as e:
            logger.error("[Notify] Erreur lors de l'envoi de la notification: %r", e)
            return False

        if 200 <= status < 300:
            logger.info("[Notify] Status is %s", status)
            return True

        logger.warning("[Notify] Notification refusée, status is %s", status)
        return False
