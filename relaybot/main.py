import logging

import aiohttp
from discord import Intents
from discord.ext import commands
from dotenv import load_dotenv

load_dotenv()

from . import config
from .constants import HTTP_TIMEOUT_SECONDS, NOTIFICATION_INTERVAL_SECONDS
from .cooldown import ChannelCooldowns
from .notifier import PushNotifier
from .shortener import LinkShortener


logging.basicConfig(
    level=getattr(logging, config.LOG_LEVEL, logging.INFO),
    format="[%(asctime)s] %(levelname)s %(name)s: %(message)s",
)


class RelayBot(commands.Bot):
    def __init__(self, shortener_api_key: str, notify_token: str):
        intents = Intents.default()
        intents.message_content = True  # Nécessaire pour lire le contenu des messages
        super().__init__(command_prefix=commands.when_mentioned, intents=intents, help_command=None)

        self.cooldowns = ChannelCooldowns(NOTIFICATION_INTERVAL_SECONDS)
        self.http_session: aiohttp.ClientSession | None = None
        self.shortener: LinkShortener | None = None
        self.notifier: PushNotifier | None = None
        self._shortener_api_key = shortener_api_key
        self._notify_token = notify_token

    async def setup_hook(self):
        # Une seule session HTTP partagée par x.gd et LINE Notify
        self.http_session = aiohttp.ClientSession(
            timeout=aiohttp.ClientTimeout(total=HTTP_TIMEOUT_SECONDS)
        )
        self.shortener = LinkShortener(self.http_session, self._shortener_api_key)
        self.notifier = PushNotifier(self.http_session, self._notify_token)

        await self.load_extension("relaybot.cogs.relay")

    async def close(self):
        await super().close()
        if self.http_session is not None and not self.http_session.closed:
            await self.http_session.close()

    async def on_ready(self):
        logging.info("%s is connected!", self.user.name)
        logging.info("Connected to %s guild(s)", len(self.guilds))


def main():
    missing = config.missing_settings()
    if missing:
        raise RuntimeError(f"Missing {', '.join(missing)} in environment")

    bot = RelayBot(config.XGD_API_KEY, config.NOTIFY_TOKEN)
    bot.run(config.DISCORD_TOKEN, log_handler=None)


if __name__ == "__main__":
    main()
