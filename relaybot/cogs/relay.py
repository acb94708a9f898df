import asyncio
import logging

import aiohttp
import discord
from discord.ext import commands

from relaybot.constants import HTTP_TIMEOUT_SECONDS, NOTIFICATION_TEMPLATE, UNKNOWN_CHANNEL_NAME
from relaybot.cooldown import ChannelCooldowns
from relaybot.notifier import PushNotifier
from relaybot.results import Resolved
from relaybot.shortener import LinkShortener

logger = logging.getLogger(__name__)

# discord.py relaie tel quel les erreurs réseau (OSError, aiohttp.ClientError)
LOOKUP_ERRORS = (
    discord.HTTPException,
    discord.InvalidData,
    aiohttp.ClientError,
    OSError,
    asyncio.TimeoutError,
)


def is_relayable(message) -> bool:
    """Messages humains, sur un serveur, avec du texte."""
    if message.author.bot:
        return False
    if not message.guild:
        return False
    if not message.content:
        return False
    return True


def format_notification(channel_name: str, nickname: str, content: str, link: str) -> str:
    return NOTIFICATION_TEMPLATE.format(
        channel=channel_name,
        author=nickname,
        content=content,
        link=link,
    )


def _describe(error: Exception) -> str:
    return str(error) or type(error).__name__


class RelayCog(commands.Cog):
    """Relaie les messages du serveur vers LINE Notify, un envoi par salon et par minute."""

    def __init__(
        self,
        bot: commands.Bot,
        cooldowns: ChannelCooldowns,
        shortener: LinkShortener,
        notifier: PushNotifier,
    ):
        self.bot = bot
        self.cooldowns = cooldowns
        self.shortener = shortener
        self.notifier = notifier

    async def _resolve_channel_name(self, channel_id: int) -> Resolved:
        try:
            channel = self.bot.get_channel(channel_id)
            if channel is None:
                channel = await asyncio.wait_for(self.bot.fetch_channel(channel_id), HTTP_TIMEOUT_SECONDS)
        except LOOKUP_ERRORS as e:
            return Resolved(UNKNOWN_CHANNEL_NAME, _describe(e))

        name = getattr(channel, "name", None)
        if not name:
            # Salon sans nom (hors serveur) : chaîne vide
            return Resolved("", "channel has no name")
        return Resolved(name)

    async def _resolve_nickname(self, message) -> Resolved:
        author = message.author
        if isinstance(author, discord.Member):
            # Déjà un membre du serveur : pas besoin d'appel REST
            if author.nick:
                return Resolved(author.nick)
            return Resolved(author.name, "no nickname")

        try:
            member = message.guild.get_member(author.id)
            if member is None:
                member = await asyncio.wait_for(message.guild.fetch_member(author.id), HTTP_TIMEOUT_SECONDS)
        except LOOKUP_ERRORS as e:
            return Resolved(author.name, _describe(e))

        if member.nick:
            return Resolved(member.nick)
        return Resolved(author.name, "no nickname")

    async def relay(self, message) -> bool:
        """Envoie la notification si le salon n'est pas en cooldown.

        Retourne True si une notification a été tentée. L'horodatage du salon
        est mis à jour même si l'envoi échoue.
        """
        channel_id = message.channel.id

        async with self.cooldowns.claim(channel_id) as allowed:
            if not allowed:
                logger.debug("[Relay] Salon %s en cooldown, message %s ignoré", channel_id, message.id)
                return False

            channel_name = await self._resolve_channel_name(channel_id)
            nickname = await self._resolve_nickname(message)
            for lookup in (channel_name, nickname):
                if lookup.degraded:
                    logger.debug("[Relay] Valeur de repli %r (%s)", lookup.value, lookup.fallback_reason)

            link = await self.shortener.shorten(message.jump_url)

            text = format_notification(channel_name.value, nickname.value, message.content, link.value)
            await self.notifier.notify(text)

            self.cooldowns.record(channel_id)

        logger.info("[Relay] Notification pour le salon %s (message %s)", channel_id, message.id)
        return True

    @commands.Cog.listener()
    async def on_message(self, message):
        if not is_relayable(message):
            return

        await self.relay(message)


async def setup(bot: commands.Bot):
    await bot.add_cog(RelayCog(bot, bot.cooldowns, bot.shortener, bot.notifier))
