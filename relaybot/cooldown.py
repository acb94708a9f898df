import asyncio
from contextlib import asynccontextmanager
from time import monotonic
from typing import AsyncIterator, Callable


class ChannelCooldowns:
    """Horodatage de la dernière notification envoyée, par salon.

    Chaque salon a son propre verrou : deux messages du même salon ne peuvent
    pas passer le contrôle en même temps, les autres salons ne sont pas bloqués.
    """

    def __init__(self, interval_seconds: float, clock: Callable[[], float] = monotonic):
        self.interval_seconds = interval_seconds
        self._clock = clock
        self._last_notify_by_channel: dict[int, float] = {}
        # Un verrou par salon vu, conservé tant que le bot tourne (borné par le nombre de salons)
        self._locks: dict[int, asyncio.Lock] = {}

    def lock_for(self, channel_id: int) -> asyncio.Lock:
        lock = self._locks.get(channel_id)
        if lock is None:
            lock = asyncio.Lock()
            self._locks[channel_id] = lock
        return lock

    def should_notify(self, channel_id: int) -> bool:
        last_notify = self._last_notify_by_channel.get(channel_id)
        if last_notify is None:
            return True
        return (self._clock() - last_notify) >= self.interval_seconds

    def record(self, channel_id: int) -> None:
        self._last_notify_by_channel[channel_id] = self._clock()

    def last_notified(self, channel_id: int) -> float | None:
        return self._last_notify_by_channel.get(channel_id)

    @asynccontextmanager
    async def claim(self, channel_id: int) -> AsyncIterator[bool]:
        """Verrouille le salon et indique si une notification est autorisée.

        L'appelant doit appeler ``record`` avant de sortir du bloc.
        """
        async with self.lock_for(channel_id):
            yield self.should_notify(channel_id)
