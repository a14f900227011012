"""Best-effort human-readable notifications.

Notification delivery never affects execution: failures are logged and
dropped.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from aiogram import Bot

    from scorekeeper.config.models import TelegramConfig

logger = logging.getLogger(__name__)

MAX_SEND_LENGTH = 4000  # Below Telegram's 4096 limit


class Notifier(Protocol):
    async def send(self, message: str) -> None: ...


class NullNotifier:
    """Notifier used when no chat backend is configured."""

    async def send(self, message: str) -> None:
        return None


class TelegramNotifier:
    """Posts plain-text messages to a single Telegram chat."""

    def __init__(self, bot: Bot, chat_id: str):
        self._bot = bot
        self._chat_id = chat_id

    @classmethod
    def from_config(cls, config: TelegramConfig) -> TelegramNotifier:
        from aiogram import Bot

        if config.bot_token is None or not config.chat_id:
            raise ValueError("Telegram notifier requires bot_token and chat_id")
        return cls(Bot(token=config.bot_token.get_secret_value()), config.chat_id)

    async def send(self, message: str) -> None:
        await self._bot.send_message(
            self._chat_id, message[:MAX_SEND_LENGTH], parse_mode=None
        )

    async def close(self) -> None:
        await self._bot.session.close()


def build_notifier(config: TelegramConfig | None) -> Notifier:
    if config is not None and config.enabled:
        return TelegramNotifier.from_config(config)
    return NullNotifier()


async def notify(notifier: Notifier, message: str) -> None:
    """Send a message, logging instead of raising on failure."""
    try:
        await notifier.send(message)
    except Exception as e:
        logger.warning(
            "notification_failed",
            extra={"error.message": str(e), "notification.preview": message[:50]},
        )
