"""
Outbound message channel to the game server chat.

Every channel (CFTools, logging-only) inherits from this base class so the
webhook route and the expiry sweeper can deliver text without knowing
which backend is configured.
"""

import logging
from abc import ABC, abstractmethod

logger = logging.getLogger(__name__)


class DeliveryError(Exception):
    """Raised when a message could not be delivered to the game server."""

    pass


class MessageChannel(ABC):
    """Abstract base for outbound chat delivery."""

    @property
    @abstractmethod
    def channel_name(self) -> str:
        """Identifier used in logs."""
        pass

    @abstractmethod
    async def send(self, content: str) -> None:
        """
        Deliver one line of text to the in-game chat.

        Raises:
            DeliveryError: If the message could not be delivered
        """
        pass

    async def close(self) -> None:
        """Release any underlying resources."""
        pass


class LoggingMessageChannel(MessageChannel):
    """
    Channel that only logs messages.

    Used when CFTools credentials are not configured, e.g. local development.
    Keeps the sent messages for inspection.
    """

    def __init__(self):
        self.sent: list[str] = []

    @property
    def channel_name(self) -> str:
        return "log"

    async def send(self, content: str) -> None:
        self.sent.append(content)
        logger.info(f"[chat] {content}")


async def deliver(channel: MessageChannel, content: str) -> bool:
    """
    Send a message and swallow delivery failures.

    Failures are logged and never retried. Returns True on success.
    """
    try:
        await channel.send(content)
        return True
    except Exception as e:
        logger.error(f"Failed to deliver message via {channel.channel_name}: {e}")
        return False
