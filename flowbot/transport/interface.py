from abc import ABC, abstractmethod

from pydantic import BaseModel, Field


class InboundMessage(BaseModel):
    """
    A message event delivered by the transport.
    """
    author_id: str
    text: str
    channel_id: str
    is_from_self: bool = Field(
        False,
        description="True for messages the bot sent itself; these are dropped before any processing."
    )


class MessageSender(ABC):
    """
    Abstract Base Class interface that defines the outbound side of any transport
    (chat platform gateway, HTTP webhook, console, ...)
    """

    @abstractmethod
    async def send(self, channel_id: str, text: str) -> bool:
        """
        Delivers `text` to `channel_id`. Returns False when delivery failed.
        Fire-and-forget for the caller: failures are logged, never retried.
        """
        pass
