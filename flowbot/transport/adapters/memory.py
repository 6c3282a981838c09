import logging
from collections import deque
from typing import Deque, Dict, List

from ..interface import MessageSender

logger = logging.getLogger(__name__)


class OutboxSender(MessageSender):
    """
    Queues outbound messages per channel until the transport drains them.
    Each channel keeps at most `max_messages`; older ones are dropped first.
    """

    def __init__(self, max_messages: int = 100):
        self.max_messages = max_messages
        self._outbox: Dict[str, Deque[str]] = {}

    async def send(self, channel_id: str, text: str) -> bool:
        queue = self._outbox.get(channel_id)
        if queue is None:
            queue = self._outbox[channel_id] = deque(maxlen=self.max_messages)
        queue.append(text)
        return True

    def peek(self, channel_id: str) -> List[str]:
        return list(self._outbox.get(channel_id, ()))

    def drain(self, channel_id: str) -> List[str]:
        return list(self._outbox.pop(channel_id, ()))


class LoggingSender(MessageSender):
    """
    Writes outbound messages to the log. Default sender when no transport is wired.
    """

    async def send(self, channel_id: str, text: str) -> bool:
        logger.info(f"[{channel_id}] {text}")
        return True
