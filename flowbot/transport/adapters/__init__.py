from flowbot.transport.adapters.memory import LoggingSender, OutboxSender

__all__ = [
    "LoggingSender",
    "OutboxSender",
]
