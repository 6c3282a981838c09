"""
Transport Layer - Inbound Events and Outbound Delivery

The chat platform itself is external. This package defines what the core
consumes from it (InboundMessage) and what it needs from it (MessageSender).
"""

from flowbot.transport.interface import InboundMessage, MessageSender

__all__ = [
    "InboundMessage",
    "MessageSender",
]
