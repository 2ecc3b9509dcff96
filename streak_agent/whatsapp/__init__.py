"""WhatsApp delivery module."""

from streak_agent.whatsapp.client import (
    send_whatsapp,
    whatsapp_address,
    WhatsAppSender,
)

__all__ = [
    "send_whatsapp",
    "whatsapp_address",
    "WhatsAppSender",
]
