"""
Inbound message pipeline: classify → engine → store → render → deliver.

State is saved before delivery, so a failed send never loses a logged day.
"""

from dataclasses import dataclass
from datetime import date
from typing import Callable, Optional

from streak_agent.config import logger
from streak_agent.engine import RECORD_INDEPENDENT, apply
from streak_agent.errors import StoreUnavailable
from streak_agent.intents import classify
from streak_agent.models import Intent, Outcome
from streak_agent.responses import ResponseSelector

Sender = Callable[[str, str], bool]


@dataclass
class MessageResult:
    intent: Intent
    outcome: Outcome
    reply: str
    delivered: bool


def deliver(send: Sender, user_id: str, text: str) -> bool:
    """Call the sender, logging (never raising) on failure."""
    try:
        delivered = bool(send(user_id, text))
    except Exception as e:
        logger.error(f"Delivery to {user_id} raised: {e}")
        return False

    if not delivered:
        logger.error(f"Delivery to {user_id} failed")
    return delivered


def handle_message(
    store,
    sender_id: str,
    body: Optional[str],
    today: date,
    send: Sender,
    selector: Optional[ResponseSelector] = None,
) -> Optional[MessageResult]:
    """
    Process one inbound message for one user.

    Returns None if the store could not be read or written; in that case the
    record is untouched and no reply is sent.
    """
    selector = selector or ResponseSelector()
    intent = classify(body)
    logger.info(f"Received message from {sender_id}: {intent.kind.value}")

    record = None
    try:
        if intent.kind not in RECORD_INDEPENDENT:
            record = store.get(sender_id)

        new_record, outcome = apply(record, intent, today)

        if new_record is not None and new_record != record:
            store.put(sender_id, new_record)
    except StoreUnavailable as e:
        logger.error(f"Store unavailable while handling message from {sender_id}: {e}")
        return None

    reply = selector.render(outcome)
    delivered = deliver(send, sender_id, reply)

    return MessageResult(intent=intent, outcome=outcome, reply=reply, delivered=delivered)
