"""
Twilio WhatsApp client with retry logic.
"""

import requests
from tenacity import retry, stop_after_attempt, wait_exponential, retry_if_exception_type

from streak_agent.config import TWILIO_API_BASE, WHATSAPP_MAX_CHARS, logger
from streak_agent.errors import DeliveryFailed


def whatsapp_address(number: str) -> str:
    """Prefix a phone number with the whatsapp: channel if it isn't already."""
    return number if number.startswith("whatsapp:") else f"whatsapp:{number}"


# Only failures to connect are retried. A read timeout is not: the request
# may already have reached Twilio and a retry could send a duplicate.
@retry(
    stop=stop_after_attempt(3),
    wait=wait_exponential(multiplier=1, min=2, max=10),
    retry=retry_if_exception_type((requests.ConnectionError, requests.ConnectTimeout)),
    reraise=True
)
def _send_whatsapp_chunk(account_sid: str, auth_token: str, from_number: str, to: str, text: str) -> requests.Response:
    """Send a single message chunk through the Twilio Messages API."""
    return requests.post(
        f"{TWILIO_API_BASE}/Accounts/{account_sid}/Messages.json",
        auth=(account_sid, auth_token),
        data={
            "From": whatsapp_address(from_number),
            "To": whatsapp_address(to),
            "Body": text,
        },
        timeout=30
    )


def _deliver(to: str, message: str, account_sid: str, auth_token: str, from_number: str):
    chunks = [message[i:i + WHATSAPP_MAX_CHARS] for i in range(0, len(message), WHATSAPP_MAX_CHARS)] or [""]

    for chunk in chunks:
        response = _send_whatsapp_chunk(account_sid, auth_token, from_number, to, chunk)
        if not response.ok:
            raise DeliveryFailed(f"Twilio API error: {response.status_code} - {response.text}")


def send_whatsapp(to: str, message: str, account_sid: str, auth_token: str, from_number: str) -> bool:
    """Send a WhatsApp message. Returns success status; failures are logged, never raised."""
    if not (account_sid and auth_token and from_number):
        logger.error("Twilio credentials not configured - cannot send message")
        return False

    try:
        _deliver(to, message, account_sid, auth_token, from_number)
    except Exception as e:
        logger.error(f"WhatsApp send to {to} failed: {e}")
        return False

    logger.info(f"Message sent to {to}")
    return True


class WhatsAppSender:
    """Binds Twilio credentials into a send(user_id, text) -> bool callable."""

    def __init__(self, account_sid: str, auth_token: str, from_number: str):
        self.account_sid = account_sid
        self.auth_token = auth_token
        self.from_number = from_number

    def __call__(self, user_id: str, text: str) -> bool:
        return send_whatsapp(user_id, text, self.account_sid, self.auth_token, self.from_number)
