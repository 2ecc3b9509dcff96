"""
Streak Agent
WhatsApp habit tracker: users set a goal, text "done"/"nope" each day,
and get a daily reminder plus a running streak count.

This is the Modal entrypoint. All logic is in the streak_agent package.
"""

import modal
import os

# ============================================================================
# MODAL CONFIGURATION
# ============================================================================

image = (
    modal.Image.debian_slim(python_version="3.11")
    .pip_install(
        "anthropic>=0.40.0",
        "requests>=2.28.0",
        "fastapi>=0.100.0",
        "python-multipart>=0.0.6",
        "python-dotenv>=1.0.0",
        "tenacity>=8.2.0",
    )
    .add_local_dir("prompts", "/root/prompts")
    .add_local_dir("streak_agent", "/root/streak_agent")
)

app = modal.App("streak-agent", image=image)

# Persistent volume for users.json
volume = modal.Volume.from_name("streak-agent-data", create_if_missing=True)

from streak_agent.config import (
    USERS_FILE,
    TIMEZONE,
    REMINDER_CRON,
    AI_PHRASING_ENABLED,
    logger,
)
from streak_agent.utils import now_local, today_local, ensure_directories
from streak_agent.storage import JsonUserStore
from streak_agent.responses import ResponseSelector
from streak_agent.handler import handle_message
from streak_agent.reminders import send_reminders
from streak_agent.whatsapp import WhatsAppSender
from streak_agent.claude import ClaudePhraser


# ============================================================================
# HELPERS
# ============================================================================

def _reload_volume():
    """Reload volume to see latest commits from other containers."""
    try:
        volume.reload()
    except RuntimeError:
        pass  # Running locally, not in Modal


def _commit_volume():
    try:
        volume.commit()
    except RuntimeError:
        pass  # Running locally, not in Modal


def _store() -> JsonUserStore:
    _reload_volume()
    ensure_directories()
    store = JsonUserStore(USERS_FILE, on_write=_commit_volume)
    store.initialize()
    return store


def _sender() -> WhatsAppSender:
    return WhatsAppSender(
        os.environ.get("TWILIO_ACCOUNT_SID"),
        os.environ.get("TWILIO_AUTH_TOKEN"),
        os.environ.get("TWILIO_WHATSAPP_NUMBER"),
    )


def _selector() -> ResponseSelector:
    anthropic_key = os.environ.get("ANTHROPIC_API_KEY")
    if AI_PHRASING_ENABLED and anthropic_key:
        return ResponseSelector(generator=ClaudePhraser(anthropic_key))
    return ResponseSelector()


SECRETS = [
    modal.Secret.from_name("twilio"),
    modal.Secret.from_name("anthropic"),
]


# ============================================================================
# DAILY REMINDER
# ============================================================================

@app.function(
    secrets=SECRETS,
    volumes={"/data": volume},
    timeout=300,
    schedule=modal.Cron(REMINDER_CRON, timezone=TIMEZONE),
)
def daily_reminders():
    """Remind every user who hasn't logged today."""
    today = today_local()
    logger.info(f"Running daily reminders for {today.isoformat()}...")

    run = send_reminders(_store(), today, _sender(), only_pending=True)

    logger.info("Daily reminders completed")
    return run.to_dict()


# ============================================================================
# MANUAL TRIGGERS & INSPECTION
# ============================================================================

@app.function(secrets=SECRETS, volumes={"/data": volume}, timeout=300)
def send_reminders_now():
    """Manual trigger: remind every user, whether or not they logged today."""
    run = send_reminders(_store(), today_local(), _sender(), only_pending=False)
    return run.to_dict()


@app.function(volumes={"/data": volume})
def view_user(user_id: str):
    """Fetch one user's record."""
    record = _store().get(user_id)
    if record is None:
        logger.info(f"User not found: {user_id}")
        return {"error": "User not found"}
    return record.to_dict()


@app.function(volumes={"/data": volume})
def view_users():
    """Fetch all user records."""
    users = {user_id: record.to_dict() for user_id, record in _store().list()}
    logger.info(f"{len(users)} user(s) on record")
    return users


# ============================================================================
# WHATSAPP WEBHOOK
# ============================================================================

from fastapi import Request, Response

EMPTY_TWIML = '<?xml version="1.0" encoding="UTF-8"?><Response></Response>'


@app.function(secrets=SECRETS, volumes={"/data": volume}, timeout=120)
@modal.fastapi_endpoint(method="POST")
async def whatsapp_webhook(request: Request):
    """Twilio webhook endpoint for incoming WhatsApp messages."""
    form = await request.form()
    sender_id = form.get("From", "")
    body = form.get("Body", "")

    if sender_id:
        try:
            handle_message(_store(), sender_id, body, today_local(), _sender(), _selector())
        except Exception as e:
            logger.error(f"Unhandled error processing message from {sender_id}: {e}")
    else:
        logger.warning("Webhook call without a From field - ignoring")

    # Replies go out through the REST API, not TwiML
    return Response(content=EMPTY_TWIML, media_type="application/xml")


@app.function()
@modal.fastapi_endpoint(method="GET")
def health():
    return {"status": "ok", "timestamp": now_local().isoformat()}


@app.local_entrypoint()
def main():
    """CLI entrypoint for manual runs."""
    logger.info("Triggering reminders...")
    result = send_reminders_now.remote()
    logger.info(f"Result: {result}")
