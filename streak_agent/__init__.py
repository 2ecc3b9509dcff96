"""
Streak Agent Package

Re-exports the public functions used by modal_agent.py and the tests.
"""

# Config and constants
from streak_agent.config import (
    DATA_DIR,
    USERS_FILE,
    TIMEZONE,
    LOCAL_TZ,
    REMINDER_CRON,
    CLAUDE_MODEL,
    AI_PHRASING_ENABLED,
    logger,
)

# Utilities
from streak_agent.utils import (
    now_local,
    today_local,
    yesterday,
    ensure_directories,
)

# Errors
from streak_agent.errors import (
    StreakAgentError,
    StoreUnavailable,
    DeliveryFailed,
    PhrasingGeneratorFailed,
)

# Data model
from streak_agent.models import (
    HistoryEntry,
    UserRecord,
    Intent,
    IntentKind,
    Outcome,
    OutcomeKind,
)

# Core
from streak_agent.intents import classify
from streak_agent.engine import apply
from streak_agent.responses import ResponseSelector

# Storage
from streak_agent.storage import JsonUserStore

# Pipeline and reminders
from streak_agent.handler import handle_message, MessageResult
from streak_agent.reminders import (
    find_due_reminders,
    send_reminders,
    ReminderDue,
    ReminderRun,
)

# Collaborators
from streak_agent.whatsapp import send_whatsapp, WhatsAppSender
from streak_agent.claude import ClaudePhraser

__all__ = [
    # Config
    "DATA_DIR",
    "USERS_FILE",
    "TIMEZONE",
    "LOCAL_TZ",
    "REMINDER_CRON",
    "CLAUDE_MODEL",
    "AI_PHRASING_ENABLED",
    "logger",
    # Utils
    "now_local",
    "today_local",
    "yesterday",
    "ensure_directories",
    # Errors
    "StreakAgentError",
    "StoreUnavailable",
    "DeliveryFailed",
    "PhrasingGeneratorFailed",
    # Model
    "HistoryEntry",
    "UserRecord",
    "Intent",
    "IntentKind",
    "Outcome",
    "OutcomeKind",
    # Core
    "classify",
    "apply",
    "ResponseSelector",
    # Storage
    "JsonUserStore",
    # Pipeline
    "handle_message",
    "MessageResult",
    "find_due_reminders",
    "send_reminders",
    "ReminderDue",
    "ReminderRun",
    # Collaborators
    "send_whatsapp",
    "WhatsAppSender",
    "ClaudePhraser",
]
