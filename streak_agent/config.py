"""
Configuration constants and logging setup for Streak Agent.
"""

import logging
import os
from pathlib import Path
from zoneinfo import ZoneInfo

from dotenv import load_dotenv


def _load_local_env():
    """Load .env file for local development (skipped on Modal)."""
    env_file = Path(__file__).parent.parent / ".env"
    if env_file.exists():
        load_dotenv(env_file)


_load_local_env()

# Logging configuration
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s | %(levelname)s | %(message)s',
    datefmt='%Y-%m-%d %H:%M:%S'
)
logger = logging.getLogger("streak_agent")

# Timezone used to decide what "today" is
TIMEZONE = os.environ.get("TIMEZONE", "America/New_York")
LOCAL_TZ = ZoneInfo(TIMEZONE)

# Data directory (Modal volume path)
DATA_DIR = Path(os.environ.get("STREAK_DATA_DIR", "/data"))
USERS_FILE = DATA_DIR / "users.json"

# Daily reminder trigger, evaluated in TIMEZONE
REMINDER_CRON = os.environ.get("REMINDER_CRON", "0 8 * * *")

# Twilio WhatsApp
TWILIO_API_BASE = "https://api.twilio.com/2010-04-01"
WHATSAPP_MAX_CHARS = 1600

# Claude model for optional reply phrasing
CLAUDE_MODEL = "claude-sonnet-4-5"
AI_PHRASING_ENABLED = os.environ.get("AI_PHRASING", "1") != "0"
