"""
User record storage: one JSON object keyed by user id.

Writes go through a temp file and os.replace so a crash mid-write never
leaves a truncated users.json behind. There is no locking across the
get → put sequence; concurrent updates for the same user are last-writer-wins.
"""

import json
import os
from pathlib import Path
from typing import Callable, Iterator, Optional, Tuple

from streak_agent.config import USERS_FILE, logger
from streak_agent.errors import StoreUnavailable
from streak_agent.models import UserRecord


class JsonUserStore:
    """
    Key-value store of UserRecords persisted to a single JSON file.

    Args:
        path: users.json location (defaults to the Modal volume path)
        on_write: called after every successful write, e.g. volume.commit
    """

    def __init__(self, path: Path = None, on_write: Optional[Callable[[], None]] = None):
        self.path = Path(path) if path is not None else USERS_FILE
        self.on_write = on_write

    def _load_raw(self) -> dict:
        try:
            if not self.path.exists():
                return {}
            with open(self.path, encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            # ValueError covers JSONDecodeError and UnicodeDecodeError
            raise StoreUnavailable(f"Could not read {self.path}: {e}") from e

        if not isinstance(data, dict):
            raise StoreUnavailable(f"Unexpected contents in {self.path}")
        return data

    def _save_raw(self, data: dict):
        tmp_file = self.path.with_suffix(self.path.suffix + ".tmp")
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(tmp_file, 'w', encoding="utf-8") as f:
                json.dump(data, f, indent=2, ensure_ascii=False)
            os.replace(tmp_file, self.path)
        except OSError as e:
            raise StoreUnavailable(f"Could not write {self.path}: {e}") from e

        if self.on_write:
            self.on_write()

    def initialize(self):
        """Create an empty users file if none exists."""
        try:
            exists = self.path.exists()
        except OSError as e:
            raise StoreUnavailable(f"Could not access {self.path}: {e}") from e

        if not exists:
            self._save_raw({})
            logger.info(f"Created {self.path}")

    def get(self, user_id: str) -> Optional[UserRecord]:
        raw = self._load_raw().get(user_id)
        if raw is None:
            return None
        try:
            return UserRecord.from_dict(raw)
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            raise StoreUnavailable(f"Malformed record for {user_id}: {e}") from e

    def put(self, user_id: str, record: UserRecord):
        data = self._load_raw()
        data[user_id] = record.to_dict()
        self._save_raw(data)

    def list(self) -> Iterator[Tuple[str, UserRecord]]:
        """Yield (user_id, record) pairs, skipping entries that fail to parse."""
        for user_id, raw in self._load_raw().items():
            try:
                record = UserRecord.from_dict(raw)
            except (KeyError, TypeError, ValueError, AttributeError) as e:
                logger.warning(f"Skipping malformed record for {user_id}: {e}")
                continue
            yield user_id, record
