"""
Tests for the reminder scan and batch send.
"""

from datetime import date
from unittest.mock import MagicMock

import pytest

from streak_agent.errors import StoreUnavailable
from streak_agent.models import HistoryEntry, UserRecord
from streak_agent.reminders import ReminderDue, find_due_reminders, send_reminders

PENDING = "whatsapp:+15550000001"
RESPONDED = "whatsapp:+15550000002"


@pytest.fixture
def populated_store(store, today):
    store.put(PENDING, UserRecord(goal="read daily", created_at=date(2026, 1, 1)))
    store.put(RESPONDED, UserRecord(
        goal="run",
        created_at=date(2026, 1, 1),
        streak=1,
        last_completed=today,
        history=[HistoryEntry(today, True)],
    ))
    return store


class TestFindDueReminders:
    """Single scan shared by the daily job and the manual trigger."""

    def test_skips_users_who_responded(self, populated_store, today):
        due = find_due_reminders(populated_store, today)

        assert due == [ReminderDue(PENDING, "read daily")]

    def test_skip_entry_also_counts_as_responded(self, store, today):
        store.put(PENDING, UserRecord(goal="read", created_at=today, history=[HistoryEntry(today, False)]))

        assert find_due_reminders(store, today) == []

    def test_unfiltered_includes_everyone(self, populated_store, today):
        due = find_due_reminders(populated_store, today, only_pending=False)

        assert {r.user_id for r in due} == {PENDING, RESPONDED}

    def test_entry_from_yesterday_still_due(self, store, today):
        store.put(PENDING, UserRecord(goal="read", created_at=date(2026, 1, 1), history=[HistoryEntry(date(2026, 1, 14), True)]))

        assert len(find_due_reminders(store, today)) == 1

    def test_scan_is_read_only(self, populated_store, users_file, today):
        before = users_file.read_text()

        find_due_reminders(populated_store, today)

        assert users_file.read_text() == before

    def test_empty_store(self, store, today):
        assert find_due_reminders(store, today) == []

    def test_reminder_text(self):
        assert ReminderDue(PENDING, "reading").text == "How's the reading? Did you do it? 📚"


class TestSendReminders:
    """Batch delivery with per-user isolation."""

    def test_sends_once_per_due_user(self, populated_store, sender, today):
        run = send_reminders(populated_store, today, sender)

        sender.assert_called_once_with(PENDING, "How's the read daily? Did you do it? 📚")
        assert run.sent == 1
        assert run.failed == []
        assert run.summary == "Reminders sent to 1 users"

    def test_manual_variant_sends_to_all(self, populated_store, sender, today):
        run = send_reminders(populated_store, today, sender, only_pending=False)

        assert sender.call_count == 2
        assert run.sent == 2

    def test_one_failure_does_not_stop_batch(self, store, today):
        for i in range(3):
            store.put(f"whatsapp:+1555000000{i}", UserRecord(goal=f"goal {i}", created_at=today))

        def flaky(user_id, text):
            if user_id.endswith("1"):
                raise RuntimeError("network down")
            return True

        run = send_reminders(store, today, flaky)

        assert run.sent == 2
        assert run.failed == ["whatsapp:+15550000001"]

    def test_false_return_counts_as_failure(self, populated_store, today):
        run = send_reminders(populated_store, today, MagicMock(return_value=False), only_pending=False)

        assert run.sent == 0
        assert len(run.failed) == 2

    def test_store_failure_is_reported(self, today, sender):
        broken = MagicMock()
        broken.list.side_effect = StoreUnavailable("disk gone")

        run = send_reminders(broken, today, sender)

        assert run.sent == 0
        assert run.error == "disk gone"
        sender.assert_not_called()

    def test_to_dict(self, populated_store, sender, today):
        result = send_reminders(populated_store, today, sender).to_dict()

        assert result["message"] == "Reminders sent to 1 users"
        assert result["sent"] == 1

    def test_undecodable_file_is_reported(self, store, users_file, today, sender):
        users_file.write_bytes(b'{"whatsapp:+1": {"goal": "\xff\xfe"}}')

        run = send_reminders(store, today, sender)

        assert run.sent == 0
        assert run.error is not None
        sender.assert_not_called()
