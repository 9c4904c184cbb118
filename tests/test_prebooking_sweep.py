"""Unit tests for the prebooking expiry sweep."""

import pytest
from unittest.mock import MagicMock
from datetime import date, datetime, time

from app.errors import GatewayError
from app.models.prebooking import Prebooking
from app.repositories.base import YardRepository
from app.services.prebooking_sweep import sweep_expired_prebookings

NOW = datetime(2026, 10, 19, 10, 30)


@pytest.fixture
def prebookings(db_session):
    rows = {
        "yesterday": Prebooking(expected_date=date(2026, 10, 18), expected_time=time(23, 0)),
        "earlier_today": Prebooking(expected_date=date(2026, 10, 19), expected_time=time(8, 0)),
        "this_minute": Prebooking(expected_date=date(2026, 10, 19), expected_time=time(10, 30)),
        "later_today": Prebooking(expected_date=date(2026, 10, 19), expected_time=time(11, 0)),
        "tomorrow": Prebooking(expected_date=date(2026, 10, 20), expected_time=time(7, 0)),
        "already_done": Prebooking(expected_date=date(2026, 10, 1), expected_time=time(9, 0), consumed=True),
    }
    db_session.add_all(rows.values())
    db_session.commit()
    return rows


def consumed_flags(db_session, rows):
    return {name: db_session.get(Prebooking, row.id).consumed for name, row in rows.items()}


class TestPrebookingSweep:
    def test_expires_past_dates_and_past_times_today(self, repo, db_session, prebookings):
        result = sweep_expired_prebookings(repo, now=NOW)

        assert result.ok
        assert result.consumed_by_date == 1
        assert result.consumed_by_time == 1
        assert consumed_flags(db_session, prebookings) == {
            "yesterday": True,
            "earlier_today": True,
            "this_minute": False,
            "later_today": False,
            "tomorrow": False,
            "already_done": True,
        }

    def test_second_run_is_a_no_op(self, repo, db_session, prebookings):
        sweep_expired_prebookings(repo, now=NOW)
        first = consumed_flags(db_session, prebookings)

        again = sweep_expired_prebookings(repo, now=NOW)

        assert again.consumed_by_date == 0
        assert again.consumed_by_time == 0
        assert consumed_flags(db_session, prebookings) == first

    def test_success_response(self, repo, prebookings):
        assert sweep_expired_prebookings(repo, now=NOW).to_response() == {
            "ok": True, "message": "Prebooking cleanup completed",
        }

    def test_one_failure_does_not_skip_the_other_update(self):
        repo = MagicMock(spec=YardRepository)
        repo.consume_prebookings_before.side_effect = GatewayError("permission denied for table prebookings")
        repo.consume_prebookings_due.return_value = 2

        result = sweep_expired_prebookings(repo, now=NOW)

        repo.consume_prebookings_due.assert_called_once_with(date(2026, 10, 19), "10:30")
        assert not result.ok
        assert result.to_response() == {"ok": False, "error": "permission denied for table prebookings"}

    def test_second_update_failure_reported(self):
        repo = MagicMock(spec=YardRepository)
        repo.consume_prebookings_before.return_value = 0
        repo.consume_prebookings_due.side_effect = GatewayError("timeout")

        result = sweep_expired_prebookings(repo, now=NOW)

        assert result.error == "timeout"
