"""Tests for daily remittance reconciliation."""

from datetime import date, datetime
from decimal import Decimal
from zoneinfo import ZoneInfo

import pytest

from loan_ops.exceptions import RemittanceValidationError
from loan_ops.models import (
    Remittance,
    RemittanceCheck,
    RemittanceState,
    TodayRemittanceState,
)
from loan_ops.remittance import (
    build_remittance_submission,
    check_outstanding_remittance,
    format_remittance_date_label,
    remittance_reference_date,
    settle_outstanding_remittance,
    today_remittance_status,
)

LAGOS = ZoneInfo("Africa/Lagos")
MONDAY = datetime(2024, 3, 4, 8, 0, tzinfo=LAGOS)
FRIDAY = date(2024, 3, 1)


def _record(
    day: date,
    collected: str,
    paid: str,
    resolved: bool = False,
    hour: int = 17,
) -> Remittance:
    return Remittance(
        remittance_date=datetime(day.year, day.month, day.day, hour, 0, tzinfo=LAGOS),
        amount_collected=Decimal(collected),
        amount_paid=Decimal(paid),
        resolved_issue=resolved,
    )


class TestRemittanceReferenceDate:
    """Tests for remittance_reference_date."""

    @pytest.mark.parametrize(
        "base,expected",
        [
            (date(2024, 3, 4), date(2024, 3, 1)),  # Monday -> Friday
            (date(2024, 3, 3), date(2024, 3, 1)),  # Sunday -> Friday
            (date(2024, 3, 2), date(2024, 3, 1)),  # Saturday -> Friday
            (date(2024, 3, 5), date(2024, 3, 4)),  # Tuesday -> Monday
            (date(2024, 3, 8), date(2024, 3, 7)),  # Friday -> Thursday
            (date(2024, 1, 1), date(2023, 12, 29)),  # Monday across year end
        ],
    )
    def test_weekday_policy(self, base: date, expected: date) -> None:
        """Test the look-back for each day of the week."""
        assert remittance_reference_date(base) == expected

    def test_monday_never_lands_on_weekend(self) -> None:
        """Test Monday looks back to Friday, not the weekend."""
        reference = remittance_reference_date(MONDAY)
        assert reference.weekday() == 4

    def test_string_base(self) -> None:
        """Test the base day may be an ISO string."""
        assert remittance_reference_date("2024-03-04T08:00:00") == FRIDAY

    def test_aware_base_uses_local_day(self) -> None:
        """Test an aware base is judged by its local day."""
        # 23:30 UTC Sunday is already Monday in Lagos
        base = datetime(2024, 3, 3, 23, 30, tzinfo=ZoneInfo("UTC"))
        assert remittance_reference_date(base) == FRIDAY

    def test_defaults_to_today(self) -> None:
        """Test the base defaults to today."""
        assert isinstance(remittance_reference_date(), date)

    def test_unparseable_base_uses_today(self) -> None:
        """Test a malformed base falls back to today, as loan metrics do."""
        assert remittance_reference_date("not a date") == remittance_reference_date()


class TestCheckOutstandingRemittance:
    """Tests for check_outstanding_remittance."""

    def test_no_record_for_day(self) -> None:
        """Test a day with no remittance is blocking."""
        history = [_record(date(2024, 2, 29), "10000", "10000")]

        check = check_outstanding_remittance(history, now=MONDAY)

        assert check.state == RemittanceState.NONE
        assert check.reference_date == FRIDAY
        assert check.blocking is True

    def test_empty_history(self) -> None:
        """Test an empty history is classified as none."""
        check = check_outstanding_remittance([], now=MONDAY)
        assert check.state == RemittanceState.NONE

    def test_no_history_is_not_checked(self) -> None:
        """Test a profile without history is not blocked."""
        check = check_outstanding_remittance(None, now=MONDAY)

        assert check.state == RemittanceState.COMPLETE
        assert check.blocking is False

    def test_complete(self) -> None:
        """Test a fully remitted day is complete."""
        check = check_outstanding_remittance([_record(FRIDAY, "10000", "10000")], now=MONDAY)

        assert check.state == RemittanceState.COMPLETE
        assert check.remaining == 0
        assert check.blocking is False

    def test_partial_sums_part_payments(self) -> None:
        """Test part payments are summed against the collected amount."""
        history = [
            _record(FRIDAY, "10000", "4000", hour=17),
            _record(FRIDAY, "10000", "3000", hour=19),
        ]

        check = check_outstanding_remittance(history, now=MONDAY)

        assert check.state == RemittanceState.PARTIAL
        assert check.amount_collected == Decimal("10000")
        assert check.amount_paid == Decimal("7000")
        assert check.remaining == Decimal("3000")
        assert check.records == 2
        assert check.blocking is True

    def test_part_payments_completing_the_day(self) -> None:
        """Test part payments that reach the collected amount are complete."""
        history = [_record(FRIDAY, "10000", "6000"), _record(FRIDAY, "10000", "4000")]

        check = check_outstanding_remittance(history, now=MONDAY)

        assert check.state == RemittanceState.COMPLETE

    def test_collected_is_highest_reported(self) -> None:
        """Test the day's collected amount is the highest one reported."""
        history = [_record(FRIDAY, "8000", "8000"), _record(FRIDAY, "12000", "2000")]

        check = check_outstanding_remittance(history, now=MONDAY)

        assert check.amount_collected == Decimal("12000")
        assert check.state == RemittanceState.PARTIAL

    def test_resolved_by_admin(self) -> None:
        """Test a day cleared by an admin is resolved."""
        history = [
            _record(FRIDAY, "10000", "2000"),
            _record(FRIDAY, "10000", "0", resolved=True),
        ]

        check = check_outstanding_remittance(history, now=MONDAY)

        assert check.state == RemittanceState.RESOLVED
        assert check.blocking is False

    def test_weekend_records_ignored_on_monday(self) -> None:
        """Test weekend records do not count for Friday."""
        history = [_record(date(2024, 3, 2), "5000", "5000"), _record(date(2024, 3, 3), "5000", "5000")]

        check = check_outstanding_remittance(history, now=MONDAY)

        assert check.state == RemittanceState.NONE

    def test_backend_json_records(self) -> None:
        """Test raw backend records are accepted and undated ones skipped."""
        history = [
            {"date": "2024-03-01T16:00:00Z", "amountCollected": 5000, "amountPaid": 2500},
            {"date": None, "amountCollected": 5000, "amountPaid": 5000},
        ]

        check = check_outstanding_remittance(history, now=MONDAY)

        assert check.state == RemittanceState.PARTIAL
        assert check.remaining == Decimal("2500")

    def test_records_matched_on_local_day(self) -> None:
        """Test records are matched on their Lagos calendar day."""
        late_friday = {"date": "2024-03-01T22:30:00Z", "amountCollected": 100, "amountPaid": 100}
        saturday = {"date": "2024-03-01T23:30:00Z", "amountCollected": 100, "amountPaid": 100}

        assert check_outstanding_remittance([late_friday], now=MONDAY).state == RemittanceState.COMPLETE
        assert check_outstanding_remittance([saturday], now=MONDAY).state == RemittanceState.NONE


class TestTodayRemittanceStatus:
    """Tests for today_remittance_status."""

    def test_nothing_today(self) -> None:
        """Test no record today gives none."""
        status = today_remittance_status([_record(FRIDAY, "100", "100")], 5000, now=MONDAY)

        assert status.state == TodayRemittanceState.NONE
        assert status.paid == 0

    def test_partial(self) -> None:
        """Test paying less than collected today is partial."""
        status = today_remittance_status([_record(date(2024, 3, 4), "5000", "2000")], 5000, now=MONDAY)

        assert status.state == TodayRemittanceState.PARTIAL
        assert status.paid == Decimal("2000")

    def test_full(self) -> None:
        """Test paying the whole collection today is full."""
        history = [_record(date(2024, 3, 4), "5000", "2000"), _record(date(2024, 3, 4), "5000", "3000")]

        status = today_remittance_status(history, "5000", now=MONDAY)

        assert status.state == TodayRemittanceState.FULL
        assert status.paid == Decimal("5000")

    def test_nothing_collected_is_never_full(self) -> None:
        """Test a zero collection is never full."""
        status = today_remittance_status([_record(date(2024, 3, 4), "0", "0")], 0, now=MONDAY)

        assert status.state == TodayRemittanceState.PARTIAL

    def test_no_history(self) -> None:
        """Test a missing history gives none."""
        assert today_remittance_status(None, 100, now=MONDAY).state == TodayRemittanceState.NONE


class TestBuildRemittanceSubmission:
    """Tests for build_remittance_submission."""

    def test_valid_submission(self) -> None:
        """Test a valid part payment and its request body."""
        submission = build_remittance_submission(
            amount_collected=5000,
            amount_paid="2000",
            already_paid=1000,
            image=" /uploads/r.jpg ",
            remark="first part",
            now=MONDAY,
        )

        assert submission.amount_paid == Decimal("2000")
        assert submission.remittance_date == MONDAY
        assert submission.to_payload() == {
            "amountCollected": 5000.0,
            "amountPaid": 2000.0,
            "image": "/uploads/r.jpg",
            "date": MONDAY.isoformat(),
            "remark": "first part",
        }

    def test_paying_exact_remainder(self) -> None:
        """Test paying exactly the remainder is allowed."""
        submission = build_remittance_submission(5000, 4000, already_paid=1000, now=MONDAY)
        assert submission.amount_paid == Decimal("4000")

    def test_exceeds_collected(self) -> None:
        """Test the running total may not exceed the collection."""
        with pytest.raises(RemittanceValidationError, match="cannot exceed collected amount"):
            build_remittance_submission(5000, 4500, already_paid=1000, now=MONDAY)

    def test_message_shows_collected_amount(self) -> None:
        """Test the error message shows the collected amount."""
        with pytest.raises(RemittanceValidationError) as exc_info:
            build_remittance_submission(10000, 20000, now=MONDAY)
        assert "₦10,000.00" in str(exc_info.value)

    @pytest.mark.parametrize("amount", [0, -50, "", "abc", None])
    def test_non_positive_amount(self, amount: object) -> None:
        """Test zero, negative and non-numeric amounts are rejected."""
        with pytest.raises(RemittanceValidationError, match="greater than zero"):
            build_remittance_submission(5000, amount, now=MONDAY)

    def test_invalid_date(self) -> None:
        """Test an unparseable remittance date is rejected."""
        with pytest.raises(RemittanceValidationError, match="valid remittance date"):
            build_remittance_submission(5000, 100, remittance_date="someday")


class TestSettleOutstandingRemittance:
    """Tests for settle_outstanding_remittance."""

    def _partial_check(self) -> RemittanceCheck:
        return RemittanceCheck(
            state=RemittanceState.PARTIAL,
            reference_date=FRIDAY,
            amount_collected=Decimal("10000"),
            amount_paid=Decimal("7000"),
            records=2,
        )

    def test_dated_on_pending_day(self) -> None:
        """Test the settlement is dated on the day being settled."""
        submission = settle_outstanding_remittance(self._partial_check(), 3000)

        assert submission.remittance_date == datetime(2024, 3, 1, tzinfo=LAGOS)
        assert submission.amount_collected == Decimal("10000")
        assert submission.amount_paid == Decimal("3000")

    def test_cannot_overpay_remainder(self) -> None:
        """Test the settlement may not exceed the remainder."""
        with pytest.raises(RemittanceValidationError):
            settle_outstanding_remittance(self._partial_check(), 3500)

    @pytest.mark.parametrize(
        "state", [RemittanceState.NONE, RemittanceState.RESOLVED, RemittanceState.COMPLETE]
    )
    def test_only_partial_days_can_be_settled(self, state: RemittanceState) -> None:
        """Test only partial days can be settled."""
        check = RemittanceCheck(state=state, reference_date=FRIDAY)
        with pytest.raises(RemittanceValidationError, match="no incomplete remittance"):
            settle_outstanding_remittance(check, 100)


class TestFormatRemittanceDateLabel:
    """Tests for format_remittance_date_label."""

    def test_none(self) -> None:
        """Test an unknown day reads as yesterday."""
        assert format_remittance_date_label(None) == "yesterday"

    def test_day(self) -> None:
        """Test a day renders as weekday, month and day."""
        assert format_remittance_date_label(FRIDAY) == "Friday, Mar 1"
