"""Tests for shared serialization utilities."""

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from zoneinfo import ZoneInfo

from loan_ops.models import (
    CustomerDetails,
    LoanMetrics,
    LoanStatus,
    RemittanceCheck,
    RemittanceState,
)
from loan_ops.sinks.serialization import dataclass_to_dict, serialize_value, to_dict


@dataclass
class _Row:
    status: LoanStatus
    customer: CustomerDetails
    amounts: list[Decimal]


class TestToDict:
    """Tests for to_dict function."""

    def test_loan_metrics(self) -> None:
        metrics = LoanMetrics(
            disbursed_at=datetime(2024, 3, 4, 9, 0),
            daily_amount=Decimal("100"),
            business_days_since_disbursement=2,
            outstanding_due=Decimal("200"),
            loan_id="LN-1",
        )

        result = to_dict(metrics)

        assert result["disbursed_at"] == "2024-03-04T09:00:00"
        assert result["projected_end_date"] is None
        assert result["daily_amount"] == "100"
        assert result["outstanding_due"] == "200"
        assert result["business_days_since_disbursement"] == 2
        assert result["loan_id"] == "LN-1"

    def test_dict_values_serialized(self) -> None:
        summary = {"cso_id": "cso-1", "total_outstanding_due": Decimal("1500.00")}

        assert to_dict(summary) == {"cso_id": "cso-1", "total_outstanding_due": "1500.00"}

    def test_other_type(self) -> None:
        assert to_dict(42) == {"value": "42"}


class TestDataclassToDict:
    """Tests for dataclass_to_dict function."""

    def test_enum_and_date(self) -> None:
        check = RemittanceCheck(state=RemittanceState.PARTIAL, reference_date=date(2024, 3, 1))

        result = dataclass_to_dict(check)

        assert result["state"] == "partial"
        assert result["reference_date"] == "2024-03-01"
        assert result["amount_collected"] == "0"

    def test_nested_dataclass_and_list(self) -> None:
        row = _Row(
            status=LoanStatus.ACTIVE,
            customer=CustomerDetails(first_name="Ada"),
            amounts=[Decimal("1.50"), Decimal("2")],
        )

        result = dataclass_to_dict(row)

        assert result["status"] == "active loan"
        assert result["customer"]["first_name"] == "Ada"
        assert result["amounts"] == ["1.50", "2"]


class TestSerializeValue:
    """Tests for serialize_value function."""

    def test_decimal(self) -> None:
        assert serialize_value(Decimal("99.99")) == "99.99"

    def test_aware_datetime(self) -> None:
        dt = datetime(2024, 3, 4, 10, 30, tzinfo=ZoneInfo("Africa/Lagos"))
        assert serialize_value(dt) == "2024-03-04T10:30:00+01:00"

    def test_tuple_becomes_list(self) -> None:
        assert serialize_value((Decimal("1"), "x")) == ["1", "x"]

    def test_passthrough(self) -> None:
        assert serialize_value(None) is None
        assert serialize_value(3) == 3
        assert serialize_value(True) is True
