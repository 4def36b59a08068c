"""Pytest configuration and fixtures."""

from datetime import datetime
from typing import Any

import pytest

from loan_ops.config import MetricsConfig


@pytest.fixture
def seed() -> int:
    """Fixed seed for reproducible tests."""
    return 42


@pytest.fixture
def metrics_config() -> MetricsConfig:
    """Default metrics configuration (22 installments, Lagos time)."""
    return MetricsConfig()


@pytest.fixture
def sample_cso_id() -> str:
    """Sample CSO ID."""
    return "cso-test-001"


@pytest.fixture
def sample_loan_id() -> str:
    """Sample loan backend ID."""
    return "loan-test-001"


@pytest.fixture
def monday() -> datetime:
    """Monday 4 March 2024, mid-morning."""
    return datetime(2024, 3, 4, 9, 0)


@pytest.fixture
def sample_loan_json(sample_loan_id: str, sample_cso_id: str) -> dict[str, Any]:
    """Loan as returned by the backend, disbursed on Monday 4 March 2024."""
    return {
        "_id": sample_loan_id,
        "loanId": "LN-100200",
        "csoId": sample_cso_id,
        "status": "active loan",
        "customerDetails": {
            "firstName": "Ada",
            "lastName": "Okafor",
            "phoneOne": "08012345678",
            "address": "12 Allen Avenue, Ikeja",
            "bvn": "22123456789",
        },
        "loanDetails": {
            "amountRequested": 20000,
            "amountDisbursed": 20000,
            "amountToBePaid": 2200,
            "amountPaidSoFar": 0,
            "dailyAmount": 100,
        },
        "disbursedAt": "2024-03-04T09:00:00",
        "createdAt": "2024-03-01T14:12:00",
    }
