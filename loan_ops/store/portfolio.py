"""Portfolio data store with referential integrity."""

import logging
from dataclasses import dataclass, field
from datetime import datetime

from loan_ops.exceptions import (
    EntityNotFoundError,
    InvalidEntityStateError,
    ReferentialIntegrityError,
)
from loan_ops.models import Cso, Loan, LoanPayment, LoanStatus, Remittance

logger = logging.getLogger(__name__)


@dataclass
class PortfolioStore:
    """In-memory store for CSOs, their loans and remittances."""

    csos: dict[str, Cso] = field(default_factory=dict)
    loans: dict[str, Loan] = field(default_factory=dict)
    remittances: list[Remittance] = field(default_factory=list)

    # Relationship indexes
    _cso_loans: dict[str, list[str]] = field(default_factory=dict)
    _cso_remittances: dict[str, list[int]] = field(default_factory=dict)

    def add_cso(self, cso: Cso) -> None:
        """Add a CSO to the store."""
        self.csos[cso.cso_id] = cso
        self._cso_loans.setdefault(cso.cso_id, [])
        self._cso_remittances.setdefault(cso.cso_id, [])

    def add_loan(self, loan: Loan) -> None:
        """Add a loan to the store."""
        if loan.cso_id not in self.csos:
            raise ReferentialIntegrityError(f"CSO {loan.cso_id} not found")

        if loan.record_id not in self.loans:
            self._cso_loans[loan.cso_id].append(loan.record_id)
        self.loans[loan.record_id] = loan

    def add_remittance(self, remittance: Remittance) -> None:
        """Add a remittance record to the store."""
        if remittance.cso_id not in self.csos:
            raise ReferentialIntegrityError(f"CSO {remittance.cso_id} not found")

        idx = len(self.remittances)
        self.remittances.append(remittance)
        self._cso_remittances[remittance.cso_id].append(idx)

    def get_loan(self, record_id: str) -> Loan:
        """Get a loan by its backend id."""
        try:
            return self.loans[record_id]
        except KeyError:
            raise EntityNotFoundError(f"Loan {record_id} not found") from None

    def get_cso_loans(self, cso_id: str) -> list[Loan]:
        """Get all loans originated by a CSO."""
        return [self.loans[loan_id] for loan_id in self._cso_loans.get(cso_id, [])]

    def get_cso_remittances(self, cso_id: str) -> list[Remittance]:
        """Get a CSO's remittance history in insertion order."""
        return [self.remittances[i] for i in self._cso_remittances.get(cso_id, [])]

    def record_payment(self, payment: LoanPayment) -> Loan:
        """Apply a validated repayment to the loan's running total.

        A loan whose balance reaches zero is marked fully paid.
        """
        loan = self.get_loan(payment.record_id)

        if loan.disbursed_at is None or loan.status != LoanStatus.ACTIVE:
            raise InvalidEntityStateError(f"Loan {loan.loan_id} is not an active disbursed loan")
        if payment.amount <= 0:
            raise InvalidEntityStateError("Payment amount must be positive")

        details = loan.details
        details.amount_paid_so_far += payment.amount
        if details.amount_to_be_paid > 0 and details.amount_paid_so_far >= details.amount_to_be_paid:
            loan.status = LoanStatus.FULLY_PAID
            logger.info("Loan %s fully paid", loan.loan_id)

        return loan

    def disburse(self, record_id: str, disbursed_at: datetime) -> Loan:
        """Mark an approved loan as disbursed; the date is set only once."""
        loan = self.get_loan(record_id)

        if loan.disbursed_at is not None:
            raise InvalidEntityStateError(f"Loan {loan.loan_id} was already disbursed")
        if loan.status != LoanStatus.APPROVED:
            raise InvalidEntityStateError(f"Loan {loan.loan_id} is not approved")

        loan.disbursed_at = disbursed_at
        loan.status = LoanStatus.ACTIVE
        return loan
