"""Sample-data generators for CSO portfolios."""

from loan_ops.generators.cso import CsoGenerator
from loan_ops.generators.loan import LoanGenerator
from loan_ops.generators.patterns import RepaymentBehavior
from loan_ops.generators.remittance import RemittanceGenerator

__all__ = [
    "CsoGenerator",
    "LoanGenerator",
    "RemittanceGenerator",
    "RepaymentBehavior",
]
