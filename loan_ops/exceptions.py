"""Custom exception hierarchy for loan-ops."""


class LoanOpsError(Exception):
    """Base exception for all loan-ops errors."""


class EntityNotFoundError(LoanOpsError):
    """Raised when a referenced entity does not exist."""


class ReferentialIntegrityError(EntityNotFoundError):
    """Raised when a record points at a CSO or loan that is not in the store."""


class InvalidEntityStateError(LoanOpsError):
    """Raised when an entity is in an invalid state for the operation."""


class ValidationError(LoanOpsError):
    """Raised when user input is rejected before it is sent to the backend.

    The message is meant to be shown to the user as-is.
    """


class PaymentValidationError(ValidationError):
    """Raised when a loan repayment cannot be recorded."""


class RemittanceValidationError(ValidationError):
    """Raised when a remittance submission is rejected."""


class ConfigurationError(LoanOpsError):
    """Raised when configuration is invalid or missing."""


class SinkError(LoanOpsError):
    """Raised when a sink operation fails."""
