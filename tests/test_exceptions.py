"""Tests for custom exception hierarchy."""

from loan_ops.exceptions import (
    ConfigurationError,
    EntityNotFoundError,
    InvalidEntityStateError,
    LoanOpsError,
    PaymentValidationError,
    ReferentialIntegrityError,
    RemittanceValidationError,
    SinkError,
    ValidationError,
)


class TestExceptionHierarchy:
    """Test exception inheritance chain."""

    def test_loan_ops_error_is_exception(self) -> None:
        assert isinstance(LoanOpsError("test"), Exception)

    def test_entity_not_found_is_loan_ops_error(self) -> None:
        assert isinstance(EntityNotFoundError("test"), LoanOpsError)

    def test_referential_integrity_is_entity_not_found(self) -> None:
        err = ReferentialIntegrityError("test")
        assert isinstance(err, EntityNotFoundError)
        assert isinstance(err, LoanOpsError)

    def test_invalid_entity_state_is_loan_ops_error(self) -> None:
        assert isinstance(InvalidEntityStateError("test"), LoanOpsError)

    def test_validation_errors(self) -> None:
        assert isinstance(ValidationError("test"), LoanOpsError)
        assert isinstance(PaymentValidationError("test"), ValidationError)
        assert isinstance(RemittanceValidationError("test"), ValidationError)

    def test_configuration_error_is_loan_ops_error(self) -> None:
        assert isinstance(ConfigurationError("test"), LoanOpsError)

    def test_sink_error_is_loan_ops_error(self) -> None:
        assert isinstance(SinkError("test"), LoanOpsError)

    def test_exception_message(self) -> None:
        err = ReferentialIntegrityError("CSO cso-001 not found")
        assert str(err) == "CSO cso-001 not found"
