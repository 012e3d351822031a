"""Client for the BZSt eVatR VAT number confirmation service."""

from evatr.errors import DecodeError, EvatrError, InvalidInputError, TransportError
from evatr.schemas import QualifiedValidationResult, ResultCode, ValidationRequest, ValidationResult
from evatr.service import check_qualified, check_simple, validate

__all__ = [
    "DecodeError",
    "EvatrError",
    "InvalidInputError",
    "QualifiedValidationResult",
    "ResultCode",
    "TransportError",
    "ValidationRequest",
    "ValidationResult",
    "check_qualified",
    "check_simple",
    "validate",
]
