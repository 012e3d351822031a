"""Pydantic schemas for the eVatR confirmation request and its results.

Pure value objects: frozen, built once per call and returned to the caller.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------


class ResultCode(str, Enum):
    """Per-field outcome of a qualified check (wire letters A–D)."""

    MATCH = "A"
    NO_MATCH = "B"
    NOT_QUERIED = "C"
    NOT_RETURNED = "D"  # member state did not share the data


# ---------------------------------------------------------------------------
# Request
# ---------------------------------------------------------------------------


class ValidationRequest(BaseModel):
    """Input for a simple or qualified confirmation request."""

    model_config = ConfigDict(frozen=True)

    own_vat_number: str = Field(min_length=1)  # German VAT number of the requester
    foreign_vat_number: str = Field(min_length=1)
    company_name: str | None = None  # including legal form
    city: str | None = None
    zip: str | None = None
    street: str | None = None
    include_raw_response: bool = False

    @field_validator("own_vat_number", "foreign_vat_number", mode="before")
    @classmethod
    def strip_vat_number(cls, v: object) -> object:
        """Strip surrounding whitespace; the length check runs afterwards."""
        return v.strip() if isinstance(v, str) else v

    @property
    def is_qualified(self) -> bool:
        """Company name and city together select a qualified check."""
        return bool(self.company_name) and bool(self.city)


# ---------------------------------------------------------------------------
# Results
# ---------------------------------------------------------------------------


class ValidationResult(BaseModel):
    """Outcome of a simple check.

    ``date`` and ``time`` are kept in the wire format (``dd.mm.yyyy`` / ``hh:mm:ss``).
    ``error_code`` is None when the response carried no numeric code.
    """

    model_config = ConfigDict(frozen=True)

    date: str | None = None
    time: str | None = None
    error_code: int | None = None
    error_description: str | None = None
    own_vat_number: str | None = None
    validated_vat_number: str | None = None
    valid_from: str | None = None
    valid_until: str | None = None
    is_valid: bool = False  # error_code == 200
    raw_response: str | None = None


class QualifiedValidationResult(ValidationResult):
    """Outcome of a qualified check: the simple fields plus the address comparison."""

    # Echoed back by the service, not necessarily identical to the request
    company_name: str | None = None
    city: str | None = None
    zip: str | None = None
    street: str | None = None

    result_name: ResultCode | None = None
    result_city: ResultCode | None = None
    result_zip: ResultCode | None = None
    result_street: ResultCode | None = None

    result_name_description: str | None = None
    result_city_description: str | None = None
    result_zip_description: str | None = None
    result_street_description: str | None = None
