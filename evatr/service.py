"""VAT number confirmation service: orchestrates URL builder, transport, decoder and code tables."""

from __future__ import annotations

import logging
import re
from collections.abc import Awaitable, Callable
from typing import cast

from evatr.client import evatr_client
from evatr.codes import description_for_error_code, description_for_result_code, parse_result_code
from evatr.decoder import Envelope, decode_envelope, deserialize_xml
from evatr.errors import DecodeError, InvalidInputError
from evatr.request import build_request_url
from evatr.schemas import QualifiedValidationResult, ResultCode, ValidationRequest, ValidationResult

logger = logging.getLogger(__name__)

# Takes a URL, returns the response body
Fetcher = Callable[[str], Awaitable[str]]

VALID_ERROR_CODE = 200

# eVatR response field names
_FIELD_DATE = "Datum"
_FIELD_TIME = "Uhrzeit"
_FIELD_ERROR_CODE = "ErrorCode"
_FIELD_OWN_VAT = "UstId_1"
_FIELD_FOREIGN_VAT = "UstId_2"
_FIELD_VALID_FROM = "Gueltig_ab"
_FIELD_VALID_UNTIL = "Gueltig_bis"
_FIELD_COMPANY = "Firmenname"
_FIELD_CITY = "Ort"
_FIELD_ZIP = "PLZ"
_FIELD_STREET = "Strasse"

# result-code field → QualifiedValidationResult attribute
_RESULT_FIELDS = {
    "Erg_Name": "result_name",
    "Erg_Ort": "result_city",
    "Erg_PLZ": "result_zip",
    "Erg_Str": "result_street",
}

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


def parse_error_code(raw: str | None) -> int | None:
    """Parse the leading base-10 integer of ``raw``; None when there is none."""
    if raw is None:
        return None
    match = _LEADING_INT.match(raw)
    return int(match.group(1)) if match else None


def _mask(vat_number: str) -> str:
    return vat_number[:4] + "X" * max(len(vat_number) - 4, 0)


def _result_codes(envelope: Envelope) -> dict[str, ResultCode | None]:
    """Parse the four result letters; an unknown letter fails the whole call."""
    codes: dict[str, ResultCode | None] = {}
    for field, attr in _RESULT_FIELDS.items():
        parsed = parse_result_code(envelope.get(field))
        if not parsed.ok:
            raise DecodeError(
                f"Unexpected result code {parsed.invalid!r} in field {field}",
                field=field,
                value=parsed.invalid,
            )
        codes[attr] = parsed.code
    return codes


async def validate(
    request: ValidationRequest | None,
    qualified: bool | None = None,
    fetch: Fetcher | None = None,
) -> ValidationResult | QualifiedValidationResult:
    """Run one confirmation request and return the typed result.

    Steps:
    1. Fail fast on a missing request (no I/O)
    2. Build the request URL
    3. Fetch the response body (transport errors propagate, no retry)
    4. Deserialize and decode the XML-RPC envelope
    5. Parse the error code; a missing/non-numeric code is kept as None
    6. Attach descriptions; for qualified checks parse the result letters

    Args:
        request: The request; None raises InvalidInputError.
        qualified: Force the check kind; defaults to ``request.is_qualified``.
        fetch: Transport override; defaults to ``evatr_client.fetch``.
    """
    if request is None:
        raise InvalidInputError("params are missing")
    if qualified is None:
        qualified = request.is_qualified
    fetch = fetch or evatr_client.fetch

    url = build_request_url(request, qualified)
    logger.debug(
        "eVatR %s check for %s",
        "qualified" if qualified else "simple",
        _mask(request.foreign_vat_number),
    )

    text = await fetch(url)
    envelope = decode_envelope(deserialize_xml(text))

    error_code = parse_error_code(envelope.get(_FIELD_ERROR_CODE))
    logger.info("eVatR answered %s for %s", error_code, _mask(request.foreign_vat_number))

    simple_fields = {
        "date": envelope.get(_FIELD_DATE),
        "time": envelope.get(_FIELD_TIME),
        "error_code": error_code,
        "error_description": description_for_error_code(error_code),
        "own_vat_number": envelope.get(_FIELD_OWN_VAT),
        "validated_vat_number": envelope.get(_FIELD_FOREIGN_VAT),
        "valid_from": envelope.get(_FIELD_VALID_FROM) or None,
        "valid_until": envelope.get(_FIELD_VALID_UNTIL) or None,
        "is_valid": error_code == VALID_ERROR_CODE,
        "raw_response": text if request.include_raw_response else None,
    }

    if not qualified:
        return ValidationResult(**simple_fields)

    codes = _result_codes(envelope)
    return QualifiedValidationResult(
        **simple_fields,
        company_name=envelope.get(_FIELD_COMPANY),
        city=envelope.get(_FIELD_CITY),
        zip=envelope.get(_FIELD_ZIP),
        street=envelope.get(_FIELD_STREET),
        **codes,
        **{f"{attr}_description": description_for_result_code(code) for attr, code in codes.items()},
    )


async def check_simple(
    request: ValidationRequest | None,
    fetch: Fetcher | None = None,
) -> ValidationResult:
    """Simple check: only the two VAT numbers are sent."""
    return cast(ValidationResult, await validate(request, qualified=False, fetch=fetch))


async def check_qualified(
    request: ValidationRequest | None,
    fetch: Fetcher | None = None,
) -> QualifiedValidationResult:
    """Qualified check: company name and city are required, zip and street optional."""
    if request is None:
        raise InvalidInputError("params are missing")
    if not request.is_qualified:
        raise InvalidInputError("company_name and city are required for a qualified check")
    return cast(QualifiedValidationResult, await validate(request, qualified=True, fetch=fetch))
