"""eVatR request URL builder.

Pure string construction, no network I/O. The endpoint takes every parameter in
the query string of a GET request:

  simple:    UstId_1, UstId_2
  qualified: UstId_1, UstId_2, Firmenname, Ort, PLZ, Strasse
"""

from __future__ import annotations

from urllib.parse import urlencode

from evatr.config import settings
from evatr.errors import InvalidInputError
from evatr.schemas import ValidationRequest

# Wire parameter names
PARAM_OWN_VAT = "UstId_1"
PARAM_FOREIGN_VAT = "UstId_2"
PARAM_COMPANY = "Firmenname"
PARAM_CITY = "Ort"
PARAM_ZIP = "PLZ"
PARAM_STREET = "Strasse"


def build_query(params: ValidationRequest, qualified: bool) -> list[tuple[str, str]]:
    """Return the ordered wire parameters; absent optional values become empty strings."""
    query = [
        (PARAM_OWN_VAT, params.own_vat_number),
        (PARAM_FOREIGN_VAT, params.foreign_vat_number),
    ]
    if qualified:
        query += [
            (PARAM_COMPANY, params.company_name or ""),
            (PARAM_CITY, params.city or ""),
            (PARAM_ZIP, params.zip or ""),
            (PARAM_STREET, params.street or ""),
        ]
    return query


def build_request_url(
    params: ValidationRequest | None,
    qualified: bool,
    base_url: str | None = None,
) -> str:
    """Build the absolute request URL for a simple or qualified check.

    Args:
        params: The validated request. None raises InvalidInputError.
        qualified: Include company name and address parameters.
        base_url: Endpoint override; defaults to ``settings.evatr_rpc_url``.

    Returns:
        The endpoint URL with a percent-encoded (UTF-8) query string.
    """
    if params is None:
        raise InvalidInputError("params are missing")

    endpoint = base_url or settings.evatr_rpc_url
    return f"{endpoint}?{urlencode(build_query(params, qualified))}"
