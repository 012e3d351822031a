"""eVatR error codes and result codes → German descriptions.

Pure Python. The tables are data, loaded from evatr/data/*.json:
  - error_codes.json:  numeric overall outcome (200 = valid)
  - result_codes.json: single-letter outcome per address field of a qualified check

The error-code table follows the BZSt documentation and changes with it, so it can
be replaced without touching the package (EVATR_ERROR_CODES_PATH).

Reference: https://evatr.bff-online.de/eVatR/xmlrpc/codes
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path

from evatr.config import settings
from evatr.schemas import ResultCode

logger = logging.getLogger(__name__)

_DATA_DIR = Path(__file__).resolve().parent / "data"
_ERROR_CODES_PATH = _DATA_DIR / "error_codes.json"
_RESULT_CODES_PATH = _DATA_DIR / "result_codes.json"


# ---------------------------------------------------------------------------
# Table loaders (cached)
# ---------------------------------------------------------------------------


@lru_cache(maxsize=4)
def _load_table(path: Path) -> dict[str, str]:
    """Load a ``{"codes": {code: description}}`` JSON table."""
    if not path.exists():
        logger.warning("Code table not found: %s", path)
        return {}
    with open(path, encoding="utf-8") as f:
        data = json.load(f)
    return {str(code): description for code, description in data.get("codes", {}).items()}


def load_error_codes() -> dict[int, str]:
    """Return the error-code table, honouring the configured override path."""
    path = settings.evatr_error_codes_path or _ERROR_CODES_PATH
    return {int(code): description for code, description in _load_table(Path(path)).items()}


def load_result_codes() -> dict[ResultCode, str]:
    """Return the result-code table keyed by ResultCode."""
    table = _load_table(_RESULT_CODES_PATH)
    return {code: table[code.value] for code in ResultCode if code.value in table}


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def description_for_error_code(code: int | None) -> str | None:
    """Look up the German description of an error code.

    Unknown codes have no description; the numeric code stays authoritative.
    """
    if code is None:
        return None
    return load_error_codes().get(code)


def description_for_result_code(code: ResultCode | None) -> str | None:
    """Look up the German description of a result letter (None for absent input)."""
    if code is None:
        return None
    return load_result_codes().get(code)


@dataclass(frozen=True)
class ParsedResultCode:
    """Outcome of parsing a result letter.

    Exactly one state holds: a recognized ``code``, an ``invalid`` raw value,
    or neither (the field was absent or empty).
    """

    code: ResultCode | None = None
    invalid: str | None = None

    @property
    def ok(self) -> bool:
        return self.invalid is None


def parse_result_code(raw: str | None) -> ParsedResultCode:
    """Parse a wire letter into a ResultCode without raising."""
    if not raw:
        return ParsedResultCode()
    try:
        return ParsedResultCode(code=ResultCode(raw))
    except ValueError:
        return ParsedResultCode(invalid=raw)
