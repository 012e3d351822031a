"""Tests for the eVatR request URL builder."""

from __future__ import annotations

from urllib.parse import parse_qs, urlsplit

import pytest

from evatr.errors import InvalidInputError
from evatr.request import build_query, build_request_url
from evatr.schemas import ValidationRequest

_ENDPOINT = "https://evatr.bff-online.de/evatrRPC"


def _simple() -> ValidationRequest:
    return ValidationRequest(own_vat_number="DE115235681", foreign_vat_number="CZ00177041")


def _qualified(**overrides) -> ValidationRequest:
    fields = {
        "own_vat_number": "DE115235681",
        "foreign_vat_number": "CZ00177041",
        "company_name": "ŠKODA AUTO a.s.",
        "city": "Mladá Boleslav",
    }
    fields.update(overrides)
    return ValidationRequest(**fields)


class TestSimpleUrl:
    def test_simple_url(self) -> None:
        url = build_request_url(_simple(), qualified=False)
        assert url == f"{_ENDPOINT}?UstId_1=DE115235681&UstId_2=CZ00177041"

    def test_simple_ignores_company_fields(self) -> None:
        """qualified=False never sends address parameters, even when present."""
        url = build_request_url(_qualified(), qualified=False)
        assert "Firmenname" not in url
        assert "Ort" not in url

    def test_base_url_override(self) -> None:
        url = build_request_url(_simple(), qualified=False, base_url="http://localhost:8080/rpc")
        assert url.startswith("http://localhost:8080/rpc?UstId_1=")


class TestQualifiedUrl:
    def test_parameter_order(self) -> None:
        names = [name for name, _ in build_query(_qualified(), qualified=True)]
        assert names == ["UstId_1", "UstId_2", "Firmenname", "Ort", "PLZ", "Strasse"]

    def test_missing_optional_values_are_empty(self) -> None:
        """zip/street absent → empty values, never the text "None"."""
        url = build_request_url(_qualified(), qualified=True)
        assert url.endswith("&PLZ=&Strasse=")
        assert "None" not in url

    def test_free_text_is_percent_encoded(self) -> None:
        url = build_request_url(
            _qualified(company_name="Müller & Söhne GmbH", street="Hauptstraße 1/2"),
            qualified=True,
        )
        assert "Firmenname=M%C3%BCller+%26+S%C3%B6hne+GmbH" in url
        assert "Strasse=Hauptstra%C3%9Fe+1%2F2" in url
        assert " " not in url

    def test_values_survive_query_parsing(self) -> None:
        request = _qualified(zip="293 01", street="tř. Václava Klementa 869")
        query = parse_qs(urlsplit(build_request_url(request, qualified=True)).query)

        assert query == {
            "UstId_1": ["DE115235681"],
            "UstId_2": ["CZ00177041"],
            "Firmenname": ["ŠKODA AUTO a.s."],
            "Ort": ["Mladá Boleslav"],
            "PLZ": ["293 01"],
            "Strasse": ["tř. Václava Klementa 869"],
        }


class TestInvalidInput:
    def test_missing_params(self) -> None:
        with pytest.raises(InvalidInputError):
            build_request_url(None, qualified=False)

    def test_invalid_input_is_a_value_error(self) -> None:
        with pytest.raises(ValueError):
            build_request_url(None, qualified=True)
