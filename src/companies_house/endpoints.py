"""Catalog of Companies House API endpoints."""

from __future__ import annotations

from collections.abc import Mapping, Sequence, Sized
from dataclasses import dataclass
from string import Formatter
from typing import Any
from urllib.parse import quote

from companies_house.errors import InvalidRequestError
from companies_house.request import ApiRequest, HttpMethod, ResponseFormat, params_hash

DEFAULT_BASE_URL = "https://api.company-information.service.gov.uk"

_PSC = "/company/{company_number}/persons-with-significant-control"


def _is_missing(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    if isinstance(value, Sized):
        return len(value) == 0
    return False


@dataclass(frozen=True)
class Endpoint:
    """Static description of one API operation."""

    name: str
    path: str
    description: str
    key_prefix: str
    query_params: tuple[str, ...] = ()
    required_params: tuple[str, ...] = ()
    hash_params: bool = False
    method: HttpMethod = "GET"
    format: ResponseFormat = "json"
    accept: str = "application/json"

    @property
    def path_params(self) -> tuple[str, ...]:
        return tuple(field for _, field, _, _ in Formatter().parse(self.path) if field)

    @property
    def requires_identifier(self) -> bool:
        return bool(self.path_params)

    def validate(self, identifiers: Sequence[str], params: Mapping[str, Any]) -> None:
        """Reject missing identifiers, missing required params and unknown params.

        Endpoints that key by literal arguments only accept their recognized
        query params, so every param on the wire is part of the cache key.
        """
        expected = self.path_params
        if len(identifiers) != len(expected):
            raise InvalidRequestError(
                f"{self.name} expects {len(expected)} identifier(s) "
                f"({', '.join(expected) or 'none'}), got {len(identifiers)}."
            )
        for field, value in zip(expected, identifiers, strict=True):
            if not str(value).strip():
                raise InvalidRequestError(f'Path parameter "{field}" is required for {self.name}.')
        for name in self.required_params:
            if _is_missing(params.get(name)):
                raise InvalidRequestError(f'Query parameter "{name}" is required for {self.name}.')
        if self.hash_params:
            return
        unknown = sorted(set(params) - set(self.query_params))
        if unknown:
            raise InvalidRequestError(
                f"{self.name} does not accept query parameter(s): {', '.join(unknown)}."
            )

    def render_path(self, identifiers: Sequence[str]) -> str:
        values = {
            field: quote(str(value), safe="")
            for field, value in zip(self.path_params, identifiers, strict=True)
        }
        return self.path.format(**values)

    def cache_key(self, identifiers: Sequence[str], params: Mapping[str, Any]) -> str:
        if self.hash_params:
            return f"{self.key_prefix}_{params_hash(params)}"
        parts = [str(value) for value in identifiers]
        parts.extend(str(params[name]) for name in self.required_params)
        return "_".join([self.key_prefix, *parts])

    def build_request(
        self,
        base_url: str,
        identifiers: Sequence[str],
        params: Mapping[str, Any] | None = None,
    ) -> tuple[str, ApiRequest]:
        """Validate a call and return its cache key and request descriptor."""
        query = dict(params or {})
        self.validate(identifiers, query)
        request = ApiRequest(
            url=f"{base_url.rstrip('/')}{self.render_path(identifiers)}",
            method=self.method,
            params=query,
            format=self.format,
            accept=self.accept,
        )
        return self.cache_key(identifiers, query), request


def _search(name: str, path: str, description: str, key_prefix: str) -> Endpoint:
    return Endpoint(
        name=name,
        path=path,
        description=description,
        key_prefix=key_prefix,
        query_params=("q",),
        required_params=("q",),
    )


def _lookup(name: str, path: str, description: str, key_prefix: str) -> Endpoint:
    return Endpoint(name=name, path=path, description=description, key_prefix=key_prefix)


_CATALOG: tuple[Endpoint, ...] = (
    Endpoint(
        name="search",
        path="/search",
        description="Search across companies, officers, and disqualified officers.",
        key_prefix="search",
        query_params=("q",),
        required_params=("q",),
        hash_params=True,
    ),
    _search(
        "search_companies",
        "/search/companies",
        "Search for companies by name or number.",
        "search_companies",
    ),
    _search(
        "search_officers",
        "/search/officers",
        "Search for company officers by name.",
        "search_officers",
    ),
    _search(
        "search_disqualified_officers",
        "/search/disqualified-officers",
        "Search for disqualified officers.",
        "search_disqualified",
    ),
    _search(
        "alphabetical_search_companies",
        "/alphabetical-search/companies",
        "Search companies alphabetically.",
        "search_alpha",
    ),
    _search(
        "dissolved_search_companies",
        "/dissolved-search/companies",
        "Search for dissolved companies.",
        "search_dissolved",
    ),
    Endpoint(
        name="advanced_search_companies",
        path="/advanced-search/companies",
        description="Advanced company search filtered by location, incorporation date, etc.",
        key_prefix="advanced",
        query_params=(
            "company_name_includes",
            "location",
            "incorporated_from",
            "incorporated_to",
        ),
        hash_params=True,
    ),
    _lookup("company", "/company/{company_number}", "Retrieve the company profile.", "company"),
    _lookup(
        "registered_office_address",
        "/company/{company_number}/registered-office-address",
        "Get the registered office address.",
        "company_office",
    ),
    _lookup(
        "company_officers",
        "/company/{company_number}/officers",
        "List company officers.",
        "company_officers",
    ),
    _lookup(
        "officer_appointment",
        "/company/{company_number}/appointments/{appointment_id}",
        "Get details of a specific officer appointment.",
        "officer_appointment",
    ),
    _lookup(
        "filing_history",
        "/company/{company_number}/filing-history",
        "List the company's filing history.",
        "filing_history",
    ),
    _lookup(
        "filing_history_item",
        "/company/{company_number}/filing-history/{transaction_id}",
        "Retrieve a specific filing history item.",
        "filing_item",
    ),
    _lookup(
        "charges",
        "/company/{company_number}/charges",
        "List charges (mortgages) registered against the company.",
        "charges",
    ),
    _lookup(
        "charge",
        "/company/{company_number}/charges/{charge_id}",
        "Get details of a specific charge.",
        "charge_detail",
    ),
    _lookup(
        "insolvency",
        "/company/{company_number}/insolvency",
        "Retrieve insolvency information.",
        "insolvency",
    ),
    _lookup(
        "exemptions",
        "/company/{company_number}/exemptions",
        "Get information on company exemptions.",
        "exemptions",
    ),
    _lookup(
        "registers",
        "/company/{company_number}/registers",
        "Access the company's statutory registers.",
        "registers",
    ),
    _lookup(
        "uk_establishments",
        "/company/{company_number}/uk-establishments",
        "List UK establishments associated with the company.",
        "uk_establishments",
    ),
    _lookup("psc_list", _PSC, "List persons with significant control (PSC).", "psc"),
    _lookup(
        "psc_statements",
        "/company/{company_number}/persons-with-significant-control-statements",
        "List PSC statements.",
        "psc_statements",
    ),
    _lookup(
        "psc_individual",
        f"{_PSC}/individual/{{psc_id}}",
        "Get details of an individual PSC.",
        "psc_individual",
    ),
    _lookup(
        "psc_corporate_entity",
        f"{_PSC}/corporate-entity/{{psc_id}}",
        "Get details of a corporate PSC.",
        "psc_corporate",
    ),
    _lookup(
        "psc_legal_person",
        f"{_PSC}/legal-person/{{psc_id}}",
        "Get details of a legal person PSC.",
        "psc_legal",
    ),
    _lookup(
        "psc_super_secure",
        f"{_PSC}/super-secure/{{super_secure_id}}",
        "Get details of a super secure PSC.",
        "psc_secure",
    ),
    _lookup(
        "officer_appointments",
        "/officers/{officer_id}/appointments",
        "List appointments for a specific officer.",
        "officer_appointments",
    ),
    _lookup(
        "disqualified_natural_officer",
        "/disqualified-officers/natural/{officer_id}",
        "Get details of a disqualified natural person.",
        "disqualified_natural",
    ),
    _lookup(
        "disqualified_corporate_officer",
        "/disqualified-officers/corporate/{officer_id}",
        "Get details of a disqualified corporate officer.",
        "disqualified_corporate",
    ),
    _lookup(
        "document_metadata",
        "/document/{document_id}",
        "Retrieve metadata for a document.",
        "document_metadata",
    ),
    Endpoint(
        name="document_content",
        path="/document/{document_id}/content",
        description="Download the document content.",
        key_prefix="document_pdf",
        format="binary",
        accept="application/pdf",
    ),
)

ENDPOINTS: dict[str, Endpoint] = {endpoint.name: endpoint for endpoint in _CATALOG}


def get_endpoint(name: str) -> Endpoint:
    try:
        return ENDPOINTS[name]
    except KeyError:
        raise InvalidRequestError(f"unknown endpoint: {name}") from None
