"""Cached client for the Companies House public data API."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from companies_house.cache_store import FileResultCache, MemoryResultCache, ResultCache
from companies_house.endpoints import DEFAULT_BASE_URL, get_endpoint
from companies_house.gateway import DEFAULT_TTL_SECONDS, CachingGateway, Transport
from companies_house.settings import Settings
from companies_house.transport import RegistryHttpClient


class CompaniesHouseClient:
    """Endpoint methods over one catalog-driven, cache-first dispatcher."""

    def __init__(
        self,
        *,
        http: Transport,
        cache: ResultCache,
        base_url: str = DEFAULT_BASE_URL,
        default_ttl: int = DEFAULT_TTL_SECONDS,
    ) -> None:
        self.http = http
        self.base_url = base_url.rstrip("/")
        self.gateway = CachingGateway(transport=http, cache=cache, default_ttl=default_ttl)

    @classmethod
    def from_settings(
        cls, settings: Settings, *, cache: ResultCache | None = None
    ) -> CompaniesHouseClient:
        """Wire transport and cache from resolved settings."""
        http = RegistryHttpClient(
            api_key=settings.api_key,
            verbose=settings.verbose,
            cookie_file=settings.cookie_file or None,
            client_options={"timeout": settings.timeout_s},
        )
        if cache is None and settings.cache_dir:
            cache = FileResultCache(settings.cache_dir)
        elif cache is None:
            cache = MemoryResultCache()
        return cls(
            http=http,
            cache=cache,
            base_url=settings.base_url,
            default_ttl=settings.cache_ttl_s,
        )

    def close(self) -> None:
        close = getattr(self.http, "close", None)
        if callable(close):
            close()

    def __enter__(self) -> CompaniesHouseClient:
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    def call(
        self,
        name: str,
        *identifiers: str,
        params: Mapping[str, Any] | None = None,
        ttl: int | None = None,
    ) -> Any:
        """Dispatch one catalog endpoint through the caching gateway."""
        endpoint = get_endpoint(name)
        key, request = endpoint.build_request(self.base_url, identifiers, params)
        return self.gateway.fetch(key, request, ttl)

    # Search

    def search(self, params: Mapping[str, Any]) -> Any:
        return self.call("search", params=params)

    def search_companies(self, query: str) -> Any:
        return self.call("search_companies", params={"q": query})

    def search_officers(self, query: str) -> Any:
        return self.call("search_officers", params={"q": query})

    def search_disqualified_officers(self, query: str) -> Any:
        return self.call("search_disqualified_officers", params={"q": query})

    def alphabetical_search_companies(self, query: str) -> Any:
        return self.call("alphabetical_search_companies", params={"q": query})

    def dissolved_search_companies(self, query: str) -> Any:
        return self.call("dissolved_search_companies", params={"q": query})

    def advanced_search(self, filters: Mapping[str, Any]) -> Any:
        return self.call("advanced_search_companies", params=filters)

    # Company

    def get_company(self, company_number: str) -> Any:
        return self.call("company", company_number)

    def get_registered_office_address(self, company_number: str) -> Any:
        return self.call("registered_office_address", company_number)

    def get_company_officers(self, company_number: str) -> Any:
        return self.call("company_officers", company_number)

    def get_officer_appointment(self, company_number: str, appointment_id: str) -> Any:
        return self.call("officer_appointment", company_number, appointment_id)

    def get_filing_history(self, company_number: str) -> Any:
        return self.call("filing_history", company_number)

    def get_filing_history_item(self, company_number: str, transaction_id: str) -> Any:
        return self.call("filing_history_item", company_number, transaction_id)

    def get_charges(self, company_number: str) -> Any:
        return self.call("charges", company_number)

    def get_charge(self, company_number: str, charge_id: str) -> Any:
        return self.call("charge", company_number, charge_id)

    def get_insolvency(self, company_number: str) -> Any:
        return self.call("insolvency", company_number)

    def get_exemptions(self, company_number: str) -> Any:
        return self.call("exemptions", company_number)

    def get_registers(self, company_number: str) -> Any:
        return self.call("registers", company_number)

    def get_uk_establishments(self, company_number: str) -> Any:
        return self.call("uk_establishments", company_number)

    # Persons with significant control

    def get_psc_list(self, company_number: str) -> Any:
        return self.call("psc_list", company_number)

    def get_psc_statements(self, company_number: str) -> Any:
        return self.call("psc_statements", company_number)

    def get_individual_psc(self, company_number: str, psc_id: str) -> Any:
        return self.call("psc_individual", company_number, psc_id)

    def get_corporate_entity_psc(self, company_number: str, psc_id: str) -> Any:
        return self.call("psc_corporate_entity", company_number, psc_id)

    def get_legal_person_psc(self, company_number: str, psc_id: str) -> Any:
        return self.call("psc_legal_person", company_number, psc_id)

    def get_super_secure_psc(self, company_number: str, super_secure_id: str) -> Any:
        return self.call("psc_super_secure", company_number, super_secure_id)

    # Officers

    def get_officer_appointments(self, officer_id: str) -> Any:
        return self.call("officer_appointments", officer_id)

    def get_disqualified_natural_officer(self, officer_id: str) -> Any:
        return self.call("disqualified_natural_officer", officer_id)

    def get_disqualified_corporate_officer(self, officer_id: str) -> Any:
        return self.call("disqualified_corporate_officer", officer_id)

    # Documents

    def get_document_metadata(self, document_id: str) -> Any:
        return self.call("document_metadata", document_id)

    def download_document(self, document_id: str) -> bytes:
        """Download document content as PDF bytes."""
        return self.call("document_content", document_id)
