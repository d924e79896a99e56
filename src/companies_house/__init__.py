"""Typed, cached client for the Companies House public data API."""

from companies_house.cache_store import FileResultCache, MemoryResultCache, ResultCache
from companies_house.client import CompaniesHouseClient
from companies_house.endpoints import DEFAULT_BASE_URL, ENDPOINTS, Endpoint, get_endpoint
from companies_house.errors import (
    CompaniesHouseError,
    HTTPResponseError,
    HTTPTransportError,
    InvalidRequestError,
    ResponseDecodeError,
)
from companies_house.gateway import DEFAULT_TTL_SECONDS, CachingGateway
from companies_house.request import ALLOWS_BODY, ApiRequest, allows_body, params_hash
from companies_house.settings import Settings
from companies_house.transport import RegistryHttpClient, build_url

__version__ = "0.1.0"

__all__ = [
    "ALLOWS_BODY",
    "ApiRequest",
    "CachingGateway",
    "CompaniesHouseClient",
    "CompaniesHouseError",
    "DEFAULT_BASE_URL",
    "DEFAULT_TTL_SECONDS",
    "ENDPOINTS",
    "Endpoint",
    "FileResultCache",
    "HTTPResponseError",
    "HTTPTransportError",
    "InvalidRequestError",
    "MemoryResultCache",
    "RegistryHttpClient",
    "ResponseDecodeError",
    "ResultCache",
    "Settings",
    "__version__",
    "allows_body",
    "build_url",
    "get_endpoint",
    "params_hash",
]
