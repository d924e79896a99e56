"""Request descriptor and cache-key helpers for registry API calls."""

from __future__ import annotations

import hashlib
import json
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Literal

HttpMethod = Literal["GET", "HEAD", "OPTIONS", "TRACE", "POST", "PUT", "PATCH", "DELETE", "CONNECT"]
ResponseFormat = Literal["json", "text", "binary"]

# Verbs whose semantics permit a request payload.
ALLOWS_BODY: dict[str, bool] = {
    "GET": False,
    "HEAD": False,
    "OPTIONS": False,
    "TRACE": False,
    "POST": True,
    "PUT": True,
    "PATCH": True,
    "DELETE": True,
    "CONNECT": True,
}

_VALID_FORMATS: tuple[ResponseFormat, ...] = ("json", "text", "binary")

DEFAULT_ACCEPT = "application/json"


def normalize_method(value: str) -> HttpMethod:
    """Normalize a verb to one of the supported HTTP methods."""
    cleaned = value.strip().upper()
    if cleaned in ALLOWS_BODY:
        return cleaned  # type: ignore[return-value]
    raise ValueError(f"unsupported HTTP method: {value}")


def allows_body(method: str) -> bool:
    return ALLOWS_BODY[normalize_method(method)]


def canonical_params(params: Mapping[str, Any]) -> str:
    """Serialize params deterministically, independent of key order."""
    return json.dumps(dict(params), sort_keys=True, separators=(",", ":"), ensure_ascii=True)


def params_hash(params: Mapping[str, Any]) -> str:
    """Compute a stable hash for a parameter mapping."""
    return hashlib.sha256(canonical_params(params).encode("utf-8")).hexdigest()


@dataclass(frozen=True)
class ApiRequest:
    """Immutable description of one API call."""

    url: str
    method: HttpMethod = "GET"
    params: Mapping[str, Any] = field(default_factory=dict)
    format: ResponseFormat = "json"
    accept: str | None = DEFAULT_ACCEPT

    def __post_init__(self) -> None:
        object.__setattr__(self, "method", normalize_method(self.method))
        object.__setattr__(self, "params", dict(self.params))
        if self.format not in _VALID_FORMATS:
            raise ValueError(f"invalid response format: {self.format}")

    @property
    def allows_body(self) -> bool:
        return ALLOWS_BODY[self.method]

    def key(self) -> str:
        """Hash the method, url and params into a request identity."""
        payload = {"method": self.method, "url": self.url, "params": self.params}
        serialized = json.dumps(payload, sort_keys=True, separators=(",", ":"))
        return hashlib.sha256(serialized.encode("utf-8")).hexdigest()
