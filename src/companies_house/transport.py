"""HTTP transport for the Companies House public data API."""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from http.cookiejar import MozillaCookieJar
from pathlib import Path
from typing import Any

import httpx

from companies_house.errors import HTTPResponseError, HTTPTransportError, ResponseDecodeError
from companies_house.request import DEFAULT_ACCEPT, ApiRequest

logger = logging.getLogger(__name__)

FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"
JSON_CONTENT_TYPE = "application/json"


def build_url(request: ApiRequest) -> str:
    """Return the request URL, with params as query string for body-less verbs."""
    if not request.params or request.allows_body:
        return request.url
    return str(httpx.URL(request.url).copy_merge_params(request.params))


def detect_content_type(headers: Mapping[str, str] | None) -> str:
    """Return the media type configured in default headers."""
    value = httpx.Headers(headers or {}).get("content-type", FORM_CONTENT_TYPE)
    return value.split(";", 1)[0].strip().lower()


def decode_payload(response: httpx.Response, response_format: str) -> Any:
    if response_format == "json":
        try:
            return json.loads(response.content)
        except ValueError as exc:
            raise ResponseDecodeError(
                f"JSON decode error: {exc}", status_code=response.status_code
            ) from exc
    if response_format == "text":
        return response.text
    return response.content


def _load_cookie_jar(path: Path) -> MozillaCookieJar:
    path.parent.mkdir(parents=True, exist_ok=True)
    jar = MozillaCookieJar(str(path))
    if path.exists():
        jar.load(ignore_discard=True, ignore_expires=True)
    return jar


def _log_request(request: httpx.Request) -> None:
    logger.debug("> %s %s", request.method, request.url)


def _log_response(response: httpx.Response) -> None:
    logger.debug("< %s %s %s", response.status_code, response.request.method, response.url)


class RegistryHttpClient:
    """Single-attempt HTTP client with Basic auth and status mapping."""

    def __init__(
        self,
        *,
        api_key: str = "",
        verbose: bool = False,
        cookie_file: Path | str | None = None,
        default_headers: Mapping[str, str] | None = None,
        client_options: Mapping[str, Any] | None = None,
    ) -> None:
        self.api_key = api_key
        self.default_headers = dict(default_headers or {})
        self.content_type = detect_content_type(self.default_headers)
        self.cookie_file = Path(cookie_file) if cookie_file else None
        self._cookie_jar = _load_cookie_jar(self.cookie_file) if self.cookie_file else None

        options = dict(client_options or {})
        if verbose:
            hooks = dict(options.get("event_hooks") or {})
            hooks["request"] = [*hooks.get("request", []), _log_request]
            hooks["response"] = [*hooks.get("response", []), _log_response]
            options["event_hooks"] = hooks
        if self._cookie_jar is not None:
            options["cookies"] = self._cookie_jar
        options["auth"] = httpx.BasicAuth(api_key, "")
        options["follow_redirects"] = True
        self._http = httpx.Client(**options)

    def close(self) -> None:
        self._http.close()

    def __enter__(self) -> RegistryHttpClient:
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    def _headers(self, request: ApiRequest) -> httpx.Headers:
        headers = httpx.Headers(self.default_headers)
        headers["Accept"] = request.accept or DEFAULT_ACCEPT
        return headers

    def _body(self, request: ApiRequest, headers: httpx.Headers) -> dict[str, Any]:
        if not request.params or not request.allows_body:
            return {}
        if self.content_type == JSON_CONTENT_TYPE:
            content = json.dumps(request.params).encode("utf-8")
            headers["Content-Type"] = JSON_CONTENT_TYPE
            headers["Content-Length"] = str(len(content))
            return {"content": content}
        return {"data": dict(request.params)}

    def send(self, request: ApiRequest) -> Any:
        """Execute one request and return the decoded payload."""
        url = build_url(request)
        headers = self._headers(request)
        body = self._body(request, headers)
        try:
            response = self._http.request(request.method, url, headers=headers, **body)
        except httpx.RequestError as exc:
            raise HTTPTransportError(
                f"{request.method} {url} failed with transport error: {exc}"
            ) from exc
        self._save_cookies()

        if response.status_code >= 400:
            raise HTTPResponseError(
                response.status_code,
                response.text,
                url=url,
                message=f"HTTP error from {url}",
            )
        return decode_payload(response, request.format)

    def _save_cookies(self) -> None:
        if self._cookie_jar is None:
            return
        self._cookie_jar.save(ignore_discard=True, ignore_expires=True)
