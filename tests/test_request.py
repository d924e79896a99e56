from __future__ import annotations

import dataclasses

import pytest

from companies_house.request import (
    ALLOWS_BODY,
    ApiRequest,
    allows_body,
    canonical_params,
    normalize_method,
    params_hash,
)


def test_method_body_table_is_fixed() -> None:
    assert {method for method, body in ALLOWS_BODY.items() if not body} == {
        "GET",
        "HEAD",
        "OPTIONS",
        "TRACE",
    }
    assert {method for method, body in ALLOWS_BODY.items() if body} == {
        "POST",
        "PUT",
        "PATCH",
        "DELETE",
        "CONNECT",
    }


def test_allows_body_normalizes_case() -> None:
    assert allows_body("post") is True
    assert allows_body(" get ") is False


def test_normalize_method_rejects_unknown_verb() -> None:
    with pytest.raises(ValueError, match="unsupported HTTP method"):
        normalize_method("FETCH")


def test_params_hash_ignores_insertion_order() -> None:
    first = {"q": "tesco", "items_per_page": 20, "location": ["London", "Leeds"]}
    second = {"location": ["London", "Leeds"], "items_per_page": 20, "q": "tesco"}

    assert canonical_params(first) == canonical_params(second)
    assert params_hash(first) == params_hash(second)
    assert params_hash(first) != params_hash({"q": "sainsbury"})


def test_api_request_defaults() -> None:
    request = ApiRequest(url="https://api.example.test/company/1")

    assert request.method == "GET"
    assert request.params == {}
    assert request.format == "json"
    assert request.accept == "application/json"
    assert request.allows_body is False


def test_api_request_is_immutable() -> None:
    request = ApiRequest(url="https://api.example.test/search", params={"q": "a"})

    with pytest.raises(dataclasses.FrozenInstanceError):
        request.url = "https://elsewhere.test"  # type: ignore[misc]


def test_api_request_copies_params() -> None:
    params = {"q": "tesco"}
    request = ApiRequest(url="https://api.example.test/search", params=params)
    params["q"] = "changed"

    assert request.params == {"q": "tesco"}


def test_api_request_key_is_order_independent() -> None:
    url = "https://api.example.test/advanced-search/companies"
    first = ApiRequest(url=url, method="get", params={"location": "York", "q": "a"})
    second = ApiRequest(url=url, method="GET", params={"q": "a", "location": "York"})

    assert first.method == "GET"
    assert first.key() == second.key()
    assert first.key() != ApiRequest(url=url, method="POST", params=second.params).key()


def test_api_request_rejects_unknown_format() -> None:
    with pytest.raises(ValueError, match="invalid response format"):
        ApiRequest(url="https://api.example.test/x", format="xml")  # type: ignore[arg-type]
