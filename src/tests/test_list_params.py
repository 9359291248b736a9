from __future__ import annotations

import os

import pytest

from src.app.params import ListQueryError, parse_limit, parse_list_query_params
from src.app.resources import ResourceRegistry
from src.query.types import Connective, SortDirection


def users():
    resource = ResourceRegistry().get("users")
    assert resource is not None
    return resource


def test_parse_limit_defaults_and_bounds() -> None:
    assert parse_limit(None) == 10
    assert parse_limit("") == 10
    assert parse_limit("1") == 1
    assert parse_limit("1000") == 1000


@pytest.mark.parametrize(
    ("raw", "reason"),
    [
        ("abc", "not_an_integer"),
        (" 5", "not_an_integer"),
        ("5 ", "not_an_integer"),
        ("1_0", "not_an_integer"),
        ("\u0665", "not_an_integer"),
        ("1.0", "not_an_integer"),
        ("9" * 20, "not_an_integer"),
        ("0", "out_of_range"),
        ("-3", "out_of_range"),
        ("1001", "out_of_range"),
    ],
)
def test_parse_limit_rejects(raw: str, reason: str) -> None:
    with pytest.raises(ListQueryError) as excinfo:
        parse_limit(raw)
    assert excinfo.value.parameter == "limit"
    assert excinfo.value.reason == reason


def test_parse_limit_reads_settings_at_call_time() -> None:
    original = os.environ.get("LISTQ_MAX_LIMIT")
    os.environ["LISTQ_MAX_LIMIT"] = "50"
    try:
        with pytest.raises(ListQueryError):
            parse_limit("51")
        assert parse_limit("50") == 50
    finally:
        if original is None:
            os.environ.pop("LISTQ_MAX_LIMIT", None)
        else:
            os.environ["LISTQ_MAX_LIMIT"] = original


def test_parse_list_query_params() -> None:
    params = parse_list_query_params(
        users(),
        fields="id, email",
        sort="created_at DESC",
        filter="disabled=0 AND email='a@b.c'",
        limit="25",
    )
    assert params.fields.columns == ("id", "email")
    assert params.sort.keys[0].direction is SortDirection.DESC
    assert params.filter.connectives == (Connective.AND,)
    assert params.limit == 25


def test_parse_list_query_params_reports_parameter() -> None:
    with pytest.raises(ListQueryError) as excinfo:
        parse_list_query_params(users(), sort="id", filter="id=1")
    detail = excinfo.value.as_detail()
    assert detail["parameter"] == "sort"
    assert detail["reason"] == "cardinality_mismatch"


def test_parse_list_query_params_rejects_long_expressions() -> None:
    original = os.environ.get("LISTQ_MAX_EXPRESSION_LENGTH")
    os.environ["LISTQ_MAX_EXPRESSION_LENGTH"] = "8"
    try:
        with pytest.raises(ListQueryError) as excinfo:
            parse_list_query_params(users(), filter="first_name='Alice'")
        assert excinfo.value.parameter == "filter"
        assert excinfo.value.reason == "too_long"
    finally:
        if original is None:
            os.environ.pop("LISTQ_MAX_EXPRESSION_LENGTH", None)
        else:
            os.environ["LISTQ_MAX_EXPRESSION_LENGTH"] = original


def test_registry_overrides() -> None:
    registry = ResourceRegistry(overrides={"users": {"sort": ["id"]}, "invoices": {"fields": ["id"]}})
    users_columns = registry.get("Users")
    assert users_columns is not None
    assert users_columns.sort == ("id",)
    assert "email" in users_columns.fields
    invoices = registry.get("invoices")
    assert invoices is not None
    assert invoices.fields == ("id",)
    assert invoices.filter == ()
    assert "invoices" in registry.names()
