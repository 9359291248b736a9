from __future__ import annotations

from src.query.tokenizer import get_fields, split_sort_token, tokenize_fields, tokenize_sort


def test_tokenize_fields_trims_and_keeps_empty_tokens() -> None:
    assert tokenize_fields(" id , first_name,, email ") == ["id", "first_name", "", "email"]


def test_tokenize_fields_keeps_duplicates_in_order() -> None:
    assert tokenize_fields("email,id,email") == ["email", "id", "email"]


def test_tokenize_sort_does_not_trim() -> None:
    assert tokenize_sort("id ASC, name DESC") == ["id ASC", " name DESC"]


def test_split_sort_token() -> None:
    assert split_sort_token(" name DESC") == ("name", "DESC")
    assert split_sort_token("id") == ("id", None)
    assert split_sort_token("id   asc ") == ("id", "asc")
    assert split_sort_token("id ASC extra") == ("id", "ASC extra")
    assert split_sort_token("   ") == ("", None)


def test_get_fields() -> None:
    assert get_fields("") == []
    assert get_fields("id, first_name") == ["id", "first_name"]
