"""
Tests for validation helpers.
"""
import pytest
from socialapi.core.utils import generate_id, is_valid_accountname, is_valid_email, parse_int


@pytest.mark.parametrize("value", ["a@b.com", "first.last@mail.example.org", "x_1@d.io"])
def test_valid_emails(value):
    assert is_valid_email(value)


@pytest.mark.parametrize("value", ["abc", "a@b", "a b@c.com", "a@@b.com", "@b.com", "a@b.com\n", "", None, 42])
def test_invalid_emails(value):
    assert not is_valid_email(value)


@pytest.mark.parametrize("value", ["a_b.1", "ABC", "user.name_2"])
def test_valid_accountnames(value):
    assert is_valid_accountname(value)


@pytest.mark.parametrize("value", ["a b", "", "name!", "한글", "a-b", "abc\n", None])
def test_invalid_accountnames(value):
    assert not is_valid_accountname(value)


def test_parse_int_defaults():
    """Missing, non-numeric and zero values use the default."""
    assert parse_int(None, 10) == 10
    assert parse_int("abc", 10) == 10
    assert parse_int("0", 10) == 10
    assert parse_int("", 0) == 0


def test_parse_int_leading_digits():
    assert parse_int("5", 10) == 5
    assert parse_int("5abc", 10) == 5
    assert parse_int(" 7", 10) == 7


def test_generate_id_is_unique():
    ids = {generate_id() for _ in range(100)}
    assert len(ids) == 100
    assert all(len(i) > 9 for i in ids)
