"""Tests for .env rendering."""

from __future__ import annotations

import logging
from io import StringIO

import pytest
from dotenv import dotenv_values

from pages_env.document import Environment, VariableDocument
from pages_env.envfile import quote_value, render, to_env_lines
from pages_env.errors import EnvironmentUnavailable


def test_production_single_line() -> None:
    doc = VariableDocument(production={"A": "1"}, preview=None)
    assert to_env_lines(doc, Environment.PRODUCTION) == ["A=1"]


def test_null_environment_unavailable() -> None:
    doc = VariableDocument(production={"A": "1"}, preview=None)
    with pytest.raises(EnvironmentUnavailable, match="preview"):
        to_env_lines(doc, Environment.PREVIEW)


def test_sorted_by_key() -> None:
    doc = VariableDocument(production={"B": "2", "A": "1"}, preview={})
    assert to_env_lines(doc, Environment.PRODUCTION) == ["A=1", "B=2"]


def test_empty_environment_has_no_lines() -> None:
    doc = VariableDocument(production={}, preview={})
    assert to_env_lines(doc, Environment.PREVIEW) == []
    assert render([]) == ""


def test_empty_flag_keeps_names_only() -> None:
    doc = VariableDocument(production={"TOKEN": "secret", "URL": "https://x"})
    assert to_env_lines(doc, Environment.PRODUCTION, empty=True) == ['TOKEN=""', 'URL=""']


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        ("plain", "plain"),
        ("https://api.example.com/v1", "https://api.example.com/v1"),
        ("", ""),
        ("two words", '"two words"'),
        ("a=b", '"a=b"'),
        ('say "hi"', '"say \\"hi\\""'),
        ("line1\nline2", '"line1\\nline2"'),
        ("back\\slash", '"back\\\\slash"'),
        ("# not a comment", '"# not a comment"'),
        ("${HOME}/bin", "'${HOME}/bin'"),
        ("pa$$word", "'pa$$word'"),
        ("it's $5", "\"it's $5\""),
    ],
)
def test_quote_value(value: str, expected: str) -> None:
    assert quote_value(value) == expected


def test_output_parses_back_with_dotenv() -> None:
    variables = {
        "PLAIN": "value",
        "SPACED": "hello world",
        "EQUALS": "k=v",
        "QUOTES": "it's \"fine\"",
        "MULTILINE": "first\nsecond",
        "BACKSLASH": "C:\\path",
        "HASH": "x # y",
        "EMPTY": "",
    }
    doc = VariableDocument(production=variables, preview=None)
    text = render(to_env_lines(doc, Environment.PRODUCTION))
    assert dict(dotenv_values(stream=StringIO(text), interpolate=False)) == variables


def test_dollar_values_single_quoted_and_parse_back() -> None:
    variables = {"PATHISH": "${HOME}/bin", "PRICE": "$5 each", "PLAIN": "x"}
    doc = VariableDocument(production=variables, preview=None)
    lines = to_env_lines(doc, Environment.PRODUCTION)
    assert lines == ["PATHISH='${HOME}/bin'", "PLAIN=x", "PRICE='$5 each'"]
    text = render(lines)
    assert dict(dotenv_values(stream=StringIO(text), interpolate=False)) == variables


def test_unquotable_dollar_value_warns(caplog: pytest.LogCaptureFixture) -> None:
    doc = VariableDocument(production={"MSG": "it's ${X}", "OK": "${Y}"}, preview=None)
    with caplog.at_level(logging.WARNING, logger="pages_env.envfile"):
        lines = to_env_lines(doc, Environment.PRODUCTION)
    assert lines == ['MSG="it\'s ${X}"', "OK='${Y}'"]
    assert "MSG contains '$'" in caplog.text
    assert len(caplog.records) == 1
