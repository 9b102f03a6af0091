"""Tests for table and JSON rendering."""

import io
import json

import pytest

from aboki.exporter import (
    Presenter,
    UnsupportedOutputFormatError,
    format_mapping,
    format_table,
)


def test_format_table_with_head_pads_short_rows() -> None:
    rendered = format_table([["25/12/2023", "755 / 765*"]], head=["TIMESTAMP", "USD", "GBP"])

    lines = rendered.splitlines()
    assert lines[0] == "+" + "-" * 14 + "+" + "-" * 14 + "+" + "-" * 7 + "+"
    assert lines[1] == "|  TIMESTAMP   |  USD         |  GBP  |"
    assert lines[3] == "|  25/12/2023  |  755 / 765*  |       |"
    assert lines[0] == lines[2] == lines[-1]


def test_format_table_empty_returns_empty_string() -> None:
    assert format_table([]) == ""


def test_format_mapping_is_vertical() -> None:
    rendered = format_mapping({"usd": 755.0})

    assert rendered.splitlines()[1] == "|  usd  |  755.0  |"


def test_presenter_rejects_unknown_format() -> None:
    with pytest.raises(UnsupportedOutputFormatError) as excinfo:
        Presenter("xml")
    assert "xml" in str(excinfo.value)


def test_presenter_accepts_format_case_insensitively() -> None:
    assert Presenter(" JSON ").output == "json"


def test_presenter_table_mode_prints_title_and_messages() -> None:
    buffer = io.StringIO()
    presenter = Presenter("table", stream=buffer)

    presenter.message("Conversion Successful")
    presenter.table({"title": "Lagos Rates", "rows": [["25/12/2023", "755 / 765*"]]})

    output = buffer.getvalue().splitlines()
    assert output[0] == "Conversion Successful"
    assert output[1] == "Lagos Rates"
    assert "755 / 765*" in output[3]


def test_presenter_json_mode_emits_only_json() -> None:
    buffer = io.StringIO()
    presenter = Presenter("json", stream=buffer)

    presenter.message("Conversion Successful")
    presenter.mapping({"ngn": 1000, "usd": 1.32, "rate": 755.0})

    assert json.loads(buffer.getvalue()) == {"ngn": 1000, "usd": 1.32, "rate": 755.0}


def test_presenters_do_not_share_state() -> None:
    first, second = io.StringIO(), io.StringIO()

    Presenter("table", stream=first).mapping({"usd": 755.0})
    Presenter("table", stream=second).mapping({"gbp": 400.0})

    assert "usd" not in second.getvalue()
    assert "gbp" in second.getvalue()
