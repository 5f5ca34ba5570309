import datetime
import locale

import pytest

from things_api import date_utils
from things_api.date_utils import date_literal, parse_date, render_date
from things_api.errors import DateParseError, ThingsError


@pytest.mark.parametrize("text, expected", [
    ("2024-12-25", datetime.date(2024, 12, 25)),
    ("  2024-12-25  ", datetime.date(2024, 12, 25)),
    ("2024/12/25", datetime.date(2024, 12, 25)),
    ("12/25/2024", datetime.date(2024, 12, 25)),
    ("25/12/2024", datetime.date(2024, 12, 25)),
    ("December 25, 2024", datetime.date(2024, 12, 25)),
    ("Dec 25, 2024", datetime.date(2024, 12, 25)),
])
def test_parse_date_formats(text, expected):
    assert parse_date(text) == expected


def test_ambiguous_numeric_date_is_month_first():
    assert parse_date("01/02/2024") == datetime.date(2024, 1, 2)


def test_natural_language():
    assert parse_date("tomorrow") == datetime.date.today() + datetime.timedelta(days=1)


@pytest.mark.parametrize("text", ["", "   ", "xyzzy"])
def test_unparseable_input_raises(text):
    with pytest.raises(DateParseError):
        parse_date(text)


def test_date_parse_error_is_value_error():
    with pytest.raises(ValueError):
        parse_date("xyzzy")
    assert issubclass(DateParseError, ThingsError)


def test_render_date_is_iso():
    assert render_date(datetime.date(2024, 1, 5)) == 'date "2024-01-05"'


def test_date_literal_normalizes():
    assert date_literal("12/25/2024") == 'date "2024-12-25"'


def test_date_literal_falls_back_to_escaped_text(monkeypatch):
    def _fail(text):
        raise DateParseError(text)

    monkeypatch.setattr(date_utils, "parse_date", _fail)
    assert date_literal('next "blue" moon') == 'date "next \\"blue\\" moon"'


@pytest.fixture
def german_time_locale():
    previous = locale.setlocale(locale.LC_TIME)
    for name in ("de_DE.UTF-8", "de_DE.utf8", "de_DE"):
        try:
            locale.setlocale(locale.LC_TIME, name)
            break
        except locale.Error:
            continue
    else:
        pytest.skip("de_DE locale is not installed")
    yield
    locale.setlocale(locale.LC_TIME, previous)


@pytest.mark.parametrize("text", ["2024-12-25", "12/25/2024", "25/12/2024", "2024/12/25"])
def test_numeric_dates_ignore_host_locale(german_time_locale, text):
    assert parse_date(text) == datetime.date(2024, 12, 25)
    assert date_literal(text) == 'date "2024-12-25"'


def test_ambiguous_date_is_month_first_under_german_locale(german_time_locale):
    assert parse_date("01/02/2024") == datetime.date(2024, 1, 2)
