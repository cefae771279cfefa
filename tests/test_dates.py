import asyncio
import datetime as dt
import threading

import pytest

from conftest import json_response
from earthgif.dates import nearest_dates, parse_date, prompt_choice, resolve_date
from earthgif.errors import ValidationError

TODAY = dt.date(2024, 5, 1)
AVAILABLE = ["2022-01-05", "2022-01-03", "2021-12-30"]


class TestParseDate:
    def test_valid(self):
        assert parse_date("2022-01-01", today=TODAY) == dt.date(2022, 1, 1)

    def test_today_is_accepted(self):
        assert parse_date("2024-05-01", today=TODAY) == TODAY

    @pytest.mark.parametrize("text", ["2022/01/01", "yesterday", "2022-13-01", ""])
    def test_not_a_date(self, text):
        with pytest.raises(ValidationError, match="not a valid date"):
            parse_date(text, today=TODAY)

    @pytest.mark.parametrize("text", ["2015-06-13", "2010-01-01", "2024-05-02", "2030-01-01"])
    def test_out_of_range(self, text):
        with pytest.raises(ValidationError, match="date is not between"):
            parse_date(text, today=TODAY)


def test_nearest_dates():
    assert nearest_dates(AVAILABLE, "2022-01-04") == ("2022-01-05", "2022-01-03")
    assert nearest_dates(AVAILABLE, "2022-01-03") == ("2022-01-03", "2022-01-03")
    assert nearest_dates(AVAILABLE, "2023-01-01") == (None, "2022-01-05")
    assert nearest_dates(AVAILABLE, "2020-01-01") == ("2021-12-30", None)


def test_prompt_choice_reprompts(capsys):
    answers = iter(["2", "", "1"])
    assert prompt_choice("2022-01-05", "2022-01-03", ask=lambda _: next(answers)) == "2022-01-03"
    assert "(0) 2022-01-05, (1) 2022-01-03" in capsys.readouterr().out


def test_prompt_choice_eof():
    def ask(_):
        raise EOFError

    with pytest.raises(ValidationError):
        prompt_choice("a", "b", ask=ask)


@pytest.fixture
def catalog(make_client):
    return make_client(lambda request: json_response([{"date": d} for d in AVAILABLE]))


def test_resolve_available_date(catalog):
    def choose(newer, older):
        raise AssertionError("should not prompt")

    assert asyncio.run(resolve_date(catalog, "2022-01-03", choose)) == "2022-01-03"


def test_resolve_asks_between_neighbors(catalog):
    offered = []

    def choose(newer, older):
        offered.append((newer, older))
        return newer

    assert asyncio.run(resolve_date(catalog, "2022-01-04", choose)) == "2022-01-05"
    assert offered == [("2022-01-05", "2022-01-03")]


def test_resolve_single_neighbor_without_prompt(catalog):
    assert asyncio.run(resolve_date(catalog, "2023-06-01", lambda *a: "x")) == "2022-01-05"


def test_prompt_runs_off_the_event_loop(catalog):
    threads = []

    def choose(newer, older):
        threads.append(threading.current_thread())
        return older

    assert asyncio.run(resolve_date(catalog, "2022-01-04", choose)) == "2022-01-03"
    assert threads[0] is not threading.main_thread()
