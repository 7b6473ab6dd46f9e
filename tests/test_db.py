import datetime
import pathlib

import pytest
import timeflake
from dateutil.tz import tzutc

from typist.db import DbVersionError, make_db, set_version
from typist.results.types import Result
from typist.textinput.recording import replay_into, trace_from_text
from typist.textinput.textinput import TextInput
from typist.textinput.types import Step, TextInputSettings


def make_result(text: str, typed: str):
    text_input = TextInput(text, TextInputSettings(forgive_errors=True))
    replay_into(text_input, trace_from_text(typed))
    return Result.from_text_input(text_input, started_at=datetime.datetime(2023, 5, 4, 12, 30, 15, 250000, tzinfo=tzutc()))


def assert_same_results(actual: list[Result], expected: list[Result]):
    assert [r.id.base62 for r in actual] == [r.id.base62 for r in expected]
    assert [r.text for r in actual] == [r.text for r in expected]
    assert [r.started_at for r in actual] == [r.started_at for r in expected]
    assert [r.steps for r in actual] == [r.steps for r in expected]


def test_result_from_text_input():
    result = make_result("abcd", "xbcd")
    assert isinstance(result.id, timeflake.Timeflake)
    assert result.text == "abcd"
    assert result.length == 4
    assert result.typo_count == 1
    assert result.steps[0] == Step(code_point=ord("a"), time_stamp=0, typo=True)
    assert result.histogram().get(ord("a")).miss_count == 1


def test_incomplete_result():
    text_input = TextInput("abcd")
    replay_into(text_input, trace_from_text("ab"))
    with pytest.raises(ValueError):
        Result.from_text_input(text_input)


def test_round_trip(tmp_path: pathlib.Path):
    db = make_db(tmp_path / "results.db")
    assert db.load() == []
    first = make_result("hello", "hello")
    second = make_result("abcd", "bcd")
    db.append([first])
    db.append([second])
    db.append([])
    assert db.count() == 2
    assert_same_results(db.load(), [first, second])

    # reopening finds the same data
    db.engine.dispose()
    reopened = make_db(tmp_path / "results.db")
    assert_same_results(reopened.load(), [first, second])

    reopened.clear()
    assert reopened.load() == []
    assert reopened.count() == 0


def test_version_mismatch(tmp_path: pathlib.Path):
    db_path = tmp_path / "results.db"
    db = make_db(db_path)
    with db.engine.begin() as conn:
        set_version(conn, 99)
    db.engine.dispose()
    with pytest.raises(DbVersionError):
        make_db(db_path)
