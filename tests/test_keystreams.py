# SPDX-FileCopyrightText: 2023 Rose Davidson <rose@metaclassical.com>
#
# SPDX-License-Identifier: GPL-3.0-or-later
import pathlib

import pytest

from typist.textinput.keystreams import KeystrokeOutcome, make_typing_stream
from typist.textinput.recording import Recorder, load_trace, replay, replay_into, save_trace, trace_from_text
from typist.textinput.textinput import TextInput
from typist.textinput.types import Feedback, Keystroke, Step, TextInputSettings


@pytest.mark.trio
async def test_typing_stream():
    text_input = TextInput("abc")
    async with make_typing_stream(replay(trace_from_text("abc")), text_input) as outcomes:
        results = [outcome async for outcome in outcomes]
    assert results == [
        KeystrokeOutcome(keystroke=Keystroke(code_point=ord("a"), time_stamp=0), feedback=Feedback.SUCCEEDED, position=1),
        KeystrokeOutcome(keystroke=Keystroke(code_point=ord("b"), time_stamp=100), feedback=Feedback.SUCCEEDED, position=2),
        KeystrokeOutcome(keystroke=Keystroke(code_point=ord("c"), time_stamp=200), feedback=Feedback.SUCCEEDED, position=3),
    ]
    assert text_input.completed


@pytest.mark.trio
async def test_typing_stream_drops_controls():
    text_input = TextInput("ab")
    trace = [
        Keystroke(code_point=ord("a"), time_stamp=0),
        Keystroke(code_point=0x01, time_stamp=50),
        Keystroke(code_point=0x1B, time_stamp=60),
        Keystroke(code_point=ord("x"), time_stamp=100),
        Keystroke(code_point=0x08, time_stamp=200),
        Keystroke(code_point=ord("b"), time_stamp=300),
    ]
    async with make_typing_stream(replay(trace), text_input) as outcomes:
        results = [outcome async for outcome in outcomes]
    assert [chr(r.keystroke.code_point) for r in results] == ["a", "x", "\b", "b"]
    assert [r.feedback for r in results] == [Feedback.SUCCEEDED, Feedback.FAILED, Feedback.SUCCEEDED, Feedback.RECOVERED]
    assert text_input.steps == (Step(code_point=ord("a"), time_stamp=0), Step(code_point=ord("b"), time_stamp=300, typo=True))


@pytest.mark.trio
async def test_typing_stream_stops_at_completion():
    text_input = TextInput("ab")
    async with make_typing_stream(replay(trace_from_text("abcdef")), text_input) as outcomes:
        results = [outcome async for outcome in outcomes]
    assert len(results) == 2
    assert text_input.completed


@pytest.mark.trio
async def test_recording(tmp_path: pathlib.Path):
    settings = TextInputSettings(forgive_errors=True)
    text_input = TextInput("the cat sat", settings)
    recorder = Recorder()
    typed = "teh\b\bhe cat sta\b\bat"
    async with make_typing_stream(replay(trace_from_text(typed)), text_input, recorder) as outcomes:
        live = [outcome async for outcome in outcomes]
    assert text_input.completed
    assert len(recorder.keystrokes) == len(typed)

    trace_path = tmp_path / "trace.json"
    recorder.save(trace_path)
    trace = load_trace(trace_path)
    assert trace == recorder.keystrokes

    replayed = TextInput("the cat sat", settings)
    assert replay_into(replayed, trace) == live
    assert replayed.steps == text_input.steps
    assert replayed.get_chars() == text_input.get_chars()


def test_save_and_load_trace(tmp_path: pathlib.Path):
    trace = trace_from_text("hi\b there", start=1000, interval=25)
    trace_path = tmp_path / "trace.json"
    save_trace(trace_path, trace)
    assert load_trace(trace_path) == trace
    assert trace[2] == Keystroke(code_point=0x08, time_stamp=1050)
