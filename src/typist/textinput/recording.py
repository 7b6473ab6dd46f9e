# SPDX-FileCopyrightText: 2023 Rose Davidson <rose@metaclassical.com>
#
# SPDX-License-Identifier: GPL-3.0-or-later
from __future__ import annotations

import collections.abc
import pathlib
import typing
from contextlib import aclosing

import msgspec
import trio
from trio.lowlevel import checkpoint

from .keystreams import KeystrokeOutcome, Section
from .types import Keystroke

if typing.TYPE_CHECKING:
    from .textinput import TextInput

trace_decoder = msgspec.json.Decoder(list[Keystroke])


class Recorder(Section):
    def __init__(self):
        self.keystrokes: list[Keystroke] = []

    def save(self, path: pathlib.Path):
        save_trace(path, self.keystrokes)

    async def pump(self, source: trio.MemoryReceiveChannel[Keystroke], sink: trio.MemorySendChannel[Keystroke]):
        async with aclosing(source), aclosing(sink):
            async for keystroke in source:
                self.keystrokes.append(keystroke)
                await sink.send(keystroke)


def save_trace(path: pathlib.Path, keystrokes: collections.abc.Sequence[Keystroke]):
    path.write_bytes(msgspec.json.encode(list(keystrokes)))


def load_trace(path: pathlib.Path) -> list[Keystroke]:
    return trace_decoder.decode(path.read_bytes())


def trace_from_text(typed: str, start: int = 0, interval: int = 100) -> list[Keystroke]:
    "Make a trace for typing the given string at a steady pace. Backspaces may be written as '\\b'."
    return [Keystroke.typed(c, start + i * interval) for i, c in enumerate(typed)]


async def replay(keystrokes: collections.abc.Iterable[Keystroke]) -> collections.abc.AsyncIterator[Keystroke]:
    for keystroke in keystrokes:
        await checkpoint()
        yield keystroke


def replay_into(text_input: TextInput, keystrokes: collections.abc.Iterable[Keystroke]) -> list[KeystrokeOutcome]:
    outcomes = []
    for keystroke in keystrokes:
        if text_input.completed:
            break
        feedback = text_input.step(keystroke.code_point, keystroke.time_stamp)
        outcomes.append(KeystrokeOutcome(keystroke=keystroke, feedback=feedback, position=text_input.position))
    return outcomes
