# SPDX-FileCopyrightText: 2023 Rose Davidson <rose@metaclassical.com>
#
# SPDX-License-Identifier: GPL-3.0-or-later
from __future__ import annotations

import abc
from contextlib import aclosing, asynccontextmanager
from typing import TYPE_CHECKING, Any, AsyncIterable

import msgspec
import trio

from .normalize import BACKSPACE, is_printable, is_whitespace
from .types import Feedback, Keystroke

if TYPE_CHECKING:
    from .textinput import TextInput


class KeystrokeOutcome(msgspec.Struct, frozen=True):
    keystroke: Keystroke
    feedback: Feedback
    position: int


class Section(abc.ABC):
    @abc.abstractmethod
    async def pump(self, source: trio.MemoryReceiveChannel[Any], sink: trio.MemorySendChannel[Any]): ...


# stage 1: drop anything which is not a character we could possibly be asked to type
class DropControls(Section):
    async def pump(self, source: trio.MemoryReceiveChannel[Keystroke], sink: trio.MemorySendChannel[Keystroke]):
        async with aclosing(source), aclosing(sink):
            async for keystroke in source:
                code_point = keystroke.code_point
                if code_point == BACKSPACE or is_whitespace(code_point) or is_printable(code_point):
                    await sink.send(keystroke)


# stage 2: feed keystrokes into the text input; once the text is complete, the rest are swallowed
class FeedTextInput(Section):
    def __init__(self, text_input: TextInput):
        self.text_input = text_input

    async def pump(self, source: trio.MemoryReceiveChannel[Keystroke], sink: trio.MemorySendChannel[KeystrokeOutcome]):
        async with aclosing(source), aclosing(sink):
            async for keystroke in source:
                if self.text_input.completed:
                    continue
                feedback = self.text_input.step(keystroke.code_point, keystroke.time_stamp)
                await sink.send(KeystrokeOutcome(keystroke=keystroke, feedback=feedback, position=self.text_input.position))


@asynccontextmanager
async def pump_all(first_source: AsyncIterable[Any], *sections: Section):
    async with trio.open_nursery() as nursery:
        section_input = first_source
        for section in sections:
            section_send_channel, section_receive_channel = trio.open_memory_channel(0)
            nursery.start_soon(section.pump, section_input, section_send_channel)
            section_input = section_receive_channel
        yield section_input
        nursery.cancel_scope.cancel()


@asynccontextmanager
async def make_typing_stream(keystrokes: AsyncIterable[Keystroke], text_input: TextInput, *extra_sections: Section):
    sections = [DropControls(), *extra_sections, FeedTextInput(text_input)]
    async with pump_all(keystrokes, *sections) as outcomes:
        yield outcomes
