# SPDX-FileCopyrightText: 2023 Rose Davidson <rose@metaclassical.com>
#
# SPDX-License-Identifier: GPL-3.0-or-later
from __future__ import annotations

import collections.abc
import datetime
import typing

import msgspec
import timeflake

from ..textinput.histogram import Histogram
from ..textinput.types import Step
from ..util import now

if typing.TYPE_CHECKING:
    from ..textinput.textinput import TextInput

# Called with (total, current) as records are transferred.
ProgressListener = collections.abc.Callable[[int, int], None]


class Result(msgspec.Struct, kw_only=True, frozen=True):
    id: timeflake.Timeflake
    text: str
    started_at: datetime.datetime
    steps: list[Step]

    @property
    def typo_count(self):
        return sum(1 for step in self.steps if step.typo)

    @property
    def length(self):
        return len(self.steps)

    def histogram(self) -> Histogram:
        return Histogram.from_steps(self.steps)

    @classmethod
    def from_text_input(cls, text_input: TextInput, started_at: typing.Optional[datetime.datetime] = None):
        if not text_input.completed:
            raise ValueError("Only completed text inputs can be saved as results.")
        return cls(
            id=timeflake.random(),
            text=text_input.text,
            started_at=now() if started_at is None else started_at,
            steps=list(text_input.steps),
        )


# Load our own data; user_id is None for someone who isn't logged in.
class PrivateRequest(msgspec.Struct, frozen=True, tag="private"):
    user_id: typing.Optional[str] = None


# Load the data of some other, public, user.
class PublicRequest(msgspec.Struct, frozen=True, tag="public"):
    user_id: str


OpenRequest = typing.Union[PrivateRequest, PublicRequest]
