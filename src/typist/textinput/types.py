# SPDX-FileCopyrightText: 2023 Rose Davidson <rose@metaclassical.com>
#
# SPDX-License-Identifier: GPL-3.0-or-later
import enum

import attr
import msgspec


class Feedback(enum.Enum):
    SUCCEEDED = enum.auto()
    RECOVERED = enum.auto()
    FAILED = enum.auto()


class CharAttrs(enum.Enum):
    NORMAL = enum.auto()
    HIT = enum.auto()
    MISS = enum.auto()
    GARBAGE = enum.auto()
    CURSOR = enum.auto()


@attr.frozen(kw_only=True)
class TextInputSettings:
    stop_on_error: bool = attr.field(default=False)
    forgive_errors: bool = attr.field(default=False)
    space_skips_words: bool = attr.field(default=False)


class Keystroke(msgspec.Struct, frozen=True):
    code_point: int
    time_stamp: int

    @classmethod
    def typed(cls, character: str, time_stamp: int):
        return cls(code_point=ord(character), time_stamp=time_stamp)


class Step(msgspec.Struct, frozen=True):
    code_point: int
    time_stamp: int
    typo: bool = False

    @property
    def character(self):
        return chr(self.code_point)


class Char(msgspec.Struct, frozen=True):
    code_point: int
    attrs: CharAttrs

    @property
    def character(self):
        return chr(self.code_point)


class Sample(msgspec.Struct, frozen=True):
    code_point: int
    hit_count: int
    miss_count: int
    time_to_type: int

    @property
    def character(self):
        return chr(self.code_point)
