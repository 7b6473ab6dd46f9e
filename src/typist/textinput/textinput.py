# SPDX-FileCopyrightText: 2023 Rose Davidson <rose@metaclassical.com>
#
# SPDX-License-Identifier: GPL-3.0-or-later
from __future__ import annotations

import collections.abc
import functools
import logging
import typing

from .normalize import BACKSPACE, SPACE, is_whitespace, normalize, normalize_whitespace
from .types import Char, CharAttrs, Feedback, Step, TextInputSettings

logger = logging.getLogger(__name__)

StepListener = collections.abc.Callable[[Step], None]

# How many correctly typed characters must follow a mistake before we believe we know what the mistake was.
RECOVER_BUFFER_LENGTH = 3
# Only the most recent mistyped characters are kept around; anything beyond this is dropped.
GARBAGE_BUFFER_LENGTH = 10


class TextInputCompleted(Exception):
    pass


def _ignore_step(step: Step):
    pass


@functools.lru_cache(maxsize=4096)
def _char(code_point: int, attrs: CharAttrs) -> Char:
    return Char(code_point=code_point, attrs=attrs)


# The user types the target text one keystroke at a time. Anything which matches the character at the
# cursor is committed as a Step; committed steps can never be edited. Anything which doesn't match goes
# into the garbage buffer, where it can be backspaced away, or where it may later turn out to be a
# single replaced or skipped character followed by correct typing.
class TextInput:
    _steps: list[Step]
    _garbage: list[Step]
    _typo: bool

    def __init__(
        self,
        text: str,
        settings: typing.Optional[TextInputSettings] = None,
        on_step: typing.Optional[StepListener] = None,
    ):
        if settings is None:
            settings = TextInputSettings()
        self.text = text
        self.code_points = tuple(ord(c) for c in text)
        self.settings = settings
        self._on_step = on_step if on_step is not None else _ignore_step
        self.reset()

    def reset(self):
        self._steps = []
        self._garbage = []
        self._typo = False

    @property
    def stop_on_error(self):
        return self.settings.stop_on_error

    @property
    def forgive_errors(self):
        return self.settings.forgive_errors

    @property
    def space_skips_words(self):
        return self.settings.space_skips_words

    @property
    def steps(self) -> tuple[Step, ...]:
        return tuple(self._steps)

    @property
    def garbage(self) -> tuple[Step, ...]:
        return tuple(self._garbage)

    @property
    def typo(self) -> bool:
        return self._typo

    @property
    def position(self) -> int:
        return len(self._steps)

    @property
    def remaining(self) -> int:
        return len(self.code_points) - len(self._steps)

    @property
    def completed(self) -> bool:
        return len(self._steps) == len(self.code_points)

    def _expected(self, offset: int = 0) -> int:
        return self.code_points[len(self._steps) + offset]

    def step(self, code_point: int, time_stamp: int) -> Feedback:
        if self.completed:
            raise TextInputCompleted("Cannot enter any more characters; the text is already complete.")

        code_point = normalize_whitespace(code_point)

        # Spaces typed before the very first character are ignored.
        if not self._steps and not self._garbage and not self._typo and code_point == SPACE:
            return Feedback.SUCCEEDED

        if code_point == BACKSPACE:
            if self._garbage:
                self._garbage.pop()
                return Feedback.SUCCEEDED
            return Feedback.FAILED

        if code_point == SPACE and not is_whitespace(self._expected()):
            at_word_start = not self._steps or is_whitespace(self.code_points[len(self._steps) - 1])
            if not self._garbage and at_word_start:
                return Feedback.SUCCEEDED
            if self.space_skips_words:
                self._skip_word(time_stamp)
                return Feedback.RECOVERED

        if normalize(self._expected()) == code_point and (self.forgive_errors or not self._garbage):
            typo = self._typo
            self._add_step(Step(code_point=code_point, time_stamp=time_stamp, typo=typo))
            self._garbage = []
            self._typo = False
            return Feedback.RECOVERED if typo else Feedback.SUCCEEDED

        self._typo = True
        if not self.stop_on_error or self.forgive_errors:
            if len(self._garbage) < GARBAGE_BUFFER_LENGTH:
                self._garbage.append(Step(code_point=code_point, time_stamp=time_stamp))
        if self.forgive_errors and (self._recover_replaced_character() or self._recover_skipped_character()):
            return Feedback.RECOVERED
        return Feedback.FAILED

    def get_chars(self) -> list[Char]:
        chars = []
        cursor = len(self._steps)
        for i, code_point in enumerate(self.code_points):
            if i < cursor:
                chars.append(_char(code_point, CharAttrs.MISS if self._steps[i].typo else CharAttrs.HIT))
            elif i == cursor:
                if not self.stop_on_error:
                    chars.extend(_char(g.code_point, CharAttrs.GARBAGE) for g in self._garbage)
                chars.append(_char(code_point, CharAttrs.CURSOR))
            else:
                chars.append(_char(code_point, CharAttrs.NORMAL))
        return chars

    def _add_step(self, step: Step):
        self._steps.append(step)
        self._on_step(step)

    def _skip_word(self, time_stamp: int):
        start = len(self._steps)
        self._add_step(Step(code_point=self._expected(), time_stamp=time_stamp, typo=True))
        while not self.completed and not is_whitespace(self._expected()):
            self._add_step(Step(code_point=self._expected(), time_stamp=time_stamp, typo=True))
        # land on the first character of the next word
        if not self.completed and is_whitespace(self._expected()):
            self._add_step(Step(code_point=self._expected(), time_stamp=time_stamp, typo=False))
        logger.debug("Skipped word from %d to %d", start, len(self._steps))
        self._garbage = []
        self._typo = False

    def _can_look_ahead(self, needed_garbage: int) -> bool:
        return len(self._garbage) >= needed_garbage and len(self._steps) + RECOVER_BUFFER_LENGTH + 1 <= len(self.code_points)

    def _recover_replaced_character(self) -> bool:
        # text:    abcd
        # garbage: xbcd
        if not self._can_look_ahead(RECOVER_BUFFER_LENGTH + 1):
            return False
        for i in range(RECOVER_BUFFER_LENGTH):
            if self._expected(i + 1) != self._garbage[i + 1].code_point:
                return False
        self._commit_recovered(self._garbage[1:])
        return True

    def _recover_skipped_character(self) -> bool:
        # text:    abcd
        # garbage: bcd
        if not self._can_look_ahead(RECOVER_BUFFER_LENGTH):
            return False
        for i in range(RECOVER_BUFFER_LENGTH):
            if self._expected(i + 1) != self._garbage[i].code_point:
                return False
        self._commit_recovered(self._garbage)
        return True

    def _commit_recovered(self, correct: list[Step]):
        # The character at the cursor is the mistake. It takes the time of the first garbage keystroke,
        # even when it was skipped outright and never actually typed.
        logger.debug("Recovered typo at %d from %d buffered keystrokes", len(self._steps), len(self._garbage))
        garbage = self._garbage
        self._add_step(Step(code_point=self._expected(), time_stamp=garbage[0].time_stamp, typo=True))
        for g in correct:
            self._add_step(Step(code_point=g.code_point, time_stamp=g.time_stamp, typo=False))
        self._garbage = []
        self._typo = False
