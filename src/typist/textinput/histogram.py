# SPDX-FileCopyrightText: 2023 Rose Davidson <rose@metaclassical.com>
#
# SPDX-License-Identifier: GPL-3.0-or-later
from __future__ import annotations

import collections.abc
import typing

import attr

from ..util import round_half_up
from .types import Sample, Step


@attr.define(kw_only=True)
class _Tally:
    hit_count: int = 0
    miss_count: int = 0
    total_time: int = 0

    @property
    def timed_count(self):
        return self.hit_count - self.miss_count

    def sample(self, code_point: int):
        time_to_type = round_half_up(self.total_time / self.timed_count) if self.timed_count else 0
        return Sample(
            code_point=code_point,
            hit_count=self.hit_count,
            miss_count=self.miss_count,
            time_to_type=time_to_type,
        )


class Histogram:
    """Per-character statistics: how often each character was typed, how often it was a typo, and how long
    it took on average to type when it wasn't.

    Samples are kept sorted by code point, so iteration order is deterministic.
    """

    EMPTY: typing.ClassVar[Histogram]

    def __init__(self, samples: collections.abc.Iterable[Sample]):
        self._data: dict[int, Sample] = {}
        for sample in sorted(samples, key=lambda s: s.code_point):
            if sample.code_point in self._data:
                raise ValueError(f"Duplicate sample for code point {sample.code_point}")
            self._data[sample.code_point] = sample

    def __iter__(self) -> collections.abc.Iterator[Sample]:
        return iter(self._data.values())

    def __len__(self):
        return len(self._data)

    def __contains__(self, code_point: int):
        return code_point in self._data

    def __repr__(self):
        return f"Histogram({list(self._data.values())!r})"

    @property
    def complexity(self) -> int:
        return len(self._data)

    def has(self, code_point: int) -> bool:
        return code_point in self._data

    def get(self, code_point: int) -> typing.Optional[Sample]:
        return self._data.get(code_point)

    @classmethod
    def from_steps(cls, steps: collections.abc.Iterable[Step], started_at: typing.Optional[int] = None) -> Histogram:
        tallies: dict[int, _Tally] = {}
        last_time_stamp = started_at
        for step in steps:
            tally = tallies.setdefault(step.code_point, _Tally())
            tally.hit_count += 1
            if step.typo:
                tally.miss_count += 1
            elif last_time_stamp is not None:
                tally.total_time += step.time_stamp - last_time_stamp
            last_time_stamp = step.time_stamp
        return cls(tally.sample(code_point) for code_point, tally in tallies.items())

    @classmethod
    def merge(cls, histograms: collections.abc.Iterable[Histogram]) -> Histogram:
        # time_to_type is an average over the non-typo samples, so weight it by how many there were
        tallies: dict[int, _Tally] = {}
        for histogram in histograms:
            for sample in histogram:
                tally = tallies.setdefault(sample.code_point, _Tally())
                tally.hit_count += sample.hit_count
                tally.miss_count += sample.miss_count
                tally.total_time += sample.time_to_type * (sample.hit_count - sample.miss_count)
        return cls(tally.sample(code_point) for code_point, tally in tallies.items())


Histogram.EMPTY = Histogram([])
