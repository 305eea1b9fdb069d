from __future__ import annotations

from abc import ABCMeta, abstractmethod
from collections.abc import Callable, Iterable, Iterator, Sequence
from functools import lru_cache
from numbers import Integral, Real
from typing import Any, Self
import itertools as it
import operator as op
import warnings

import numpy as np
import pyrsistent as pyr

from .units import Hz, Cents, A440
from .utils.number import tdivmod

__all__ = [
    "MIDI_NOTES",
    "DEFAULT_REF_KEY",
    "Tuning",
    "Edo",
    "EqualSteps",
    "CyclicTuning",
    "MidiTuning",
]

MIDI_NOTES = 127
"""Number of MIDI notes held by a `MidiTuning`, covering notes 0 to 126."""

DEFAULT_REF_KEY = 69
"""MIDI note number of A4."""


def _resolveStep(step: Any) -> int:
    if isinstance(step, bool) or not isinstance(step, Integral):
        raise TypeError(f"Step should be an integer, got {step!r}.")
    return int(step)


def _resolveReference(reference: Hz | Real) -> Hz:
    reference = Hz(reference)
    if not reference.value > 0:
        warnings.warn(f"Reference pitch should be positive, got {reference!r}.")
    return reference


class Tuning(metaclass=ABCMeta):
    """
    A tuning system, mapping integer steps to frequencies. A step is an index into the
    scale of the tuning, not necessarily a semitone.

    Every tuning satisfies `tuning.pitch(0) == tuning.referencePitch`.
    """

    __slots__ = ()

    @property
    @abstractmethod
    def referencePitch(self) -> Hz:
        """Frequency of step 0."""
        raise NotImplementedError

    @abstractmethod
    def pitch(self, step: Integral) -> Hz | None:
        """
        Returns the frequency of a step, or `None` if the tuning cannot represent the step.
        """
        raise NotImplementedError

    def interval(self, fromStep: Integral, toStep: Integral) -> Cents | None:
        """
        Returns the interval from one step to another, or `None` if either of the steps is
        not available in the tuning.
        """
        start, stop = self.pitch(fromStep), self.pitch(toStep)
        if start is None or stop is None:
            return None
        return stop / start


class Edo(Tuning):
    """
    **Equal division of the octave** into `cardinality` steps.

    `cardinality` should be positive. A zero cardinality is not rejected but gives an
    infinite step size, and every pitch of the tuning comes out infinite or NaN.
    """

    __slots__ = ("_cardinality", "_stepSize", "_reference")

    def __new__(cls, cardinality: Integral, reference: Hz | Real = A440) -> Self:
        if isinstance(cardinality, bool) or not isinstance(cardinality, Integral):
            raise TypeError(f"Cardinality should be an integer, got {cardinality!r}.")
        cardinality = int(cardinality)
        if cardinality <= 0:
            warnings.warn(f"Cardinality should be positive, got {cardinality}.")
        self = super().__new__(cls)
        self._cardinality = cardinality
        with np.errstate(divide="ignore"):
            self._stepSize = Cents(np.float32(1200.0) / np.float32(cardinality))
        self._reference = _resolveReference(reference)
        return self

    @property
    def cardinality(self) -> int:
        """Number of equal divisions of the octave."""
        return self._cardinality

    @property
    def stepSize(self) -> Cents:
        return self._stepSize

    @property
    def referencePitch(self) -> Hz:
        return self._reference

    def pitch(self, step: Integral) -> Hz:
        return self._reference + self._stepSize * _resolveStep(step)

    def interval(self, fromStep: Integral, toStep: Integral) -> Cents:
        return self._stepSize * (_resolveStep(toStep) - _resolveStep(fromStep))

    def __reduce__(self) -> tuple[Callable[..., Self], tuple[Any, ...]]:
        return (self.__class__, (self._cardinality, self._reference))

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self._cardinality}, {self._reference!r})"


class EqualSteps(Tuning):
    """
    Tuning with equal steps of an arbitrary size. Unlike `Edo`, the steps don't have to
    divide the octave, e.g. `EqualSteps(Cents.fromRatio(3) * (1 / 13))` is the Bohlen-Pierce
    scale.
    """

    __slots__ = ("_stepSize", "_reference")

    def __new__(cls, stepSize: Cents | Real, reference: Hz | Real = A440) -> Self:
        self = super().__new__(cls)
        self._stepSize = Cents(stepSize)
        self._reference = _resolveReference(reference)
        return self

    @property
    def stepSize(self) -> Cents:
        return self._stepSize

    @property
    def referencePitch(self) -> Hz:
        return self._reference

    def pitch(self, step: Integral) -> Hz:
        return self._reference + self._stepSize * _resolveStep(step)

    def __reduce__(self) -> tuple[Callable[..., Self], tuple[Any, ...]]:
        return (self.__class__, (self._stepSize, self._reference))

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self._stepSize!r}, {self._reference!r})"


class CyclicTuning(Tuning):
    """
    A tuning made of a cycle of unequal steps that repeats indefinitely, transposed by the
    period on each repetition.

    `steps` lists the offsets of the steps measured from the start of the cycle. The
    implicit zero at the start is omitted and the last entry is the period. For example,
    `CyclicTuning.fromRatios([3 / 2, 2])` has a perfect fifth above the reference and
    repeats at the octave: step 3 is a twelfth above the reference and step -1 is a fourth
    below it.

    An empty cycle maps every step to the reference pitch.
    """

    __slots__ = ("_steps", "_reference")

    def __new__(
        cls, steps: Iterable[Cents | Real] = (), reference: Hz | Real = A440
    ) -> Self:
        self = super().__new__(cls)
        self._steps = pyr.pvector(map(Cents, steps))
        self._reference = _resolveReference(reference)
        return self

    @classmethod
    def fromRatios(cls, ratios: Iterable[Real], reference: Hz | Real = A440) -> Self:
        """
        Creates a cyclic tuning from the frequency ratios of the steps relative to the
        start of the cycle, e.g. `[9 / 8, 5 / 4, 4 / 3, 3 / 2, 5 / 3, 15 / 8, 2]` for a just
        major scale.
        """
        return cls(map(Cents.fromRatio, ratios), reference)

    @property
    def steps(self) -> Sequence[Cents]:
        return self._steps

    @property
    def period(self) -> Cents:
        """The interval by which the cycle repeats."""
        if not self._steps:
            return Cents.ZERO
        return self._steps[-1]

    @property
    def referencePitch(self) -> Hz:
        return self._reference

    def __len__(self) -> int:
        return len(self._steps)

    def pitch(self, step: Integral) -> Hz:
        step = _resolveStep(step)
        n = len(self._steps)
        if n == 0:
            return self._reference
        cycle, rem = tdivmod(step, n)
        period = self._steps[-1]
        if rem == 0:
            return self._reference + period * cycle
        if rem > 0:
            offset = self._steps[rem - 1]
        else:
            # a negative remainder counts back from the start of the cycle, which is one
            # period below the start of the next one
            offset = self._steps[n + rem - 1] - period
        return self._reference + (period * cycle + offset)

    def __reduce__(self) -> tuple[Callable[..., Self], tuple[Any, ...]]:
        return (self.__class__, (tuple(self._steps), self._reference))

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({list(self._steps)!r}, {self._reference!r})"


@lru_cache(maxsize=1)
def _defaultPitches() -> np.ndarray:
    return MidiTuning.fromTuning(Edo(12, A440), DEFAULT_REF_KEY).pitches


def _frozen(pitches: np.ndarray) -> np.ndarray:
    pitches.flags.writeable = False
    return pitches


class MidiTuning(Tuning):
    """
    A map from MIDI notes to pitches, holding a frequency for each of the notes 0 to 126.

    This is what a synthesizer should actually use: any other tuning can be flattened into
    a `MidiTuning` with `MidiTuning.fromTuning()`, after which looking up a note is a plain
    array access.

    `MidiTuning()` is 12 EDO with A440 at note 69.
    """

    __slots__ = ("_pitches",)

    def __new__(cls) -> Self:
        return cls._newImpl(_defaultPitches())

    @classmethod
    def _newImpl(cls, pitches: np.ndarray) -> Self:
        self = super().__new__(cls)
        self._pitches = pitches
        return self

    @classmethod
    def fromTuning(
        cls, tuning: Tuning, refKey: Integral = DEFAULT_REF_KEY
    ) -> Self | None:
        """
        Maps the steps of `tuning` linearly to MIDI notes, with step 0 at MIDI note
        `refKey`. Returns `None` if `tuning` lacks a pitch for any of the notes.
        """
        refKey = op.index(refKey)
        if not 0 <= refKey < MIDI_NOTES:
            raise ValueError(
                f"Reference key should be in the range [0, {MIDI_NOTES}), got {refKey}."
            )
        pitches = np.empty(MIDI_NOTES, dtype=np.float32)
        for note in range(MIDI_NOTES):
            if (hz := tuning.pitch(note - refKey)) is None:
                return None
            pitches[note] = hz.value
        return cls._newImpl(_frozen(pitches))

    @classmethod
    def fromPitches(cls, pitches: Iterable[Hz | Real]) -> Self | None:
        """
        Creates a `MidiTuning` from the first 127 of the given pitches. Returns `None` if
        fewer than 127 pitches are given.
        """
        pitches = [Hz(p).value for p in it.islice(pitches, MIDI_NOTES + 1)]
        if len(pitches) < MIDI_NOTES:
            return None
        if len(pitches) > MIDI_NOTES:
            warnings.warn(
                f"Only the first {MIDI_NOTES} pitches are used. The rest are ignored."
            )
            del pitches[MIDI_NOTES:]
        return cls._newImpl(_frozen(np.array(pitches, dtype=np.float32)))

    @property
    def pitches(self) -> np.ndarray:
        """The frequencies of all notes as a read-only `float32` array."""
        return self._pitches

    @property
    def referencePitch(self) -> Hz:
        return Hz(self._pitches[0])

    def pitch(self, step: Integral) -> Hz | None:
        step = _resolveStep(step)
        if 0 <= step < MIDI_NOTES:
            return Hz(self._pitches[step])
        return None

    def __getitem__(self, note: int) -> Hz:
        """
        Frequency of a MIDI note. Unlike `pitch()`, a note outside 0 to 126 raises
        `IndexError` instead of returning `None`.
        """
        note = op.index(note)
        if note < 0:
            raise IndexError(f"MIDI note should not be negative, got {note}.")
        return Hz(self._pitches[note])

    def __len__(self) -> int:
        return MIDI_NOTES

    def __iter__(self) -> Iterator[Hz]:
        return map(Hz, self._pitches)

    def __reduce__(self) -> tuple[Callable[..., Self], tuple[Any, ...]]:
        return (self.__class__.fromPitches, (self._pitches.tolist(),))

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} {self[0]!r} .. {self[MIDI_NOTES - 1]!r}>"
