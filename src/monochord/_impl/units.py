"""
Units of pitch and interval. Both are single precision, which is enough for a pitch table
and matches what audio back ends consume.
"""

from __future__ import annotations

from typing import Any, Self
from collections.abc import Callable
from numbers import Real
from functools import total_ordering

import numpy as np

from .math_ import AbelianElement
from .utils.cls import classProp, cachedGetter

__all__ = ["Hz", "Cents", "A440"]

_CENTS_PER_OCTAVE = np.float32(1200.0)


def _resolveFloat(value: Any, unit: str) -> np.float32:
    if not isinstance(value, Real):
        raise TypeError(f"Expected a real number as {unit}, got {value!r}.")
    return np.float32(value)


@total_ordering
class Hz:
    """
    Hertz is the standard unit of frequency, and thus the unit of concrete pitches.

    Adding `Cents` to `Hz` transposes the frequency, so `Hz(440.0) + Cents(702.0)` is about
    `Hz(660.0)`. Dividing two frequencies gives the interval between them in cents.
    """

    __slots__ = ("_value", "_hash")

    def __new__(cls, value: Real | Self = 0.0) -> Self:
        if isinstance(value, cls):
            return value
        return cls._newImpl(_resolveFloat(value, "frequency"))

    @classmethod
    def _newImpl(cls, value: np.float32) -> Self:
        self = super().__new__(cls)
        self._value = np.float32(value)
        return self

    @property
    def value(self) -> np.float32:
        return self._value

    def __float__(self) -> float:
        return float(self._value)

    def __round__(self, ndigits: int | None = None) -> float:
        return round(float(self._value), ndigits)

    def __add__(self, other: Any) -> Self:
        if not isinstance(other, Cents):
            return NotImplemented
        return self._newImpl(self._value * other.toRatio())

    def __radd__(self, other: Any) -> Self:
        return self.__add__(other)

    def __sub__(self, other: Any) -> Self:
        if not isinstance(other, Cents):
            return NotImplemented
        return self + (-other)

    def __mul__(self, other: Any) -> Self:
        if not isinstance(other, Real):
            return NotImplemented
        return self._newImpl(self._value * np.float32(other))

    def __rmul__(self, other: Any) -> Self:
        return self.__mul__(other)

    def __truediv__(self, other: Any) -> Cents:
        """`Hz(b) / Hz(a)` is equivalent to `Cents.fromRatio(b / a)`."""
        if not isinstance(other, Hz):
            return NotImplemented
        return Cents.fromRatio(self._value / other._value)

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, Hz):
            return NotImplemented
        return bool(self._value == other._value)

    def __lt__(self, other: Any) -> bool:
        if not isinstance(other, Hz):
            return NotImplemented
        return bool(self._value < other._value)

    @cachedGetter
    def __hash__(self):
        return hash((self.__class__, float(self._value)))

    def __reduce__(self) -> tuple[Callable[..., Self], tuple[Any, ...]]:
        return (self._newImpl, (float(self._value),))

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({float(self._value)!r})"


@total_ordering
class Cents(AbelianElement):
    """
    Cent is the standard unit of musical interval.

    A 12 EDO semitone is 100 cents large while an octave is 1200 cents large. Converting
    between cents and a frequency ratio follows `cents = 1200 * log2(ratio)`.
    """

    __slots__ = ("_value", "_hash")

    def __new__(cls, value: Real | Self = 0.0) -> Self:
        if isinstance(value, cls):
            return value
        return cls._newImpl(_resolveFloat(value, "cents"))

    @classmethod
    def _newImpl(cls, value: np.float32) -> Self:
        self = super().__new__(cls)
        self._value = np.float32(value)
        return self

    @classProp
    def ZERO(cls) -> Self:
        return cls._newImpl(0.0)

    @classmethod
    def fromRatio(cls, ratio: Real) -> Self:
        """
        Creates an interval from a linear frequency ratio, e.g. `2` for an octave. The
        ratio should be positive.
        """
        ratio = _resolveFloat(ratio, "ratio")
        return cls._newImpl(_CENTS_PER_OCTAVE * np.log2(ratio))

    def toRatio(self) -> np.float32:
        """Linear frequency ratio of the interval."""
        return np.exp2(self._value / _CENTS_PER_OCTAVE)

    @property
    def value(self) -> np.float32:
        return self._value

    def __float__(self) -> float:
        return float(self._value)

    def __round__(self, ndigits: int | None = None) -> float:
        return round(float(self._value), ndigits)

    def __add__(self, other: Any) -> Self:
        if not isinstance(other, Cents):
            return NotImplemented
        return self._newImpl(self._value + other._value)

    def __neg__(self) -> Self:
        return self._newImpl(-self._value)

    def __mul__(self, other: Any) -> Self:
        if not isinstance(other, Real):
            return NotImplemented
        return self._newImpl(self._value * np.float32(other))

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, Cents):
            return NotImplemented
        return bool(self._value == other._value)

    def __lt__(self, other: Any) -> bool:
        if not isinstance(other, Cents):
            return NotImplemented
        return bool(self._value < other._value)

    @cachedGetter
    def __hash__(self):
        return hash((self.__class__, float(self._value)))

    def __reduce__(self) -> tuple[Callable[..., Self], tuple[Any, ...]]:
        return (self._newImpl, (float(self._value),))

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({float(self._value)!r})"


A440 = Hz(440.0)
"""Concert pitch A4, the default reference pitch of every tuning."""
