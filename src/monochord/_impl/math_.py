from __future__ import annotations

from typing import Any, Self
from abc import abstractmethod

from .utils.cls import classProp, ClassPropMeta

__all__ = ["AbelianElement"]


class AbelianElement(metaclass=ClassPropMeta):
    """
    Represents an element of an **abelian group**, aka. commutative group in terms of the "add"
    operator.
    """

    __slots__ = ()

    @classProp
    @abstractmethod
    def ZERO(cls) -> Self:
        """Identity element of the group."""
        raise NotImplementedError

    @abstractmethod
    def __add__(self, other: Self) -> Self:
        """
        `self + other`, which is the fundamental operation of an abelian group.
        """
        raise NotImplementedError

    def __pos__(self) -> Self:
        return self

    @abstractmethod
    def __neg__(self) -> Self:
        """
        `-self`, which refers to the "inverse" of the current element in group theory.
        """
        raise NotImplementedError

    def __sub__(self, other: Any) -> Self:
        """
        `self - other`, equivalent to `self + (-other)`.
        """
        if not isinstance(other, AbelianElement):
            return NotImplemented
        return self + (-other)

    @abstractmethod
    def __mul__(self, other: Any) -> Self:
        """
        `self * other`, scaling by a number. For integer `other` this must agree with adding
        `self` to itself `other` times.
        """
        raise NotImplementedError

    def __radd__(self, other: Any) -> Self:
        return self.__add__(other)

    def __rmul__(self, other: Any) -> Self:
        return self.__mul__(other)
