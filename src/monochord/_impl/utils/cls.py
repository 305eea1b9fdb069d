from __future__ import annotations

from abc import ABCMeta
from typing import Any, Callable
from functools import partial
from threading import RLock

__all__ = [
    "ClassPropMeta",
    "classProp",
    "cachedGetter",
]

_DUMMY = object()
_LOCK = RLock()

type FGet[T, P] = Callable[[T], P]


class ClassPropMeta(ABCMeta):
    """
    Metaclass for classes carrying class properties. Assigning to or deleting a class
    property through the class is routed to the descriptor, which refuses it.
    """

    def __setattr__(cls, name: str, value: Any):
        if isinstance(vars(cls).get(name), classProp):
            raise AttributeError(f"Cannot set class property {name!r}.")
        super().__setattr__(name, value)

    def __delattr__(cls, name: str):
        if isinstance(vars(cls).get(name), classProp):
            raise AttributeError(f"Cannot delete class property {name!r}.")
        super().__delattr__(name)


class classProp[T, P](property):
    """
    A read-only class-level property, accessible from both the class and its instances.

    Chaining `@classmethod` and `@property` used to achieve the same, but that has been
    [deprecated since Python 3.11 and removed in 3.13](https://docs.python.org/3.13/library/functions.html#classmethod).
    The owner class must use `ClassPropMeta` (or a subtype) as metaclass.
    """

    def __get__(self, instance: T | None, owner: type[T] = None) -> P:
        if owner is None:
            owner = instance.__class__
        return self.fget(owner)

    def __set_name__(self, owner: type[T], name: str):
        if not isinstance(owner, ClassPropMeta):
            raise TypeError(
                f"Class {owner.__name__} must use {ClassPropMeta.__name__} (or its subtype) as "
                "metaclass to have class properties."
            )


def _cachedGetter[T, P](fget: FGet[T, P], *, key: str = None) -> FGet[T, P]:
    if key is None:
        fname = fget.__name__
        if fname.startswith("__") and fname.endswith("__"):
            # "dunder" method
            key = f"_{fname[2:-2]}"
        else:
            key = f"_{fname}"

    def wrapper(self: T) -> P:
        with _LOCK:
            if (value := getattr(self, key, _DUMMY)) is _DUMMY:
                value = fget(self)
                setattr(self, key, value)
            return value

    wrapper.__name__ = fget.__name__
    wrapper.__doc__ = fget.__doc__
    return wrapper


def cachedGetter(arg1=None, /, *, key: str | None = None):
    """
    Caches the result of a getter function in a private attribute named after the getter
    with a leading underscore (`__hash__` is stored in `_hash`), or in `key` when given.
    The attribute must be listed in `__slots__` of a slotted class.
    """
    if isinstance(arg1, str):
        key, arg1 = arg1, None
    if arg1 is None:
        return partial(_cachedGetter, key=key)
    return _cachedGetter(arg1, key=key)
