"""
Hand-written runtime imported by every generated tuple module.

Provides:
    - TupleMarker: slotted base of every tuple, refuses attribute assignment
    - ValueIdentity: contract for structural equality, hashing and repr
    - TupleN: the dynamically typed overflow container
    - TupleOverflowWarning: emitted when a typed tuple degrades into TupleN

IMPORTANT:
    Generated code depends on these names and on their slot layout. Every
    class here declares ``__slots__`` so generated subclasses stay free of
    an instance ``__dict__``.
"""

import warnings
from abc import ABC, abstractmethod
from typing import Any, Iterator, Optional, Tuple


class TupleOverflowWarning(UserWarning):
    """A tuple grew past the largest generated arity and lost its static typing."""


class TupleMarker:
    """
    A marker for all the available tuple implementations.

    Instances are immutable: assigning or deleting any attribute raises
    AttributeError. Subclasses set their slots with ``object.__setattr__``.
    """

    __slots__ = ()

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable, cannot set {name!r}")

    def __delattr__(self, name: str) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable, cannot delete {name!r}")


class ValueIdentity(ABC):
    """
    Represents a class with explicit implementations of ``__eq__``,
    ``__hash__`` and ``__repr__``.

    Two objects honouring this contract are equal when their values are,
    and equal objects hash alike.
    """

    __slots__ = ()

    @abstractmethod
    def __eq__(self, other: object) -> bool: ...

    @abstractmethod
    def __hash__(self) -> int: ...

    @abstractmethod
    def __repr__(self) -> str: ...


class TupleN(TupleMarker, ValueIdentity):
    """
    A tuple that can store any number of values of any type.

    This is where chain-extension ends up once the generated family runs
    out of arities. Nothing about its contents is known statically, so
    values come back out through :meth:`get`, which can check their type.

    Example:
        t = TupleN(1, "two", None)
        t.get(1, str)           # "two"
        t.get_nullable(2)       # None
        t.to(4.0)               # TupleN(1, "two", None, 4.0)
    """

    __slots__ = ("_values",)

    def __init__(self, *values: Any):
        object.__setattr__(self, "_values", tuple(values))

    @property
    def size(self) -> int:
        """How many values are stored in this tuple."""
        return len(self._values)

    @property
    def values(self) -> Tuple[Any, ...]:
        return self._values

    def _check_index(self, index: int) -> None:
        if not 0 <= index < len(self._values):
            raise IndexError(f"index {index} out of range for TupleN of size {len(self._values)}")

    def get_nullable(self, index: int, kind: Optional[type] = None) -> Any:
        """
        Return the value stored under ``index``, which may be None.

        Args:
            index: Position of the value, 0-based
            kind: If given, a non-None value must be an instance of it

        Raises:
            IndexError: if ``index`` is out of range
            TypeError: if the value is not None and not of type ``kind``
        """
        self._check_index(index)
        value = self._values[index]
        if value is not None and kind is not None and not isinstance(value, kind):
            raise TypeError(f"Value stored under index {index} is not of type {kind.__name__}")
        return value

    def get(self, index: int, kind: Optional[type] = None) -> Any:
        """
        Return the value stored under ``index``.

        Raises:
            IndexError: if ``index`` is out of range
            ValueError: if the stored value is None
            TypeError: if ``kind`` is given and the value is not of that type
        """
        value = self.get_nullable(index, kind)
        if value is None:
            raise ValueError(f"Value under index {index} is None")
        return value

    def to(self, that: Any) -> "TupleN":
        """Returns a new TupleN holding the values of this tuple followed by ``that``."""
        warnings.warn(
            "Extending a TupleN creates another TupleN",
            TupleOverflowWarning,
            stacklevel=2,
        )
        return TupleN(*self._values, that)

    def __add__(self, that: Any) -> "TupleN":
        return self.to(that)

    def to_list(self) -> list:
        return list(self._values)

    def __getitem__(self, index: int) -> Any:
        return self._values[index]

    def __len__(self) -> int:
        return len(self._values)

    def __iter__(self) -> Iterator[Any]:
        return iter(self._values)

    def __eq__(self, other: object) -> bool:
        if self is other:
            return True
        if not isinstance(other, TupleN):
            return NotImplemented
        return self._values == other._values

    def __hash__(self) -> int:
        return hash(self._values)

    def __repr__(self) -> str:
        return f"({', '.join(repr(value) for value in self._values)})"

    def __reduce__(self):
        return (TupleN, self._values)
