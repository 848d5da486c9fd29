"""
Shared helpers for the emitters: type expressions and helper type variables.

Helper type variables never use a single letter other than the reserved
one, so they cannot collide with a position type parameter:

    NT          the value appended by chain-extension
    RT          the result of ``fold``
    T           the element type of the list projection (the reserved letter)
    KT, VT      key and value types of the map projection
    A1, B1, ... the element types of a second tuple (``flat_map``, ``zip_with``)
"""

from typing import Iterable, List, Sequence

from tuplegen.model import ArityModel, FamilyModel
from tuplegen.naming import RESERVED_LETTER

NEXT_TYPE = "NT"
RESULT_TYPE = "RT"
ELEMENT_TYPE = RESERVED_LETTER.upper()
KEY_TYPE = "KT"
VALUE_TYPE = "VT"

RUNTIME_NAMES = ("TupleMarker", "TupleN", "TupleOverflowWarning", "ValueIdentity")


def other_params(member: ArityModel) -> List[str]:
    """Type parameters of a second, independently typed tuple of the same arity."""
    return [f"{p}1" for p in member.type_params]


def generic(name: str, params: Sequence[str]) -> str:
    """``Tuple2[A, B]``, or the bare name when there are no parameters."""
    if not params:
        return name
    return f"{name}[{', '.join(params)}]"


def callable_of(params: Sequence[str], result: str) -> str:
    return f"Callable[[{', '.join(params)}], {result}]"


def tuple_expr(items: Sequence[str]) -> str:
    """A native tuple expression, with the trailing comma a 1-tuple needs."""
    if len(items) == 1:
        return f"({items[0]},)"
    return f"({', '.join(items)})"


def fields(member: ArityModel) -> List[str]:
    """Slot names backing each position, e.g. ``_a``."""
    return [f"_{label}" for label in member.labels]


def attrs(owner: str, names: Iterable[str]) -> List[str]:
    return [f"{owner}.{name}" for name in names]


def type_var_names(family: FamilyModel) -> List[str]:
    """Every type variable the generated modules declare, in declaration order."""
    terminal = family.get(family.max_arity)
    positions = list(terminal.type_params)
    return positions + other_params(terminal) + [NEXT_TYPE, RESULT_TYPE, ELEMENT_TYPE, KEY_TYPE, VALUE_TYPE]


def implementation_type_vars(family: FamilyModel) -> List[str]:
    """The type variables concrete classes mention. Projection types stay on the contracts."""
    projections = {ELEMENT_TYPE, KEY_TYPE, VALUE_TYPE}
    return [name for name in type_var_names(family) if name not in projections]
