"""
Interop emitter.

Adds the arity-specific conversions:
    - arity 2 and 3: ``to_pair`` / ``to_triple`` plus the ``~`` alias on the
      contract, and ``from_pair`` / ``from_triple`` in the implementations file
    - every proper arity: ``to_list`` for homogeneous tuples
    - even arities: ``to_map`` for tuples alternating two types

Homogeneity is expressed by annotating ``self`` (``self: Tuple3[T, T, T]``),
so it is checked where the generated code is called, not here. An arity that
lacks a capability simply gets no member for it.
"""

from typing import List

from tuplegen.codemodel import ClassDef, Function, Parameter, imports_from
from tuplegen.model import ArityModel, Capability, FamilyModel

from .common import ELEMENT_TYPE, KEY_TYPE, VALUE_TYPE, attrs, generic, tuple_expr

# capability -> (native name, projection method, converter function)
NATIVE = {
    Capability.PAIR_INTEROP: ("pair", "to_pair", "from_pair"),
    Capability.TRIPLE_INTEROP: ("triple", "to_triple", "from_triple"),
}


def _native_capability(member: ArityModel):
    for capability in NATIVE:
        if member.has(capability):
            return capability
    return None


def emit_to_list(member: ArityModel) -> Function:
    if member.is_null:
        return Function(
            name="to_list",
            parameters=[Parameter("self")],
            returns="list[Any]",
            docstring="Returns a new, empty list.",
            body=["return []"],
            imports=imports_from("typing", "Any"),
        )
    this = generic(member.interface_name, [ELEMENT_TYPE] * member.arity)
    return Function(
        name="to_list",
        parameters=[Parameter("self", this)],
        returns=f"list[{ELEMENT_TYPE}]",
        docstring="Returns a new list containing all the values of this tuple, in order.",
        body=[f"return [{', '.join(attrs('self', member.labels))}]"],
    )


def emit_to_map(member: ArityModel) -> Function:
    """
    Pair odd positions (keys) with even positions (values).

    The generated body is a dict display, so a repeated key keeps the value
    of its last pair and keys keep their first-seen order.
    """
    alternating = [KEY_TYPE if i % 2 == 0 else VALUE_TYPE for i in range(member.arity)]
    values = attrs("self", member.labels)
    entries = ", ".join(f"{key}: {value}" for key, value in zip(values[0::2], values[1::2]))
    return Function(
        name="to_map",
        parameters=[Parameter("self", generic(member.interface_name, alternating))],
        returns=f"dict[{KEY_TYPE}, {VALUE_TYPE}]",
        docstring=(
            "Returns a new dict containing the values of this tuple.\n"
            "\n"
            "The entries are created by pairing the value at each odd position (first, third, ...)\n"
            "with the value right after it. Later pairs win over earlier ones with an equal key."
        ),
        body=[f"return {{{entries}}}"],
    )


def emit_to_native(member: ArityModel) -> List[Function]:
    native, method, _ = NATIVE[_native_capability(member)]
    native_type = f"tuple[{', '.join(member.type_params)}]"
    return [
        Function(
            name=method,
            parameters=[Parameter("self")],
            returns=native_type,
            docstring=f"Returns a new native {native} based on the values of this tuple.",
            body=[f"return {tuple_expr(attrs('self', member.labels))}"],
        ),
        Function(
            name="__invert__",
            parameters=[Parameter("self")],
            returns=native_type,
            docstring=f"Returns a new native {native} based on the values of this tuple.",
            body=[f"return self.{method}()"],
        ),
    ]


def add_interface_interop(cls: ClassDef, member: ArityModel) -> ClassDef:
    """Add the projections and native conversions ``member`` is capable of to ``cls``."""
    if member.has(Capability.LIST_PROJECTION):
        cls.add(emit_to_list(member))
    if member.has(Capability.MAP_PROJECTION):
        cls.add(emit_to_map(member))
    if _native_capability(member) is not None:
        for fn in emit_to_native(member):
            cls.add(fn)
    return cls


def emit_native_converters(family: FamilyModel) -> List[Function]:
    """``from_pair`` / ``from_triple`` for the members carrying native interop."""
    converters = []
    for member in family:
        capability = _native_capability(member)
        if capability is None:
            continue
        native, _, function = NATIVE[capability]
        names = list(member.ordinals)
        converters.append(Function(
            name=function,
            parameters=[Parameter(native, f"tuple[{', '.join(member.type_params)}]")],
            returns=generic(member.interface_name, member.type_params),
            docstring=f"Returns a new {member.class_name} containing the values of the native ``{native}``.",
            body=[
                f"{', '.join(names)} = {native}",
                f"return {member.class_name}({', '.join(names)})",
            ],
        ))
    return converters
