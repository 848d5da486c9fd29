"""
Implementation emitter.

Turns each ArityModel into one concrete, immutable, value-semantic class
implementing its ``Tuple{k}`` contract, plus:
    - ``NullTuple`` and its ``Null`` singleton for arity 0
    - ``from_pair`` / ``from_triple`` (via the interop emitter)
    - the ``tuple_of`` factory

Instances store their values in slots named after the accessors (``_a``,
``_b``, ...). The runtime's ``TupleMarker`` refuses attribute assignment, so
``__init__`` goes through ``object.__setattr__``.

Chain-extension constructs the next concrete class by name. Nothing is looked
up at runtime.
"""

from typing import List

from tuplegen.codemodel import Assignment, ClassDef, Function, Import, Module, Parameter, imports_from
from tuplegen.logging import get_logger
from tuplegen.model import ArityModel, Capability, FamilyModel
from tuplegen.naming import cardinal

from . import interop
from .common import (
    NEXT_TYPE,
    RESULT_TYPE,
    attrs,
    callable_of,
    fields,
    generic,
    implementation_type_vars,
    other_params,
    tuple_expr,
)

logger = get_logger(__name__)

SELF = Parameter("self")

NULL_INSTANCE = "Null"


def _init(member: ArityModel) -> Function:
    return Function(
        name="__init__",
        parameters=[SELF] + [Parameter(label, param) for label, param in zip(member.labels, member.type_params)],
        returns="None",
        body=[f'object.__setattr__(self, "{field}", {label})' for field, label in zip(fields(member), member.labels)],
    )


def _accessors(member: ArityModel) -> List[Function]:
    return [
        Function(name=label, parameters=[SELF], returns=param, decorators=["property"], body=[f"return self.{field}"])
        for label, param, field in zip(member.labels, member.type_params, fields(member))
    ]


def _chain_extension(member: ArityModel, family: FamilyModel) -> Function:
    successor = family.successor(member)
    values = attrs("self", fields(member)) + ["that"]
    return Function(
        name="to",
        parameters=[SELF, Parameter("that", NEXT_TYPE)],
        returns=generic(successor.interface_name, list(member.type_params) + [NEXT_TYPE]),
        docstring=f"Returns a new {successor.class_name} from the values of this tuple and ``that``.",
        body=[f"return {successor.class_name}({', '.join(values)})"],
    )


def _transforms(member: ArityModel, family: FamilyModel) -> List[Function]:
    params = list(member.type_params)
    other = generic(member.interface_name, other_params(member))
    values = ", ".join(attrs("self", fields(member)))

    functions = [
        Function(
            name="fold",
            parameters=[SELF, Parameter("transformer", callable_of(params, RESULT_TYPE))],
            returns=RESULT_TYPE,
            body=[f"return transformer({values})"],
        ),
        Function(
            name="flat_map",
            parameters=[SELF, Parameter("transformer", callable_of(params, other))],
            returns=other,
            body=[f"return transformer({values})"],
        ),
        Function(
            name="any",
            parameters=[SELF, Parameter("predicate", callable_of(params, "bool"))],
            returns="bool",
            body=[f"return bool(predicate({values}))"],
        ),
        Function(
            name="none",
            parameters=[SELF, Parameter("predicate", callable_of(params, "bool"))],
            returns="bool",
            body=[f"return not predicate({values})"],
        ),
    ]

    if member.has(Capability.ZIP):
        pair = family.get(2)
        functions.append(Function(
            name="zip_with",
            parameters=[SELF, Parameter("that", other)],
            returns=generic(pair.interface_name, [generic(member.interface_name, params), other]),
            body=[f"return {pair.class_name}(self, that)"],
        ))
    return functions


def _value_identity(member: ArityModel) -> List[Function]:
    mine = tuple_expr(attrs("self", fields(member)))
    theirs = tuple_expr(attrs("other", fields(member)))
    shown = ", ".join(f"{{self.{field}!r}}" for field in fields(member))
    return [
        Function(
            name="__eq__",
            parameters=[SELF, Parameter("other", "object")],
            returns="bool",
            body=[
                "if self is other:",
                "    return True",
                f"if not isinstance(other, {member.class_name}):",
                "    return NotImplemented",
                f"return {mine} == {theirs}",
            ],
        ),
        Function(name="__hash__", parameters=[SELF], returns="int", body=[f"return hash({mine})"]),
        Function(name="__repr__", parameters=[SELF], returns="str", body=[f'return f"({shown})"']),
        Function(
            name="__reduce__",
            parameters=[SELF],
            returns="tuple[Any, ...]",
            body=[f"return ({member.class_name}, {mine})"],
            imports=imports_from("typing", "Any"),
        ),
    ]


def _docstring(member: ArityModel) -> str:
    if member.arity == 1:
        equality = "if their components are equal."
    else:
        equality = f"if all {cardinal(member.arity)} components are equal."
    return "\n".join([
        f"Represents a generic implementation of a {member.arity}-tuple.",
        "",
        "There is no meaning attached to values in this class, it can be used for any purpose.",
        "",
        f"{member.class_name} exhibits value semantics, i.e. two {member.class_name} instances are equal",
        equality,
    ])


def emit_null_implementation(member: ArityModel, family: FamilyModel) -> List:
    successor = family.successor(member)
    cls = ClassDef(
        name=member.class_name,
        bases=[member.interface_name],
        docstring=(
            "Represents a generic implementation of a null-tuple.\n"
            "\n"
            f"Use the ``{NULL_INSTANCE}`` instance rather than creating new ones."
        ),
    )
    cls.add(Assignment("__slots__", "()"))
    cls.add(Function(
        name="to",
        parameters=[SELF, Parameter("that", NEXT_TYPE)],
        returns=generic(successor.interface_name, [NEXT_TYPE]),
        docstring=f"Returns a new {successor.class_name} holding ``that``.",
        body=[f"return {successor.class_name}(that)"],
    ))
    cls.add(Function(
        name="__eq__",
        parameters=[SELF, Parameter("other", "object")],
        returns="bool",
        body=[f"return isinstance(other, {member.class_name})"],
    ))
    cls.add(Function(name="__hash__", parameters=[SELF], returns="int", body=["return 0"]))
    cls.add(Function(name="__repr__", parameters=[SELF], returns="str", body=[f'return "{NULL_INSTANCE}"']))
    cls.add(Function(name="__reduce__", parameters=[SELF], returns="str", body=[f'return "{NULL_INSTANCE}"']))
    return [cls, Assignment(NULL_INSTANCE, f"{member.class_name}()")]


def emit_implementation(member: ArityModel, family: FamilyModel) -> ClassDef:
    """
    Emit the concrete class of one proper arity.

    Raises:
        ModelInconsistency: if the model's labels and type parameters disagree
    """
    member.validate()

    cls = ClassDef(
        name=member.class_name,
        bases=[generic(member.interface_name, member.type_params)],
        docstring=_docstring(member),
    )
    slots = tuple_expr([f'"{field}"' for field in fields(member)])
    cls.add(Assignment("__slots__", slots))
    cls.add(_init(member))
    for fn in _accessors(member):
        cls.add(fn)
    if member.has(Capability.CHAIN_EXTENSION):
        cls.add(_chain_extension(member, family))
    for fn in _transforms(member, family):
        cls.add(fn)
    for fn in _value_identity(member):
        cls.add(fn)
    return cls


def emit_factory(family: FamilyModel, runtime_module: str) -> List:
    """
    ``tuple_of(*values)``: the null tuple, the concrete class of that arity,
    or a TupleN past the end of the family.

    Unlike chain-extension this is a lookup by arity, which is fine for a
    factory whose arity is only known at runtime.
    """
    classes = [member.class_name for member in family.proper]
    constructors = Assignment("_CONSTRUCTORS", tuple_expr(classes))
    factory = Function(
        name="tuple_of",
        parameters=[Parameter("values", "Any", variadic=True)],
        returns="TupleMarker",
        docstring=(
            "Returns a new tuple containing the specified ``values``.\n"
            "\n"
            f"No values give ``{NULL_INSTANCE}``, up to {family.max_arity} values give the family member of that\n"
            "arity and anything longer gives a TupleN."
        ),
        body=[
            "if not values:",
            f"    return {NULL_INSTANCE}",
            f"if len(values) > {family.max_arity}:",
            "    return TupleN(*values)",
            "return _CONSTRUCTORS[len(values) - 1](*values)",
        ],
        imports=imports_from("typing", "Any") + imports_from(runtime_module, "TupleMarker", "TupleN"),
    )
    return [constructors, factory]


def emit_implementations(
    family: FamilyModel,
    runtime_module: str = "tuplegen.runtime",
    interfaces_module: str = "tuples",
    name: str = "tuples_impl",
) -> Module:
    """
    Emit the implementations file.

    Args:
        family: The family to emit
        runtime_module: Module the generated code imports the runtime from
        interfaces_module: Stem of the sibling interfaces module
        name: File stem of the output module

    Returns:
        Module holding ``NullTuple``, ``Null``, every concrete class in
        increasing arity, the native converters and ``tuple_of``
    """
    module = Module(name=name, imports=[Import("__future__", "annotations")])
    sibling = f".{interfaces_module}"
    module.imports.extend(imports_from(sibling, *implementation_type_vars(family)))
    module.imports.extend(imports_from(sibling, *(member.interface_name for member in family)))
    module.imports.extend(imports_from("typing", "Callable"))

    for member in family:
        logger.debug("Emitting implementation %s", member.class_name)
        if member.is_null:
            module.body.extend(emit_null_implementation(member, family))
        else:
            module.add(emit_implementation(member, family))

    module.body.extend(interop.emit_native_converters(family))
    module.body.extend(emit_factory(family, runtime_module))
    return module
