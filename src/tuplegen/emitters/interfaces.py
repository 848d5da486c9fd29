"""
Interface emitter.

Turns each ArityModel into the abstract contract ``Tuple{k}``:
    - one abstract read-only property per position
    - ``to`` chain-extension (typed within the bound, TupleN at the bound)
      and ``+`` as its operator form
    - ``component1`` .. ``component{k}`` plus ``__iter__`` / ``__len__``
    - abstract ``fold``, ``flat_map``, ``any``, ``none`` and ``zip_with``

Every contract extends the runtime's ``TupleMarker`` and ``ValueIdentity``.
Interop members (projections, native conversions) are added by the interop
emitter.
"""

from typing import List

from tuplegen.codemodel import Assignment, ClassDef, Function, Import, Module, Parameter, imports_from
from tuplegen.logging import get_logger
from tuplegen.model import ArityModel, Capability, FamilyModel

from . import interop
from .common import (
    NEXT_TYPE,
    RESULT_TYPE,
    attrs,
    callable_of,
    generic,
    other_params,
    tuple_expr,
    type_var_names,
)

logger = get_logger(__name__)

SELF = Parameter("self")

EXPLANATORY_COMMENT = [
    "Every tuple type below defines its chain-extension operation, 'to', as an ordinary",
    "method of the type itself. 'Single(1).to(2).to(3)' therefore always resolves to the",
    "next member of the family, and the concrete classes construct that member directly",
    "instead of looking a constructor up at runtime.",
    "    The last member of the family is the exception: extending it returns a 'TupleN'",
    "from the runtime module and emits a 'TupleOverflowWarning', since there is no",
    "statically typed member beyond it. 'a + b' is shorthand for 'a.to(b)'.",
    "    'Tuple2' and 'Tuple3' can be converted to native tuples with 'to_pair' and",
    "'to_triple', or with the '~' operator. The operator is entirely optional and should",
    "only be used where it does not hurt readability. 'from_pair' and 'from_triple' in",
    "the implementations module convert the other way.",
]


def emit_type_vars(family: FamilyModel) -> List[Assignment]:
    """Module-level TypeVar declarations. Position parameters are covariant."""
    positions = set(family.get(family.max_arity).type_params)
    declarations = []
    for name in type_var_names(family):
        if name in positions:
            value = f'TypeVar("{name}", covariant=True)'
        else:
            value = f'TypeVar("{name}")'
        declarations.append(Assignment(name, value, imports=imports_from("typing", "TypeVar")))
    return declarations


def _chain_extension(member: ArityModel, family: FamilyModel, runtime_module: str) -> Function:
    successor = family.successor(member)

    if successor is None:
        values = ", ".join(attrs("self", member.labels) + ["that"])
        return Function(
            name="to",
            parameters=[SELF, Parameter("that", "Any")],
            returns="TupleN",
            docstring=(
                "Returns a new TupleN that contains the values of this tuple and ``that``.\n"
                "\n"
                f"{member.interface_name} is the largest member of the family. Extending it leaves\n"
                "static arity typing behind and always emits a TupleOverflowWarning."
            ),
            body=[
                "warnings.warn(",
                f'    "Extending a {member.arity}-tuple creates a TupleN; static arity typing ends here",',
                "    TupleOverflowWarning,",
                "    stacklevel=2,",
                ")",
                f"return TupleN({values})",
            ],
            imports=(
                imports_from("typing", "Any")
                + [Import("warnings")]
                + imports_from(runtime_module, "TupleN", "TupleOverflowWarning")
            ),
        )

    return Function(
        name="to",
        parameters=[SELF, Parameter("that", NEXT_TYPE)],
        returns=generic(successor.interface_name, list(member.type_params) + [NEXT_TYPE]),
        docstring=(
            f"Returns a new {successor.arity}-tuple from the values of this tuple and ``that``.\n"
            "\n"
            "Whether or not this is supported is implementation specific, a class implementing\n"
            "this contract may choose not to provide it."
        ),
        body=[f'raise NotImplementedError(f"{{type(self).__name__}} does not support chain-extension")'],
    )


def _plus(extension: Function) -> Function:
    """``+`` with the signature of ``to``; overflow at the bound comes along with it."""
    return Function(
        name="__add__",
        parameters=extension.parameters,
        returns=extension.returns,
        docstring="Operator form of ``to``, e.g. ``Single(1) + 2 == Duad(1, 2)``.",
        body=["return self.to(that)"],
    )


def _accessor(member: ArityModel, index: int) -> Function:
    return Function(
        name=member.labels[index],
        parameters=[SELF],
        returns=member.type_params[index],
        decorators=["property", "abstractmethod"],
        docstring=f"The {member.ordinals[index]} value of this tuple.",
        imports=imports_from("abc", "abstractmethod"),
    )


def _component(member: ArityModel, index: int) -> Function:
    return Function(
        name=f"component{index + 1}",
        parameters=[SELF],
        returns=member.type_params[index],
        body=[f"return self.{member.labels[index]}"],
    )


def _iteration(member: ArityModel) -> List[Function]:
    iterable = tuple_expr(attrs("self", member.labels))
    return [
        Function(
            name="__iter__",
            parameters=[SELF],
            returns="Iterator[Any]",
            body=[f"return iter({iterable})"],
            imports=imports_from("typing", "Any", "Iterator"),
        ),
        Function(name="__len__", parameters=[SELF], returns="int", body=[f"return {member.arity}"]),
    ]


def _transforms(member: ArityModel, family: FamilyModel) -> List[Function]:
    params = list(member.type_params)
    others = other_params(member)
    this = generic(member.interface_name, params)
    other = generic(member.interface_name, others)
    abstract = ["abstractmethod"]
    needs = imports_from("abc", "abstractmethod") + imports_from("typing", "Callable")

    functions = [
        Function(
            name="fold",
            parameters=[SELF, Parameter("transformer", callable_of(params, RESULT_TYPE))],
            returns=RESULT_TYPE,
            decorators=abstract,
            docstring="Returns the result of applying the values of this tuple to ``transformer``.",
            imports=needs,
        ),
        Function(
            name="flat_map",
            parameters=[SELF, Parameter("transformer", callable_of(params, other))],
            returns=other,
            decorators=abstract,
            docstring="Returns the tuple produced by applying the values of this tuple to ``transformer``.",
            imports=needs,
        ),
        Function(
            name="any",
            parameters=[SELF, Parameter("predicate", callable_of(params, "bool"))],
            returns="bool",
            decorators=abstract,
            docstring="Returns True if ``predicate`` passes when supplied the values of this tuple.",
            imports=needs,
        ),
        Function(
            name="none",
            parameters=[SELF, Parameter("predicate", callable_of(params, "bool"))],
            returns="bool",
            decorators=abstract,
            docstring="Returns True if ``predicate`` fails when supplied the values of this tuple.",
            imports=needs,
        ),
    ]

    if member.has(Capability.ZIP):
        pair = family.get(2)
        functions.append(Function(
            name="zip_with",
            parameters=[SELF, Parameter("that", other)],
            returns=generic(pair.interface_name, [this, other]),
            decorators=abstract,
            docstring=(
                "Returns a 2-tuple holding this tuple and ``that`` tuple.\n"
                "\n"
                "The two tuples are paired as wholes, their values are not paired up position by position."
            ),
            imports=needs,
        ))
    return functions


def _docstring(member: ArityModel) -> str:
    lines = [
        f"Represents an abstract implementation of a {member.arity}-tuple.",
        "",
        "Whether or not there is any meaning attached to the values represented by this tuple",
        "is implementation specific.",
        "",
        "See Also:",
        f"    {member.class_name}",
        "",
        "Attributes:",
    ]
    for label, word in zip(member.labels, member.ordinals):
        lines.append(f"    {label}: The {word} value of this tuple.")
    return "\n".join(lines)


def emit_null_interface(member: ArityModel, family: FamilyModel, runtime_module: str) -> ClassDef:
    cls = ClassDef(
        name=member.interface_name,
        bases=["TupleMarker", "ValueIdentity"],
        docstring=(
            "Represents a null tuple.\n"
            "\n"
            "A null tuple does not hold any values.\n"
            "\n"
            "See Also:\n"
            f"    {member.class_name}"
        ),
        imports=imports_from(runtime_module, "TupleMarker", "ValueIdentity"),
    )
    cls.add(Assignment("__slots__", "()"))
    extension = _chain_extension(member, family, runtime_module)
    cls.add(extension)
    cls.add(_plus(extension))
    for fn in _iteration(member):
        cls.add(fn)
    return cls


def emit_interface(member: ArityModel, family: FamilyModel, runtime_module: str = "tuplegen.runtime") -> ClassDef:
    """
    Emit the abstract contract of one arity.

    Raises:
        ModelInconsistency: if the model's labels and type parameters disagree
    """
    member.validate()
    if member.is_null:
        return emit_null_interface(member, family, runtime_module)

    cls = ClassDef(
        name=member.interface_name,
        bases=["TupleMarker", "ValueIdentity", generic("Generic", member.type_params)],
        docstring=_docstring(member),
        imports=imports_from(runtime_module, "TupleMarker", "ValueIdentity") + imports_from("typing", "Generic"),
    )
    cls.add(Assignment("__slots__", "()"))
    for index in range(member.arity):
        cls.add(_accessor(member, index))
    extension = _chain_extension(member, family, runtime_module)
    cls.add(extension)
    cls.add(_plus(extension))
    for index in range(member.arity):
        cls.add(_component(member, index))
    for fn in _iteration(member):
        cls.add(fn)
    for fn in _transforms(member, family):
        cls.add(fn)
    return cls


def emit_interfaces(family: FamilyModel, runtime_module: str = "tuplegen.runtime", name: str = "tuples") -> Module:
    """
    Emit the interfaces file: type variables, then ``Tuple0`` .. ``Tuple{N}``.

    Args:
        family: The family to emit
        runtime_module: Module the generated code imports the runtime from
        name: File stem of the output module

    Returns:
        Module holding every contract in increasing arity
    """
    module = Module(name=name, imports=[Import("__future__", "annotations")], comment=list(EXPLANATORY_COMMENT))
    module.body.extend(emit_type_vars(family))

    for member in family:
        logger.debug("Emitting interface %s", member.interface_name)
        cls = emit_interface(member, family, runtime_module)
        interop.add_interface_interop(cls, member)
        module.add(cls)
    return module
