"""
Code Model

The structured description of Python source that emitters produce and
backends render. Emitters never build source text for whole definitions;
they build these objects and leave layout to the backend.

Objects:
    - Import (one imported name, or a bare module)
    - Parameter (one function parameter)
    - Function (function or method)
    - Assignment (module or class level ``name = value``)
    - ClassDef (class with members)
    - Module (one output file)

Every definition lists the imports its text needs, so the import block of
a file can be collected from its contents instead of being maintained by
hand.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Union


@dataclass(frozen=True, order=True)
class Import:
    """
    One import requirement.

    Properties:
        module: Module to import from, e.g. "typing" or ".tuples"
        name: Imported name, or None for a plain ``import module``
    """

    module: str
    name: Optional[str] = None


def imports_from(module: str, *names: str) -> List[Import]:
    return [Import(module, name) for name in names]


@dataclass
class Parameter:
    name: str
    annotation: Optional[str] = None
    default: Optional[str] = None
    variadic: bool = False


@dataclass
class Function:
    """
    A function or method definition.

    Methods list ``self`` explicitly as their first parameter, which lets
    an emitter annotate it (used to express homogeneity constraints).

    Body lines are relative to the function body and may carry their own
    further indentation.
    """

    name: str
    parameters: List[Parameter] = field(default_factory=list)
    returns: Optional[str] = None
    body: List[str] = field(default_factory=list)
    decorators: List[str] = field(default_factory=list)
    docstring: Optional[str] = None
    imports: List[Import] = field(default_factory=list)


@dataclass
class Assignment:
    target: str
    value: str
    imports: List[Import] = field(default_factory=list)


Member = Union[Function, Assignment]


@dataclass
class ClassDef:
    name: str
    bases: List[str] = field(default_factory=list)
    docstring: Optional[str] = None
    members: List[Member] = field(default_factory=list)
    imports: List[Import] = field(default_factory=list)

    def add(self, member: Member) -> ClassDef:
        self.members.append(member)
        return self

    def get(self, name: str) -> Optional[Member]:
        for member in self.members:
            if isinstance(member, Function) and member.name == name:
                return member
            if isinstance(member, Assignment) and member.target == name:
                return member
        return None


Definition = Union[ClassDef, Function, Assignment]


@dataclass
class Module:
    """
    One output file.

    Properties:
        name:
            File stem, e.g. "tuples"

        body:
            Top-level definitions in emission order

        imports:
            Resolved import block; filled in by the source writer from the
            requirements of ``body``

        comment:
            Free-form explanatory comment placed right after the import block
    """

    name: str
    body: List[Definition] = field(default_factory=list)
    imports: List[Import] = field(default_factory=list)
    comment: List[str] = field(default_factory=list)

    @property
    def filename(self) -> str:
        return f"{self.name}.py"

    def add(self, definition: Definition) -> Module:
        self.body.append(definition)
        return self

    def classes(self) -> List[ClassDef]:
        return [d for d in self.body if isinstance(d, ClassDef)]

    def get(self, name: str) -> Optional[Definition]:
        for definition in self.body:
            if isinstance(definition, (ClassDef, Function)) and definition.name == name:
                return definition
            if isinstance(definition, Assignment) and definition.target == name:
                return definition
        return None
