"""
Core Family Model Objects

Defines the in-memory description of the tuple family the generator emits:
    - Capability (optional operations an arity gets)
    - ExtensionPolicy (what chain-extension does at this arity)
    - ArityModel (one member of the family)
    - FamilyModel (the whole family, arity 0..N)

ARCHITECTURAL RULE:
    These objects:
        - Know nothing about Python source text or formatting
        - Are immutable once built
        - Are fully serializable
        - Describe structure, not behavior

Emitters read these objects; nothing downstream of the builder changes them.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import FrozenSet, Iterator, Optional, Tuple

from .errors import ModelInconsistency


class Capability(Enum):
    """Optional operations an arity may carry. Always derived, never chosen."""

    PAIR_INTEROP = "pair_interop"
    TRIPLE_INTEROP = "triple_interop"
    LIST_PROJECTION = "list_projection"
    MAP_PROJECTION = "map_projection"
    ZIP = "zip"
    CHAIN_EXTENSION = "chain_extension"


class ExtensionPolicy(Enum):
    """
    What chain-extension resolves to at a given arity.

    TYPED:
        arity < N, ``to`` returns the statically typed next tuple.
    OVERFLOW:
        arity == N, ``to`` degrades into the runtime ``TupleN`` container.
        Terminal: nothing leads back to a typed tuple from here.
    """

    TYPED = "typed"
    OVERFLOW = "overflow"


@dataclass(frozen=True)
class ArityModel:
    """
    Describes one member of the tuple family.

    Properties:
        arity:
            Number of values held (0 for the null tuple)

        interface_name:
            Name of the abstract contract, e.g. "Tuple3"

        class_name:
            Name of the concrete type, e.g. "Triad"

        labels:
            Accessor names in position order, e.g. ("a", "b", "c")

        type_params:
            Type-parameter names in position order, e.g. ("A", "B", "C")

        ordinals:
            Ordinal word per position, used in documentation

        capabilities:
            Derived set of optional operations

        extension:
            Chain-extension policy at this arity

    INVARIANTS:
        - len(labels) == len(type_params) == len(ordinals) == arity
        - labels are unique and ordered by position
    """

    arity: int
    interface_name: str
    class_name: str
    labels: Tuple[str, ...] = ()
    type_params: Tuple[str, ...] = ()
    ordinals: Tuple[str, ...] = ()
    capabilities: FrozenSet[Capability] = field(default_factory=frozenset)
    extension: ExtensionPolicy = ExtensionPolicy.TYPED

    def has(self, capability: Capability) -> bool:
        return capability in self.capabilities

    @property
    def is_null(self) -> bool:
        return self.arity == 0

    @property
    def is_terminal(self) -> bool:
        return self.extension is ExtensionPolicy.OVERFLOW

    def validate(self) -> None:
        """
        Check the per-arity invariants.

        Raises:
            ModelInconsistency: if label, type-parameter and ordinal counts
                disagree with each other or with the arity, or labels repeat
        """
        if len(self.type_params) != len(self.labels):
            raise ModelInconsistency(
                f"{self.interface_name} has {len(self.type_params)} type parameters "
                f"but {len(self.labels)} accessor labels",
                arity=self.arity,
            )
        if len(self.labels) != self.arity or len(self.ordinals) != self.arity:
            raise ModelInconsistency(
                f"{self.interface_name} declares arity {self.arity} "
                f"but has {len(self.labels)} labels and {len(self.ordinals)} ordinals",
                arity=self.arity,
            )
        if len(set(self.labels)) != len(self.labels):
            raise ModelInconsistency(f"{self.interface_name} has duplicate labels", arity=self.arity)


@dataclass(frozen=True)
class FamilyModel:
    """
    The complete tuple family for arity 0..max_arity.

    This is THE input of every emitter. It is built once per run, passed by
    read-only reference and discarded afterwards.

    INVARIANTS:
        - members start at arity 0
        - arities strictly increase with no gaps
        - the last member has arity == max_arity and is the only OVERFLOW one
    """

    max_arity: int
    members: Tuple[ArityModel, ...]

    def __post_init__(self):
        if not self.members:
            raise ModelInconsistency("Family has no members")
        for expected, member in enumerate(self.members):
            if member.arity != expected:
                raise ModelInconsistency(
                    f"Family member at position {expected} has arity {member.arity}",
                    arity=member.arity,
                )
        if self.members[-1].arity != self.max_arity:
            raise ModelInconsistency(
                f"Family ends at arity {self.members[-1].arity}, expected {self.max_arity}",
                arity=self.members[-1].arity,
            )
        for member in self.members:
            if member.is_terminal != (member.arity == self.max_arity):
                raise ModelInconsistency(
                    f"{member.interface_name} has extension policy {member.extension.value}",
                    arity=member.arity,
                )

    def __iter__(self) -> Iterator[ArityModel]:
        return iter(self.members)

    def __len__(self) -> int:
        return len(self.members)

    def get(self, arity: int) -> Optional[ArityModel]:
        """
        Retrieve the member for ``arity``.

        Returns:
            ArityModel or None if the family has no such arity
        """
        if 0 <= arity < len(self.members):
            return self.members[arity]
        return None

    def successor(self, member: ArityModel) -> Optional[ArityModel]:
        """Return the member one arity above ``member``, or None at the bound."""
        return self.get(member.arity + 1)

    @property
    def null(self) -> ArityModel:
        return self.members[0]

    @property
    def proper(self) -> Tuple[ArityModel, ...]:
        """Members with arity 1..N."""
        return self.members[1:]
