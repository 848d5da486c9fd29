"""
Family Model Builder

Builds the FamilyModel for arity 0..N from the naming engine.

Capabilities are derived from the arity and the family bound:
    - PAIR_INTEROP      arity == 2
    - TRIPLE_INTEROP    arity == 3
    - MAP_PROJECTION    arity even and >= 2
    - LIST_PROJECTION   always
    - ZIP               arity >= 1 and the family has an arity-2 member
    - CHAIN_EXTENSION   arity < N

The arity-N member receives the OVERFLOW extension policy.
"""

from typing import FrozenSet, Set

from .errors import InvalidArity, UnsupportedArity
from .logging import get_logger
from .model import ArityModel, Capability, ExtensionPolicy, FamilyModel
from .naming import LETTER_BUDGET, family_name, ordinal, position_labels, type_params

logger = get_logger(__name__)

NULL_INTERFACE_NAME = "Tuple0"
NULL_CLASS_NAME = "NullTuple"


def derive_capabilities(arity: int, max_arity: int) -> FrozenSet[Capability]:
    caps: Set[Capability] = {Capability.LIST_PROJECTION}
    if arity == 2:
        caps.add(Capability.PAIR_INTEROP)
    if arity == 3:
        caps.add(Capability.TRIPLE_INTEROP)
    if arity >= 2 and arity % 2 == 0:
        caps.add(Capability.MAP_PROJECTION)
    if arity >= 1 and max_arity >= 2:
        caps.add(Capability.ZIP)
    if arity < max_arity:
        caps.add(Capability.CHAIN_EXTENSION)
    return frozenset(caps)


def build_arity(arity: int, max_arity: int) -> ArityModel:
    """
    Build the model of a single arity.

    Raises:
        UnsupportedArity: if the naming engine cannot name this arity
    """
    if arity == 0:
        interface_name, class_name = NULL_INTERFACE_NAME, NULL_CLASS_NAME
    else:
        interface_name, class_name = f"Tuple{arity}", family_name(arity)

    extension = ExtensionPolicy.OVERFLOW if arity == max_arity else ExtensionPolicy.TYPED

    return ArityModel(
        arity=arity,
        interface_name=interface_name,
        class_name=class_name,
        labels=position_labels(arity),
        type_params=type_params(arity),
        ordinals=tuple(ordinal(i) for i in range(1, arity + 1)),
        capabilities=derive_capabilities(arity, max_arity),
        extension=extension,
    )


def build(max_arity: int) -> FamilyModel:
    """
    Build the tuple family for arity 0..max_arity.

    Deterministic: two calls with the same ``max_arity`` return equal models.

    Args:
        max_arity: Largest arity with a statically typed member

    Returns:
        The immutable FamilyModel

    Raises:
        InvalidArity: if ``max_arity`` is below 1 or beyond the letter budget
    """
    if not isinstance(max_arity, int) or isinstance(max_arity, bool):
        raise InvalidArity(f"Maximum arity must be an integer, got {max_arity!r}")
    if max_arity < 1:
        raise InvalidArity("Maximum arity must be at least 1", arity=max_arity)
    if max_arity > LETTER_BUDGET:
        raise InvalidArity(
            f"Maximum arity exceeds the letter budget of {LETTER_BUDGET}",
            arity=max_arity,
        )

    members = []
    for arity in range(max_arity + 1):
        try:
            members.append(build_arity(arity, max_arity))
        except UnsupportedArity as e:
            raise InvalidArity(f"Cannot name arity {arity}: {e.message}", arity=arity) from e
        logger.debug("Built model for arity %d (%s)", arity, members[-1].class_name)

    family = FamilyModel(max_arity=max_arity, members=tuple(members))
    for member in family:
        member.validate()
    return family
