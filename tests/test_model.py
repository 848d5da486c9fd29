"""
Tests for the family model and its builder.

These tests verify:
    - Member naming and ordering
    - Capability derivation
    - Extension policy at and below the bound
    - Invariants enforced by ArityModel / FamilyModel
    - Rejection of unusable maximum arities
"""

import dataclasses

import pytest

from tuplegen.builder import build, build_arity, derive_capabilities
from tuplegen.errors import InvalidArity, ModelInconsistency
from tuplegen.model import ArityModel, Capability, ExtensionPolicy, FamilyModel


class TestBuild:
    """Test the shape of built families."""

    def test_build_three_yields_arities_zero_to_three(self):
        """Should produce one member per arity, in increasing order."""
        family = build(3)
        assert [m.arity for m in family] == [0, 1, 2, 3]
        assert len(family) == 4

    def test_member_names(self):
        """Should name contracts Tuple{k} and classes after the family names."""
        family = build(3)
        assert [m.interface_name for m in family] == ["Tuple0", "Tuple1", "Tuple2", "Tuple3"]
        assert [m.class_name for m in family] == ["NullTuple", "Single", "Duad", "Triad"]

    def test_labels_params_and_ordinals_line_up(self):
        """Should give each position a label, a type parameter and an ordinal."""
        triad = build(3).get(3)
        assert triad.labels == ("a", "b", "c")
        assert triad.type_params == ("A", "B", "C")
        assert triad.ordinals == ("first", "second", "third")

    def test_only_last_member_overflows(self):
        """Should mark exactly the arity-N member as OVERFLOW."""
        family = build(3)
        assert [m.extension for m in family] == [
            ExtensionPolicy.TYPED,
            ExtensionPolicy.TYPED,
            ExtensionPolicy.TYPED,
            ExtensionPolicy.OVERFLOW,
        ]
        assert family.get(3).is_terminal

    def test_only_two_and_three_have_native_interop(self):
        """Should give pair interop to arity 2 and triple interop to arity 3 only."""
        family = build(5)
        pair = [m.arity for m in family if m.has(Capability.PAIR_INTEROP)]
        triple = [m.arity for m in family if m.has(Capability.TRIPLE_INTEROP)]
        assert pair == [2]
        assert triple == [3]

    def test_build_is_deterministic(self):
        """Should return equal models for equal input."""
        assert build(6) == build(6)

    def test_default_bound_builds(self):
        family = build(24)
        assert family.get(24).class_name == "Quattuorvigintuple"

    def test_largest_supported_bound(self):
        """Should accept the full letter budget."""
        family = build(25)
        assert family.get(25).labels[-1] == "z"

    @pytest.mark.parametrize("max_arity", [0, -1])
    def test_bound_below_one_is_rejected(self, max_arity):
        with pytest.raises(InvalidArity) as exc:
            build(max_arity)
        assert exc.value.arity == max_arity

    def test_bound_beyond_letter_budget_is_rejected(self):
        """Should refuse arities the naming engine cannot label."""
        with pytest.raises(InvalidArity) as exc:
            build(26)
        assert "letter budget" in str(exc.value)
        assert "arity=26" in str(exc.value)

    @pytest.mark.parametrize("max_arity", ["3", 3.0, True, None])
    def test_non_integer_bound_is_rejected(self, max_arity):
        with pytest.raises(InvalidArity):
            build(max_arity)


class TestCapabilities:
    """Test capability derivation."""

    def test_every_arity_projects_to_list(self):
        for member in build(6):
            assert member.has(Capability.LIST_PROJECTION)

    def test_map_projection_on_even_arities_only(self):
        """Should give to_map to 2, 4, 6 and nothing else."""
        family = build(7)
        assert [m.arity for m in family if m.has(Capability.MAP_PROJECTION)] == [2, 4, 6]

    def test_chain_extension_below_bound_only(self):
        family = build(4)
        assert [m.arity for m in family if m.has(Capability.CHAIN_EXTENSION)] == [0, 1, 2, 3]

    def test_zip_needs_a_pair_member(self):
        """Should not offer zip when the family has no 2-tuple to zip into."""
        assert not derive_capabilities(1, 1) & {Capability.ZIP}
        assert Capability.ZIP in derive_capabilities(1, 2)

    def test_null_tuple_does_not_zip(self):
        assert not build(4).null.has(Capability.ZIP)


class TestArityModel:
    """Test ArityModel invariants."""

    def test_validate_accepts_built_member(self):
        build_arity(4, 6).validate()

    def test_mismatched_type_params_are_rejected(self):
        """Should raise when labels and type parameters disagree."""
        broken = dataclasses.replace(build_arity(3, 4), type_params=("A", "B"))
        with pytest.raises(ModelInconsistency) as exc:
            broken.validate()
        assert exc.value.arity == 3

    def test_duplicate_labels_are_rejected(self):
        broken = dataclasses.replace(build_arity(2, 4), labels=("a", "a"))
        with pytest.raises(ModelInconsistency):
            broken.validate()

    def test_members_are_immutable(self):
        member = build_arity(2, 4)
        with pytest.raises(dataclasses.FrozenInstanceError):
            member.arity = 5


class TestFamilyModel:
    """Test FamilyModel invariants and lookups."""

    def test_get_and_successor(self):
        family = build(3)
        assert family.get(2).class_name == "Duad"
        assert family.get(4) is None
        assert family.successor(family.get(2)).class_name == "Triad"
        assert family.successor(family.get(3)) is None

    def test_null_and_proper_members(self):
        family = build(3)
        assert family.null.class_name == "NullTuple"
        assert [m.arity for m in family.proper] == [1, 2, 3]

    def test_gap_in_arities_is_rejected(self):
        """Should refuse a family missing an arity."""
        members = build(3).members
        with pytest.raises(ModelInconsistency):
            FamilyModel(max_arity=3, members=(members[0], members[1], members[3]))

    def test_wrong_bound_is_rejected(self):
        with pytest.raises(ModelInconsistency):
            FamilyModel(max_arity=4, members=build(3).members)

    def test_overflow_below_bound_is_rejected(self):
        """Should refuse an OVERFLOW member that is not the last one."""
        members = list(build(3).members)
        members[1] = dataclasses.replace(members[1], extension=ExtensionPolicy.OVERFLOW)
        with pytest.raises(ModelInconsistency):
            FamilyModel(max_arity=3, members=tuple(members))

    def test_empty_family_is_rejected(self):
        with pytest.raises(ModelInconsistency):
            FamilyModel(max_arity=0, members=())

    def test_hand_built_member(self):
        member = ArityModel(arity=0, interface_name="Tuple0", class_name="NullTuple")
        assert member.is_null
        assert member.labels == ()
