"""
Tests for the hand-written runtime the generated code imports.
"""

import pickle

import pytest

from tuplegen.runtime import TupleMarker, TupleN, TupleOverflowWarning, ValueIdentity


class TestTupleN:
    """Test the overflow container."""

    def test_size_length_and_iteration(self):
        t = TupleN(1, "two", None)
        assert t.size == 3
        assert len(t) == 3
        assert list(t) == [1, "two", None]

    def test_indexing(self):
        t = TupleN("x", "y")
        assert t[1] == "y"
        with pytest.raises(IndexError):
            t[2]

    def test_get_checks_type(self):
        t = TupleN(1, "two")
        assert t.get(1, str) == "two"
        assert t.get(0) == 1
        with pytest.raises(TypeError):
            t.get(0, str)

    def test_get_rejects_none(self):
        with pytest.raises(ValueError):
            TupleN(None).get(0)

    def test_get_out_of_range(self):
        with pytest.raises(IndexError):
            TupleN(1).get(1)
        with pytest.raises(IndexError):
            TupleN(1).get(-1)

    def test_get_nullable_allows_none(self):
        t = TupleN(None, 2)
        assert t.get_nullable(0) is None
        assert t.get_nullable(0, int) is None
        assert t.get_nullable(1, int) == 2
        with pytest.raises(TypeError):
            t.get_nullable(1, str)

    def test_to_appends_and_warns(self):
        with pytest.warns(TupleOverflowWarning):
            extended = TupleN(1).to(2)
        assert extended == TupleN(1, 2)

    def test_plus_appends_and_warns(self):
        with pytest.warns(TupleOverflowWarning):
            extended = TupleN(1) + 2
        assert extended == TupleN(1, 2)

    def test_value_semantics(self):
        assert TupleN(1, 2) == TupleN(1, 2)
        assert TupleN(1, 2) != TupleN(2, 1)
        assert hash(TupleN(1, 2)) == hash(TupleN(1, 2))
        assert TupleN(1, 2) != (1, 2)

    def test_repr(self):
        assert repr(TupleN(1, "x")) == "(1, 'x')"
        assert repr(TupleN()) == "()"

    def test_immutable(self):
        t = TupleN(1)
        with pytest.raises(AttributeError):
            t._values = (2,)
        with pytest.raises(AttributeError):
            t.extra = 1
        with pytest.raises(AttributeError):
            del t._values

    def test_pickle(self):
        t = TupleN(1, "two")
        assert pickle.loads(pickle.dumps(t)) == t

    def test_to_list(self):
        assert TupleN(3, 1).to_list() == [3, 1]


class TestMarkers:

    def test_tuple_n_is_a_tuple(self):
        assert isinstance(TupleN(), TupleMarker)
        assert isinstance(TupleN(), ValueIdentity)

    def test_value_identity_is_abstract(self):
        with pytest.raises(TypeError):
            ValueIdentity()

    def test_overflow_warning_is_a_user_warning(self):
        assert issubclass(TupleOverflowWarning, UserWarning)
