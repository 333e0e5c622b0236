#
# vardump - Sentinels Tests
#

# Standard library -----------------------------------------------------------------------------------------------------
import pickle

# Third-party ----------------------------------------------------------------------------------------------------------
import pytest

# Local ----------------------------------------------------------------------------------------------------------------
from vardump.sentinels import (
    UNSET, END, REQUIRES_MULTILINE,
    UnsetType, EndType, RequiresMultilineType,
    ifnotunset,
)


# Tests ----------------------------------------------------------------------------------------------------------------

class TestSentinels:
    def test_singleton_identity(self):
        """Ensure each sentinel is a singleton object."""
        assert UNSET is UnsetType()
        assert END is EndType()
        assert REQUIRES_MULTILINE is RequiresMultilineType()

    @pytest.mark.parametrize(
        ("sentinel", "expected"),
        [
            pytest.param(UNSET, "<UNSET>", id="unset"),
            pytest.param(END, "<END>", id="end"),
            pytest.param(REQUIRES_MULTILINE, "<REQUIRES_MULTILINE>", id="requires_multiline"),
        ],
    )
    def test_repr_clean(self, sentinel, expected):
        """Assert repr shows clean angle-bracketed name."""
        assert repr(sentinel) == expected

    @pytest.mark.parametrize(
        ("s1", "s2", "is_equal"),
        [
            pytest.param(UNSET, UNSET, True, id="unset-self"),
            pytest.param(UNSET, END, False, id="unset-end"),
            pytest.param(END, REQUIRES_MULTILINE, False, id="end-requires_multiline"),
            pytest.param(REQUIRES_MULTILINE, REQUIRES_MULTILINE, True, id="requires_multiline-self"),
        ],
    )
    def test_identity_and_eq(self, s1, s2, is_equal):
        """Verify identity and equality are aligned."""
        assert (s1 is s2) is is_equal
        assert (s1 == s2) is is_equal

    @pytest.mark.parametrize(
        "sentinel",
        [
            pytest.param(UNSET, id="unset"),
            pytest.param(END, id="end"),
            pytest.param(REQUIRES_MULTILINE, id="requires_multiline"),
        ],
    )
    def test_falsy_and_hashable(self, sentinel):
        assert not sentinel
        assert {sentinel: 1}[sentinel] == 1

    @pytest.mark.parametrize(
        "sentinel",
        [
            pytest.param(UNSET, id="unset"),
            pytest.param(END, id="end"),
            pytest.param(REQUIRES_MULTILINE, id="requires_multiline"),
        ],
    )
    def test_pickle_roundtrip(self, sentinel):
        """Pickling must return the very same singleton."""
        assert pickle.loads(pickle.dumps(sentinel)) is sentinel

    def test_equality_with_non_sentinel(self):
        assert UNSET != None  # noqa: E711
        assert REQUIRES_MULTILINE != "\n"


class TestIfNotUnset:
    @pytest.mark.parametrize(
        ("value", "default", "expected"),
        [
            pytest.param(UNSET, 5, 5, id="unset-default"),
            pytest.param(None, 5, None, id="none-kept"),
            pytest.param(0, 5, 0, id="falsy-kept"),
            pytest.param("x", None, "x", id="value-kept"),
        ],
    )
    def test_core_behavior(self, value, default, expected):
        assert ifnotunset(value, default=default) == expected

    def test_default_factory(self):
        assert ifnotunset(UNSET, default_factory=list) == []

    def test_factory_not_called_when_set(self):
        def factory():
            raise AssertionError("must not be called")

        assert ifnotunset(3, default_factory=factory) == 3

    def test_raises_when_both_default_and_factory(self):
        with pytest.raises(ValueError, match="both default and default_factory"):
            ifnotunset(UNSET, default=1, default_factory=list)
