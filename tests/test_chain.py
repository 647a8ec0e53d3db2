"""Tests for category chain walking.

Functions under test in mapattrs/resolving/chain.py.
"""

from mapattrs.resolving.chain import iter_category_chain, parent_of


class TestParentOf:
    """Test single-step parent derivation."""

    def test_three_segments(self):
        assert parent_of("a:b:c") == "a:b"

    def test_two_segments(self):
        assert parent_of("a:b") == "a"

    def test_single_segment_has_no_parent(self):
        assert parent_of("a") is None

    def test_empty_string_has_no_parent(self):
        assert parent_of("") is None

    def test_trailing_colon(self):
        assert parent_of("a:") == "a"

    def test_leading_colon_gives_empty_parent(self):
        assert parent_of(":b") == ""

    def test_only_last_colon_is_split(self):
        assert parent_of("region::city") == "region:"


class TestIterCategoryChain:
    """Test the full ancestor sequence."""

    def test_nearest_first_and_includes_start(self):
        assert list(iter_category_chain("region:city:capital")) == [
            "region:city:capital",
            "region:city",
            "region",
        ]

    def test_single_segment(self):
        assert list(iter_category_chain("poi")) == ["poi"]

    def test_empty_id_is_walked_once(self):
        assert list(iter_category_chain("")) == [""]

    def test_leading_colon_ends_at_empty_id(self):
        assert list(iter_category_chain(":b")) == [":b", ""]

    def test_each_step_strictly_shorter(self):
        chain = list(iter_category_chain("a:b:c:d:e"))
        assert all(len(a) > len(b) for a, b in zip(chain, chain[1:]))
