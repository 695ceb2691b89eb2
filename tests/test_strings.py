"""Tests for string matching helpers."""

from cmdtree.helpers import MATCH_EXACT, MATCH_NONE, edit_distance, parse_integer, prefix_score


class TestPrefixScore:
    """Test prefix scoring of command names."""

    def test_exact_match(self):
        """Equal strings score MATCH_EXACT."""
        assert prefix_score("status", "status") == MATCH_EXACT

    def test_prefix_scores_length(self):
        """A proper prefix scores its own length."""
        assert prefix_score("status", "st") == 2
        assert prefix_score("status", "s") == 1

    def test_mismatch(self):
        """A non-prefix scores MATCH_NONE."""
        assert prefix_score("status", "sx") == MATCH_NONE

    def test_score_grows_with_prefix(self):
        """Longer valid prefixes never score lower."""
        scores = [prefix_score("status", word) for word in ("s", "st", "sta", "stat", "statu", "status")]
        assert scores == sorted(scores)
        assert scores[-1] == MATCH_EXACT

    def test_longer_than_name(self):
        """A word longer than the name never matches."""
        assert prefix_score("st", "status") == MATCH_NONE

    def test_empty_word(self):
        """The empty word matches nothing."""
        assert prefix_score("status", "") == MATCH_NONE


class TestEditDistance:
    """Test Levenshtein distance."""

    def test_identical(self):
        """Identical strings have distance zero."""
        assert edit_distance("abc", "abc") == 0

    def test_classic(self):
        """kitten -> sitting is three edits."""
        assert edit_distance("kitten", "sitting") == 3

    def test_empty(self):
        """Distance to the empty string is the length."""
        assert edit_distance("", "abc") == 3
        assert edit_distance("abcd", "") == 4

    def test_symmetric(self):
        """Argument order does not matter."""
        assert edit_distance("stats", "status") == edit_distance("status", "stats") == 1


    def test_triangle_inequality(self):
        """d(a, c) <= d(a, b) + d(b, c)."""
        triples = [
            ("status", "start", "stop"),
            ("kitten", "sitting", "mitten"),
            ("", "abc", "abd"),
            ("net", "show", "set"),
        ]
        for a, b, c in triples:
            assert edit_distance(a, c) <= edit_distance(a, b) + edit_distance(b, c)


class TestParseInteger:
    """Test the integer scanner."""

    def test_decimal(self):
        """Plain decimals parse."""
        assert parse_integer("42") == (42, False)

    def test_negative(self):
        """A leading minus is reported separately."""
        assert parse_integer("-7") == (7, True)

    def test_hex(self):
        """A lowercase 0x prefix selects hex."""
        assert parse_integer("0x1F") == (31, False)
        assert parse_integer("-0x10") == (16, True)

    def test_rejects_garbage(self):
        """Non-numeric text and bare prefixes are rejected."""
        assert parse_integer("12a") is None
        assert parse_integer("0x") is None
        assert parse_integer("-") is None
        assert parse_integer("") is None
        assert parse_integer("0X10") is None

    def test_wraps_to_64_bits(self):
        """Magnitudes wrap at 2**64."""
        assert parse_integer(str(2**64 + 5)) == (5, False)

    def test_lenient_stops_at_space(self):
        """Lenient mode ignores text after a space."""
        assert parse_integer("12 34", lenient=True) == (12, False)
        assert parse_integer("12 34") is None
