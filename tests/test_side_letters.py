"""Tests for the box model."""

from itertools import combinations

import pytest

from letterboxed import InvalidConfiguration, LetterNotOnBoard, SideLetters
from letterboxed.letters import index_of, mask_of
from letterboxed.side_letters import OFF_BOARD

SIDES = ["ABC", "DEF", "GHI", "JKL"]


class TestValidBoxes:
    """Test construction of valid boxes."""

    def test_sides_and_letters(self):
        """Sides keep their order; letters are listed side by side."""
        box = SideLetters(SIDES)
        assert box.sides == ("ABC", "DEF", "GHI", "JKL")
        assert box.letters == "ABCDEFGHIJKL"
        assert box.mask == mask_of("ABCDEFGHIJKL")

    def test_lowercase_and_letter_lists(self):
        """Groups may be lowercase strings or lists of letters."""
        box = SideLetters(["rsh", list("wkb"), "del", ("y", "i", "a")])
        assert box.sides == ("RSH", "WKB", "DEL", "YIA")
        assert box.sorted_letters == "ABDEHIKLRSWY"

    def test_twelve_distinct_letters(self):
        """A valid box always has twelve pairwise distinct letters."""
        box = SideLetters(["rsh", "wkb", "del", "yia"])
        assert len(set(box.letters)) == 12

    def test_str(self):
        """The box renders as its sides joined with dashes."""
        assert str(SideLetters(SIDES)) == "ABC-DEF-GHI-JKL"

    def test_equality_and_hash(self):
        """Boxes compare by their sides."""
        assert SideLetters(SIDES) == SideLetters([s.lower() for s in SIDES])
        assert hash(SideLetters(SIDES)) == hash(SideLetters(SIDES))
        assert SideLetters(SIDES) != SideLetters(["DEF", "ABC", "GHI", "JKL"])


class TestInvalidBoxes:
    """Test that malformed boxes are rejected."""

    def test_duplicate_letter_across_sides(self):
        """A letter on two sides is a configuration error."""
        with pytest.raises(InvalidConfiguration, match="more than once"):
            SideLetters(["ABC", "DEF", "GHI", "JKA"])

    def test_duplicate_letter_within_side(self):
        """A letter twice on one side is a configuration error."""
        with pytest.raises(InvalidConfiguration):
            SideLetters(["AAB", "DEF", "GHI", "JKL"])

    @pytest.mark.parametrize("side", ["AB", "ABCD", ""])
    def test_wrong_side_size(self, side):
        """Every side must have exactly three letters."""
        with pytest.raises(InvalidConfiguration, match="exactly 3"):
            SideLetters([side, "DEF", "GHI", "JKL"])

    @pytest.mark.parametrize("groups", [[], ["ABC"], ["ABC", "DEF", "GHI"], SIDES + ["MNO"]])
    def test_wrong_number_of_sides(self, groups):
        """A box must have exactly four sides."""
        with pytest.raises(InvalidConfiguration, match="4 sides"):
            SideLetters(groups)

    @pytest.mark.parametrize("side", ["AB1", "A-C", "AB ", "ABÉ"])
    def test_non_alphabet_letter(self, side):
        """Letters outside A-Z are rejected."""
        with pytest.raises(InvalidConfiguration, match="non-alphabet"):
            SideLetters([side, "DEF", "GHI", "JKL"])

    def test_invalid_configuration_is_value_error(self):
        """Configuration errors can be caught as ValueError."""
        with pytest.raises(ValueError):
            SideLetters(["ABC"])


class TestSideOf:
    """Test side lookup."""

    def test_side_of_every_box_letter(self):
        """side_of is defined on all twelve letters, given as letters or indices."""
        box = SideLetters(SIDES)
        for side_id, side in enumerate(SIDES):
            for letter in side:
                assert box.side_of(letter) == side_id
                assert box.side_of(letter.lower()) == side_id
                assert box.side_of(index_of(letter)) == side_id

    @pytest.mark.parametrize("letter", ["M", "Z", "z", "", "1", 0, 27, index_of("Q")])
    def test_side_of_other_letters_fails(self, letter):
        """side_of fails for anything that is not one of the twelve letters."""
        box = SideLetters(SIDES)
        with pytest.raises(LetterNotOnBoard):
            box.side_of(letter)

    def test_side_table(self):
        """The lookup table holds side ids for box letters and OFF_BOARD elsewhere."""
        box = SideLetters(SIDES)
        assert len(box.side_table) == 27
        assert box.side_table[0] == OFF_BOARD
        assert box.side_table[index_of("E")] == 1
        assert box.side_table[index_of("Z")] == OFF_BOARD
        assert not box.side_table.flags.writeable


class TestForbiddenPairs:
    """Test same-side letter pairs."""

    def test_same_side_pairs_are_forbidden(self):
        """Every ordered pair from one side, doubled letters included, is forbidden."""
        box = SideLetters(SIDES)
        assert len(box.forbidden_pairs) == 4 * 9
        for pair in ["AA", "AB", "BA", "CB", "EF", "IG", "LK", "ab"]:
            assert box.is_forbidden_pair(pair)

    def test_different_side_pairs_are_allowed(self):
        """Pairs of letters from different sides are allowed."""
        box = SideLetters(SIDES)
        for a, b in combinations(box.letters, 2):
            if box.side_of(a) != box.side_of(b):
                assert not box.is_forbidden_pair(a + b)
                assert not box.is_forbidden_pair(b + a)

    @pytest.mark.parametrize("pair", ["", "A", "ABC", "A1", "-B"])
    def test_malformed_pairs(self, pair):
        """Only two alphabet letters can be checked."""
        with pytest.raises(ValueError):
            SideLetters(SIDES).is_forbidden_pair(pair)
