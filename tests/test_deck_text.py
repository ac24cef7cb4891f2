import pytest

from deckdiff.analysis.merge import compute_merge, merge_to_text
from deckdiff.parsers.deck_text import clean_card_name, deck_to_text, parse_deck_text


class TestParseDeckText:
    def test_sideboard_is_dropped(self) -> None:
        text = "4 Lightning Bolt\n4 Goblin Guide\n\nSideboard\n3 Smash to Smithereens"

        assert parse_deck_text(text) == {"Lightning Bolt": 4, "Goblin Guide": 4}

    def test_arena_export(self, sample_arena_export: str) -> None:
        deck = parse_deck_text(sample_arena_export)

        assert deck == {"Lightning Bolt": 4, "Monastery Swiftspear": 4, "Mountain": 20}

    def test_sideboard_header_is_case_insensitive(self) -> None:
        text = "4 Lightning Bolt\nSIDEBOARD:\n2 Abrade"

        assert parse_deck_text(text) == {"Lightning Bolt": 4}

    def test_sideboard_needs_word_boundary(self) -> None:
        """Only a whole-word "Sideboard" ends the main deck."""
        text = "Sideboarding notes\n4 Lightning Bolt"

        assert parse_deck_text(text) == {"Lightning Bolt": 4}

    def test_skips_deck_and_companion_headers(self) -> None:
        text = "Companion\n1 Lurrus of the Dream-Den\nDeck\n4 Lightning Bolt"

        assert parse_deck_text(text) == {"Lurrus of the Dream-Den": 1, "Lightning Bolt": 4}

    def test_x_quantity_suffix(self) -> None:
        assert parse_deck_text("4x Lightning Bolt\n2X Shock") == {
            "Lightning Bolt": 4,
            "Shock": 2,
        }

    def test_bracket_and_paren_notations_are_equivalent(self) -> None:
        assert parse_deck_text("3 Foo [MOM]") == {"Foo": 3}
        assert parse_deck_text("3x Foo (MOM) 150") == {"Foo": 3}

    def test_repeated_names_are_summed(self) -> None:
        assert parse_deck_text("3 Foo [MOM]\n3x Foo (MOM) 150") == {"Foo": 6}

    def test_separator_variants_are_summed(self) -> None:
        text = "2 Fire // Ice (MH2) 290\n1 Fire///Ice"

        assert parse_deck_text(text) == {"Fire // Ice": 3}

    def test_malformed_lines_are_skipped(self) -> None:
        text = "// Burn\nLightning Bolt\n4 Lightning Bolt\nx4 Shock\n"

        assert parse_deck_text(text) == {"Lightning Bolt": 4}

    def test_windows_line_endings(self) -> None:
        assert parse_deck_text("4 Lightning Bolt\r\n2 Shock\r\n") == {
            "Lightning Bolt": 4,
            "Shock": 2,
        }

    def test_zero_quantity_is_dropped(self) -> None:
        assert parse_deck_text("0 Foo\n4 Bar") == {"Bar": 4}

    def test_zero_quantity_still_sums(self) -> None:
        assert parse_deck_text("0 Foo\n2 Foo") == {"Foo": 2}

    def test_empty_input(self) -> None:
        assert parse_deck_text("") == {}
        assert parse_deck_text("\n\n   \n") == {}


class TestCleanCardName:
    def test_alphanumeric_collector_number(self) -> None:
        assert clean_card_name("Mountain (NEO) 290a") == "Mountain"

    def test_residual_trailing_number(self) -> None:
        assert clean_card_name("Mountain 290") == "Mountain"

    def test_keeps_commas(self) -> None:
        assert clean_card_name("Sheoldred, the Apocalypse (DMU) 107") == (
            "Sheoldred, the Apocalypse"
        )

    def test_hyphenated_set_code(self) -> None:
        assert clean_card_name("Lightning Bolt (PRM-123)") == "Lightning Bolt"
        assert clean_card_name("Lightning Bolt (PLST) LEB-161") == "Lightning Bolt"

    @pytest.mark.parametrize(
        "remainder",
        ["Foo (ABC) (DEF)", "Foo 12 34", "Foo [A] [B]", "Foo [MOM] (MOM) 150", "Foo ///12"],
    )
    def test_cleaned_name_is_stable(self, remainder: str) -> None:
        cleaned = clean_card_name(remainder)

        assert clean_card_name(cleaned) == cleaned

    def test_stacked_set_codes(self) -> None:
        assert clean_card_name("Foo (ABC) (DEF)") == "Foo"
        assert clean_card_name("Foo 12 34") == "Foo"
        assert clean_card_name("Foo [A] [B]") == "Foo"


class TestDeckToText:
    def test_sorted_lines(self) -> None:
        assert deck_to_text({"Shock": 2, "Lightning Bolt": 4}) == "4 Lightning Bolt\n2 Shock"

    def test_merge_export_parses_back(self) -> None:
        left = parse_deck_text(
            "4 Lightning Bolt (LEB) 163\n2 Fire//Ice\n1 Foo [MOM]\n1 Bar (ABC) (DEF)\n2 Baz 12 34"
        )
        right = parse_deck_text("3 Lightning Bolt\n3 Monastery Swiftspear\n3 Qux [A] [B]")
        rows = compute_merge(left, right)

        reparsed = parse_deck_text(merge_to_text(rows))

        assert reparsed == {row.name: row.quantity for row in rows}
