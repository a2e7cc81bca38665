import pytest

from moodboard.catalog import MOODS, PALETTES, ROOM_TYPES, STYLES, TIMEFRAMES
from moodboard.normalizer import normalize, normalize_hints, normalize_record
from moodboard.records import AttributeRecord, DesignHints

SMALL = ["Eclectic", "Modern"]


def test_exact_match_is_case_insensitive():
    assert normalize("eclectic", SMALL) == "Eclectic"


def test_value_containing_an_entry():
    assert normalize("Eclectic boho mix", SMALL) == "Eclectic"


def test_entry_containing_the_value():
    assert normalize("balcony", ROOM_TYPES) == "Balcony / Outdoor"


def test_unmatched_value_passes_through():
    assert normalize("Zen Garden", SMALL) == "Zen Garden"


def test_exact_match_beats_earlier_substring_match():
    assert normalize("minimal", ["Minimalist", "Minimal"]) == "Minimal"


def test_first_substring_match_in_catalog_order_wins():
    assert normalize("art", ["Art Deco", "Modern Art"]) == "Art Deco"


@pytest.mark.parametrize("value", ["", "   "])
def test_blank_values_are_left_alone(value):
    assert normalize(value, STYLES) == value


@pytest.mark.parametrize("catalog", [ROOM_TYPES, STYLES, MOODS, PALETTES])
@pytest.mark.parametrize("value", [
    "balcony", "Japandi living", "warm neutrals", "COZY", "Zen Garden", "Art deco glam", "muted",
])
def test_normalize_is_idempotent(catalog, value):
    once = normalize(value, catalog)
    assert normalize(once, catalog) == once


def test_normalize_record_touches_only_catalog_fields():
    record = AttributeRecord(
        room_type="living room",
        aesthetic_style="scandinavian",
        theme_mood="calm and serene",
        color_palette="Muted jewel tones",
        notes="living room",
    )

    out = normalize_record(record)

    assert out.room_type == "Living room"
    assert out.aesthetic_style == "Scandinavian"
    assert out.theme_mood == "Calm"
    assert out.color_palette == "Muted jewel tones"
    assert out.notes == "living room"
    assert record.room_type == "living room"


def test_normalize_hints_includes_project_fields():
    hints = normalize_hints(DesignHints(timeframe="flexible", budget="Zero"))
    assert hints.timeframe == TIMEFRAMES.options[1]
    assert hints.budget == "Zero"
