import json

import pytest

from moodboard.errors import EmptyResultError, MalformedResponseError, ResponseParseError
from moodboard.records import AttributeRecord
from moodboard.sanitizer import ensure_usable, extract_record, parse, sanitize

INNER = json.dumps({
    "roomType": "Balcony",
    "aestheticStyle": "Eclectic",
    "colorPalette": "Green, Brown",
    "notes": "",
}, indent=2)


def test_three_wrapping_styles_parse_identically():
    tagged = f"```json\n{INNER}\n```"
    untagged = f"```\n{INNER}\n```"
    raw = INNER

    records = [parse(sanitize(text)) for text in (tagged, untagged, raw)]

    assert records[0] == records[1] == records[2]
    assert records[0].room_type == "Balcony"
    assert records[0].color_palette == "Green, Brown"


def test_fence_with_surrounding_prose():
    reply = f"Here is the analysis you asked for:\n```json\n{INNER}\n```\nLet me know!"
    assert extract_record(reply).aesthetic_style == "Eclectic"


def test_unfenced_object_inside_prose():
    reply = 'Sure. {"roomType": "Kitchen", "themeMood": "Airy"} Hope that helps.'
    record = extract_record(reply)
    assert record.room_type == "Kitchen"
    assert record.theme_mood == "Airy"


def test_single_line_fence():
    assert sanitize('```{"roomType": "Foyer"}```') == '{"roomType": "Foyer"}'


def test_truncated_fence_without_closing_marker():
    assert extract_record('```json\n{"roomType": "Bathroom"}').room_type == "Bathroom"


def test_no_object_boundary_is_malformed():
    with pytest.raises(MalformedResponseError) as info:
        sanitize("I could not analyze this image, sorry.")
    assert "sorry" not in info.value.message
    assert info.value.raw_text.startswith("I could not")


def test_invalid_json_is_parse_error():
    with pytest.raises(ResponseParseError):
        extract_record('```json\n{"roomType": "Bedroom",}\n```')


def test_non_object_json_is_parse_error():
    with pytest.raises(ResponseParseError):
        parse('[{"roomType": "Bedroom"}]')


def test_non_string_and_missing_fields_become_empty():
    record = parse(json.dumps({
        "roomType": 5,
        "aestheticStyle": ["Boho"],
        "themeMood": None,
        "colorPalette": "Sage",
        "unexpected": "ignored",
    }))

    assert record.room_type == ""
    assert record.aesthetic_style == ""
    assert record.theme_mood == ""
    assert record.color_palette == "Sage"
    assert record.lighting_preferences == ""
    assert set(record.to_wire()) == set(AttributeRecord().to_wire())


@pytest.mark.parametrize("reply", [None, "", "   ", "{}", "  ok  "])
def test_too_short_reply_is_empty_result(reply):
    with pytest.raises(EmptyResultError):
        ensure_usable(reply)


def test_usable_reply_is_returned_unchanged():
    assert ensure_usable(INNER) == INNER
