from types import SimpleNamespace

import pytest

from display.field_types import slugify
from display.render import (
    duration_days_for,
    format_list_value,
    format_pros_cons_value,
    offer_name,
    person_count_for,
    price_comparison,
    render_cell,
)


def _columns(*labels):
    return [SimpleNamespace(field_id=slugify(label), label=label) for label in labels]


def test_format_list_value():
    assert format_list_value("Wifi\nBasen\n\n- Parking") == "• Wifi\n• Basen\n- Parking"
    assert format_list_value("Tylko wifi") == "Tylko wifi"
    assert format_list_value("") == ""


def test_format_pros_cons_value():
    assert format_pros_cons_value("Blisko plaży\n\n Tanio ", True) == "✅ Blisko plaży\n✅ Tanio"
    assert format_pros_cons_value("Daleko", False) == "❌ Daleko"


def test_render_pros_and_cons():
    assert render_cell("zalety", "Zalety", "Basen")["text"] == "✅ Basen"
    cell = render_cell("wady", "Wady", "Daleko")
    assert cell["kind"] == "pros_cons"
    assert cell["text"] == "❌ Daleko"


def test_render_link_requires_http():
    assert render_cell("link", "Link", "https://booking.com/x")["kind"] == "link"
    cell = render_cell("link", "Link", "www.booking.com/x")
    assert cell["kind"] == "text"
    assert cell["text"] == "www.booking.com/x"


def test_render_room_list():
    cell = render_cell("pokoje", "Pokoje", "2x dwuosobowy\nApartament")
    assert cell["kind"] == "list"
    assert cell["text"] == "• 2x dwuosobowy\n• Apartament"


def test_render_empty_text_cell():
    cell = render_cell("hotel", "Hotel", "")
    assert cell["kind"] == "text"
    assert cell["empty"] is True


def test_render_price_without_amount_is_empty():
    cell = render_cell("cena", "Cena", "do ustalenia")
    assert cell["kind"] == "price"
    assert cell["empty"] is True
    assert cell["raw"] == "do ustalenia"


def test_render_breakdown_price_heading():
    value = '{"total": 3000, "type": "breakdown", "breakdown": {"flights": 1000, "food": 2000}}'
    cell = render_cell("cena", "Cena", value, 2, 10)
    assert cell["heading"] == "Koszty szczegółowe"
    assert [line["key"] for line in cell["breakdown"]] == ["flights", "food"]
    assert cell["summary"]["per_person"] == 1500
    assert cell["summary"]["show_per_person"] is True


@pytest.mark.parametrize(
    "value",
    ["{", "★", "/", "→", "| |", "{\"total\": null}", "★ 4,2/0", "WAW →", "\n\n", "💥"],
)
@pytest.mark.parametrize(
    "field_id, label",
    [("cena", "Cena"), ("ocena", "Ocena"), ("lot", "Lot"), ("zalety", "Zalety")],
)
def test_malformed_values_never_raise(field_id, label, value):
    cell = render_cell(field_id, label, value)
    assert cell["raw"] == value


def test_person_count_and_duration_lookup():
    columns = _columns("Hotel", "Osoby", "Ilość nocy")
    assert person_count_for({"osoby": "4 dorosłych"}, columns) == 4
    assert duration_days_for({"ilo-nocy": "10"}, columns) == 10

    # Missing or unreadable values fall back to defaults
    assert person_count_for({"osoby": "dużo"}, columns) == 1
    assert duration_days_for({}, columns) == 7
    assert person_count_for({}, _columns("Hotel")) == 1


def test_offer_name():
    assert offer_name({"destination": "Rodos"}, 0) == "Rodos"
    assert offer_name({"hotel": "Atrium"}, 0) == "Atrium"
    assert offer_name({"lokalizacja": "Lindos"}, 0) == "Lindos"
    assert offer_name({}, 2) == "Oferta 3"


def test_price_comparison_prefers_total_column():
    columns = _columns("Cena za osobę", "Suma")
    offers = [
        ("a", {"cena-za-osob": "100", "suma": '{"total": 2400}'}),
        ("b", {"cena-za-osob": "200", "suma": "0"}),
    ]
    rows = price_comparison(offers, columns)
    assert len(rows) == 1
    assert rows[0]["id"] == "a"
    assert rows[0]["name"] == "Oferta 1"
    assert rows[0]["totalPrice"] == 2400


def test_out_of_range_counts_fall_back_to_defaults():
    columns = _columns("Osoby", "Dni")
    assert person_count_for({"osoby": "9" * 400}, columns) == 1
    assert duration_days_for({"dni": "20000"}, columns) == 7
