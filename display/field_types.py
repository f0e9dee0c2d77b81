"""Keyword heuristics that decide how a column is displayed.

Every check is a case-insensitive substring match against both the column's
``field_id`` and its ``label``. Keywords cover Polish and English labels.
"""

import re
from enum import Enum


class FieldType(str, Enum):
    PRICE = "price"
    RATING = "rating"
    FLIGHT = "flight"
    ROOM = "room"
    AMENITIES = "amenities"
    PROS_CONS = "pros_cons"
    LINK = "link"
    LOCATION = "location"
    CATEGORY = "category"
    TEXT = "text"


PRICE_KEYWORDS = ("cena", "price", "koszt", "cost", "kwota", "amount", "suma", "total", "w-sumie")
PRICE_NEGATIVE_KEYWORDS = ("ocena", "rating", "review", "score", "note")
RATING_KEYWORDS = ("ocena", "rating", "review", "score", "gwiazdka", "star", "opinion")
ROOM_KEYWORDS = (
    "pokoj", "pokoje", "room", "rooms", "accommodation",
    "noclegi", "willa", "villa", "apartament",
)
FLIGHT_KEYWORDS = ("lot", "flight", "samolot", "wylot", "powrot", "departure", "arrival", "return")
AMENITIES_KEYWORDS = ("udogodnienia", "amenities", "facilities", "wyposazenie", "equipment")
PROS_CONS_KEYWORDS = (
    "zalety", "wady", "pros", "cons", "advantages", "disadvantages", "plus", "minus",
)
LINK_KEYWORDS = ("link", "url", "strona", "website", "booking", "rezerwacja")
LOCATION_KEYWORDS = ("lokalizacja", "location")
CATEGORY_KEYWORDS = ("kategoria", "category")
POSITIVE_KEYWORDS = ("zalety", "pros")
TOTAL_PRICE_KEYWORDS = ("suma", "total", "w-sumie")

DEFAULT_ICON = "Hash"

# Checked in this order when suggesting an icon for a new column
ICONS = {
    FieldType.PRICE: "DollarSign",
    FieldType.RATING: "Star",
    FieldType.FLIGHT: "Plane",
    FieldType.ROOM: "Bed",
    FieldType.AMENITIES: "Wifi",
    FieldType.PROS_CONS: "CheckCircle",
    FieldType.LINK: "ExternalLink",
    FieldType.LOCATION: "MapPin",
    FieldType.CATEGORY: "Building",
}


def _matches(field_id: str, label: str, keywords) -> bool:
    field_lower = (field_id or "").lower()
    label_lower = (label or "").lower()
    return any(k in field_lower or k in label_lower for k in keywords)


def _label_matches(label: str, keywords) -> bool:
    label_lower = (label or "").lower()
    return any(k in label_lower for k in keywords)


def is_price_field(field_id: str, label: str) -> bool:
    if _matches(field_id, label, PRICE_NEGATIVE_KEYWORDS):
        return False
    return _matches(field_id, label, PRICE_KEYWORDS)


def is_rating_field(field_id: str, label: str) -> bool:
    return _matches(field_id, label, RATING_KEYWORDS)


def is_room_field(field_id: str, label: str) -> bool:
    return _matches(field_id, label, ROOM_KEYWORDS)


def is_flight_field(field_id: str, label: str) -> bool:
    return _matches(field_id, label, FLIGHT_KEYWORDS)


def is_amenities_field(field_id: str, label: str) -> bool:
    return _matches(field_id, label, AMENITIES_KEYWORDS)


def is_pros_cons_field(field_id: str, label: str) -> bool:
    return _matches(field_id, label, PROS_CONS_KEYWORDS)


def is_link_field(field_id: str, label: str) -> bool:
    return _matches(field_id, label, LINK_KEYWORDS)


def is_positive_field(label: str) -> bool:
    """Pros/cons columns whose label names advantages get a check mark."""
    return _label_matches(label, POSITIVE_KEYWORDS)


def is_total_price_field(label: str) -> bool:
    return _label_matches(label, TOTAL_PRICE_KEYWORDS)


def is_person_count_field(field_id: str, label: str) -> bool:
    field_lower = (field_id or "").lower()
    label_lower = (label or "").lower()
    return (
        "osob" in field_lower
        or "osob" in label_lower
        or "person" in field_lower
        or "person" in label_lower
        or "people" in field_lower
    )


def is_duration_field(field_id: str, label: str) -> bool:
    field_lower = (field_id or "").lower()
    label_lower = (label or "").lower()
    return (
        any(k in field_lower for k in ("dni", "days", "duration"))
        or any(k in label_lower for k in ("dni", "days", "noc"))
    )


def detect_field_type(field_id: str, label: str) -> FieldType:
    if is_price_field(field_id, label):
        return FieldType.PRICE
    if is_rating_field(field_id, label):
        return FieldType.RATING
    if is_flight_field(field_id, label):
        return FieldType.FLIGHT
    if is_room_field(field_id, label):
        return FieldType.ROOM
    if is_amenities_field(field_id, label):
        return FieldType.AMENITIES
    if is_pros_cons_field(field_id, label):
        return FieldType.PROS_CONS
    if is_link_field(field_id, label):
        return FieldType.LINK
    # Location and category are only recognised from the label
    if _label_matches(label, LOCATION_KEYWORDS):
        return FieldType.LOCATION
    if _label_matches(label, CATEGORY_KEYWORDS):
        return FieldType.CATEGORY
    return FieldType.TEXT


def suggest_icon(field_id: str, label: str) -> str:
    return ICONS.get(detect_field_type(field_id, label), DEFAULT_ICON)


def slugify(label: str) -> str:
    """Lowercase, collapse anything outside ``[a-z0-9]`` into ``-``."""
    slug = re.sub(r"[^a-z0-9]+", "-", (label or "").lower().strip())
    return slug.strip("-")
