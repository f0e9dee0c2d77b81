"""Price cells: parsing, derived amounts and pl-PL currency formatting.

A price cell holds either free text ("4 500 PLN", "1200 EUR za osobę") or
the JSON blob written back by the price editor::

    {"total": 5400, "currency": "PLN", "type": "breakdown",
     "isAllInclusive": false,
     "breakdown": {"flights": 1800, "accommodation": 3600, ...}}
"""

import json
import logging
import math
import re
from decimal import ROUND_HALF_UP, Decimal
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from display.numbers import parse_float

logger = logging.getLogger(__name__)

PriceType = Literal["total", "per-person", "breakdown"]

DEFAULT_CURRENCY = "PLN"
SUPPORTED_CURRENCIES = ("PLN", "EUR", "USD", "GBP")
CURRENCY_SYMBOLS = {"PLN": "zł", "EUR": "€"}
NBSP = "\u00a0"

BREAKDOWN_LABELS = {
    "flights": "✈️ Loty",
    "accommodation": "🏠 Noclegi",
    "food": "🍽️ Wyżywienie",
    "transport": "🚗 Transport",
    "activities": "🎯 Atrakcje",
    "climate": "🛡️ Opłata Klimatyczna",
    "other": "💼 Inne",
}

_CURRENCY_RE = re.compile(f"({'|'.join(SUPPORTED_CURRENCIES)})", re.IGNORECASE)
_NON_NUMERIC_RE = re.compile(r"[^\d.-]")


class PriceBreakdown(BaseModel):
    flights: float | None = None
    accommodation: float | None = None
    food: float | None = None
    transport: float | None = None
    activities: float | None = None
    climate: float | None = None
    other: float | None = None

    def sum(self) -> float:
        return sum(v for v in self.model_dump().values() if v is not None)

    def has_amounts(self) -> bool:
        return any(v for v in self.model_dump().values())


class PriceData(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    total: float = 0
    breakdown: PriceBreakdown | None = None
    currency: str = DEFAULT_CURRENCY
    type: PriceType = "total"
    is_all_inclusive: bool = Field(default=False, alias="isAllInclusive")

    def to_json(self) -> str:
        exclude = {"breakdown"} if self.breakdown is None else None
        return self.model_dump_json(by_alias=True, exclude=exclude)


class PriceSummary(BaseModel):
    grand_total: float
    per_person: float
    per_day: float
    per_person_per_day: float
    person_count: int
    duration_days: int
    show_per_person: bool
    show_per_person_per_day: bool


def _number(value) -> float | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        try:
            number = float(value)
        except OverflowError:
            return None
        return number if math.isfinite(number) else None
    if isinstance(value, str):
        return parse_float(value)
    return None


def _from_json(data: dict) -> PriceData:
    raw_breakdown = data.get("breakdown")
    if not isinstance(raw_breakdown, dict):
        raw_breakdown = {}
    breakdown = PriceBreakdown(
        **{key: _number(raw_breakdown.get(key)) for key in PriceBreakdown.model_fields}
    )

    price_type = data.get("type")
    if price_type not in ("total", "per-person", "breakdown"):
        price_type = "total"
    currency = data.get("currency")

    return PriceData(
        total=_number(data.get("total")) or 0,
        breakdown=breakdown,
        currency=currency if isinstance(currency, str) and currency else DEFAULT_CURRENCY,
        type=price_type,
        is_all_inclusive=bool(data.get("isAllInclusive")),
    )


def parse_price(value: str | None, label: str = "") -> PriceData:
    """Parse a stored price cell. Never raises; unreadable text becomes 0."""
    if not value or not value.strip():
        return PriceData()

    try:
        parsed = json.loads(value)
    except ValueError:
        logger.debug("Price value is not JSON, reading it as text: %r", value)
        parsed = None
    if isinstance(parsed, dict) and "total" in parsed:
        return _from_json(parsed)

    currency = DEFAULT_CURRENCY
    currency_match = _CURRENCY_RE.search(value)
    if currency_match:
        currency = currency_match.group(1).upper()

    total = parse_float(_NON_NUMERIC_RE.sub("", value)) or 0

    label_lower = (label or "").lower()
    per_person = "osob" in label_lower or "person" in label_lower
    all_inclusive = "inclusive" in label_lower or "all-in" in label_lower

    return PriceData(
        total=total,
        currency=currency,
        type="per-person" if per_person else "total",
        is_all_inclusive=all_inclusive,
    )


def extract_total(value: str | None) -> float:
    """Total of a price cell as used by the comparison table."""
    if not value:
        return 0
    try:
        parsed = json.loads(value)
    except ValueError:
        parsed = None
    if isinstance(parsed, dict):
        return _number(parsed.get("total")) or 0
    return parse_float(_NON_NUMERIC_RE.sub("", value)) or 0


def price_summary(price: PriceData, person_count: int, duration_days: int) -> PriceSummary:
    persons = person_count if person_count > 0 else 1
    days = duration_days if duration_days > 0 else 1
    per_person_rate = price.type == "per-person"

    base = price.total or 0
    grand_total = base * persons if per_person_rate else base

    return PriceSummary(
        grand_total=grand_total,
        per_person=base if per_person_rate else grand_total / persons,
        per_day=grand_total / days,
        per_person_per_day=grand_total / (days * persons),
        person_count=persons,
        duration_days=days,
        show_per_person=persons > 1 and (per_person_rate or price.type != "total"),
        show_per_person_per_day=persons > 1,
    )


def update_price(current: PriceData, **changes) -> PriceData:
    """Apply an edit the way the price editor does.

    Changing the breakdown recomputes the total from it and marks the price
    as a breakdown; typing a total over a breakdown turns it back into a
    plain total.
    """
    updated = current.model_copy(update=changes)
    if changes.get("breakdown") is not None:
        breakdown = changes["breakdown"]
        if isinstance(breakdown, dict):
            breakdown = PriceBreakdown(**breakdown)
        updated.breakdown = breakdown
        updated.total = breakdown.sum()
        updated.type = "breakdown"
    elif "total" in changes and updated.type == "breakdown":
        updated.type = "total"
    return updated


def update_breakdown(current: PriceData, key: str, amount: float | None) -> PriceData:
    if key not in PriceBreakdown.model_fields:
        raise ValueError(f"Unknown breakdown entry: {key}")
    breakdown = current.breakdown.model_dump() if current.breakdown else {}
    breakdown[key] = amount
    return update_price(current, breakdown=breakdown)


def format_currency(amount: float | None, currency: str = DEFAULT_CURRENCY) -> str:
    """Format like ``Intl.NumberFormat('pl-PL', {style: 'currency'})``.

    >>> format_currency(12345.5)
    '12\\xa0345,5\\xa0zł'
    """
    if amount is None or not math.isfinite(amount):
        return "N/A"

    rounded = Decimal(str(amount)).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
    negative = rounded < 0
    text = f"{abs(rounded):.2f}".rstrip("0").rstrip(".")
    int_part, _, frac = text.partition(".")

    # pl-PL only groups thousands from five integer digits up
    if len(int_part) >= 5:
        groups = []
        while int_part:
            groups.insert(0, int_part[-3:])
            int_part = int_part[:-3]
        int_part = NBSP.join(groups)

    number = f"{int_part},{frac}" if frac else int_part
    symbol = CURRENCY_SYMBOLS.get((currency or DEFAULT_CURRENCY).upper(), currency)
    return f"{'-' if negative else ''}{number}{NBSP}{symbol}"


def breakdown_lines(price: PriceData) -> list[dict]:
    """Non-zero breakdown entries with their display label and amount."""
    if price.breakdown is None:
        return []
    lines = []
    for key, amount in price.breakdown.model_dump().items():
        if not amount:
            continue
        lines.append(
            {
                "key": key,
                "label": BREAKDOWN_LABELS.get(key, key),
                "amount": amount,
                "formatted": format_currency(amount, price.currency),
            }
        )
    return lines
