import logging
import math

from core.config import settings
from display.field_types import (
    is_amenities_field,
    is_duration_field,
    is_flight_field,
    is_link_field,
    is_person_count_field,
    is_positive_field,
    is_price_field,
    is_pros_cons_field,
    is_rating_field,
    is_room_field,
    is_total_price_field,
)
from display.flight import parse_flight
from display.numbers import MAX_COUNT, parse_int
from display.price import (
    breakdown_lines,
    extract_total,
    format_currency,
    parse_price,
    price_summary,
)
from display.rating import parse_rating, review_label

logger = logging.getLogger(__name__)

BULLET = "•"
POSITIVE_MARK = "✅"
NEGATIVE_MARK = "❌"


def format_list_value(value: str) -> str:
    """Bullet every line of a multi-line value; single lines are kept as-is."""
    if not value:
        return ""
    lines = [line for line in value.split("\n") if line.strip()]
    if len(lines) <= 1:
        return value
    return "\n".join(
        line if line.startswith((BULLET, "-")) else f"{BULLET} {line.strip()}"
        for line in lines
    )


def format_pros_cons_value(value: str, is_positive: bool = True) -> str:
    if not value:
        return ""
    mark = POSITIVE_MARK if is_positive else NEGATIVE_MARK
    return "\n".join(f"{mark} {line.strip()}" for line in value.split("\n") if line.strip())


def _render_price(label, value, person_count, duration_days):
    price = parse_price(value, label)
    summary = price_summary(price, person_count, duration_days)
    if not math.isfinite(summary.grand_total):
        logger.debug("Price total out of range, showing the raw value: %r", value)
        return {
            "empty": False,
            "price": None,
            "summary": None,
            "heading": "Cena",
            "breakdown": [],
            "formatted": dict.fromkeys(("total", "perPerson", "perDay", "perPersonPerDay"), "N/A"),
        }
    currency = price.currency
    has_breakdown = bool(price.breakdown and price.breakdown.has_amounts())
    if price.is_all_inclusive:
        heading = "All-Inclusive"
    elif has_breakdown:
        heading = "Koszty szczegółowe"
    else:
        heading = "Cena"
    return {
        "empty": not value or summary.grand_total == 0,
        "price": price.model_dump(by_alias=True),
        "summary": summary.model_dump(),
        "heading": heading,
        "breakdown": breakdown_lines(price),
        "formatted": {
            "total": format_currency(summary.grand_total, currency),
            "perPerson": format_currency(summary.per_person, currency),
            "perDay": format_currency(summary.per_day, currency),
            "perPersonPerDay": format_currency(summary.per_person_per_day, currency),
        },
    }


def _render_rating(value):
    rating = parse_rating(value)
    if rating is None:
        return {"empty": True, "rating": None}
    payload = {"empty": False, "rating": rating.model_dump(by_alias=True), "parsed": rating.has_score}
    if rating.has_score:
        normalized = rating.normalized_stars
        payload["normalizedStars"] = round(normalized, 2) if math.isfinite(normalized) else None
        if rating.review_count:
            payload["reviews"] = f"{rating.review_count} {review_label(rating.review_count)}"
    return payload


def _render_flight(value):
    flight = parse_flight(value)
    if flight is None:
        return {"empty": True, "flight": None}
    return {
        "empty": False,
        "flight": flight.model_dump(by_alias=True),
        "parsed": flight.is_parsed,
    }


def render_cell(
    field_id: str,
    label: str,
    value: str | None,
    person_count: int | None = None,
    duration_days: int | None = None,
) -> dict:
    """Describe how a single offer cell should be displayed.

    The result always carries the raw value so a client can fall back to it;
    parsers never raise on malformed text.
    """
    value = value or ""
    if person_count is None:
        person_count = settings.DEFAULT_PERSON_COUNT
    if duration_days is None:
        duration_days = settings.DEFAULT_DURATION_DAYS

    cell = {"fieldId": field_id, "label": label, "raw": value}

    if is_price_field(field_id, label):
        cell.update(kind="price", **_render_price(label, value, person_count, duration_days))
    elif is_rating_field(field_id, label):
        cell.update(kind="rating", **_render_rating(value))
    elif is_flight_field(field_id, label):
        cell.update(kind="flight", **_render_flight(value))
    elif not value.strip():
        cell.update(kind="text", empty=True, text="")
    elif is_link_field(field_id, label) and value.startswith("http"):
        cell.update(kind="link", empty=False, href=value, text=value)
    elif is_pros_cons_field(field_id, label):
        text = format_pros_cons_value(value, is_positive_field(label))
        cell.update(kind="pros_cons", empty=False, text=text)
    elif is_amenities_field(field_id, label) or is_room_field(field_id, label):
        cell.update(kind="list", empty=False, text=format_list_value(value))
    else:
        cell.update(kind="text", empty=False, text=value)
    return cell


def _find_column(columns, predicate):
    return next((c for c in columns if predicate(c.field_id, c.label)), None)


def person_count_for(values: dict[str, str], columns) -> int:
    column = _find_column(columns, is_person_count_field)
    if column is None:
        return settings.DEFAULT_PERSON_COUNT
    count = parse_int(values.get(column.field_id) or "1")
    if count is None or count > MAX_COUNT:
        return settings.DEFAULT_PERSON_COUNT
    return count


def duration_days_for(values: dict[str, str], columns) -> int:
    column = _find_column(columns, is_duration_field)
    if column is None:
        return settings.DEFAULT_DURATION_DAYS
    days = parse_int(values.get(column.field_id) or str(settings.DEFAULT_DURATION_DAYS))
    if days is None or days > MAX_COUNT:
        return settings.DEFAULT_DURATION_DAYS
    return days


def render_offer(values: dict[str, str], columns) -> list[dict]:
    """Render every column of one offer in column order."""
    person_count = person_count_for(values, columns)
    duration_days = duration_days_for(values, columns)
    return [
        render_cell(c.field_id, c.label, values.get(c.field_id, ""), person_count, duration_days)
        for c in columns
    ]


def offer_name(values: dict[str, str], position: int) -> str:
    return (
        values.get("destination")
        or values.get("hotel")
        or values.get("lokalizacja")
        or f"Oferta {position + 1}"
    )


def price_comparison(offers: list[tuple[str, dict[str, str]]], columns) -> list[dict]:
    """One row per offer with a positive total, as in the comparison table.

    ``offers`` holds ``(offer_id, values)`` pairs in display order.
    """
    price_columns = [c for c in columns if is_price_field(c.field_id, c.label)]
    if not price_columns:
        return []
    main_column = next(
        (c for c in price_columns if is_total_price_field(c.label)), price_columns[0]
    )
    logger.debug("Comparing prices on column %s", main_column.field_id)

    rows = []
    for position, (offer_id, values) in enumerate(offers):
        person_count = person_count_for(values, columns)
        duration_days = duration_days_for(values, columns)
        total = extract_total(values.get(main_column.field_id) or "0")
        if total <= 0:
            continue

        per_person = total / person_count if person_count > 1 else total
        per_day = total / duration_days if duration_days > 0 else total
        if duration_days > 0 and person_count > 0:
            per_person_per_day = total / (duration_days * person_count)
        else:
            per_person_per_day = total
        rows.append(
            {
                "id": offer_id,
                "name": offer_name(values, position),
                "totalPrice": total,
                "pricePerPerson": per_person,
                "pricePerDay": per_day,
                "pricePerPersonPerDay": per_person_per_day,
                "personCount": person_count,
                "durationDays": duration_days,
            }
        )
    return rows
