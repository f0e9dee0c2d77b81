"""Flight segment cells.

Expected format (date, times and the airline part are optional)::

    WAW 15.09 05:55 → RHO 09:30 | Enter Air ENT7991
"""

import re

from pydantic import BaseModel, ConfigDict, Field

FLIGHT_RE = re.compile(
    r"^([A-Z]{3})\s*(?:(\d{2}\.\d{2})\s*(\d{2}:\d{2}))?\s*[→-]\s*([A-Z]{3})\s*(\d{2}:\d{2})?\s*(?:\|\s*(.+))?",
    re.IGNORECASE,
)
# Trailing upper-case token is the flight number
AIRLINE_RE = re.compile(r"^(.*?)(?:\s+([A-Z0-9]+))?$")


class ParsedFlight(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    from_airport: str = Field(default="", alias="from")
    to_airport: str = Field(default="", alias="to")
    date: str | None = None
    departure_time: str | None = Field(default=None, alias="departureTime")
    arrival_time: str | None = Field(default=None, alias="arrivalTime")
    airline: str | None = None
    flight_number: str | None = Field(default=None, alias="flightNumber")
    raw_string: str | None = Field(default=None, alias="rawString")

    @property
    def is_parsed(self) -> bool:
        return bool(self.from_airport and self.to_airport)


def parse_flight(value: str | None) -> ParsedFlight | None:
    if not value or not value.strip():
        return None

    text = value.strip()
    match = FLIGHT_RE.match(text)
    if not match:
        return ParsedFlight(raw_string=text)

    from_airport, date, departure, to_airport, arrival, additional = match.groups()
    flight = ParsedFlight(
        from_airport=from_airport or "",
        to_airport=to_airport or "",
        date=date or None,
        departure_time=departure or None,
        arrival_time=arrival or None,
    )
    if additional:
        airline_match = AIRLINE_RE.match(additional)
        if airline_match:
            flight.airline = airline_match.group(1).strip()
            flight.flight_number = airline_match.group(2) or None
        else:
            flight.airline = additional.strip()
    return flight
