from display.flight import parse_flight


def test_parse_full_flight():
    flight = parse_flight("WAW 15.09 05:55 → RHO 09:30 | Enter Air ENT7991")
    assert flight.is_parsed
    assert flight.from_airport == "WAW"
    assert flight.to_airport == "RHO"
    assert flight.date == "15.09"
    assert flight.departure_time == "05:55"
    assert flight.arrival_time == "09:30"
    assert flight.airline == "Enter Air"
    assert flight.flight_number == "ENT7991"
    assert flight.raw_string is None


def test_parse_minimal_flight():
    flight = parse_flight("KTW-CHQ")
    assert flight.is_parsed
    assert flight.from_airport == "KTW"
    assert flight.to_airport == "CHQ"
    assert flight.date is None
    assert flight.departure_time is None
    assert flight.airline is None


def test_airport_codes_are_case_insensitive():
    flight = parse_flight("  waw → rho 09:30 | Ryanair  ")
    assert flight.from_airport == "waw"
    assert flight.to_airport == "rho"
    assert flight.arrival_time == "09:30"
    assert flight.airline == "Ryanair"
    assert flight.flight_number is None


def test_unrecognised_flight_keeps_raw_text():
    flight = parse_flight("  Lot bezpośredni rano ")
    assert not flight.is_parsed
    assert flight.raw_string == "Lot bezpośredni rano"
    assert flight.from_airport == ""


def test_blank_flight():
    assert parse_flight("") is None
    assert parse_flight("   ") is None
    assert parse_flight(None) is None


def test_flight_serializes_with_short_keys():
    data = parse_flight("WAW → RHO").model_dump(by_alias=True)
    assert data["from"] == "WAW"
    assert data["to"] == "RHO"
    assert "departureTime" in data
