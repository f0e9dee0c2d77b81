import csv
import io

from fastapi.testclient import TestClient
from sqlalchemy.exc import SQLAlchemyError


def _seed(make_column, make_offer):
    make_column("Destination")
    make_column("Osoby")
    make_column("Dni")
    make_column("W sumie")
    rodos = make_offer({"destination": "Rodos", "osoby": "2", "dni": "7", "w-sumie": "7000 PLN"})
    kreta = make_offer({"destination": "Kreta", "osoby": "2", "dni": "10", "w-sumie": "8000"})
    make_offer({"destination": "Malta", "w-sumie": ""})
    return rodos, kreta


def test_price_comparison_without_price_column(client: TestClient, make_column, make_offer):
    make_column("Hotel")
    make_offer({"hotel": "Hilton"})
    response = client.get("/api/comparison/prices")
    assert response.status_code == 200
    assert response.json() == []


def test_price_comparison(client: TestClient, make_column, make_offer):
    """
    Test GET /api/comparison/prices
    This test verifies that:
    1. Offers without a positive total are left out
    2. Per-person and per-day prices use the offer's own columns
    3. The cheapest offer is flagged for every metric
    """
    rodos, kreta = _seed(make_column, make_offer)

    response = client.get("/api/comparison/prices")
    assert response.status_code == 200
    rows = {row["name"]: row for row in response.json()}
    assert set(rows) == {"Rodos", "Kreta"}

    assert rows["Rodos"]["id"] == rodos["id"]
    assert rows["Rodos"]["totalPrice"] == 7000
    assert rows["Rodos"]["pricePerPerson"] == 3500
    assert rows["Rodos"]["pricePerDay"] == 1000
    assert rows["Rodos"]["pricePerPersonPerDay"] == 500
    assert rows["Rodos"]["formatted"]["totalPrice"] == "7000\u00a0zł"

    assert rows["Kreta"]["id"] == kreta["id"]
    assert rows["Kreta"]["pricePerDay"] == 800
    assert rows["Kreta"]["durationDays"] == 10

    assert rows["Rodos"]["bestTotal"] is True
    assert rows["Rodos"]["bestPerPerson"] is True
    assert rows["Kreta"]["bestTotal"] is False
    assert rows["Kreta"]["bestPerDay"] is True
    assert rows["Kreta"]["bestPerPersonPerDay"] is True


def test_price_comparison_plot(client: TestClient, make_column, make_offer):
    _seed(make_column, make_offer)
    response = client.get("/api/comparison/prices/plot")
    assert response.status_code == 200
    assert response.headers["content-type"] == "image/png"
    assert response.content.startswith(b"\x89PNG")


def test_price_comparison_plot_without_prices(client: TestClient):
    response = client.get("/api/comparison/prices/plot")
    assert response.status_code == 404


def test_export_csv(client: TestClient, make_column, make_offer):
    make_column("Hotel")
    make_column("Cena")
    offer = make_offer({"hotel": "Hilton", "cena": "1 200 EUR"})

    response = client.get("/api/comparison/export-csv")
    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/csv")
    assert "vacation-offers.csv" in response.headers["content-disposition"]

    rows = list(csv.reader(io.StringIO(response.text)))
    assert rows[0] == ["ID", "Hotel", "Cena", "Created At"]
    assert rows[1][:3] == [offer["id"], "Hilton", "1 200 EUR"]


def test_price_comparison_skips_out_of_range_totals(client: TestClient, make_column, make_offer):
    make_column("Destination")
    make_column("Cena")
    make_offer({"destination": "Rodos", "cena": '{"total": 1e999}'})
    make_offer({"destination": "Kreta", "cena": "9" * 400})
    make_offer({"destination": "Malta", "cena": "3000"})

    response = client.get("/api/comparison/prices")
    assert response.status_code == 200
    data = response.json()
    assert [row["name"] for row in data] == ["Malta"]
    assert data[0]["totalPrice"] == 3000


def _fail_get_offers(db):
    raise SQLAlchemyError("database is locked")


def test_price_comparison_database_error(client: TestClient, monkeypatch):
    monkeypatch.setattr("crud.offer.get_offers", _fail_get_offers)
    response = client.get("/api/comparison/prices")
    assert response.status_code == 500
    assert response.json()["detail"] == "Failed to fetch offers"


def test_price_comparison_plot_database_error(client: TestClient, monkeypatch):
    monkeypatch.setattr("crud.offer.get_offers", _fail_get_offers)
    response = client.get("/api/comparison/prices/plot")
    assert response.status_code == 500
    assert response.json()["detail"] == "Failed to fetch offers"


def test_export_csv_database_error(client: TestClient, monkeypatch):
    monkeypatch.setattr("crud.offer.get_offers", _fail_get_offers)
    response = client.get("/api/comparison/export-csv")
    assert response.status_code == 500
    assert response.json()["detail"] == "Failed to export offers"
