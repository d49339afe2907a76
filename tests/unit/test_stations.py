import pytest

from refuel_radar.common.brands import build_brand_table
from refuel_radar.common.errors import InvalidStationError
from refuel_radar.pipeline.stations import evaluate_station, normalise_station

TIMESTAMP = "2024-11-27T11:45:32+00:00"


def _raw_station(**overrides):
    station = {
        "site_id": "xxx",
        "brand": " esso ",
        "address": "The Petrol Station",
        "postcode": "AB1 2CD",
        "location": {"latitude": "51.5", "longitude": 0},
        "prices": {"E5": 138.9, "E10": "129.9", "SDV": 0},
    }
    station.update(overrides)
    return station


def test_normalise_station_builds_single_price_block():
    station = normalise_station(_raw_station(), TIMESTAMP)

    assert station.site_id == "xxx"
    assert station.brand == "Esso"
    assert station.location.lat == 51.5
    assert station.location.lon == 0.0
    assert dict(station.prices) == {"E5": 138.9, "E10": 129.9}
    assert station.timestamp == TIMESTAMP


def test_normalise_station_rejects_null_or_missing_brand():
    with pytest.raises(InvalidStationError, match="brand is null"):
        normalise_station(_raw_station(brand=None), TIMESTAMP)

    raw = _raw_station()
    del raw["brand"]
    with pytest.raises(InvalidStationError, match="brand is null"):
        normalise_station(raw, TIMESTAMP)


def test_normalise_station_empty_brand_follows_policy():
    accepted = normalise_station(_raw_station(brand=""), TIMESTAMP)
    assert accepted.brand == ""

    with pytest.raises(InvalidStationError, match="brand is empty"):
        normalise_station(_raw_station(brand="  "), TIMESTAMP, empty_brand_policy="reject")


@pytest.mark.parametrize(
    "location",
    [
        {"latitude": "north", "longitude": 0},
        {"latitude": 51.5, "longitude": None},
        {"latitude": 51.5},
        {"latitude": True, "longitude": 0},
        None,
        "51.5,0",
    ],
)
def test_normalise_station_rejects_bad_coordinates(location):
    with pytest.raises(InvalidStationError):
        normalise_station(_raw_station(location=location), TIMESTAMP)


def test_normalise_station_rejects_missing_text_fields_and_non_objects():
    with pytest.raises(InvalidStationError):
        normalise_station(_raw_station(postcode=None), TIMESTAMP)
    with pytest.raises(InvalidStationError):
        normalise_station(["not", "a", "station"], TIMESTAMP)


def test_normalise_station_allows_empty_price_set():
    station = normalise_station(_raw_station(prices={"E5": 0, "E10": "x"}), TIMESTAMP)
    assert dict(station.prices) == {}
    assert station.timestamp == TIMESTAMP


def test_normalise_station_uses_supplied_brand_table():
    table = build_brand_table({"bobs": "Bob's"})
    station = normalise_station(_raw_station(brand="BOBS"), TIMESTAMP, brand_table=table)
    assert station.brand == "Bob's"


def test_evaluate_station_returns_rejection_instead_of_raising():
    outcome = evaluate_station(3, _raw_station(brand=None, site_id="abc"), TIMESTAMP)

    assert not outcome.ok
    assert outcome.station is None
    assert outcome.rejection.index == 3
    assert outcome.rejection.site_id == "abc"
    assert outcome.rejection.reason == "brand is null"
    assert outcome.rejection.error_code == "INVALID_STATION"


def test_evaluate_station_wraps_success():
    outcome = evaluate_station(0, _raw_station(), TIMESTAMP)
    assert outcome.ok
    assert outcome.rejection is None
    assert outcome.station.brand == "Esso"


def test_normalise_station_rejects_coordinate_beyond_float_range():
    with pytest.raises(InvalidStationError, match="invalid latitude"):
        normalise_station(_raw_station(location={"latitude": 10**400, "longitude": 0}), TIMESTAMP)


def test_normalise_station_drops_price_label_equal_to_timestamp_key():
    raw = _raw_station(prices={"timestamp": 150.9, "lu": 140.9, "E10": 129.9})

    default_key = normalise_station(raw, TIMESTAMP)
    assert dict(default_key.prices) == {"lu": 140.9, "E10": 129.9}

    custom_key = normalise_station(raw, TIMESTAMP, timestamp_key="lu")
    assert dict(custom_key.prices) == {"timestamp": 150.9, "E10": 129.9}
    assert custom_key.to_dict("lu")["prices"] == [{"timestamp": 150.9, "E10": 129.9, "lu": TIMESTAMP}]
