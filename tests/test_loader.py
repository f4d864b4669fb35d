import logging
import os
from datetime import datetime, timedelta, timezone

import pytest

from dispatch import DataIntegrityError, TripDispatcher
from dispatch.loader import load_records
from drivers.models import DriverStatus
from records import StaticRecordSource

TEST_DATA_DIRECTORY = os.path.join(os.path.dirname(os.path.abspath(__file__)), "test_data")


def build_source(passengers=None, drivers=None, trips=None) -> StaticRecordSource:
    """
    One passenger, one driver, one finished trip unless overridden.
    """
    return StaticRecordSource(
        passengers=passengers if passengers is not None else [{"id": "1", "name": "Passenger 1"}],
        drivers=drivers if drivers is not None else [{"id": "1", "name": "Driver 1", "status": "AVAILABLE"}],
        trips=trips if trips is not None else [trip_row()],
    )


def trip_row(**overrides):
    row = {
        "id": "1",
        "driver_id": "1",
        "passenger_id": "1",
        "start_time": "2018-05-25T11:52:40-07:00",
        "end_time": "2018-05-25T12:25:00-07:00",
        "cost": "10",
        "rating": "5",
    }
    row.update(overrides)
    return row


def test_load_records_parses_typed_fields():
    loaded = load_records(build_source())

    trip = loaded.trips[0]
    pacific = timezone(timedelta(hours=-7))

    assert trip.id == 1
    assert trip.start_time == datetime(2018, 5, 25, 11, 52, 40, tzinfo=pacific)
    assert trip.end_time == datetime(2018, 5, 25, 12, 25, tzinfo=pacific)
    assert trip.cost == 10.0
    assert trip.rating == 5
    assert trip.duration() == 32 * 60 + 20

    assert loaded.drivers[0].status == DriverStatus.AVAILABLE
    assert trip.passenger is loaded.passengers[0]
    assert trip.driver is loaded.drivers[0]


def test_load_records_accepts_native_values():
    source = build_source(
        passengers=[{"id": 1, "name": "Passenger 1"}],
        drivers=[{"id": 1, "name": "Driver 1", "status": DriverStatus.UNAVAILABLE}],
        trips=[trip_row(id=1, driver_id=1, passenger_id=1, end_time=None, cost=None, rating=None)],
    )

    loaded = load_records(source)

    assert loaded.trips[0].is_in_progress
    assert loaded.drivers[0].status == DriverStatus.UNAVAILABLE


def test_naive_timestamps_are_read_as_utc():
    loaded = load_records(build_source(trips=[trip_row(start_time="2018-05-25 11:52:40", end_time="")]))

    assert loaded.trips[0].start_time == datetime(2018, 5, 25, 11, 52, 40, tzinfo=timezone.utc)
    assert loaded.trips[0].end_time is None


def test_status_is_case_insensitive():
    loaded = load_records(build_source(drivers=[{"id": "1", "name": "Driver 1", "status": "unavailable"}]))
    assert loaded.drivers[0].status == DriverStatus.UNAVAILABLE


@pytest.mark.parametrize(
    "source",
    [
        build_source(trips=[trip_row(passenger_id="9")]),
        build_source(trips=[trip_row(driver_id="9")]),
    ],
    ids=["unknown-passenger", "unknown-driver"],
)
def test_unresolved_foreign_keys_fail_the_load(source):
    with pytest.raises(DataIntegrityError, match="unknown"):
        load_records(source)


@pytest.mark.parametrize(
    "source",
    [
        build_source(passengers=[{"id": "1"}]),
        build_source(passengers=[{"id": "", "name": "Nobody"}]),
        build_source(passengers=[{"id": "one", "name": "Passenger 1"}]),
        build_source(passengers=[{"id": "0", "name": "Passenger 0"}]),
        build_source(drivers=[{"id": "1", "name": "Driver 1"}]),
        build_source(drivers=[{"id": "1", "name": "Driver 1", "status": "ON_BREAK"}]),
        build_source(trips=[trip_row(start_time=None)]),
        build_source(trips=[trip_row(start_time="2018-13-45T99:99:00")]),
        build_source(trips=[trip_row(end_time="2018-05-25T10:00:00-07:00")]),
        build_source(trips=[trip_row(cost="ten")]),
        build_source(trips=[trip_row(rating="6")]),
        build_source(trips=[trip_row(rating="4.5")]),
        build_source(trips=[trip_row(cost="NaN")]),
        build_source(trips=[trip_row(cost="inf")]),
        build_source(trips=[trip_row(cost="-inf")]),
        build_source(trips=[trip_row(start_time="now", end_time="")]),
        build_source(trips=[trip_row(start_time="2018-05-25T11:52:40-07:00", end_time="today")]),
    ],
    ids=[
        "missing-name",
        "blank-id",
        "non-integer-id",
        "zero-id",
        "missing-status",
        "unknown-status",
        "missing-start-time",
        "unparsable-start-time",
        "ends-before-start",
        "non-numeric-cost",
        "rating-out-of-range",
        "fractional-rating",
        "nan-cost",
        "infinite-cost",
        "negative-infinite-cost",
        "clock-word-start-time",
        "clock-word-end-time",
    ],
)
def test_malformed_rows_fail_the_load(source):
    with pytest.raises(DataIntegrityError):
        load_records(source)


def test_duplicate_ids_fail_the_load():
    with pytest.raises(DataIntegrityError, match="Duplicate passenger"):
        load_records(build_source(passengers=[{"id": "1", "name": "A"}, {"id": "1", "name": "B"}]))

    with pytest.raises(DataIntegrityError, match="Duplicate trip"):
        load_records(build_source(trips=[trip_row(), trip_row()]))


def test_constructor_fails_entirely_on_bad_data():
    with pytest.raises(DataIntegrityError):
        TripDispatcher(build_source(trips=[trip_row(driver_id="2")]))


def test_failed_reload_keeps_previous_state():
    dispatcher = TripDispatcher.from_directory(TEST_DATA_DIRECTORY)
    passengers = list(dispatcher.passengers)
    trips = list(dispatcher.trips)

    with pytest.raises(DataIntegrityError):
        dispatcher.load(build_source(trips=[trip_row(passenger_id="5")]))

    assert dispatcher.passengers == passengers
    assert dispatcher.trips == trips
    assert dispatcher.find_passenger(8).name == "Passenger 8"


def test_reload_replaces_contents():
    dispatcher = TripDispatcher.from_directory(TEST_DATA_DIRECTORY)
    dispatcher.load(build_source())

    assert len(dispatcher.passengers) == 1
    assert len(dispatcher.trips) == 1
    assert dispatcher.request_trip(1).id == 2


def test_loaded_status_is_kept_and_mismatch_logged(caplog):
    """
    A driver with no trips loaded as UNAVAILABLE stays UNAVAILABLE; the mismatch is only logged.
    """
    source = build_source(
        drivers=[
            {"id": "1", "name": "Driver 1", "status": "AVAILABLE"},
            {"id": "2", "name": "Driver 2 (idle, unavailable)", "status": "UNAVAILABLE"},
        ]
    )

    with caplog.at_level(logging.WARNING, logger="dispatch.dispatcher"):
        dispatcher = TripDispatcher(source)

    idle_driver = dispatcher.find_driver(2)
    assert idle_driver.status == DriverStatus.UNAVAILABLE
    assert dispatcher.find_status_mismatches() == [idle_driver]
    assert "Driver 2 is loaded as UNAVAILABLE" in caplog.text


def test_empty_source_loads_an_empty_registry():
    dispatcher = TripDispatcher(StaticRecordSource())

    assert dispatcher.passengers == []
    assert dispatcher.drivers == []
    assert dispatcher.trips == []
    assert dispatcher.find_available_drivers() == []


def test_non_finite_cost_never_reaches_the_registry():
    with pytest.raises(DataIntegrityError, match="finite"):
        TripDispatcher(build_source(trips=[trip_row(cost="NaN")]))


def test_clock_words_are_not_timestamps():
    """
    pandas would read "now" as the current time; a record has to say when the trip happened.
    """
    with pytest.raises(DataIntegrityError, match="actual timestamp"):
        TripDispatcher(build_source(trips=[trip_row(start_time=" Now ", end_time="")]))
