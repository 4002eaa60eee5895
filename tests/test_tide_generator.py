from datetime import timedelta

import pytest

from features.common.exceptions.tide_exceptions import InvalidLocation
from features.locations.models.location_types import Location
from features.tides.models.tide_types import ExtremeType
from features.tides.services.tide_generator import generate_tide_series, tide_amplitude

def make_location(latitude: float, longitude: float) -> Location:
    return Location(id=f"{latitude},{longitude}", name="Test", latitude=latitude, longitude=longitude)

def test_series_has_48_half_hourly_samples_from_now(now):
    series = generate_tide_series(make_location(-33.8688, 151.2093), now)

    assert len(series.samples) == 48
    assert series.samples[0].time == now
    for i, sample in enumerate(series.samples):
        assert sample.time == now + timedelta(minutes=30 * i)

def test_extremes_alternate_high_and_low_every_six_hours(now):
    series = generate_tide_series(make_location(25.7907, -80.13), now)

    assert [extreme.type for extreme in series.extremes] == [
        ExtremeType.HIGH,
        ExtremeType.LOW,
        ExtremeType.HIGH,
        ExtremeType.LOW,
    ]
    for extreme, index in zip(series.extremes, [0, 12, 24, 36]):
        assert extreme.time == series.samples[index].time
        assert extreme.height == series.samples[index].height

@pytest.mark.parametrize("latitude", [-90.0, -45.5, 0.0, 21.3069, 90.0])
@pytest.mark.parametrize("longitude", [-180.0, -80.13, 0.0, 73.5093, 180.0])
def test_heights_stay_within_amplitude(now, latitude, longitude):
    amplitude = tide_amplitude(latitude)
    series = generate_tide_series(make_location(latitude, longitude), now)

    assert 1.0 <= amplitude <= 2.0
    for sample in series.samples:
        assert 2.0 - amplitude - 1e-9 <= sample.height <= 2.0 + amplitude + 1e-9

def test_equator_at_prime_meridian(now):
    series = generate_tide_series(make_location(0.0, 0.0), now)

    assert tide_amplitude(0.0) == pytest.approx(1.5)
    assert series.samples[0].height == pytest.approx(2.0)
    assert series.samples[6].height == pytest.approx(3.5)

def test_north_pole_has_largest_amplitude(now):
    series = generate_tide_series(make_location(90.0, 0.0), now)

    assert tide_amplitude(90.0) == pytest.approx(2.0)
    assert series.samples[0].height == pytest.approx(2.0)
    assert max(sample.height for sample in series.samples) == pytest.approx(4.0)

def test_generation_is_deterministic(now):
    location = make_location(45.4408, 12.3155)

    assert generate_tide_series(location, now) == generate_tide_series(location, now)

def test_series_records_location_and_start(now):
    series = generate_tide_series(make_location(4.1755, 73.5093), now)

    assert series.location_id == "4.1755,73.5093"
    assert series.generated_at == now

@pytest.mark.parametrize("latitude, longitude", [
    (91.0, 0.0),
    (-90.5, 10.0),
    (0.0, 180.1),
    (0.0, -181.0),
])
def test_out_of_range_coordinates_are_rejected(now, latitude, longitude):
    with pytest.raises(InvalidLocation):
        generate_tide_series(make_location(latitude, longitude), now)
