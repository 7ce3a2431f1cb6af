from __future__ import annotations

from datetime import date, datetime, timezone

from core.entities import DayReading
from core.normalize import collapse_buckets, collapse_daily, entry_date, normalize, round_half_up


CHECKIN = date(2025, 7, 1)


def test_round_half_up():
    assert round_half_up(70.5) == 71
    assert round_half_up(71.5) == 72
    assert round_half_up(-0.4) == 0
    assert round_half_up(89.49) == 89


def test_collapse_buckets_reduces_each_day(three_hour_day):
    entries = three_hour_day(CHECKIN, high=90.4, low=69.6, pop=0.35, description="light rain")

    readings = collapse_buckets(entries)

    reading = readings[CHECKIN]
    assert reading.temp_high == 90
    assert reading.temp_low == 70
    assert reading.precipitation_chance == 35
    assert reading.description == "light rain"
    assert reading.icon == "01d"


def test_collapse_buckets_uses_provider_local_time():
    late_evening_utc = int(datetime(2025, 7, 2, 2, tzinfo=timezone.utc).timestamp())
    entries = [{"dt": late_evening_utc, "main": {"temp": 80}, "weather": [{"description": "clear sky"}]}]

    assert list(collapse_buckets(entries)) == [date(2025, 7, 2)]
    assert list(collapse_buckets(entries, utc_offset=-5 * 3600)) == [date(2025, 7, 1)]


def test_collapse_buckets_tolerates_sparse_entries():
    entries = [
        {"dt_txt": "2025-07-01 09:00:00"},
        {"dt_txt": "2025-07-01 12:00:00", "temperature": 82, "precipitation_probability": 55},
        "garbage",
        {"main": {"temp": 50}},
    ]

    readings = collapse_buckets(entries)

    assert list(readings) == [CHECKIN]
    reading = readings[CHECKIN]
    assert (reading.temp_high, reading.temp_low) == (82, 82)
    assert reading.precipitation_chance == 55
    assert reading.icon == "02d"


def test_collapse_daily_reads_aliases_and_defaults():
    entries = [
        {
            "dt": int(datetime(2025, 7, 1, 17, tzinfo=timezone.utc).timestamp()),
            "temp": {"max": 91.6, "min": 72.2},
            "pop": 0.2,
            "weather": [{"description": "broken clouds", "icon": "04d"}],
        },
        {"date": "2025-07-02", "high": 85, "low": 66, "precip_chance": 70, "condition": "Showers"},
        {"date": "2025-07-03"},
    ]

    readings = collapse_daily(entries)

    assert readings[date(2025, 7, 1)] == DayReading(92, 72, 20, "broken clouds", "04d")
    assert readings[date(2025, 7, 2)] == DayReading(85, 66, 70, "Showers", "02d")
    assert readings[date(2025, 7, 3)] == DayReading(75, 60, 0, "", "02d")


def test_collapse_daily_keeps_low_at_or_below_high():
    readings = collapse_daily([{"date": "2025-07-01", "high": 58}])

    reading = readings[CHECKIN]
    assert reading.temp_low <= reading.temp_high
    assert (reading.temp_high, reading.temp_low) == (60, 58)


def test_entry_date_handles_unparseable_values():
    assert entry_date({"date": "soon"}) is None
    assert entry_date({"dt": 10**20}) is None
    assert entry_date({"dt": float("inf")}) is None
    assert entry_date({}) is None
    assert entry_date({"dt_txt": "2025-07-04 21:00:00"}) == date(2025, 7, 4)


def test_normalize_omits_unmatched_days_and_flags_by_position():
    readings = {
        date(2025, 7, 1): DayReading(90, 70, 10, "clear sky", "01d"),
        date(2025, 7, 3): DayReading(92, 71, 15, "light rain", "10d"),
        date(2025, 7, 9): DayReading(80, 60, 0, "clear sky", "01d"),
    }

    days = normalize(readings, CHECKIN, horizon_days=3)

    assert [day.date for day in days] == [date(2025, 7, 1), date(2025, 7, 3)]
    assert days[0].is_checkin and not days[0].is_checkout
    assert days[1].is_checkout and not days[1].is_checkin
    assert days[1].condition == "Light rain"
    assert days[1].condition_simple == "Rainy"
    assert days[1].icon_url == "https://openweathermap.org/img/wn/10d@2x.png"


def test_normalize_respects_horizon():
    readings = {date(2025, 7, day): DayReading(80, 65, 0, "clear sky", "01d") for day in range(1, 10)}

    assert len(normalize(readings, CHECKIN, horizon_days=5)) == 5
    assert normalize(readings, CHECKIN, horizon_days=0) == []


def test_daily_forecast_labels():
    day = normalize({CHECKIN: DayReading(90, 70, 10, "clear sky", "01d")}, CHECKIN, 1)[0]

    payload = day.as_dict()
    assert payload["date"] == "2025-07-01"
    assert payload["day_name"] == "Tuesday"
    assert payload["day_short"] == "Tue"
    assert payload["month_day"] == "Jul 1"
    assert payload["is_checkin"] and payload["is_checkout"]


def test_collapse_buckets_skips_out_of_range_timestamps(three_hour_day):
    entries = three_hour_day(CHECKIN, 90, 70) + [
        {"dt": 10**20, "main": {"temp": 80}},
        {"dt": float("inf"), "main": {"temp": 80}},
        {"dt_txt": "2025-07-01 15:00:00", "main": {"temp": float("inf")}},
    ]

    readings = collapse_buckets(entries)

    assert list(readings) == [CHECKIN]
    assert (readings[CHECKIN].temp_high, readings[CHECKIN].temp_low) == (90, 70)
