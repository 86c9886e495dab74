"""
Tests for domain models.
"""

import pendulum
import pytest

from slotcalendar.domain.exceptions import DataSourceError
from slotcalendar.domain.models import (
    FormattedSlot,
    ScheduleSnapshot,
    SlotGrid,
    TimeRange,
    TimeslotRecord,
)


class TestTimeRange:
    """Tests for TimeRange model."""

    def test_create_valid_time_range(self):
        """Test creating a range from clock times."""
        tr = TimeRange.from_times("07:30", "17:00")

        assert tr.earliest.hour == 7
        assert tr.earliest.minute == 30
        assert tr.latest.hour == 17
        assert str(tr) == "07:30 - 17:00"

    def test_single_time_range_is_valid(self):
        """A day with a single slot has earliest equal to latest."""
        tr = TimeRange.from_times("09:00", "09:00")

        assert tr.earliest == tr.latest

    def test_invalid_time_range_raises_error(self):
        """Test that an inverted range raises ValueError."""
        with pytest.raises(ValueError, match="Earliest time .* must not be after latest"):
            TimeRange.from_times("17:00", "09:00")


class TestTimeslotRecord:
    """Tests for TimeslotRecord model."""

    def test_valid_record(self):
        record = TimeslotRecord(time="08:00", offset=-5)

        assert record.time == "08:00"
        assert record.offset == -5

    def test_invalid_time_raises_error(self):
        with pytest.raises(ValueError):
            TimeslotRecord(time="25:99", offset=0)

    @pytest.mark.parametrize("time", ["7:30", "07:5", "7:5"])
    def test_unpadded_time_raises_error(self, time):
        """Grid keys are zero-padded, so "7:30" would never match "07:30"."""
        with pytest.raises(ValueError):
            TimeslotRecord(time=time, offset=0)


class TestSlotGrid:
    """Tests for SlotGrid model."""

    def test_length(self):
        grid = SlotGrid(slot_master=("09:00", "09:30"), slot_master_offset=("09:15", "09:45"))

        assert len(grid) == 2

    def test_mismatched_lengths_raise_error(self):
        with pytest.raises(ValueError, match="equal length"):
            SlotGrid(slot_master=("09:00",), slot_master_offset=())


class TestFormattedSlot:
    """Tests for slot display formatting."""

    def test_morning_slot(self):
        slot = FormattedSlot.create(time="07:30", is_avail=True, date=pendulum.date(2024, 11, 25))

        assert slot.time == "07:30"
        assert slot.am_pm == "AM"
        assert slot.civilian_time == "7:30"
        assert slot.is_avail

    def test_afternoon_slot(self):
        slot = FormattedSlot.create(time="13:30", is_avail=False, date=pendulum.date(2024, 11, 25))

        assert slot.am_pm == "PM"
        assert slot.civilian_time == "1:30"

    def test_midnight_and_noon(self):
        day = pendulum.date(2024, 11, 25)

        midnight = FormattedSlot.create(time="00:00", is_avail=False, date=day)
        noon = FormattedSlot.create(time="12:00", is_avail=False, date=day)

        assert (midnight.civilian_time, midnight.am_pm) == ("12:00", "AM")
        assert (noon.civilian_time, noon.am_pm) == ("12:00", "PM")

    def test_to_dict_uses_wire_keys(self):
        slot = FormattedSlot.create(time="14:00", is_avail=True, date=pendulum.date(2024, 11, 25))

        assert slot.to_dict() == {
            "amPM": "PM",
            "time": "14:00",
            "civilianTime": "2:00",
            "isAvail": True,
            "date": "2024-11-25",
        }


class TestScheduleSnapshot:
    """Tests for parsing data source payloads."""

    def test_from_payload(self):
        payload = {
            "interval": 60,
            "provider": {"name": "Lakeside Motors"},
            "transportationOptions": ["WAIT"],
            "dates": [
                {
                    "date": "2024-11-25",
                    "isClosed": False,
                    "timeslots": [{"time": "08:00", "offset": -5}],
                },
                {"date": "2024-11-26", "isClosed": True, "timeslots": None},
            ],
        }

        snapshot = ScheduleSnapshot.from_payload(payload)

        assert snapshot.interval == 60
        assert snapshot.provider == {"name": "Lakeside Motors"}
        assert snapshot.transportation_options == ["WAIT"]
        assert len(snapshot.dates) == 2

        open_day, closed_day = snapshot.dates
        assert open_day.date == pendulum.date(2024, 11, 25)
        assert not open_day.is_closed
        assert open_day.timeslots == (TimeslotRecord(time="08:00", offset=-5),)
        assert closed_day.is_closed
        assert closed_day.timeslots is None

    def test_missing_interval_raises_data_source_error(self):
        with pytest.raises(DataSourceError, match="Malformed schedule payload"):
            ScheduleSnapshot.from_payload({"dates": []})

    def test_invalid_slot_time_raises_data_source_error(self):
        payload = {
            "interval": 30,
            "dates": [
                {"date": "2024-11-25", "isClosed": False, "timeslots": [{"time": "8am", "offset": 0}]}
            ],
        }

        with pytest.raises(DataSourceError):
            ScheduleSnapshot.from_payload(payload)

    def test_non_mapping_payload_raises_data_source_error(self):
        with pytest.raises(DataSourceError, match="JSON object"):
            ScheduleSnapshot.from_payload(["not", "a", "mapping"])

    @pytest.mark.parametrize("day", [None, "2024-11-25", ["2024-11-25"]])
    def test_non_mapping_day_raises_data_source_error(self, day):
        with pytest.raises(DataSourceError, match="Schedule day must be a JSON object"):
            ScheduleSnapshot.from_payload({"interval": 60, "dates": [day]})

    @pytest.mark.parametrize("is_closed", ["false", "true", 0, 1, None])
    def test_non_bool_is_closed_raises_data_source_error(self, is_closed):
        payload = {
            "interval": 60,
            "dates": [{"date": "2024-11-25", "isClosed": is_closed, "timeslots": None}],
        }

        with pytest.raises(DataSourceError, match="isClosed"):
            ScheduleSnapshot.from_payload(payload)

    def test_half_hour_offset_keeps_fraction(self):
        """Offsets like UTC-3:30 arrive as -3.5 and must not be truncated."""
        payload = {
            "interval": 60,
            "dates": [
                {
                    "date": "2024-11-25",
                    "timeslots": [
                        {"time": "08:00", "offset": -3.5},
                        {"time": "09:00", "offset": 5.5},
                        {"time": "10:00", "offset": -5.0},
                    ],
                }
            ],
        }

        records = ScheduleSnapshot.from_payload(payload).dates[0].timeslots

        assert [record.offset for record in records] == [-3.5, 5.5, -5]
        assert isinstance(records[2].offset, int)

    @pytest.mark.parametrize("offset", [True, "abc", "nan", None])
    def test_invalid_offset_raises_data_source_error(self, offset):
        payload = {
            "interval": 60,
            "dates": [{"date": "2024-11-25", "timeslots": [{"time": "08:00", "offset": offset}]}],
        }

        with pytest.raises(DataSourceError):
            ScheduleSnapshot.from_payload(payload)

    def test_unpadded_slot_time_raises_data_source_error(self):
        payload = {
            "interval": 60,
            "dates": [{"date": "2024-11-25", "timeslots": [{"time": "7:30", "offset": 0}]}],
        }

        with pytest.raises(DataSourceError, match="zero-padded"):
            ScheduleSnapshot.from_payload(payload)

    def test_records_by_time_keeps_first_duplicate(self):
        payload = {
            "interval": 30,
            "dates": [
                {
                    "date": "2024-11-25",
                    "timeslots": [
                        {"time": "08:00", "offset": -5},
                        {"time": "08:00", "offset": -6},
                    ],
                }
            ],
        }

        day = ScheduleSnapshot.from_payload(payload).dates[0]

        assert day.records_by_time() == {"08:00": TimeslotRecord(time="08:00", offset=-5)}
