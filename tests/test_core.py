"""
Tests for the slot availability calculator.
"""

from datetime import time

import pytest

from barbershop.core import (
    BLOCK_MINUTES,
    Booking,
    DaySchedule,
    blocks_for,
    clashes,
    compute_available_slots,
    from_minutes,
    occupied_blocks,
    overlaps,
    to_minutes,
)

WORKDAY = DaySchedule(start_time=time(9, 0), end_time=time(19, 0), is_active=True)
WITH_LUNCH = DaySchedule(
    start_time=time(9, 0),
    end_time=time(19, 0),
    is_active=True,
    break_start=time(12, 0),
    break_end=time(13, 0),
)


def full_grid():
    return [from_minutes(m) for m in range(9 * 60, 19 * 60, BLOCK_MINUTES)]


class TestScenarios:

    def test_open_day_gives_every_half_hour(self):
        slots = compute_available_slots(WORKDAY, [], 30)

        assert len(slots) == 20
        assert slots[0] == time(9, 0)
        assert slots[1] == time(9, 30)
        assert slots[-1] == time(18, 30)

    def test_break_removes_its_blocks(self):
        slots = compute_available_slots(WITH_LUNCH, [], 30)

        expected = [t for t in full_grid() if t not in (time(12, 0), time(12, 30))]
        assert slots == expected

    def test_long_booking_occupies_both_blocks(self):
        slots = compute_available_slots(WORKDAY, [Booking(time(10, 0), 60)], 30)

        assert time(10, 0) not in slots
        assert time(10, 30) not in slots
        assert time(9, 30) in slots
        assert time(11, 0) in slots
        assert len(slots) == 18

    def test_duration_checked_against_closing_in_raw_minutes(self):
        slots = compute_available_slots(WORKDAY, [], 45)

        assert time(18, 30) not in slots
        assert time(18, 0) in slots
        assert len(slots) == 19

    def test_inactive_day_is_empty(self):
        schedule = DaySchedule(
            start_time=time(9, 0),
            end_time=time(19, 0),
            is_active=False,
            break_start=time(12, 0),
            break_end=time(13, 0),
        )

        assert compute_available_slots(schedule, [], 30) == []
        assert compute_available_slots(schedule, [Booking(time(10, 0), 30)], 90) == []


class TestEdgeCases:

    def test_missing_schedule_counts_as_day_off(self):
        assert compute_available_slots(None, [], 30) == []

    def test_existing_bookings_use_their_own_duration(self):
        bookings = [Booking(time(10, 0), 30), Booking(time(11, 0), 30)]

        short = compute_available_slots(WORKDAY, bookings, 30)
        long = compute_available_slots(WORKDAY, bookings, 60)

        # the 10:30 gap fits a 30 minute cut but not an hour
        assert time(10, 30) in short
        assert time(10, 30) not in long
        assert time(9, 30) not in long
        assert time(9, 0) in long
        assert time(11, 30) in long

    def test_odd_booking_duration_rounds_up_to_the_grid(self):
        slots = compute_available_slots(WORKDAY, [Booking(time(10, 0), 45)], 30)

        assert time(10, 30) not in slots
        assert time(11, 0) in slots

    def test_service_partly_inside_break_is_rejected(self):
        slots = compute_available_slots(WITH_LUNCH, [], 60)

        assert time(11, 0) in slots
        assert time(11, 30) not in slots
        assert time(12, 0) not in slots
        assert time(12, 30) not in slots
        assert time(13, 0) in slots

    def test_half_defined_break_is_ignored(self):
        schedule = DaySchedule(start_time=time(9, 0), end_time=time(19, 0), break_start=time(12, 0))

        assert compute_available_slots(schedule, [], 30) == full_grid()

    def test_last_partial_block_still_respects_closing(self):
        slots = compute_available_slots(WORKDAY, [], 50)

        assert time(18, 0) in slots
        assert time(18, 30) not in slots

    @pytest.mark.parametrize(
        "start,end",
        [
            (time(19, 0), time(9, 0)),
            (time(9, 0), time(9, 0)),
            (time(22, 0), time(2, 0)),  # crossing midnight is unsupported
        ],
    )
    def test_inverted_window_is_empty(self, start, end):
        schedule = DaySchedule(start_time=start, end_time=end)

        assert compute_available_slots(schedule, [], 30) == []

    def test_service_longer_than_day(self):
        short_day = DaySchedule(start_time=time(9, 0), end_time=time(10, 0))

        assert compute_available_slots(short_day, [], 90) == []

    def test_fully_booked_day(self):
        bookings = [Booking(from_minutes(m), 30) for m in range(9 * 60, 19 * 60, 30)]

        assert compute_available_slots(WORKDAY, bookings, 30) == []


@pytest.mark.parametrize(
    "schedule,bookings,duration",
    [
        (WORKDAY, [], 30),
        (WITH_LUNCH, [Booking(time(9, 0), 45)], 45),
        (WITH_LUNCH, [Booking(time(14, 0), 90), Booking(time(17, 30), 30)], 60),
        (WORKDAY, [Booking(time(9, 30), 15), Booking(time(16, 0), 120)], 75),
        (WITH_LUNCH, [Booking(time(11, 0), 60), Booking(time(13, 0), 30)], 120),
    ],
)
def test_returned_slots_respect_every_rule(schedule, bookings, duration):
    slots = compute_available_slots(schedule, bookings, duration)
    taken = occupied_blocks(bookings)
    day_end = to_minutes(schedule.end_time)

    for slot in slots:
        start = to_minutes(slot)
        blocks = [start + i * BLOCK_MINUTES for i in range(blocks_for(duration))]

        assert start + duration <= day_end
        assert not taken.intersection(blocks)
        if schedule.break_start is not None:
            assert not any(to_minutes(schedule.break_start) <= b < to_minutes(schedule.break_end) for b in blocks)

    starts = [to_minutes(s) for s in slots]
    assert starts == sorted(set(starts))
    assert compute_available_slots(schedule, bookings, duration) == slots


def test_helpers():
    assert to_minutes(time(13, 30)) == 810
    assert from_minutes(810) == time(13, 30)
    assert blocks_for(30) == 1
    assert blocks_for(31) == 2
    assert blocks_for(45) == 2
    assert blocks_for(90) == 3
    assert occupied_blocks([Booking(time(10, 0), 60)]) == {600, 630}
    assert overlaps(1, 3, 2, 4)
    assert not overlaps(1, 2, 2, 3)


@pytest.mark.parametrize(
    "start, duration, expected",
    [
        (time(10, 0), 60, True),   # covers the 10:30 booking
        (time(9, 30), 30, False),
        (time(10, 0), 45, True),   # rounds up into 10:30
        (time(11, 0), 30, True),   # inside the 11:00 hour-long booking
        (time(12, 0), 30, False),
    ],
)
def test_clashes(start, duration, expected):
    bookings = [Booking(time(10, 30), 30), Booking(time(11, 0), 60)]

    assert clashes(start, duration, bookings) is expected
    assert clashes(start, duration, []) is False
