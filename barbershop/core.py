# barbershop/core.py

import math
from dataclasses import dataclass
from datetime import time
from typing import Iterable, List, Optional

BLOCK_MINUTES = 30


@dataclass(frozen=True)
class DaySchedule:
    start_time: time
    end_time: time
    is_active: bool = True
    break_start: Optional[time] = None
    break_end: Optional[time] = None


@dataclass(frozen=True)
class Booking:
    start_time: time
    duration_minutes: int


def to_minutes(t: time) -> int:
    return t.hour * 60 + t.minute


def from_minutes(minutes: int) -> time:
    return time(*divmod(minutes, 60))


def blocks_for(duration_minutes: int) -> int:
    return math.ceil(duration_minutes / BLOCK_MINUTES)


def overlaps(a_start, a_end, b_start, b_end) -> bool:
    return a_start < b_end and b_start < a_end


def occupied_blocks(bookings: Iterable[Booking]) -> set:
    """Block-start minutes taken by existing bookings, each by its own duration."""
    taken = set()
    for booking in bookings:
        first = to_minutes(booking.start_time)
        for i in range(blocks_for(booking.duration_minutes)):
            taken.add(first + i * BLOCK_MINUTES)
    return taken


def clashes(start_time: time, duration_minutes: int, bookings: Iterable[Booking]) -> bool:
    """Whether a booking at `start_time` would share a block with any of `bookings`."""
    start = to_minutes(start_time)
    end = start + blocks_for(duration_minutes) * BLOCK_MINUTES
    for booking in bookings:
        other = to_minutes(booking.start_time)
        if overlaps(start, end, other, other + blocks_for(booking.duration_minutes) * BLOCK_MINUTES):
            return True
    return False


def compute_available_slots(
    schedule: Optional[DaySchedule],
    bookings: Iterable[Booking],
    requested_duration: int,
) -> List[time]:
    """
    Start times on the 30-minute grid where a service of `requested_duration`
    minutes fits inside working hours without touching the break or any
    existing booking.

    A missing schedule counts as a day off. Windows that end before they
    start (including ones crossing midnight) produce no slots.
    """
    if schedule is None or not schedule.is_active:
        return []

    day_start = to_minutes(schedule.start_time)
    day_end = to_minutes(schedule.end_time)
    if day_end <= day_start or requested_duration <= 0:
        return []

    has_break = schedule.break_start is not None and schedule.break_end is not None
    if has_break:
        break_start = to_minutes(schedule.break_start)
        break_end = to_minutes(schedule.break_end)

    needed = blocks_for(requested_duration)
    taken = occupied_blocks(bookings)

    available = []
    for start in range(day_start, day_end, BLOCK_MINUTES):
        # raw minutes, not rounded up to the grid
        if start + requested_duration > day_end:
            continue

        blocks = [start + i * BLOCK_MINUTES for i in range(needed)]
        if any(b in taken for b in blocks):
            continue
        if has_break and any(break_start <= b < break_end for b in blocks):
            continue

        available.append(from_minutes(start))

    return available
