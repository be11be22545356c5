"""Split a reservation into billable slots and group them for pricing.

The walk is a fold over one merged, time-ordered event stream:

* headcount changes supplied by the caller,
* band boundaries (day/night transitions) inside the reservation,
* the reservation end.

Between two consecutive events the interval is cut into fixed-length units;
the final unit before an event is shortened so no slot ever straddles a band
transition or a headcount change.
"""

from __future__ import annotations

import enum
import heapq
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from operator import attrgetter
from typing import Iterable, Iterator

from studio_pricing.core.config import Settings, get_settings
from studio_pricing.models import GroupedUnit, HeadcountChange, RateBand, TimeSlot
from studio_pricing.services.time_band_service import (
    classify,
    iter_band_boundaries,
    normalize_datetime,
)


class _EventKind(enum.IntEnum):
    # headcount changes sort first so the new count governs the slot starting there
    HEADCOUNT = 0
    BAND = 1
    END = 2


@dataclass(slots=True, frozen=True, order=True)
class _Event:
    at: datetime
    kind: _EventKind
    headcount: int | None = field(default=None, compare=False)


@dataclass(slots=True, frozen=True)
class SlotPlan:
    """Re-iterable slot sequence; every ``iter()`` restarts the walk."""

    start: datetime
    end: datetime
    initial_headcount: int
    changes: tuple[HeadcountChange, ...] = ()
    settings: Settings = field(default_factory=get_settings)

    def __iter__(self) -> Iterator[TimeSlot]:
        return _walk(self)

    def events(self) -> Iterator[_Event]:
        """Merged stream of headcount, band and end events in time order."""
        ordered_changes = sorted(self.changes, key=attrgetter("time"))
        change_events = (
            _Event(change.time, _EventKind.HEADCOUNT, change.new_headcount)
            for change in ordered_changes
        )
        band_events = (
            _Event(boundary, _EventKind.BAND)
            for boundary in iter_band_boundaries(
                self.start, self.end, settings=self.settings
            )
        )
        yield from heapq.merge(change_events, band_events)
        yield _Event(self.end, _EventKind.END)


def _walk(plan: SlotPlan) -> Iterator[TimeSlot]:
    unit = timedelta(minutes=plan.settings.unit_minutes)
    cursor = plan.start
    headcount = plan.initial_headcount
    for event in plan.events():
        if event.kind is not _EventKind.END and event.at >= plan.end:
            continue
        while cursor < event.at:
            slot_end = min(cursor + unit, event.at)
            yield TimeSlot(
                start=cursor,
                end=slot_end,
                band=classify(cursor, settings=plan.settings),
                headcount=headcount,
            )
            cursor = slot_end
        if event.kind is _EventKind.HEADCOUNT:
            headcount = event.headcount
        elif event.kind is _EventKind.END:
            return


def plan_slots(
    start: datetime,
    end: datetime,
    initial_headcount: int,
    changes: Iterable[HeadcountChange] | None = None,
    *,
    settings: Settings | None = None,
) -> SlotPlan:
    """Build a slot plan; aware timestamps are normalized to UTC."""
    return SlotPlan(
        start=normalize_datetime(start),
        end=normalize_datetime(end),
        initial_headcount=initial_headcount,
        changes=tuple(
            HeadcountChange(normalize_datetime(change.time), change.new_headcount)
            for change in changes or ()
        ),
        settings=settings or get_settings(),
    )


def iter_slots(
    start: datetime,
    end: datetime,
    initial_headcount: int,
    changes: Iterable[HeadcountChange] | None = None,
    *,
    settings: Settings | None = None,
) -> Iterator[TimeSlot]:
    """Lazily yield the slots tiling ``[start, end)``."""
    return iter(
        plan_slots(start, end, initial_headcount, changes, settings=settings)
    )


def segment(
    start: datetime,
    end: datetime,
    initial_headcount: int,
    changes: Iterable[HeadcountChange] | None = None,
    *,
    settings: Settings | None = None,
) -> list[TimeSlot]:
    """Return the ordered, gap-free slots tiling ``[start, end)``."""
    return list(
        plan_slots(start, end, initial_headcount, changes, settings=settings)
    )


def group_slots(slots: Iterable[TimeSlot]) -> list[GroupedUnit]:
    """Count slots per (band, headcount) in order of first occurrence."""
    groups: dict[tuple[RateBand, int], GroupedUnit] = {}
    for slot in slots:
        key = (slot.band, slot.headcount)
        group = groups.get(key)
        if group is None:
            group = groups[key] = GroupedUnit(band=slot.band, headcount=slot.headcount)
        group.unit_count += 1
    return list(groups.values())
