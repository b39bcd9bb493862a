"""
timeline/traversal.py
Read-only helpers over a port's timeline.  None of these raise on bad input.
"""
from typing import Callable, Iterable, Iterator, Optional, Sequence, Union

from timeline.models import TimelineEvent, TimeType


class TimeTypeView:
    """Lazy, restartable view of the events carrying one time type."""

    def __init__(self, timeline: Iterable[TimelineEvent], time_type: TimeType) -> None:
        self._timeline = timeline
        self._time_type = time_type

    def __iter__(self) -> Iterator[TimelineEvent]:
        return (e for e in self._timeline if e.time_type is self._time_type)

    def __repr__(self) -> str:
        return f"TimeTypeView({self._time_type.value!r})"


def events_by_time_type(
    timeline: Sequence[TimelineEvent], time_type: Union[TimeType, str]
) -> TimeTypeView:
    """Events classified as time_type; a raw tag ("non-unilever") is normalised first."""
    if not isinstance(time_type, TimeType):
        time_type = TimeType.from_tag(time_type)
    return TimeTypeView(timeline, time_type)


def active_cargoes_at(timeline: Sequence[TimelineEvent], index: int) -> frozenset[str]:
    """The event's own active-cargo set; empty for an index outside the timeline."""
    if not 0 <= index < len(timeline):
        return frozenset()
    return frozenset(timeline[index].active_cargoes)


def find_event_index(
    timeline: Sequence[TimelineEvent], predicate: Callable[[TimelineEvent], bool]
) -> int:
    for i, event in enumerate(timeline):
        if predicate(event):
            return i
    return -1


def find_event(
    timeline: Sequence[TimelineEvent], predicate: Callable[[TimelineEvent], bool]
) -> Optional[TimelineEvent]:
    """First event (in timeline order) satisfying predicate, or None."""
    i = find_event_index(timeline, predicate)
    return timeline[i] if i >= 0 else None
