"""
timeline/key_events.py
Key-event phrase table and resolver.

Event descriptions are free text and were worded differently at each port
visit, so every key lists alternative phrasings.  A phrasing is a tuple of
case-insensitive substrings that must all appear in the description;
"{primary}" is replaced by the primary charterer's name.

New wordings go in KEY_EVENT_PATTERNS (bump KEY_EVENT_PATTERNS_VERSION);
the attribution periods never need to change for them.
"""
from dataclasses import dataclass
from typing import Mapping, Optional, Sequence

from timeline.models import TimelineEvent
from timeline.traversal import find_event

KEY_EVENT_PATTERNS_VERSION = "2025-05-26"

NOR_TENDERED = "nor_tendered"
LAYTIME_COMMENCED = "laytime_commenced"
SHIFTING_COMMENCED = "shifting_commenced"
MADE_FAST = "made_fast"
PREPARATIONS_COMPLETE = "preparations_complete"
OTHERS_COMMENCED = "others_commenced"
PRIMARY_COMMENCED = "primary_commenced"
PRIMARY_COMPLETED = "primary_completed"
PRIMARY_DEDUCTION = "primary_deduction"

Phrase = tuple[str, ...]

KEY_EVENT_PATTERNS: dict[str, tuple[Phrase, ...]] = {
    NOR_TENDERED: (
        ("notice of readiness",),
        ("nor tendered",),
    ),
    LAYTIME_COMMENCED: (
        ("laytime can commence",),
        ("laytime commences",),
        ("laytime commenced",),
    ),
    SHIFTING_COMMENCED: (
        ("commenced shifting",),
        ("anchor aweigh",),
    ),
    MADE_FAST: (
        ("made fast",),
        ("all fast",),
    ),
    PREPARATIONS_COMPLETE: (
        ("all preparations complete",),
    ),
    OTHERS_COMMENCED: (
        ("commenced discharge of others",),
        ("com'ced disch of others",),
        ("other charterer operations start",),
    ),
    PRIMARY_COMMENCED: (
        ("hose connected", "{primary}"),
        ("commenced discharge", "{primary}"),
    ),
    PRIMARY_COMPLETED: (
        ("operations complete", "{primary}"),
        ("hose disconnected", "{primary}"),
    ),
    PRIMARY_DEDUCTION: (
        ("squeegeeing", "deduction"),
    ),
}


@dataclass(frozen=True)
class ResolvedKeyEvent:
    key: str
    event: TimelineEvent

    @property
    def time(self) -> str:
        return self.event.time


def _expand(phrase: Phrase, primary: str) -> Phrase:
    return tuple(part.replace("{primary}", primary).lower() for part in phrase)


def matches(description: str, phrases: Sequence[Phrase], primary: str = "") -> bool:
    text = (description or "").lower()
    for phrase in phrases:
        # a charterer-specific phrasing cannot match without a charterer
        if not primary and any("{primary}" in part for part in phrase):
            continue
        if all(part in text for part in _expand(phrase, primary)):
            return True
    return False


def resolve_key_event(
    timeline: Sequence[TimelineEvent],
    key: str,
    primary: str = "",
    patterns: Optional[Mapping[str, Sequence[Phrase]]] = None,
) -> Optional[ResolvedKeyEvent]:
    """First event whose description matches any phrasing for key; None if absent."""
    phrases = (patterns or KEY_EVENT_PATTERNS).get(key) or ()
    if not phrases:
        return None
    event = find_event(timeline, lambda e: matches(e.event, phrases, primary))
    return ResolvedKeyEvent(key, event) if event else None


def resolve_key_events(
    timeline: Sequence[TimelineEvent],
    primary: str = "",
    patterns: Optional[Mapping[str, Sequence[Phrase]]] = None,
) -> dict[str, ResolvedKeyEvent]:
    """All resolvable keys; unresolved ones are simply absent from the result."""
    table = patterns or KEY_EVENT_PATTERNS
    resolved: dict[str, ResolvedKeyEvent] = {}
    for key in table:
        hit = resolve_key_event(timeline, key, primary, table)
        if hit:
            resolved[key] = hit
    return resolved
