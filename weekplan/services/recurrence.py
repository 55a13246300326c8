"""
Habit recurrence rules.

Only two shapes are expanded: every day, and weekly on selected weekdays
(``FREQ=WEEKLY;BYDAY=MO,WE``). Anything else is reported as unsupported and
handled by policy.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date

from weekplan.core.logger import setup_logger
from weekplan.models.enums import RecurrenceKind

logger = setup_logger(__name__)

BYDAY_CODES = {"MO": 0, "TU": 1, "WE": 2, "TH": 3, "FR": 4, "SA": 5, "SU": 6}


@dataclass(frozen=True)
class Recurrence:
    kind: RecurrenceKind
    weekdays: frozenset[int] = field(default_factory=frozenset)
    rule: str = ""


def _parse_parts(rule: str) -> dict[str, str] | None:
    parts: dict[str, str] = {}
    for chunk in rule.split(";"):
        chunk = chunk.strip()
        if not chunk:
            continue
        key, sep, value = chunk.partition("=")
        if not sep or not value:
            return None
        parts[key.strip().upper()] = value.strip().upper()
    return parts


def parse_recurrence(rule: str | None) -> Recurrence:
    """Classify an RRULE-style string."""
    raw = (rule or "").strip()
    text = raw
    if text.upper().startswith("RRULE:"):
        text = text[len("RRULE:"):]
    if not text:
        return Recurrence(RecurrenceKind.DAILY, rule=raw)

    parts = _parse_parts(text)
    if parts is None:
        return Recurrence(RecurrenceKind.UNSUPPORTED, rule=raw)

    interval = parts.pop("INTERVAL", "1")
    parts.pop("WKST", None)
    freq = parts.pop("FREQ", None)
    if interval != "1":
        return Recurrence(RecurrenceKind.UNSUPPORTED, rule=raw)

    if freq == "DAILY" and not parts:
        return Recurrence(RecurrenceKind.DAILY, rule=raw)

    if freq == "WEEKLY" and set(parts) == {"BYDAY"}:
        codes = [code.strip() for code in parts["BYDAY"].split(",") if code.strip()]
        if codes and all(code in BYDAY_CODES for code in codes):
            return Recurrence(
                RecurrenceKind.WEEKLY_BY_DAY,
                weekdays=frozenset(BYDAY_CODES[code] for code in codes),
                rule=raw,
            )

    return Recurrence(RecurrenceKind.UNSUPPORTED, rule=raw)


def occurs_on(recurrence: Recurrence, day: date, unsupported_policy: str = "daily") -> bool:
    """Whether a habit with this recurrence is placed on ``day``."""
    if recurrence.kind == RecurrenceKind.DAILY:
        return True
    if recurrence.kind == RecurrenceKind.WEEKLY_BY_DAY:
        return day.weekday() in recurrence.weekdays
    return unsupported_policy == "daily"


def warn_unsupported(habit_name: str, recurrence: Recurrence, unsupported_policy: str) -> None:
    if recurrence.kind != RecurrenceKind.UNSUPPORTED:
        return
    action = "placing it every day" if unsupported_policy == "daily" else "skipping it"
    logger.warning(
        f"Habit '{habit_name}' has unsupported recurrence {recurrence.rule!r}; {action}"
    )
