"""
Rule extraction.

Each clause is matched on an accent-folded copy of its text:
- weekday: first weekday name, singular or plural
- ordinal: digit right before the weekday, optional "er" / "e" / "eme" suffix
- time: first "<h>h<mm>" expression snapped to a canonical slot
- categories: whole-word keywords after the first colon, or anywhere without one

The time carried between clauses lives in an EncoderState created per call.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Dict, FrozenSet, List, Optional, Tuple

from .logger import logger
from .normalize import Clause, fold_text, normalize_text, segment_clauses
from .rules import (
    DEFAULT_TIMESLOT,
    MAX_ORDINAL,
    ORDINAL_PATTERN,
    SLOT_TOLERANCE,
    TIME_PATTERN,
    WEEKDAY_PATTERN,
    WEEKDAYS_BY_WORD,
    Category,
    TimeSlot,
    Weekday,
)


@dataclass(frozen=True)
class ScheduleRule:
    ordinal: int
    weekday: Weekday
    timeslot: TimeSlot
    categories: FrozenSet[Category] = frozenset()
    # True when the slot was carried over or defaulted
    inferred_time: bool = False

    @property
    def key(self) -> Tuple[int, Weekday]:
        return (self.ordinal, self.weekday)


@dataclass(frozen=True)
class Extraction:
    """What one clause yields: an optional rule plus the state update.

    `timeslot` is the explicit time found in the clause, if any. `categories`
    is only filled for clauses without a weekday, so they can extend the rule
    written just before them.
    """

    rule: Optional[ScheduleRule] = None
    timeslot: Optional[TimeSlot] = None
    categories: FrozenSet[Category] = frozenset()
    matched_weekday: bool = False


@dataclass
class EncoderState:
    last_timeslot: TimeSlot = DEFAULT_TIMESLOT

    def commit(self, extraction: Extraction) -> None:
        if extraction.timeslot is not None:
            self.last_timeslot = extraction.timeslot


def snap_timeslot(hour: int, minute: int) -> Optional[TimeSlot]:
    """Nearest canonical slot within SLOT_TOLERANCE minutes, ties going to the earlier one."""
    if not (1 <= hour <= 23 and 0 <= minute <= 59):
        return None

    instant = hour * 60 + minute
    best = min(TimeSlot, key=lambda slot: abs(slot.minutes - instant))
    if abs(best.minutes - instant) > SLOT_TOLERANCE:
        return None
    return best


def find_timeslot(folded: str) -> Optional[TimeSlot]:
    for match in TIME_PATTERN.finditer(folded):
        slot = snap_timeslot(int(match.group(1)), int(match.group(2) or 0))
        if slot is not None:
            return slot
    return None


def find_ordinal(prefix: str) -> int:
    match = ORDINAL_PATTERN.search(prefix)
    if match is None:
        # "Tous les", misspelled fillers, nothing at all
        return 0
    return int(match.group(1))


def find_categories(folded: str) -> FrozenSet[Category]:
    return frozenset(category for category in Category if category.pattern.search(folded))


def category_text(folded: str) -> str:
    """Text after the first colon, or the whole clause when there is none."""
    _, colon, rest = folded.partition(":")
    return rest if colon else folded


def extract_clause(clause: Clause, state: EncoderState) -> Extraction:
    """Read one clause. `state` is consulted, never written."""
    folded = fold_text(clause.text)

    weekday_match = WEEKDAY_PATTERN.search(folded)
    if weekday_match is None:
        return Extraction(categories=find_categories(folded))

    timeslot = find_timeslot(folded)
    ordinal = find_ordinal(folded[: weekday_match.start()])
    if ordinal > MAX_ORDINAL:
        logger.debug(f"Ignoring clause with ordinal {ordinal}: {clause.text!r}")
        return Extraction(timeslot=timeslot, matched_weekday=True)

    rule = ScheduleRule(
        ordinal=ordinal,
        weekday=WEEKDAYS_BY_WORD[weekday_match.group(1)],
        timeslot=timeslot or state.last_timeslot,
        categories=find_categories(category_text(folded)),
        inferred_time=timeslot is None,
    )
    return Extraction(rule=rule, timeslot=timeslot, matched_weekday=True)


def consolidate(rules: List[ScheduleRule]) -> List[ScheduleRule]:
    """Fold each inferred-time rule into the next explicit rule with the same ordinal and weekday.

    An inferred rule with no such restatement after it keeps its carried-over
    slot and its position.
    """
    # Walk backwards so each key maps to the nearest explicit rule that follows.
    next_explicit: Dict[Tuple[int, Weekday], int] = {}
    targets: Dict[int, int] = {}
    for index in range(len(rules) - 1, -1, -1):
        rule = rules[index]
        if rule.inferred_time:
            if rule.key in next_explicit:
                targets[index] = next_explicit[rule.key]
        else:
            next_explicit[rule.key] = index

    merged = list(rules)
    folded_away = set()
    for index, rule in enumerate(rules):
        target = targets.get(index)
        if target is not None:
            merged[target] = replace(merged[target], categories=merged[target].categories | rule.categories)
            folded_away.add(index)

    return [rule for index, rule in enumerate(merged) if index not in folded_away]


def extract_rules(text: Optional[str]) -> List[ScheduleRule]:
    text = normalize_text(text)
    if not text:
        return []

    state = EncoderState()
    rules: List[ScheduleRule] = []
    # Rule that a weekday-less fragment on the same line may still extend
    open_index: Optional[int] = None
    open_line = -1

    for clause in segment_clauses(text):
        extraction = extract_clause(clause, state)
        state.commit(extraction)

        if extraction.matched_weekday:
            open_index = None
            if extraction.rule is not None:
                rules.append(extraction.rule)
                open_index = len(rules) - 1
                open_line = clause.line
        elif extraction.categories and open_index is not None and clause.line == open_line:
            rule = rules[open_index]
            rules[open_index] = replace(rule, categories=rule.categories | extraction.categories)
        else:
            logger.debug(f"Skipping clause without weekday: {clause.text!r}")

    kept = []
    for rule in rules:
        if rule.categories:
            kept.append(rule)
        else:
            logger.debug(f"Dropping {rule.ordinal}{rule.weekday.code}: no category")

    return consolidate(kept)
