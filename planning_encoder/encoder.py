"""
Planning tags.

A tag is six characters: ordinal digit, weekday code, timeslot code and
category code, e.g. "2VeMfFr". Tags are concatenated without separator.
"""

from __future__ import annotations

from dataclasses import replace
from typing import Iterable, List, Optional

from .errors import TagDecodeError
from .extract import ScheduleRule, extract_rules
from .rules import (
    CATEGORIES_BY_CODE,
    TAG_LENGTH,
    TAG_PATTERN,
    TIMESLOTS_BY_CODE,
    WEEKDAYS_BY_CODE,
    Category,
)


def format_tag(rule: ScheduleRule, category: Category) -> str:
    return f"{rule.ordinal}{rule.weekday.code}{rule.timeslot.code}{category.code}"


def encode_rules(rules: Iterable[ScheduleRule]) -> str:
    tags: List[str] = []

    for rule in rules:
        for category in Category:
            if category in rule.categories:
                tags.append(format_tag(rule, category))

    return "".join(tags)


def encode_schedule(text: Optional[str]) -> str:
    """
    Encode a free-text planning ("2e vendredi 10h: Frais, Sec.") into tags.

    Never raises: clauses that cannot be read are left out, and empty or
    missing text gives "".
    """
    return encode_rules(extract_rules(text))


def split_tags(encoded: str) -> List[str]:
    return [encoded[i : i + TAG_LENGTH] for i in range(0, len(encoded), TAG_LENGTH)]


def decode_schedule(encoded: Optional[str]) -> List[ScheduleRule]:
    """
    Decode tags back into rules.

    Consecutive tags sharing ordinal, weekday and timeslot are grouped into a
    single rule. Raises TagDecodeError on anything that is not a tag.
    """
    if not encoded:
        return []

    if len(encoded) % TAG_LENGTH:
        raise TagDecodeError(
            "BAD_LENGTH",
            f"Encoded planning length {len(encoded)} is not a multiple of {TAG_LENGTH}",
        )

    rules: List[ScheduleRule] = []
    for index, tag in enumerate(split_tags(encoded)):
        match = TAG_PATTERN.fullmatch(tag)
        if match is None:
            raise TagDecodeError("UNKNOWN_TAG", f"Unknown tag {tag!r} at position {index}")

        ordinal = int(match.group(1))
        weekday = WEEKDAYS_BY_CODE[match.group(2)]
        timeslot = TIMESLOTS_BY_CODE[match.group(3)]
        category = CATEGORIES_BY_CODE[match.group(4)]

        last = rules[-1] if rules else None
        if last is not None and (last.ordinal, last.weekday, last.timeslot) == (ordinal, weekday, timeslot):
            rules[-1] = replace(last, categories=last.categories | {category})
        else:
            rules.append(ScheduleRule(ordinal, weekday, timeslot, frozenset({category})))

    return rules


def describe_rule(rule: ScheduleRule) -> str:
    if rule.ordinal == 0:
        when = f"Tous les {rule.weekday.word}s"
    elif rule.ordinal == 1:
        when = f"1er {rule.weekday.word}"
    else:
        when = f"{rule.ordinal}e {rule.weekday.word}"

    labels = ", ".join(category.label for category in Category if category in rule.categories)
    return f"{when} {rule.timeslot.label}: {labels}."


def describe_schedule(rules: Iterable[ScheduleRule]) -> str:
    """Canonical French rendering, one rule per line. Encoding it gives the same tags back."""
    return "\n".join(describe_rule(rule) for rule in rules)
