"""
Schedule vocabulary and tag alphabet.

Every spelling the extractor accepts is listed here, already accent-folded and
lower-cased, so matching never has to guess.
"""

from __future__ import annotations

import re
from enum import Enum

TAG_LENGTH = 6

# Superscript letters used in "1ᵉʳ", "2ᵉ"
SUPERSCRIPTS = {
    "ᵉ": "e",
    "ʳ": "r",
}

CLAUSE_BOUNDARY = re.compile(r"\.+")

# Slot snapping tolerance around a canonical instant, in minutes.
SLOT_TOLERANCE = 60


class Weekday(Enum):
    MONDAY = ("Lu", "lundi")
    TUESDAY = ("Ma", "mardi")
    WEDNESDAY = ("Me", "mercredi")
    THURSDAY = ("Je", "jeudi")
    FRIDAY = ("Ve", "vendredi")

    def __init__(self, code: str, word: str):
        self.code = code
        self.word = word


class TimeSlot(Enum):
    EARLY = ("Md", 8, 30)
    MID = ("Mf", 10, 0)
    AFTERNOON = ("Ap", 14, 0)

    def __init__(self, code: str, hour: int, minute: int):
        self.code = code
        self.hour = hour
        self.minute = minute

    @property
    def minutes(self) -> int:
        return self.hour * 60 + self.minute

    @property
    def label(self) -> str:
        return f"{self.hour}h{self.minute:02d}" if self.minute else f"{self.hour}h"


class Category(Enum):
    # Declaration order is the emission order.
    FRESH = ("Fr", "Frais", r"frais")
    DRY = ("Se", "Sec", r"secs?")
    FROZEN = ("Su", "Surgelé", r"surgelee?s?")

    def __init__(self, code: str, label: str, keyword: str):
        self.code = code
        self.label = label
        self.pattern = re.compile(rf"(?<![a-z]){keyword}(?![a-z])")


DEFAULT_TIMESLOT = TimeSlot.EARLY

WEEKDAY_PATTERN = re.compile(
    r"(?<![a-z])(" + "|".join(day.word for day in Weekday) + r")s?(?![a-z])"
)

# Matched against the folded text right before the weekday.
ORDINAL_PATTERN = re.compile(r"(?<!\d)(\d)\s*(?:eme|er|e)?\s*$")
MAX_ORDINAL = 4

TIME_PATTERN = re.compile(r"(?<!\d)(\d{1,2})\s*h\s*(\d{2})?(?![a-z\d])")

WEEKDAYS_BY_CODE = {day.code: day for day in Weekday}
WEEKDAYS_BY_WORD = {day.word: day for day in Weekday}
TIMESLOTS_BY_CODE = {slot.code: slot for slot in TimeSlot}
CATEGORIES_BY_CODE = {category.code: category for category in Category}

TAG_PATTERN = re.compile(
    r"([0-4])("
    + "|".join(WEEKDAYS_BY_CODE)
    + r")("
    + "|".join(TIMESLOTS_BY_CODE)
    + r")("
    + "|".join(CATEGORIES_BY_CODE)
    + r")"
)

# Info field rewriting
UD_LABEL_PATTERN = re.compile(r"UD\s*:\s*(\d+)\W*", re.IGNORECASE)
UD_COUNT_PATTERN = re.compile(r"(\d+)\s*UD\W*", re.IGNORECASE)
PLANNING_BLOCK_PATTERN = re.compile(
    # Each word starts with a letter; spaces only between words
    r"Planning\s*:((?:\s*(?:[0-4]+ *)?[^\W\d_]+(?: +[^\W\d_]+)* *[0-9]+h[0-9]*\s*:\s*[^.]+\.)+)",
    re.IGNORECASE,
)
PLANNING_TAG_PATTERN = re.compile(r"\$planning:([A-Za-z0-9]*)\$")

CSV_DELIMITERS = [",", ";", "\t", "|"]
