"""
Text cleanup ahead of schedule extraction.

Responsibilities:
- superscript ordinal suffixes rewritten to plain letters
- accent folding for matching (never returned to callers)
- clause segmentation on periods and line breaks
"""

from __future__ import annotations

import unicodedata
from dataclasses import dataclass
from typing import List, Optional

from .rules import CLAUSE_BOUNDARY, SUPERSCRIPTS


@dataclass(frozen=True)
class Clause:
    line: int
    text: str


def normalize_text(text: Optional[str]) -> str:
    """Rewrite "2ᵉ"/"1ᵉʳ" style suffixes; accents, case and punctuation are kept."""
    if not text:
        return ""

    for glyph, plain in SUPERSCRIPTS.items():
        text = text.replace(glyph, plain)
    return text


def fold_text(text: str) -> str:
    """Lower-cased copy with combining marks removed ("Surgelé" -> "surgele")."""
    decomposed = unicodedata.normalize("NFD", text.lower())
    return "".join(ch for ch in decomposed if unicodedata.category(ch) != "Mn")


def segment_clauses(text: str) -> List[Clause]:
    clauses: List[Clause] = []

    for line_no, line in enumerate(text.replace("\r\n", "\n").replace("\r", "\n").split("\n")):
        for part in CLAUSE_BOUNDARY.split(line):
            part = part.strip()
            if part:
                clauses.append(Clause(line=line_no, text=part))

    return clauses
