"""
"Informations complémentaires" preprocessing.

Human-readable bits of the info field are rewritten into machine tags:
- "UD: 5" / "100 UD." -> "$ud:5$" / "$ud:100$"
- "Planning: Tous les lundis 8h30: Frais." -> "$planning:0LuMdFr$"
"""

from __future__ import annotations

from typing import Optional

from .encoder import encode_schedule
from .normalize import normalize_text
from .rules import (
    PLANNING_BLOCK_PATTERN,
    PLANNING_TAG_PATTERN,
    UD_COUNT_PATTERN,
    UD_LABEL_PATTERN,
)


def _planning_tag(match) -> str:
    return f"$planning:{encode_schedule(match.group(1).strip())}$"


def preprocess_info(text: Optional[str]) -> str:
    if not text:
        return ""

    processed = normalize_text(text)
    processed = UD_LABEL_PATTERN.sub(r"$ud:\1$", processed)
    processed = UD_COUNT_PATTERN.sub(r"$ud:\1$", processed)
    processed = PLANNING_BLOCK_PATTERN.sub(_planning_tag, processed)
    return processed


def find_planning(processed: str) -> Optional[str]:
    """Payload of the first $planning:...$ tag, if any."""
    match = PLANNING_TAG_PATTERN.search(processed)
    return match.group(1) if match else None
