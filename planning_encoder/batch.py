"""
Batch preprocessing of exported CSV files.

Responsibilities:
- encoding detection + decoding
- newline normalization
- delimiter detection
- info column lookup
- per-row preprocessing with warnings
"""

from __future__ import annotations

import csv
import hashlib
import io
from typing import Any, Dict, List, Optional

from charset_normalizer import from_bytes

from .config import settings
from .errors import ColumnNotFoundError
from .info import find_planning, preprocess_info
from .logger import logger
from .normalize import fold_text
from .rules import CSV_DELIMITERS


def _sha256_hex(data: bytes) -> str:
    return hashlib.sha256(data).hexdigest()


def decode_to_text(raw: bytes) -> tuple[str, Dict[str, Any]]:
    """
    Decode uploaded bytes to LF-terminated text.

    Rules:
    - Detect encoding best-effort via charset-normalizer.
    - If decode fails, fall back to UTF-8, then to replacement characters.
    - A UTF-8 BOM is dropped.
    """
    detected = None
    match = from_bytes(raw).best()
    if match is not None:
        detected = match.encoding

    decode_used = detected or "utf-8"
    if raw.startswith(b"\xef\xbb\xbf") and (decode_used.lower().replace("-", "_") in ("utf_8", "utf8")):
        decode_used = "utf-8-sig"

    decode_fallback = False

    try:
        text = raw.decode(decode_used)
    except (UnicodeDecodeError, LookupError):
        try:
            text = raw.decode("utf-8")
            decode_used = "utf-8"
        except UnicodeDecodeError:
            # Last resort: keep going with replacement characters
            text = raw.decode("utf-8", errors="replace")
            decode_used = "utf-8"
        decode_fallback = True
        logger.warning(f"Could not decode upload as {detected!r}, used {decode_used}")

    crlf = text.count("\r\n")
    cr = text.count("\r") - crlf
    text = text.replace("\r\n", "\n").replace("\r", "\n")

    report = {
        "detected": detected,
        "decode_used": decode_used,
        "decode_fallback": decode_fallback,
        "newlines_changed": (crlf > 0) or (cr > 0),
    }
    return text, report


def detect_delimiter(text: str) -> tuple[str, bool]:
    sample = text[:4096]
    try:
        dialect = csv.Sniffer().sniff(sample, delimiters=CSV_DELIMITERS)
    except csv.Error:
        return ",", False
    return dialect.delimiter, True


def find_column(header: List[str], column: str) -> int:
    wanted = fold_text(column.strip())
    for index, name in enumerate(header):
        if fold_text(name.strip()) == wanted:
            return index
    raise ColumnNotFoundError(column)


def preprocess_csv_bytes(raw: bytes, column: str, max_cell_length: Optional[int] = None) -> Dict[str, Any]:
    """
    Preprocess the info column of every row of an exported CSV.
    Cells longer than max_cell_length (default: settings.max_text_length) are truncated.
    Returns a dict matching the API's batch response envelope.
    """
    text, encoding_report = decode_to_text(raw)
    delimiter, sniffed = detect_delimiter(text)

    rows = list(csv.reader(io.StringIO(text, newline=""), delimiter=delimiter))
    if not rows:
        raise ColumnNotFoundError(column)

    index = find_column(rows[0], column)
    limit = max_cell_length or settings.max_text_length

    items: List[Dict[str, Any]] = []
    warnings: List[Dict[str, Any]] = []
    with_planning = 0

    for i, row in enumerate(rows[1:], start=2):
        if not any(cell.strip() for cell in row):
            continue

        if len(row) <= index:
            warnings.append({
                "row": i,
                "column": column,
                "issue": "row_too_short",
                "value": str(len(row)),
                "action": "treated_as_empty",
            })
            source = ""
        else:
            source = row[index]

        if len(source) > limit:
            warnings.append({
                "row": i,
                "column": column,
                "issue": "cell_too_long",
                "value": str(len(source)),
                "action": f"truncated_to_{limit}",
            })
            source = source[:limit]

        processed = preprocess_info(source)
        planning = find_planning(processed)
        if planning is not None:
            with_planning += 1

        items.append({
            "row": i,
            "source": source,
            "processed": processed,
            "planning": planning,
        })

    logger.info(f"Preprocessed {len(items)} rows, {with_planning} with a planning")

    return {
        "items": items,
        "report": {
            "summary": {
                "rows": len(items),
                "with_planning": with_planning,
                "warnings": len(warnings),
                "sha256": _sha256_hex(raw),
            },
            "encoding": encoding_report,
            "delimiter": {
                "detected": delimiter,
                "sniffed": sniffed,
            },
            "warnings": warnings,
        },
    }
