from typing import Optional

from fastapi import FastAPI, File, HTTPException, UploadFile

from .batch import preprocess_csv_bytes
from .config import settings
from .encoder import decode_schedule, describe_schedule, encode_schedule, split_tags
from .errors import ColumnNotFoundError, TagDecodeError
from .extract import ScheduleRule
from .info import find_planning, preprocess_info
from .logger import logger, setup_logger
from .models import (
    BatchResponse,
    DecodeRequest,
    DecodeResponse,
    EncodeRequest,
    EncodeResponse,
    HealthResponse,
    PreprocessRequest,
    PreprocessResponse,
    RuleModel,
)
from .rules import Category

setup_logger(level=settings.log_level)

app = FastAPI(
    title="planning-encoder",
    description="Encode French delivery plannings into compact schedule tags",
    version="0.1.0",
)


def _rule_model(rule: ScheduleRule) -> RuleModel:
    return RuleModel(
        ordinal=rule.ordinal,
        weekday=rule.weekday.code,
        timeslot=rule.timeslot.code,
        time=rule.timeslot.label,
        categories=[category.code for category in Category if category in rule.categories],
    )


@app.get("/health", response_model=HealthResponse)
def health():
    return {"ok": True}


@app.post("/encode", response_model=EncodeResponse)
def encode(request: EncodeRequest):
    encoded = encode_schedule(request.text)
    return {"encoded": encoded, "tags": split_tags(encoded)}


@app.post("/decode", response_model=DecodeResponse)
def decode(request: DecodeRequest):
    try:
        rules = decode_schedule(request.encoded)
    except TagDecodeError as e:
        logger.info(f"Rejected planning {request.encoded!r}: {e.code}")
        raise HTTPException(status_code=422, detail=e.message) from e

    return {
        "rules": [_rule_model(rule) for rule in rules],
        "description": describe_schedule(rules),
    }


@app.post("/preprocess", response_model=PreprocessResponse)
def preprocess(request: PreprocessRequest):
    processed = preprocess_info(request.text)
    return {"processed": processed, "planning": find_planning(processed)}


@app.post("/preprocess/csv", response_model=BatchResponse)
async def preprocess_csv(file: UploadFile = File(...), column: Optional[str] = None):
    if not (file.filename or "").lower().endswith(".csv"):
        raise HTTPException(status_code=422, detail="Only CSV files are supported")

    raw = await file.read()
    if len(raw) > settings.max_upload_bytes:
        raise HTTPException(status_code=422, detail=f"File exceeds {settings.max_upload_bytes} bytes")

    try:
        return preprocess_csv_bytes(raw, column or settings.info_column)
    except ColumnNotFoundError as e:
        logger.info(f"Rejected {file.filename}: {e.code}")
        raise HTTPException(status_code=422, detail=e.message) from e
