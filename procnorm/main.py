from typing import Optional

from fastapi import FastAPI, File, HTTPException, Query, UploadFile

from . import __version__
from .config import ConfigError, build_config
from .logging_setup import setup_logging
from .models import HealthResponse, TransformResponse
from .stream import StreamError, transform_bytes

setup_logging()

app = FastAPI(
    title="procurement-normalizer",
    description="Deterministic normalization of procurement records into contracts, buyers and suppliers",
    version=__version__,
)

@app.get("/health", response_model=HealthResponse)
def health():
    return {"ok": True}

@app.post("/transform/{transform_name}", response_model=TransformResponse)
async def transform_file(
    transform_name: str,
    file: UploadFile = File(...),
    overlay: Optional[str] = Query(default=None, description="extra fields, e.g. 'folder=Contratos|year=2021'"),
    field_delimiter: Optional[str] = Query(default=None),
    value_delimiter: Optional[str] = Query(default=None),
    country: Optional[str] = Query(default=None),
):
    if not file.filename.lower().endswith((".json", ".jsonl", ".ndjson")):
        raise HTTPException(status_code=422, detail="Only JSON or NDJSON files are supported")

    try:
        config = build_config(transform_name, overlay, field_delimiter, value_delimiter, country)
    except ConfigError as e:
        raise HTTPException(status_code=422, detail=str(e))

    raw = await file.read()
    try:
        return transform_bytes(raw, config)
    except StreamError as e:
        raise HTTPException(status_code=422, detail=str(e))
