import base64
import hashlib
import io
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from fastapi import FastAPI, File, HTTPException, Query, UploadFile
from pydantic import ValidationError

from .config import configure_logging, get_settings
from .exceptions import CsvPrepError
from .models import (
    EncodingMarker,
    HealthResponse,
    OutputFormat,
    ProcessedOutput,
    ProcessResponse,
    ReportSummary,
)
from .pipeline import process_stream
from .schemas import build_config

ACCEPTED_EXTENSIONS = (".csv", ".tsv", ".txt")
UPLOAD_CHUNK_BYTES = 64 * 1024


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    configure_logging()
    yield


app = FastAPI(
    title="csvprep",
    description="Streaming cleanup of delimited text into schema-validated records",
    version="0.2.0",
    lifespan=lifespan,
)


async def _read_upload(file: UploadFile, limit: int) -> bytes:
    """Read the upload in chunks, refusing it as soon as it exceeds `limit` bytes."""
    chunks = []
    size = 0
    while True:
        chunk = await file.read(UPLOAD_CHUNK_BYTES)
        if not chunk:
            return b"".join(chunks)
        size += len(chunk)
        if size > limit:
            raise HTTPException(status_code=413, detail="File too large")
        chunks.append(chunk)


@app.get("/health", response_model=HealthResponse)
def health():
    return {"ok": True}


@app.post("/process", response_model=ProcessResponse)
async def process_csv(
    file: UploadFile = File(...),
    dataset_type: str = Query(..., alias="type"),
    output_format: OutputFormat = Query(OutputFormat.TXT, alias="format"),
    delimiter: Optional[str] = None,
    encoding: EncodingMarker = EncodingMarker.AUTO,
    max_lines: int = Query(0, ge=0),
    skip_lines: int = Query(0, ge=0),
    no_header: bool = False,
    strict: bool = False,
    remove_duplicates: bool = False,
    validate: bool = False,
):
    if not (file.filename or "").lower().endswith(ACCEPTED_EXTENSIONS):
        raise HTTPException(status_code=422, detail="Only CSV, TSV or TXT files are supported")

    settings = get_settings()
    raw = await _read_upload(file, settings.max_upload_bytes)

    try:
        config = build_config(
            dataset_type,
            output_format=output_format,
            delimiter=delimiter,
            encoding=encoding,
            max_lines=max_lines,
            skip_lines=skip_lines,
            has_header=not no_header,
            strict_mode=strict,
            remove_duplicates=remove_duplicates,
            validate_data=validate,
        )
    except CsvPrepError as exc:
        raise HTTPException(status_code=422, detail=str(exc))
    except ValidationError as exc:
        raise HTTPException(status_code=422, detail=exc.errors(include_url=False, include_context=False))

    out = io.BytesIO()
    stats = process_stream(config, io.BytesIO(raw), out, settings)
    content = out.getvalue()

    return ProcessResponse(
        output=ProcessedOutput(
            sha256=hashlib.sha256(content).hexdigest(),
            format=config.output_format,
            content_b64=base64.b64encode(content).decode("ascii"),
        ),
        stats=stats,
        summary=ReportSummary(
            ok=stats.processed_lines > 0,
            success_rate=stats.success_rate(),
        ),
    )
