import logging
from typing import Optional

from fastapi import FastAPI, UploadFile, File, Form, HTTPException
from .models import FormatRequest, FormatResponse, HealthResponse, QuoteStyle
from .formatting import decode_text_bytes, format_with_report, sha256_hex
from .rules import ALLOWED_UPLOAD_EXTENSIONS, DEFAULT_QUOTE_STYLE, MAX_UPLOAD_BYTES

logger = logging.getLogger(__name__)

app = FastAPI(
    title="sql-quote-formatter",
    description="Format pasted IDs for SQL IN clauses",
    version="0.1.0",
)


def _response(text: str, quote: QuoteStyle, encoding: Optional[dict] = None) -> dict:
    result, count, report = format_with_report(text, quote)
    if encoding is not None:
        report["encoding"] = encoding
    return {
        "result": result,
        "count": count,
        "quote": quote,
        "sha256": sha256_hex(result),
        "report": report,
    }


@app.get("/health", response_model=HealthResponse)
def health():
    return {"ok": True}


@app.post("/format", response_model=FormatResponse)
def format_text(body: FormatRequest):
    return _response(body.text, body.quote)


@app.post("/format/file", response_model=FormatResponse)
async def format_file(
    file: UploadFile = File(...),
    quote: QuoteStyle = Form(QuoteStyle(DEFAULT_QUOTE_STYLE)),
):
    filename = (file.filename or "").lower()
    if not filename.endswith(ALLOWED_UPLOAD_EXTENSIONS):
        raise HTTPException(status_code=422, detail="Only .txt and .csv files are supported")

    raw = await file.read(MAX_UPLOAD_BYTES + 1)
    if len(raw) > MAX_UPLOAD_BYTES:
        logger.warning("rejected upload %r: over %d bytes", file.filename, MAX_UPLOAD_BYTES)
        raise HTTPException(status_code=413, detail=f"File exceeds {MAX_UPLOAD_BYTES} bytes")

    text, encoding = decode_text_bytes(raw)
    return _response(text, quote, encoding)
