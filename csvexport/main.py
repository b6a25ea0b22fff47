from __future__ import annotations

import base64
import hashlib
import json
from pathlib import PurePath
from typing import Optional
from urllib.parse import quote

from fastapi import FastAPI, File, Form, HTTPException, UploadFile
from fastapi.responses import Response

from .encoder import CsvExport
from .errors import CsvExportError, MalformedInput
from .loaders import decode_bytes, load_records
from .models import ExportRequest, ExportResponse, ExportSummary, EncodedCsv, HealthResponse

app = FastAPI(
    title="csv-export",
    description="Configurable CSV encoding of JSON records",
    version="0.1.0",
)


def content_disposition(filename: str) -> str:
    """
    Attachment header value for filename.

    Names that need percent-encoding get an ASCII fallback plus an RFC 5987
    filename* parameter; header values must stay latin-1 encodable.
    """
    fallback = filename.encode("ascii", "replace").decode("ascii")
    fallback = fallback.replace("\\", "\\\\").replace('"', '\\"')
    encoded = quote(filename)
    if encoded == filename:
        return f'attachment; filename="{fallback}"'
    return f"attachment; filename=\"{fallback}\"; filename*=UTF-8''{encoded}"


class ResponseSink:
    """Turns a delivered document into a file download response."""

    def __init__(self):
        self.response: Optional[Response] = None

    def deliver(self, text: str, filename: str, media_type: str) -> None:
        self.response = Response(
            content=text,
            media_type=media_type,
            headers={"Content-Disposition": content_disposition(filename)},
        )


def _sha256_hex(data: bytes) -> str:
    return hashlib.sha256(data).hexdigest()


def _summarize(export: CsvExport) -> ExportResponse:
    options = export.options
    if options.selects_by_header:
        columns = len(options.headers)
    elif export.records:
        columns = len(export.records[0])
    else:
        columns = None

    data = export.get_csv_data().encode("utf-8")
    return ExportResponse(
        csv=EncodedCsv(
            sha256=_sha256_hex(data),
            content_b64=base64.b64encode(data).decode("ascii"),
        ),
        summary=ExportSummary(
            rows=len(export.records),
            columns=columns,
            bom=options.use_bom,
            title=options.show_title,
            header=len(options.headers) > 0,
        ),
        filename=export.download_name,
    )


def _run_export(records, filename: str, options):
    sink = ResponseSink()
    try:
        export = CsvExport(records, filename, options, sink=sink)
    except CsvExportError as exc:
        raise HTTPException(status_code=422, detail=str(exc))

    if sink.response is not None:
        return sink.response
    return _summarize(export)


@app.get("/health", response_model=HealthResponse)
def health():
    return {"ok": True}


@app.post("/export", response_model=ExportResponse)
def export_csv(payload: ExportRequest):
    return _run_export(payload.records, payload.filename, payload.options)


@app.post("/export/upload", response_model=ExportResponse)
async def export_upload(
    file: UploadFile = File(...),
    options: Optional[str] = Form(default=None),
):
    if not file.filename or not file.filename.lower().endswith(".json"):
        raise HTTPException(status_code=422, detail="Only JSON files are supported")

    raw = await file.read()
    try:
        records = load_records(decode_bytes(raw))
        overrides = json.loads(options) if options else {}
    except MalformedInput as exc:
        raise HTTPException(status_code=422, detail=str(exc))
    except json.JSONDecodeError as exc:
        raise HTTPException(status_code=422, detail=f"options are not valid JSON: {exc}")

    return _run_export(records, PurePath(file.filename).stem, overrides)
