"""
Clean API endpoint - upload a spreadsheet, download the cleaned file.
"""
import logging
from typing import Optional
from urllib.parse import quote

from fastapi import APIRouter, File, Form, UploadFile
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import PlainTextResponse, Response

from sheet_cleaner.cleaners.config import CleanOptions
from sheet_cleaner.core.config import settings
from sheet_cleaner.core.errors import CleanError, ValidationError
from sheet_cleaner.services.clean_service import CleanService

logger = logging.getLogger(__name__)

router = APIRouter()


def content_disposition(filename: str) -> str:
    """Attachment header with an ASCII fallback name and the UTF-8 name."""
    ascii_name = filename.encode("ascii", "replace").decode("ascii").replace('"', "")
    return f"attachment; filename=\"{ascii_name}\"; filename*=UTF-8''{quote(filename)}"


def error_response(error: CleanError) -> PlainTextResponse:
    return PlainTextResponse(error.message, status_code=error.status_code)


@router.post("/clean")
async def clean_file(
    file: UploadFile = File(...),
    columns: Optional[str] = Form(None),
    trim: Optional[str] = Form(None),
    collapseSpaces: Optional[str] = Form(None),
    textCase: Optional[str] = Form(None),
    dateFormat: Optional[str] = Form(None),
    dedupeKeys: Optional[str] = Form(None),
    dropEmptyRows: Optional[str] = Form(None),
    dropEmptyCols: Optional[str] = Form(None),
    normalizeTypes: Optional[str] = Form(None),
    validateEmail: Optional[str] = Form(None),
    removeInvalidEmails: Optional[str] = Form(None),
    validateUrl: Optional[str] = Form(None),
    removeInvalidUrls: Optional[str] = Form(None),
    outputFormat: Optional[str] = Form(None),
    keepOrder: Optional[str] = Form(None),
):
    """
    Clean an uploaded CSV/XLSX/XLS file.

    Options arrive as string-encoded form fields. On success the cleaned
    file is returned as an attachment; on failure a plain-text message
    naming the failed stage.
    """
    try:
        options = CleanOptions.from_form({
            "columns": columns,
            "trim": trim,
            "collapseSpaces": collapseSpaces,
            "textCase": textCase,
            "dateFormat": dateFormat,
            "dedupeKeys": dedupeKeys,
            "dropEmptyRows": dropEmptyRows,
            "dropEmptyCols": dropEmptyCols,
            "normalizeTypes": normalizeTypes,
            "validateEmail": validateEmail,
            "removeInvalidEmails": removeInvalidEmails,
            "validateUrl": validateUrl,
            "removeInvalidUrls": removeInvalidUrls,
            "outputFormat": outputFormat,
            "keepOrder": keepOrder,
        })
    except ValidationError as e:
        return error_response(e)

    content = await file.read()
    if len(content) > settings.max_upload_bytes:
        return error_response(
            ValidationError(f"File too large (limit {settings.MAX_UPLOAD_MB} MB)", status_code=413)
        )

    service = CleanService()
    try:
        cleaned = await run_in_threadpool(
            service.run,
            content,
            file.filename,
            options,
            file.content_type,
        )
    except CleanError as e:
        return error_response(e)

    report = cleaned.report
    return Response(
        content=cleaned.content,
        media_type=cleaned.media_type,
        headers={
            "Content-Disposition": content_disposition(cleaned.filename),
            "X-Rows-In": str(report.original_shape[0]),
            "X-Rows-Out": str(report.cleaned_shape[0]),
            "X-Columns-Out": str(report.cleaned_shape[1]),
        },
    )


@router.get("/clean/options")
async def get_clean_options():
    """Describe the accepted form fields, their allowed values and defaults."""
    return CleanOptions.describe()
