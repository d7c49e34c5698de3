# backend/app/services/csv_io/file_io.py
"""
Upload and download helpers around the CSV engine.

Reading an upload is the only place the CSV flow raises for bad input: a
missing file, a name that does not end in ``.csv``, an oversized upload or a
read/decoding failure all raise ``CSVFileError``. Downloads are plain
``Response`` objects with an attachment disposition.
"""

import logging
import re
from typing import Optional

import chardet
from fastapi import Response, UploadFile

from ...config import get_settings
from ...core.exceptions import CSVFileError, TemplateNotFoundError
from .csv_processor import escape_csv_value
from .validation_schemas import get_template

logger = logging.getLogger(__name__)

CSV_MEDIA_TYPE = "text/csv;charset=utf-8"


def decode_csv_bytes(raw: bytes, fallback_encoding: str = "utf-8") -> str:
    """
    Decode uploaded bytes, preferring UTF-8 (with or without BOM).

    Falls back to chardet detection for files saved in a legacy code page.
    """
    try:
        return raw.decode("utf-8-sig")
    except UnicodeDecodeError:
        pass

    result = chardet.detect(raw)
    encoding = result.get("encoding") or fallback_encoding
    confidence = result.get("confidence") or 0
    logger.info(f"Detected encoding: {encoding} (confidence: {confidence:.2f})")
    try:
        return raw.decode(encoding)
    except (UnicodeDecodeError, LookupError) as e:
        raise CSVFileError.from_exception(
            e, f"Could not decode file as {encoding}", details={"encoding": encoding}
        ) from e


async def read_csv_file(
    file: Optional[UploadFile], *, max_size: Optional[int] = None
) -> str:
    """Return the text content of an uploaded CSV file."""
    if file is None:
        raise CSVFileError("No file provided")

    filename = file.filename or ""
    if not filename.endswith(".csv"):
        logger.warning(
            f"Rejected upload with non-CSV name '{filename}'",
            extra={"upload_name": filename},
        )
        raise CSVFileError("File must be a CSV file", filename=filename)

    settings = get_settings()
    limit = max_size if max_size is not None else settings.MAX_UPLOAD_SIZE

    try:
        # Never buffer more than limit + 1 bytes of an upload.
        raw = await file.read(limit + 1)
    except Exception as e:
        logger.error(f"Failed to read upload: {e}", extra={"upload_name": filename})
        raise CSVFileError.from_exception(e, "Failed to read file", filename=filename) from e

    if len(raw) > limit:
        raise CSVFileError(
            f"File exceeds the maximum upload size of {limit} bytes",
            filename=filename,
            details={"limit": limit},
        )

    try:
        text = decode_csv_bytes(raw, settings.CSV_FALLBACK_ENCODING)
    except CSVFileError as e:
        e.with_context(filename=filename)
        raise

    logger.info(f"Read {len(raw)} bytes from upload", extra={"upload_name": filename})
    return text


def download_csv(csv_text: str, filename: str) -> Response:
    """Wrap CSV text in a response that downloads as ``<filename>.csv``."""
    safe_name = re.sub(r"[\r\n]+", " ", filename.replace('"', ""))
    return Response(
        content=csv_text,
        media_type=CSV_MEDIA_TYPE,
        headers={"Content-Disposition": f'attachment; filename="{safe_name}.csv"'},
    )


def build_template_csv(template_name: str) -> str:
    """Header line plus the example rows of a template."""
    template = get_template(template_name)
    if template is None:
        raise TemplateNotFoundError(template_name)

    rows = [",".join(template.headers)]
    for example in template.example:
        rows.append(",".join(escape_csv_value(value) for value in example))
    return "\n".join(rows)


def download_csv_template(template_name: str) -> Response:
    csv_text = build_template_csv(template_name)
    return download_csv(csv_text, f"{template_name}_import_template")


__all__ = [
    "CSV_MEDIA_TYPE",
    "decode_csv_bytes",
    "read_csv_file",
    "download_csv",
    "build_template_csv",
    "download_csv_template",
]
