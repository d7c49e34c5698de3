# backend/app/services/csv_io/import_service.py
import logging
from datetime import date
from typing import Any, Dict, List, Mapping, Optional, Sequence

from fastapi import Response, UploadFile

from ...config import Settings, get_settings
from ...core.exceptions import TemplateNotFoundError
from ...schemas.csv_io import ImportPreview
from .csv_processor import generate_csv, parse_csv
from .file_io import download_csv, read_csv_file
from .transformers import transform_csv_to_user_data, transform_user_data_to_csv
from .validation_schemas import get_template
from .validators import validate_csv_format, validate_field_choices

logger = logging.getLogger(__name__)


class CSVImportService:
    """Runs the read -> parse -> validate -> transform steps of a bulk import,
    and the assemble -> generate -> download steps of an export."""

    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings or get_settings()

    def preview(self, text: str, template_name: str) -> ImportPreview:
        """
        Parse and validate CSV text without importing anything.

        Structural parse errors stop the preview before validation, so the
        user fixes the file layout first.
        """
        parsed = parse_csv(text)
        if parsed.errors:
            logger.info(
                f"Preview for '{template_name}' stopped with {len(parsed.errors)} parse errors"
            )
            return ImportPreview(
                template=template_name,
                headers=parsed.headers,
                data=parsed.data,
                count=len(parsed.data),
                errors=parsed.errors,
            )

        validation = validate_csv_format(parsed.headers, parsed.data, template_name)
        errors = list(validation.errors)
        errors.extend(validate_field_choices(parsed.headers, parsed.data, template_name))

        preview = ImportPreview(
            template=template_name,
            headers=parsed.headers,
            data=parsed.data,
            count=len(parsed.data),
            errors=errors,
            warnings=validation.warnings,
        )
        logger.info(
            f"Preview for '{template_name}': {preview.count} rows, "
            f"{len(preview.errors)} errors, {len(preview.warnings)} warnings"
        )
        return preview

    async def preview_upload(
        self, file: Optional[UploadFile], template_name: str
    ) -> ImportPreview:
        text = await read_csv_file(file, max_size=self.settings.MAX_UPLOAD_SIZE)
        return self.preview(text, template_name)

    def prepare_user_import(self, text: str, role: str) -> Dict[str, Any]:
        """Preview a user CSV and, when it is clean, build the API payload."""
        preview = self.preview(text, role)
        users: List[Dict[str, Any]] = []
        if preview.valid:
            users = transform_csv_to_user_data(preview.data, role)
        return {"preview": preview, "users": users}

    async def prepare_user_upload(
        self, file: Optional[UploadFile], role: str
    ) -> Dict[str, Any]:
        text = await read_csv_file(file, max_size=self.settings.MAX_UPLOAD_SIZE)
        return self.prepare_user_import(text, role)

    def export_records(
        self,
        records: Sequence[Mapping[str, Any]],
        template_name: str,
        filename: Optional[str] = None,
    ) -> Response:
        template = get_template(template_name)
        if template is None:
            raise TemplateNotFoundError(template_name)
        csv_text = generate_csv(records, template.headers)
        logger.info(f"Exported {len(records)} '{template_name}' records")
        return download_csv(csv_text, filename or f"{template_name}_{date.today().isoformat()}")

    def export_users(
        self,
        users: Sequence[Mapping[str, Any]],
        role: str,
        filename: Optional[str] = None,
    ) -> Response:
        flattened = transform_user_data_to_csv(users, role)
        csv_text = generate_csv(flattened["data"], flattened["headers"])
        logger.info(f"Exported {len(users)} {role} users")
        return download_csv(csv_text, filename or f"{role}_export_{date.today().isoformat()}")
