# backend/app/api/v1/routes/csv_io.py
import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, File, Response, UploadFile, status

from ....config import get_settings
from ....schemas.csv_io import (
    GenericResponse,
    ImportPreview,
    RecordsExportRequest,
    TemplateRead,
    UsersExportRequest,
)
from ....services.csv_io import (
    CSV_TEMPLATES,
    CSVImportService,
    download_csv_template,
)

router = APIRouter()
logger = logging.getLogger(__name__)


def get_import_service() -> CSVImportService:
    return CSVImportService(get_settings())


@router.get(
    "/templates",
    response_model=List[TemplateRead],
    summary="List CSV templates",
)
async def list_csv_templates():
    return [
        TemplateRead(name=name, headers=list(t.headers), required=list(t.required))
        for name, t in CSV_TEMPLATES.items()
    ]


@router.get(
    "/templates/{template_name}/download",
    summary="Download an import template with example rows",
)
async def download_template(template_name: str) -> Response:
    return download_csv_template(template_name)


@router.post(
    "/import/{template_name}/preview",
    response_model=ImportPreview,
    summary="Parse and validate an uploaded CSV without importing it",
)
async def preview_import(
    template_name: str,
    file: Optional[UploadFile] = File(None),
    service: CSVImportService = Depends(get_import_service),
):
    try:
        return await service.preview_upload(file, template_name)
    finally:
        if file is not None:
            await file.close()


@router.post(
    "/users/{role}/import",
    response_model=GenericResponse,
    summary="Validate a user CSV and build the bulk-import payload",
)
async def prepare_user_import(
    role: str,
    file: Optional[UploadFile] = File(None),
    service: CSVImportService = Depends(get_import_service),
):
    try:
        result = await service.prepare_user_upload(file, role)
    finally:
        if file is not None:
            await file.close()

    preview: ImportPreview = result["preview"]
    if not preview.valid:
        return GenericResponse(
            success=False,
            message=f"{len(preview.errors)} problems found in the uploaded file.",
            data={"preview": preview.model_dump(), "users": []},
            error=preview.errors[0],
        )
    return GenericResponse(
        success=True,
        message=f"{len(result['users'])} {role} records ready for import.",
        data={"preview": preview.model_dump(), "users": result["users"]},
    )


@router.post(
    "/export/{template_name}",
    status_code=status.HTTP_200_OK,
    summary="Export records as CSV using a template's columns",
)
async def export_records(
    template_name: str,
    payload: RecordsExportRequest,
    service: CSVImportService = Depends(get_import_service),
) -> Response:
    return service.export_records(payload.records, template_name, payload.filename)


@router.post(
    "/users/{role}/export",
    status_code=status.HTTP_200_OK,
    summary="Export API user records as CSV",
)
async def export_users(
    role: str,
    payload: UsersExportRequest,
    service: CSVImportService = Depends(get_import_service),
) -> Response:
    return service.export_users(payload.users, role, payload.filename)
