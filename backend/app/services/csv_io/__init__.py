# backend/app/services/csv_io/__init__.py
"""
CSV Import/Export Package for the School Admin system.
Parses, validates and generates the CSV files used for bulk import and
export of students, staff, attendance, results, fees and other records.
"""

from .csv_processor import (
    MIN_ROWS_ERROR,
    tokenize_csv_line,
    parse_csv,
    parse_date,
    get_nested_value,
    escape_csv_value,
    generate_csv,
)
from .validation_schemas import (
    CsvTemplate,
    CSV_TEMPLATES,
    FIELD_CHOICES,
    get_template,
    list_templates,
)
from .validators import (
    is_valid_email,
    is_valid_date,
    validate_csv_format,
    validate_field_choices,
)
from .transformers import (
    format_iso_date,
    transform_csv_to_user_data,
    transform_user_data_to_csv,
)
from .file_io import (
    CSV_MEDIA_TYPE,
    decode_csv_bytes,
    read_csv_file,
    download_csv,
    build_template_csv,
    download_csv_template,
)
from .import_service import CSVImportService

__all__ = [
    # Parsing and generation
    "MIN_ROWS_ERROR",
    "tokenize_csv_line",
    "parse_csv",
    "parse_date",
    "get_nested_value",
    "escape_csv_value",
    "generate_csv",
    # Templates
    "CsvTemplate",
    "CSV_TEMPLATES",
    "FIELD_CHOICES",
    "get_template",
    "list_templates",
    # Validation
    "is_valid_email",
    "is_valid_date",
    "validate_csv_format",
    "validate_field_choices",
    # User record mapping
    "format_iso_date",
    "transform_csv_to_user_data",
    "transform_user_data_to_csv",
    # Upload / download
    "CSV_MEDIA_TYPE",
    "decode_csv_bytes",
    "read_csv_file",
    "download_csv",
    "build_template_csv",
    "download_csv_template",
    # Workflow
    "CSVImportService",
]
