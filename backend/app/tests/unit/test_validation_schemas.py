# backend/app/tests/unit/test_validation_schemas.py

import pytest

from backend.app.services.csv_io import (
    CSV_TEMPLATES,
    CsvTemplate,
    build_template_csv,
    get_template,
    list_templates,
    parse_csv,
    validate_csv_format,
)

EXPECTED_TEMPLATES = [
    "student",
    "teacher",
    "parent",
    "staff",
    "attendance",
    "examResults",
    "fees",
    "admissions",
    "books",
    "payroll",
    "events",
    "homework",
]


class TestRegistry:
    def test_template_names_in_order(self):
        assert list_templates() == EXPECTED_TEMPLATES

    def test_unknown_template(self):
        assert get_template("alumni") is None

    def test_registry_is_read_only(self):
        with pytest.raises(TypeError):
            CSV_TEMPLATES["alumni"] = CsvTemplate(headers=("name",))  # type: ignore[index]

    @pytest.mark.parametrize("name", EXPECTED_TEMPLATES)
    def test_required_columns_are_headers(self, name):
        template = CSV_TEMPLATES[name]
        lowered = template.lowered_headers

        assert all(req.lower() in lowered for req in template.required)
        assert all(len(row) == len(template.headers) for row in template.example)

    def test_attendance_template(self):
        template = CSV_TEMPLATES["attendance"]

        assert template.headers == (
            "rollNumber", "studentName", "email", "status", "date", "remarks",
        )
        assert template.required == ("rollNumber", "status", "date")

    def test_export_only_templates_have_no_requirements(self):
        for name in ("payroll", "events", "homework"):
            assert CSV_TEMPLATES[name].required == ()
            assert CSV_TEMPLATES[name].example == ()


class TestCsvTemplate:
    def test_rejects_required_column_outside_headers(self):
        with pytest.raises(ValueError):
            CsvTemplate(headers=("name",), required=("email",))

    def test_required_match_is_case_insensitive(self):
        template = CsvTemplate(headers=("firstName",), required=("FIRSTNAME",))

        assert template.required == ("FIRSTNAME",)

    def test_rejects_ragged_example(self):
        with pytest.raises(ValueError):
            CsvTemplate(headers=("a", "b"), example=(("1",),))

    def test_is_immutable(self):
        template = CSV_TEMPLATES["books"]

        with pytest.raises(AttributeError):
            template.headers = ()  # type: ignore[misc]


@pytest.mark.parametrize(
    "name", [n for n in EXPECTED_TEMPLATES if CSV_TEMPLATES[n].example]
)
def test_downloadable_templates_import_cleanly(name):
    parsed = parse_csv(build_template_csv(name))

    assert parsed.errors == []
    assert len(parsed.data) == len(CSV_TEMPLATES[name].example)

    result = validate_csv_format(parsed.headers, parsed.data, name)

    assert result.valid, result.errors
    assert result.warnings == []
