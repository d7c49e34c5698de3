# backend/app/tests/unit/test_transformers.py

"""
Tests for mapping between flat CSV rows and nested user API records.
"""

from datetime import date, datetime, timedelta, timezone

import pytest

from backend.app.services.csv_io import (
    CSV_TEMPLATES,
    build_template_csv,
    format_iso_date,
    generate_csv,
    parse_csv,
    transform_csv_to_user_data,
    transform_user_data_to_csv,
)

USER_ROLES = ["student", "teacher", "parent", "staff"]


def template_rows(role):
    return parse_csv(build_template_csv(role)).data


class TestCsvToUserData:
    def test_student(self):
        user = transform_csv_to_user_data(template_rows("student"), "student")[0]

        assert user["email"] == "john.doe@example.com"
        assert user["role"] == "student"
        assert user["profile"] == {
            "firstName": "John",
            "lastName": "Doe",
            "phone": "9876543210",
            "gender": "male",
            "dateOfBirth": date(2010, 5, 15),
            "address": {
                "street": "123 Main St",
                "city": "Mumbai",
                "state": "Maharashtra",
                "country": "India",
                "zipCode": "400001",
            },
        }
        assert user["studentData"] == {
            "admissionNumber": "ADM001",
            "rollNumber": "R001",
            "bloodGroup": "O+",
        }

    def test_teacher(self):
        user = transform_csv_to_user_data(template_rows("teacher"), "teacher")[0]

        assert user["teacherData"] == {
            "employeeId": "EMP001",
            "qualification": "M.Ed",
            "experience": 10,
            "joiningDate": date(2020, 4, 1),
        }
        assert "studentData" not in user

    def test_parent_relation_is_lower_cased(self):
        row = {"firstname": "Mia", "lastname": "Doe", "email": "m@x.io", "relation": "Mother"}

        user = transform_csv_to_user_data([row], "parent")[0]

        assert user["parentData"] == {"occupation": "", "relation": "mother"}

    def test_staff(self):
        user = transform_csv_to_user_data(template_rows("staff"), "staff")[1]

        assert user["staffData"] == {
            "employeeId": "STF002",
            "department": "Accounts",
            "designation": "Accountant",
            "joiningDate": date(2022, 3, 1),
        }

    def test_absent_optional_fields(self):
        row = {"firstname": "Sam", "lastname": "Lee", "email": "sam@x.io", "gender": "",
               "dateofbirth": "", "experience": "", "joiningdate": ""}

        user = transform_csv_to_user_data([row], "teacher")[0]

        assert user["profile"]["phone"] == ""
        assert user["profile"]["gender"] is None
        assert user["profile"]["dateOfBirth"] is None
        assert user["profile"]["address"]["zipCode"] == ""
        assert user["teacherData"]["experience"] is None
        assert user["teacherData"]["joiningDate"] is None

    @pytest.mark.parametrize(
        "raw, expected", [("10", 10), ("7 years", 7), ("abc", None), (" 3", 3)]
    )
    def test_experience_reads_leading_integer(self, raw, expected):
        user = transform_csv_to_user_data([{"experience": raw}], "teacher")[0]

        assert user["teacherData"]["experience"] == expected

    def test_role_without_nested_data(self):
        user = transform_csv_to_user_data([{"email": "a@b.co"}], "alumni")[0]

        assert set(user) == {"email", "role", "profile"}


class TestUserDataToCsv:
    def test_headers_follow_role_template(self):
        result = transform_user_data_to_csv([], "teacher")

        assert result == {"data": [], "headers": list(CSV_TEMPLATES["teacher"].headers)}

    def test_unknown_role_uses_student_columns(self):
        result = transform_user_data_to_csv([], "alumni")

        assert result["headers"] == list(CSV_TEMPLATES["student"].headers)

    def test_flattens_profile_and_role_data(self):
        users = [
            {
                "email": "sarah.w@example.com",
                "profile": {
                    "firstName": "Sarah",
                    "lastName": "Williams",
                    "dateOfBirth": "1990-07-25T00:00:00.000Z",
                    "address": {"city": "Chennai"},
                },
                "teacherData": {"employeeId": "EMP002", "experience": 5,
                                "joiningDate": datetime(2021, 6, 15, 9, 0)},
            }
        ]

        row = transform_user_data_to_csv(users, "teacher")["data"][0]

        assert row["firstName"] == "Sarah"
        assert row["phone"] == ""
        assert row["dateOfBirth"] == "1990-07-25"
        assert row["city"] == "Chennai"
        assert row["street"] == ""
        assert row["employeeId"] == "EMP002"
        assert row["experience"] == 5
        assert row["joiningDate"] == "2021-06-15"
        assert row["qualification"] == ""

    def test_missing_profile(self):
        row = transform_user_data_to_csv([{"email": "x@y.io"}], "student")["data"][0]

        assert row["email"] == "x@y.io"
        assert row["firstName"] == ""
        assert row["dateOfBirth"] == ""
        assert "rollNumber" not in row

    def test_exports_through_generator(self):
        users = [{"email": "a@b.co", "profile": {"firstName": "Ann, Jr."}}]
        flattened = transform_user_data_to_csv(users, "parent")

        csv_text = generate_csv(flattened["data"], flattened["headers"])

        assert csv_text.split("\n")[1].startswith('"Ann, Jr.",,a@b.co,')


class TestFormatIsoDate:
    @pytest.mark.parametrize(
        "value, expected",
        [
            (None, ""),
            ("", ""),
            (date(2010, 5, 15), "2010-05-15"),
            (datetime(2010, 5, 15, 8, 30), "2010-05-15"),
            (datetime(2010, 5, 15, 23, 30, tzinfo=timezone(timedelta(hours=-2))), "2010-05-16"),
            ("2010-05-15", "2010-05-15"),
            ("2010-05-15T22:00:00-05:00", "2010-05-16"),
            ("05/15/2010", "2010-05-15"),
            ("garbage", ""),
        ],
    )
    def test_values(self, value, expected):
        assert format_iso_date(value) == expected


@pytest.mark.parametrize("role", USER_ROLES)
def test_csv_to_api_and_back_preserves_values(role):
    rows = template_rows(role)
    headers = CSV_TEMPLATES[role].headers

    exported = transform_user_data_to_csv(transform_csv_to_user_data(rows, role), role)

    for original, flat in zip(rows, exported["data"]):
        for header in headers:
            assert str(flat[header]) == original[header.lower()], header

    regenerated = parse_csv(generate_csv(exported["data"], exported["headers"]))
    assert regenerated.data == rows
