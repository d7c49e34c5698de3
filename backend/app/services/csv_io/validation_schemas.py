# backend/app/services/csv_io/validation_schemas.py
"""
Centralized CSV templates for bulk import and export.

Each template lists the canonical columns of one entity kind (in the order
they are written to exports and downloadable templates), the subset that must
be present and filled in on import, and example rows for the downloadable
template. Column matching on import is case-insensitive.
"""

from dataclasses import dataclass
from types import MappingProxyType
from typing import Dict, List, Mapping, Optional, Tuple


@dataclass(frozen=True)
class CsvTemplate:
    headers: Tuple[str, ...]
    required: Tuple[str, ...] = ()
    example: Tuple[Tuple[str, ...], ...] = ()

    def __post_init__(self) -> None:
        lowered = {h.lower() for h in self.headers}
        stray = [r for r in self.required if r.lower() not in lowered]
        if stray:
            raise ValueError(f"Required columns not in headers: {stray}")
        for row in self.example:
            if len(row) != len(self.headers):
                raise ValueError(
                    f"Example row has {len(row)} values for {len(self.headers)} headers"
                )

    @property
    def lowered_headers(self) -> List[str]:
        return [h.lower() for h in self.headers]


_ADDRESS = ("street", "city", "state", "country", "zipCode")

_TEMPLATES: Dict[str, CsvTemplate] = {
    "student": CsvTemplate(
        headers=(
            "firstName", "lastName", "email", "phone", "gender", "dateOfBirth",
            "admissionNumber", "rollNumber", "bloodGroup",
        ) + _ADDRESS,
        required=("firstName", "lastName", "email"),
        example=(
            ("John", "Doe", "john.doe@example.com", "9876543210", "male", "2010-05-15",
             "ADM001", "R001", "O+", "123 Main St", "Mumbai", "Maharashtra", "India", "400001"),
            ("Jane", "Smith", "jane.smith@example.com", "9876543211", "female", "2010-08-20",
             "ADM002", "R002", "A+", "456 Oak Ave", "Delhi", "Delhi", "India", "110001"),
        ),
    ),
    "teacher": CsvTemplate(
        headers=(
            "firstName", "lastName", "email", "phone", "gender", "dateOfBirth",
            "employeeId", "qualification", "experience", "joiningDate",
        ) + _ADDRESS,
        required=("firstName", "lastName", "email"),
        example=(
            ("Robert", "Johnson", "robert.j@example.com", "9876543212", "male", "1985-03-10",
             "EMP001", "M.Ed", "10", "2020-04-01", "789 Teacher Lane", "Bangalore", "Karnataka",
             "India", "560001"),
            ("Sarah", "Williams", "sarah.w@example.com", "9876543213", "female", "1990-07-25",
             "EMP002", "B.Ed", "5", "2021-06-15", "321 Edu St", "Chennai", "Tamil Nadu",
             "India", "600001"),
        ),
    ),
    "parent": CsvTemplate(
        headers=(
            "firstName", "lastName", "email", "phone", "gender", "occupation", "relation",
        ) + _ADDRESS,
        required=("firstName", "lastName", "email"),
        example=(
            ("Michael", "Doe", "michael.doe@example.com", "9876543214", "male", "Engineer",
             "father", "123 Main St", "Mumbai", "Maharashtra", "India", "400001"),
            ("Emily", "Smith", "emily.smith@example.com", "9876543215", "female", "Doctor",
             "mother", "456 Oak Ave", "Delhi", "Delhi", "India", "110001"),
        ),
    ),
    "staff": CsvTemplate(
        headers=(
            "firstName", "lastName", "email", "phone", "gender", "dateOfBirth",
            "employeeId", "department", "designation", "joiningDate",
        ) + _ADDRESS,
        required=("firstName", "lastName", "email"),
        example=(
            ("David", "Brown", "david.b@example.com", "9876543216", "male", "1988-11-05",
             "STF001", "Administration", "Office Manager", "2019-01-10", "555 Staff Rd",
             "Hyderabad", "Telangana", "India", "500001"),
            ("Lisa", "Davis", "lisa.d@example.com", "9876543217", "female", "1992-02-14",
             "STF002", "Accounts", "Accountant", "2022-03-01", "777 Admin Blvd", "Pune",
             "Maharashtra", "India", "411001"),
        ),
    ),
    "attendance": CsvTemplate(
        headers=("rollNumber", "studentName", "email", "status", "date", "remarks"),
        required=("rollNumber", "status", "date"),
        example=(
            ("R001", "John Doe", "john.doe@example.com", "present", "2024-01-15", ""),
            ("R002", "Jane Smith", "jane.smith@example.com", "absent", "2024-01-15",
             "Medical leave"),
            ("R003", "Bob Wilson", "bob.w@example.com", "late", "2024-01-15",
             "Arrived 10 mins late"),
        ),
    ),
    "examResults": CsvTemplate(
        headers=(
            "rollNumber", "studentName", "examName", "subjectName", "marksObtained",
            "maxMarks", "grade", "remarks",
        ),
        required=("rollNumber", "examName", "subjectName", "marksObtained", "maxMarks"),
        example=(
            ("R001", "John Doe", "Mid Term 2024", "Mathematics", "85", "100", "A",
             "Excellent performance"),
            ("R001", "John Doe", "Mid Term 2024", "Science", "78", "100", "B+", "Good"),
            ("R002", "Jane Smith", "Mid Term 2024", "Mathematics", "92", "100", "A+",
             "Outstanding"),
        ),
    ),
    "fees": CsvTemplate(
        headers=(
            "studentName", "rollNumber", "email", "feeType", "amount", "dueDate",
            "paidAmount", "paymentDate", "paymentMethod", "transactionId", "status",
        ),
        required=("rollNumber", "feeType", "amount"),
        example=(
            ("John Doe", "R001", "john@example.com", "Tuition Fee", "50000", "2024-04-01",
             "50000", "2024-03-25", "online", "TXN123456", "paid"),
            ("Jane Smith", "R002", "jane@example.com", "Tuition Fee", "50000", "2024-04-01",
             "25000", "2024-03-20", "cash", "", "partial"),
        ),
    ),
    "admissions": CsvTemplate(
        headers=(
            "firstName", "lastName", "email", "phone", "dateOfBirth", "gender",
            "applyingForClass", "previousSchool", "parentName", "parentPhone",
            "parentEmail", "address", "city", "state", "status",
        ),
        required=("firstName", "lastName", "email", "phone", "applyingForClass"),
        example=(
            ("John", "Doe", "john@example.com", "9876543210", "2015-05-10", "male",
             "Class 1", "ABC School", "Michael Doe", "9876543211", "michael@example.com",
             "123 Main St", "Mumbai", "Maharashtra", "submitted"),
            ("Jane", "Smith", "jane@example.com", "9876543212", "2014-08-20", "female",
             "Class 2", "XYZ School", "Emily Smith", "9876543213", "emily@example.com",
             "456 Oak Ave", "Delhi", "Delhi", "under_review"),
        ),
    ),
    "books": CsvTemplate(
        headers=(
            "title", "author", "isbn", "category", "publisher", "publicationYear",
            "copies", "availableCopies", "location", "price",
        ),
        required=("title", "author", "isbn", "category", "copies"),
        example=(
            ("Introduction to Physics", "Dr. John Smith", "978-3-16-148410-0", "textbook",
             "Academic Press", "2020", "10", "8", "Shelf A-1", "500"),
            ("Harry Potter", "J.K. Rowling", "978-0-7475-3269-9", "fiction", "Bloomsbury",
             "1997", "5", "3", "Shelf B-2", "350"),
        ),
    ),
    # Export-only templates
    "payroll": CsvTemplate(
        headers=(
            "employeeId", "employeeName", "email", "department", "designation",
            "basicSalary", "allowances", "deductions", "netSalary", "month", "year",
            "status",
        ),
    ),
    "events": CsvTemplate(
        headers=(
            "title", "type", "startDate", "endDate", "location", "description",
            "organizer", "attendees", "status",
        ),
    ),
    "homework": CsvTemplate(
        headers=(
            "studentName", "rollNumber", "homeworkTitle", "subject", "submittedAt",
            "status", "score", "maxScore", "feedback",
        ),
    ),
}

CSV_TEMPLATES: Mapping[str, CsvTemplate] = MappingProxyType(_TEMPLATES)

# Closed value sets checked on import, keyed by template then lower-cased column.
FIELD_CHOICES: Mapping[str, Mapping[str, Tuple[str, ...]]] = MappingProxyType(
    {
        "attendance": {"status": ("present", "absent", "late", "half_day", "leave")},
    }
)


def get_template(name: str) -> Optional[CsvTemplate]:
    return CSV_TEMPLATES.get(name)


def list_templates() -> List[str]:
    return list(CSV_TEMPLATES)


__all__ = [
    "CsvTemplate",
    "CSV_TEMPLATES",
    "FIELD_CHOICES",
    "get_template",
    "list_templates",
]
