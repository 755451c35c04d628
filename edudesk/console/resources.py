# edudesk/console/resources.py
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple, Type
from urllib.parse import quote

from pydantic import BaseModel, ValidationError

from edudesk.core.errors import ResponseFormatError
from edudesk.schemas.auth import LoginIn
from edudesk.schemas.course import Course, CourseCreate, CourseUpdate
from edudesk.schemas.enrollment import EnrollmentCreate
from edudesk.schemas.student import Student, StudentCreate, StudentUpdate


@dataclass(frozen=True)
class ResourceConfig:
    """Everything the generic synchronizer and form flow need to know about one entity."""

    name: str
    label: str
    endpoint: str
    key: str
    model: Type[BaseModel]
    create_model: Optional[Type[BaseModel]] = None
    update_model: Optional[Type[BaseModel]] = None
    required_fields: Tuple[str, ...] = ()
    search_fields: Tuple[str, ...] = ()
    immutable_fields: Tuple[str, ...] = ()
    labels: Dict[str, str] = field(default_factory=dict)
    # Set when the list comes from a different endpoint wrapped in an envelope
    list_endpoint: Optional[str] = None
    list_key: Optional[str] = None

    @property
    def list_path(self) -> str:
        return self.list_endpoint or self.endpoint

    def item_path(self, key_value: Any) -> str:
        return f"{self.endpoint}/{quote(str(key_value), safe='')}"

    def label_for(self, field_name: str) -> str:
        return self.labels.get(field_name, field_name.replace("_", " ").capitalize())

    def key_of(self, item: BaseModel) -> Any:
        return getattr(item, self.key)

    def parse_list(self, payload: Any) -> Tuple[List[BaseModel], Dict[str, Any]]:
        """Split a list response into typed items and any envelope fields around them."""
        envelope: Dict[str, Any] = {}
        rows = payload
        if self.list_key:
            if not isinstance(payload, dict):
                raise ResponseFormatError(f"Unexpected {self.label.lower()} list response.")
            rows = payload.get(self.list_key) or []
            envelope = {k: v for k, v in payload.items() if k != self.list_key}
        if rows is None:
            rows = []
        if not isinstance(rows, list):
            raise ResponseFormatError(f"Unexpected {self.label.lower()} list response.")
        try:
            return [self.model.model_validate(row) for row in rows], envelope
        except ValidationError as e:
            raise ResponseFormatError(f"Unexpected {self.label.lower()} record from server.") from e


STUDENTS = ResourceConfig(
    name="student",
    label="Student",
    endpoint="/api/students",
    key="student_id",
    model=Student,
    create_model=StudentCreate,
    update_model=StudentUpdate,
    required_fields=("student_id", "first_name", "last_name", "email", "department", "current_year"),
    search_fields=("full_name", "student_id", "email"),
    immutable_fields=("student_id",),
    labels={
        "student_id": "Student ID",
        "first_name": "First name",
        "last_name": "Last name",
        "email": "Email",
        "department": "Department",
        "current_year": "Year",
        "status": "Status",
    },
)

COURSES = ResourceConfig(
    name="course",
    label="Course",
    endpoint="/api/courses",
    key="course_id",
    model=Course,
    create_model=CourseCreate,
    update_model=CourseUpdate,
    required_fields=("course_id", "course_name", "credit_hours", "faculty_name", "department"),
    search_fields=("course_name", "course_id", "faculty_name"),
    immutable_fields=("course_id",),
    labels={
        "course_id": "Course ID",
        "course_name": "Course name",
        "credit_hours": "Credit hours",
        "faculty_name": "Instructor",
        "department": "Department",
        "schedule": "Schedule",
        "status": "Status",
    },
    list_endpoint="/api/admin/courses-overview",
    list_key="courses",
)

ENROLLMENTS = ResourceConfig(
    name="enrollment",
    label="Enrollment",
    endpoint="/api/enrollments",
    key="student_id",
    model=EnrollmentCreate,
    create_model=EnrollmentCreate,
    required_fields=("student_id", "course_id", "semester_id"),
    labels={"student_id": "Student", "course_id": "Course", "semester_id": "Semester"},
)

LOGIN = ResourceConfig(
    name="login",
    label="Login",
    endpoint="/api/login",
    key="userId",
    model=LoginIn,
    create_model=LoginIn,
    required_fields=("userId", "password", "role"),
    labels={"userId": "ID", "password": "Password", "role": "Role"},
)
