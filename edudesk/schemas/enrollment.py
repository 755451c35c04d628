# edudesk/schemas/enrollment.py
from pydantic import BaseModel, ConfigDict

from edudesk.schemas.course import Course


class Semester(BaseModel):
    model_config = ConfigDict(extra="allow")

    semester_id: int
    semester_name: str = ""


class EnrollmentData(BaseModel):
    """Reference data behind the enroll dialog."""
    courses: list[Course] = []
    semesters: list[Semester] = []


class EnrollmentCreate(BaseModel):
    student_id: str
    course_id: str
    semester_id: int
