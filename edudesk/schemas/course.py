# edudesk/schemas/course.py
from enum import Enum

from pydantic import BaseModel, ConfigDict


class CourseStatus(str, Enum):
    ACTIVE = "Active"
    INACTIVE = "Inactive"
    CANCELLED = "Cancelled"


class Course(BaseModel):
    model_config = ConfigDict(extra="allow")

    course_id: str
    course_name: str = ""
    credit_hours: int | None = None
    faculty_name: str | None = None
    department: str | None = None
    schedule: str | None = None
    status: str = CourseStatus.ACTIVE.value
    enrollmentCount: int = 0


class CourseCreate(BaseModel):
    course_id: str
    course_name: str
    credit_hours: int
    faculty_name: str
    department: str
    schedule: str | None = None
    status: CourseStatus | None = None


class CourseUpdate(BaseModel):
    """course_id is fixed once a course exists, so it is not part of an update."""
    course_name: str | None = None
    credit_hours: int | None = None
    faculty_name: str | None = None
    department: str | None = None
    schedule: str | None = None
    status: CourseStatus | None = None


class CourseStats(BaseModel):
    model_config = ConfigDict(extra="allow")

    totalCourses: int | None = None
    activeCourses: int | None = None
    totalEnrollment: int | None = None
