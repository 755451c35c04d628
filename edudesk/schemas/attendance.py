# edudesk/schemas/attendance.py
from enum import Enum

from pydantic import BaseModel, ConfigDict


class AttendanceStatus(str, Enum):
    PRESENT = "Present"
    ABSENT = "Absent"
    LATE = "Late"


class AttendanceRecord(BaseModel):
    model_config = ConfigDict(extra="allow")

    class_date: str
    course_id: str | None = None
    course_name: str | None = None
    status: AttendanceStatus


class AttendanceSummary(BaseModel):
    model_config = ConfigDict(extra="allow")

    overallRate: str | float | None = None
    totalClasses: int = 0
    attended: int = 0
    absences: int = 0


class CourseAttendanceDetail(BaseModel):
    model_config = ConfigDict(extra="allow")

    course_id: str
    course_name: str = ""
    total_classes: int = 0
    present: int = 0
    absent: int = 0
    late: int = 0
    percentage: float | None = None


class AttendanceReport(BaseModel):
    summary: AttendanceSummary | None = None
    details: list[CourseAttendanceDetail] = []
    recent: list[AttendanceRecord] = []
