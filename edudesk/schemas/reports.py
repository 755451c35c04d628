# edudesk/schemas/reports.py
from typing import Any

from pydantic import BaseModel, ConfigDict


class AdminStats(BaseModel):
    model_config = ConfigDict(extra="allow")

    totalStudents: int = 0
    activeCourses: int = 0
    facultyMembers: int = 0
    averageAttendance: str | float | None = None


class TrendPoint(BaseModel):
    month: str
    students: int = 0


class WeeklyAttendancePoint(BaseModel):
    day: str
    percentage: float | None = None


class DepartmentShare(BaseModel):
    name: str
    value: int = 0


class PerformanceBucket(BaseModel):
    range: str
    students: int = 0


class ReportData(BaseModel):
    keyMetrics: dict[str, Any] = {}
    enrollmentTrend: list[TrendPoint] = []
    weeklyAttendance: list[WeeklyAttendancePoint] = []
    departmentDistribution: list[DepartmentShare] = []
    performanceDistribution: list[PerformanceBucket] = []
