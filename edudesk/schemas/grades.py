# edudesk/schemas/grades.py
from pydantic import BaseModel, ConfigDict


class CourseGradeDetail(BaseModel):
    model_config = ConfigDict(extra="allow")

    course_id: str
    course_name: str = ""
    credit_hours: int | None = None
    numeric_score: float | None = None  # None until graded
    letter_grade: str | None = None


class GradeSummary(BaseModel):
    model_config = ConfigDict(extra="allow")

    currentSgpa: str | float | None = None
    totalCredits: int = 0
    coursesPassed: int = 0
    totalCourses: int = 0
    averageScore: str | float | None = None


class GradeReport(BaseModel):
    summary: GradeSummary | None = None
    details: list[CourseGradeDetail] = []
