# edudesk/console/pages/admin/views.py
"""Pure presentation for the admin screens: models in, blocks out."""
from typing import Any, Dict, List, Optional

from edudesk.console.blocks import (
    action_panel, action_panel_item, action_row, button_item, chart_pie, chart_xy, column,
    count_kpi, kpis, option, status_column, table, ui_action, value_kpi
)
from edudesk.console.stats import fmt
from edudesk.schemas.course import Course, CourseStatus
from edudesk.schemas.reports import AdminStats, ReportData
from edudesk.schemas.student import Department, Student, StudentStatus

STUDENT_STATUS_BADGES = {
    StudentStatus.ACTIVE.value: "success",
    StudentStatus.INACTIVE.value: "neutral",
    StudentStatus.ALUMNI.value: "info",
}

COURSE_STATUS_BADGES = {
    CourseStatus.ACTIVE.value: "success",
    CourseStatus.INACTIVE.value: "neutral",
    CourseStatus.CANCELLED.value: "danger",
}

DEPARTMENT_OPTIONS = [option(d.value, d.value) for d in Department]
YEAR_OPTIONS = [option(str(year), f"Year {year}") for year in range(1, 5)]
STUDENT_STATUS_OPTIONS = [option(s.value, s.value) for s in StudentStatus]
COURSE_STATUS_OPTIONS = [option(s.value, s.value) for s in CourseStatus]

STUDENT_FIELDS = [
    ("student_id", "text", None),
    ("first_name", "text", None),
    ("last_name", "text", None),
    ("email", "email", None),
    ("department", "select", DEPARTMENT_OPTIONS),
    ("current_year", "select", YEAR_OPTIONS),
    ("status", "select", STUDENT_STATUS_OPTIONS),
]

COURSE_FIELDS = [
    ("course_id", "text", None),
    ("course_name", "text", None),
    ("credit_hours", "number", None),
    ("faculty_name", "text", None),
    ("department", "select", DEPARTMENT_OPTIONS),
    ("schedule", "textarea", None),
    ("status", "select", COURSE_STATUS_OPTIONS),
]


def year_label(year: Optional[int]) -> str:
    if not year:
        return "-"
    suffix = {1: "st", 2: "nd", 3: "rd"}.get(year, "th")
    return f"{year}{suffix} Year"


def admin_home_stats(stats: AdminStats) -> List[Dict[str, Any]]:
    return [kpis([
        count_kpi("Total Students", stats.totalStudents),
        count_kpi("Active Courses", stats.activeCourses),
        count_kpi("Faculty Members", stats.facultyMembers),
        value_kpi("Average Attendance", fmt(stats.averageAttendance, 1, "%")),
    ])]


def admin_navigation() -> Dict[str, Any]:
    return action_panel([
        action_panel_item("Student Management", "Add, edit and enroll students", icon="users",
                          action=ui_action("show", {"view": "students"})),
        action_panel_item("Course Management", "Maintain the course catalogue", icon="book-open",
                          action=ui_action("show", {"view": "courses"})),
        action_panel_item("Reports & Analytics", "Enrollment, attendance and performance", icon="bar-chart",
                          action=ui_action("show", {"view": "reports"})),
    ], title="Quick Actions", columns=3)


def student_kpis(total: int, active: int, average_sgpa: Any, departments: int) -> Dict[str, Any]:
    return kpis([
        count_kpi("Total Students", total),
        count_kpi("Active Students", active, variant="success"),
        value_kpi("Average SGPA", fmt(average_sgpa)),
        count_kpi("Departments", departments, variant="info"),
    ])


def student_table(students: List[Student], query: str, with_actions: bool = True) -> Dict[str, Any]:
    rows = []
    for s in students:
        row = {
            "student_id": s.student_id,
            "name": s.full_name,
            "email": s.email or "-",
            "department": s.department or "-",
            "year": year_label(s.current_year),
            "status": s.status,
        }
        if with_actions:
            payload = {"student_id": s.student_id}
            row = action_row(row, [
                button_item("Edit", ui_action("open_edit", payload), variant="ghost", icon="edit"),
                button_item("Enroll", ui_action("open_enroll", payload), variant="ghost", icon="book-plus"),
                button_item("Delete", ui_action("open_delete", payload), variant="ghost", icon="trash"),
            ])
        rows.append(row)

    return table(
        "Student Records",
        [
            column("student_id", "Student ID"),
            column("name", "Name"),
            column("email", "Contact"),
            column("department", "Department"),
            column("year", "Year", align="center"),
            status_column("status", "Status", STUDENT_STATUS_BADGES),
        ],
        rows,
        search={"placeholder": "Search students...", "value": query, "action": ui_action("search")},
    )


def course_kpis(total: int, active: int, enrollment: float, average_credits: Any) -> Dict[str, Any]:
    return kpis([
        count_kpi("Total Courses", total),
        count_kpi("Active Courses", active, variant="success"),
        count_kpi("Total Enrollment", int(enrollment), variant="info"),
        value_kpi("Average Credits", fmt(average_credits, 1)),
    ])


def course_table(courses: List[Course], query: str) -> Dict[str, Any]:
    rows = []
    for c in courses:
        payload = {"course_id": c.course_id}
        rows.append(action_row({
            "course_id": c.course_id,
            "course_name": c.course_name,
            "faculty_name": c.faculty_name or "-",
            "department": c.department or "-",
            "credit_hours": c.credit_hours if c.credit_hours is not None else "-",
            "schedule": c.schedule or "-",
            "enrolled": c.enrollmentCount,
            "status": c.status,
        }, [
            button_item("Edit", ui_action("open_edit", payload), variant="ghost", icon="edit"),
            button_item("Delete", ui_action("open_delete", payload), variant="ghost", icon="trash"),
        ]))

    return table(
        "Course Catalog",
        [
            column("course_id", "Course ID"),
            column("course_name", "Course Name"),
            column("faculty_name", "Instructor"),
            column("department", "Department"),
            column("credit_hours", "Credits", align="center"),
            column("schedule", "Schedule"),
            column("enrolled", "Enrolled", align="center"),
            status_column("status", "Status", COURSE_STATUS_BADGES),
        ],
        rows,
        search={"placeholder": "Search courses...", "value": query, "action": ui_action("search")},
    )


def report_blocks(report: ReportData) -> List[Dict[str, Any]]:
    blocks = []
    if report.keyMetrics:
        blocks.append(kpis([
            value_kpi(_metric_label(key), str(value) if value is not None else None)
            for key, value in report.keyMetrics.items()
        ]))
    blocks.append(chart_xy(
        "Enrollment Trend", "line", "month", "students",
        [{"name": "Students", "data": [p.model_dump() for p in report.enrollmentTrend]}],
    ))
    blocks.append(chart_xy(
        "Weekly Attendance", "bar", "day", "percentage",
        [{"name": "Attendance %", "data": [p.model_dump() for p in report.weeklyAttendance]}],
    ))
    blocks.append(chart_pie(
        "Department Distribution", "name", "value",
        [d.model_dump() for d in report.departmentDistribution],
    ))
    blocks.append(chart_xy(
        "Performance Distribution", "bar", "range", "students",
        [{"name": "Students", "data": [b.model_dump() for b in report.performanceDistribution]}],
    ))
    return blocks


def _metric_label(key: str) -> str:
    # camelCase -> "Camel Case"
    words, current = [], ""
    for ch in key:
        if ch.isupper() and current:
            words.append(current)
            current = ch
        else:
            current += ch
    if current:
        words.append(current)
    return " ".join(w.capitalize() for w in words)
