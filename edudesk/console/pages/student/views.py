# edudesk/console/pages/student/views.py
from typing import Any, Dict, List, Optional

from edudesk.console.blocks import (
    action_panel, action_panel_item, column, count_kpi, kpis, status_column, table, text, ui_action, value_kpi
)
from edudesk.console.stats import NO_DATA, fmt, percentage
from edudesk.schemas.attendance import AttendanceReport, AttendanceStatus, CourseAttendanceDetail
from edudesk.schemas.grades import GradeReport
from edudesk.schemas.student import StudentDetail

ATTENDANCE_BADGES = {
    AttendanceStatus.PRESENT.value: "success",
    AttendanceStatus.ABSENT.value: "danger",
    AttendanceStatus.LATE.value: "warning",
}


def profile(detail: StudentDetail) -> List[Dict[str, Any]]:
    s = detail.student
    lines = [f"**{s.full_name}**", f"Student ID: {s.student_id}"]
    if s.department:
        lines.append(f"Department: {s.department}")
    if s.current_year:
        lines.append(f"Year: {s.current_year}")
    return [
        text("\n".join(lines)),
        kpis([value_kpi("Current SGPA", fmt(detail.sgpa))]),
    ]


def student_navigation() -> Dict[str, Any]:
    return action_panel([
        action_panel_item("Grades", "Current semester results", icon="file-text",
                          action=ui_action("show", {"view": "grades"})),
        action_panel_item("Attendance", "Class attendance by course", icon="calendar",
                          action=ui_action("show", {"view": "attendance"})),
    ], title="My Records", columns=2)


def grade_summary(report: GradeReport) -> Dict[str, Any]:
    summary = report.summary
    return kpis([
        value_kpi("Current SGPA", fmt(summary.currentSgpa)),
        count_kpi("Total Credits", summary.totalCredits),
        value_kpi("Courses Passed", f"{summary.coursesPassed}/{summary.totalCourses}"),
        value_kpi("Average Score", fmt(summary.averageScore, 1)),
    ])


def grade_table(report: GradeReport) -> Dict[str, Any]:
    rows = [{
        "course_id": d.course_id,
        "course_name": d.course_name,
        "credit_hours": d.credit_hours if d.credit_hours is not None else "-",
        # Ungraded courses have no score yet
        "numeric_score": fmt(d.numeric_score, 1) if d.numeric_score is not None else "Pending",
        "letter_grade": d.letter_grade or "-",
    } for d in report.details]
    return table("Course Grades", [
        column("course_id", "Course"),
        column("course_name", "Course Name"),
        column("credit_hours", "Credits", align="center"),
        column("numeric_score", "Score", align="center"),
        column("letter_grade", "Grade", align="center"),
    ], rows)


def overall_from_details(details: List[CourseAttendanceDetail]) -> Optional[float]:
    attended = sum(d.present + d.late for d in details)
    total = sum(d.total_classes or (d.present + d.absent + d.late) for d in details)
    return percentage(attended, total)


def attendance_summary(report: AttendanceReport) -> Dict[str, Any]:
    summary = report.summary
    if summary is not None and summary.overallRate is not None:
        overall = fmt(summary.overallRate, 1, "%")
    else:
        overall = fmt(overall_from_details(report.details), 1, "%")
    total = summary.totalClasses if summary else sum(d.total_classes for d in report.details)
    attended = summary.attended if summary else sum(d.present + d.late for d in report.details)
    absences = summary.absences if summary else sum(d.absent for d in report.details)
    return kpis([
        value_kpi("Overall Attendance", overall),
        count_kpi("Total Classes", total),
        count_kpi("Classes Attended", attended, variant="success"),
        count_kpi("Absences", absences, variant="danger"),
    ])


def attendance_table(report: AttendanceReport) -> Dict[str, Any]:
    rows = []
    for d in report.details:
        rate = d.percentage if d.percentage is not None else percentage(
            d.present + d.late, d.total_classes or (d.present + d.absent + d.late)
        )
        rows.append({
            "course": f"{d.course_id} - {d.course_name}" if d.course_name else d.course_id,
            "total_classes": d.total_classes,
            "present": d.present,
            "absent": d.absent,
            "late": d.late,
            "percentage": fmt(rate, 1, "%"),
        })
    return table("Course-wise Attendance", [
        column("course", "Course"),
        column("total_classes", "Total", align="center"),
        column("present", "Present", align="center"),
        column("absent", "Absent", align="center"),
        column("late", "Late", align="center"),
        column("percentage", "Attendance", align="center"),
    ], rows)


def recent_attendance(report: AttendanceReport) -> Dict[str, Any]:
    rows = [{
        "date": r.class_date,
        "course": r.course_name or r.course_id or NO_DATA,
        "status": r.status.value,
    } for r in report.recent]
    return table("Recent Attendance", [
        column("date", "Date"),
        column("course", "Course"),
        status_column("status", "Status", ATTENDANCE_BADGES),
    ], rows)
