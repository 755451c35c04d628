# edudesk/console/flows/enrollment.py
from typing import Any, Dict, Iterable, List, Optional, Set

from edudesk.core.http import ApiClient
from edudesk.console.flows.form import FormFlow, FormState, SuccessHook
from edudesk.console.resources import ENROLLMENTS
from edudesk.console.stats import to_number
from edudesk.console.synchronizer import RecordLoader
from edudesk.schemas.enrollment import EnrollmentData, Semester
from edudesk.schemas.student import Student

NO_VALID_SEMESTER = "No valid semester available"


def allowed_semester_ids(current_year: Any) -> Set[int]:
    """Year y maps to semesters {2y-1, 2y}; unknown years allow nothing."""
    year = to_number(current_year)
    if year is None or year != int(year) or year < 1:
        return set()
    year = int(year)
    return {2 * year - 1, 2 * year}


def filter_semesters(semesters: Iterable[Semester], current_year: Any) -> List[Semester]:
    allowed = allowed_semester_ids(current_year)
    return [s for s in semesters if s.semester_id in allowed]


class EnrollmentFlow(FormFlow):
    """Enroll one student into a course for a semester their year allows.

    The semester filter is a convenience for the operator, the backend stays
    the authority on what an enrollment may contain.
    """

    failure_message = "Failed to enroll student."

    def __init__(self, http: ApiClient, on_success: Optional[SuccessHook] = None):
        super().__init__(http, ENROLLMENTS, on_success=on_success)
        self.student: Optional[Student] = None
        self.reference = RecordLoader(
            http, "/api/enrollment-data", EnrollmentData, "Failed to load courses and semesters."
        )

    async def open_for(self, student: Student) -> bool:
        self.student = student
        self.open_create({"student_id": student.student_id, "course_id": None, "semester_id": None})
        return await self.reference.mount()

    def semester_choices(self) -> List[Semester]:
        if self.student is None or self.reference.data is None:
            return []
        return filter_semesters(self.reference.data.semesters, self.student.current_year)

    def semester_options(self) -> List[Dict[str, Any]]:
        choices = self.semester_choices()
        if not choices:
            return [{"value": "", "label": NO_VALID_SEMESTER, "disabled": True}]
        return [{"value": s.semester_id, "label": s.semester_name or f"Semester {s.semester_id}"} for s in choices]

    def course_options(self) -> List[Dict[str, Any]]:
        if self.reference.data is None:
            return []
        return [
            {"value": c.course_id, "label": f"{c.course_id} - {c.course_name}" if c.course_name else c.course_id}
            for c in self.reference.data.courses
        ]

    def set_field(self, name: str, value: Any) -> bool:
        if name == "student_id":
            return False
        if name == "semester_id" and value not in (None, ""):
            semester_id = to_number(value)
            if semester_id is None or semester_id != int(semester_id):
                return False
            if int(semester_id) not in {s.semester_id for s in self.semester_choices()}:
                return False
            value = int(semester_id)
        return super().set_field(name, value)

    @property
    def can_submit(self) -> bool:
        if self.state is not FormState.OPEN or self.reference.data is None:
            return False
        if not self.semester_choices():
            return False
        return not self.missing_fields()

    async def submit(self) -> bool:
        if self.state is FormState.OPEN and not self.semester_choices():
            self.error = "No valid semester is available for this student's year."
            return False
        return await super().submit()

    def cancel(self) -> bool:
        if not super().cancel():
            return False
        self.student = None
        return True

    def detach(self):
        super().detach()
        self.reference.unmount()
