# edudesk/console/pages/admin/students.py
import asyncio
from typing import Any, Dict, List, Optional

from edudesk.core.http import ApiClient
from edudesk.core.logging import log
from edudesk.console.base import (
    BasePage, render_confirmation, render_form, render_notice, render_section
)
from edudesk.console.blocks import button, error_block, form, form_field, heading, ui_action
from edudesk.console.flows.delete import DeleteFlow
from edudesk.console.flows.enrollment import EnrollmentFlow
from edudesk.console.flows.form import FormFlow
from edudesk.console.pages.admin import views
from edudesk.console.resources import STUDENTS
from edudesk.console.synchronizer import CollectionSynchronizer, RecordLoader
from edudesk.schemas.student import AverageGpa, Student, StudentStatus
from edudesk.state.session import SessionContext


class StudentManagementPage(BasePage):
    """Roster with search, stats and the add/edit/delete/enroll dialogs."""

    name = "students"
    title = "Student Management"

    def __init__(self, http: ApiClient, session: SessionContext):
        super().__init__(http, session)
        self.students: CollectionSynchronizer[Student] = CollectionSynchronizer(
            http, STUDENTS, "Failed to load students."
        )
        self.average_gpa = RecordLoader(http, "/api/stats/average-gpa", AverageGpa, "Failed to load average SGPA.")
        self.query = ""
        self.add_form = FormFlow(http, STUDENTS, on_success=self.refresh)
        self.edit_form = FormFlow(http, STUDENTS, on_success=self.refresh)
        self.delete_form = DeleteFlow(http, STUDENTS, on_success=self.refresh)
        self.enroll_form = EnrollmentFlow(http, on_success=self.refresh)

    def remotes(self):
        return (self.students, self.average_gpa)

    def flows(self):
        return {
            "add": self.add_form,
            "edit": self.edit_form,
            "delete": self.delete_form,
            "enroll": self.enroll_form,
        }

    async def on_mount(self):
        await asyncio.gather(self.students.mount(), self.average_gpa.mount())

    async def refresh(self, payload: Optional[Dict[str, Any]] = None):
        await asyncio.gather(self.students.refresh(), self.average_gpa.refresh())

    def action_table(self):
        table = super().action_table()
        table.update({
            "refresh": self.refresh,
            "search": self.search,
            "open_add": self.open_add,
            "open_edit": self.open_edit,
            "open_delete": self.open_delete,
            "open_enroll": self.open_enroll,
        })
        return table

    def search(self, payload: Dict[str, Any]):
        self.query = payload.get("query") or ""

    def visible_students(self) -> List[Student]:
        return self.students.search(self.query)

    def open_add(self, payload: Optional[Dict[str, Any]] = None):
        self.add_form.open_create()

    def _student(self, payload: Dict[str, Any]) -> Optional[Student]:
        student = self.students.find(payload.get("student_id"))
        if student is None:
            log.info("student_not_in_list", student_id=payload.get("student_id"))
        return student

    def open_edit(self, payload: Dict[str, Any]):
        student = self._student(payload)
        if student:
            self.edit_form.open_edit(student)

    def open_delete(self, payload: Dict[str, Any]):
        student = self._student(payload)
        if student:
            self.delete_form.open_for(student, f"{student.full_name} ({student.student_id})")

    async def open_enroll(self, payload: Dict[str, Any]):
        student = self._student(payload)
        if student:
            await self.enroll_form.open_for(student)

    def render(self) -> List[Dict[str, Any]]:
        blocks = [
            heading(self.title, "Manage and monitor student records"),
            button("Add Student", ui_action("open_add"), icon="plus"),
        ]
        blocks += render_notice(self.add_form, self.edit_form, self.delete_form, self.enroll_form)

        blocks.append(views.student_kpis(
            self.students.count(),
            self.students.count_where("status", StudentStatus.ACTIVE.value),
            self.average_gpa.data.averageSgpa if self.average_gpa.data else None,
            self.students.unique_count("department"),
        ))
        if self.average_gpa.error:
            blocks.append(error_block(self.average_gpa.error, retry=ui_action("refresh")))
        blocks += render_section(
            self.students,
            lambda: [views.student_table(self.visible_students(), self.query)],
            has_data=bool(self.students.items),
            loading="Loading students...",
            empty="No students found.",
        )

        blocks += render_form("add", self.add_form, "Add New Student", views.STUDENT_FIELDS, "Add Student",
                              description="Enter student information to create a new record")
        blocks += render_form("edit", self.edit_form, "Edit Student", views.STUDENT_FIELDS, "Save Changes")
        blocks += render_confirmation(
            "delete", self.delete_form, "Delete Student",
            f"Delete {self.delete_form.target_label}? This cannot be undone.",
        )
        blocks += self._render_enroll()
        return blocks

    def _render_enroll(self) -> List[Dict[str, Any]]:
        flow = self.enroll_form
        if not flow.is_open:
            return []
        student = flow.student
        reference = flow.reference
        semester_options = flow.semester_options()
        fields = [
            form_field("course_id", "Course", "select", value=flow.draft.get("course_id"), required=True,
                       options=flow.course_options(), disabled=flow.is_submitting or reference.data is None),
            form_field("semester_id", "Semester", "select", value=flow.draft.get("semester_id"), required=True,
                       options=semester_options,
                       disabled=flow.is_submitting or not flow.semester_choices()),
        ]
        error = flow.error or reference.error
        return [form(
            "enroll",
            f"Enroll {student.full_name}" if student else "Enroll Student",
            fields,
            submit_label="Enroll",
            can_submit=flow.can_submit,
            submitting=flow.is_submitting,
            error=error,
            description="Loading courses and semesters..." if reference.loading else None,
        )]
