# edudesk/console/pages/admin/courses.py
from typing import Any, Dict, List, Optional

from edudesk.core.http import ApiClient
from edudesk.console.base import (
    BasePage, render_confirmation, render_form, render_notice, render_section
)
from edudesk.console.blocks import button, heading, ui_action
from edudesk.console.flows.delete import DeleteFlow
from edudesk.console.flows.form import FormFlow
from edudesk.console.pages.admin import views
from edudesk.console.resources import COURSES
from edudesk.console.synchronizer import CollectionSynchronizer
from edudesk.schemas.course import Course, CourseStats, CourseStatus
from edudesk.state.session import SessionContext


class CourseManagementPage(BasePage):
    name = "courses"
    title = "Course Management"

    def __init__(self, http: ApiClient, session: SessionContext):
        super().__init__(http, session)
        self.courses: CollectionSynchronizer[Course] = CollectionSynchronizer(
            http, COURSES, "Failed to load courses."
        )
        self.query = ""
        self.add_form = FormFlow(http, COURSES, on_success=self.courses.refresh)
        self.edit_form = FormFlow(http, COURSES, on_success=self.courses.refresh)
        self.delete_form = DeleteFlow(http, COURSES, on_success=self.courses.refresh)

    def remotes(self):
        return (self.courses,)

    def flows(self):
        return {"add": self.add_form, "edit": self.edit_form, "delete": self.delete_form}

    async def on_mount(self):
        await self.courses.mount()

    def action_table(self):
        table = super().action_table()
        table.update({
            "refresh": lambda payload: self.courses.refresh(),
            "search": self.search,
            "open_add": lambda payload: self.add_form.open_create({"status": CourseStatus.ACTIVE.value}),
            "open_edit": self.open_edit,
            "open_delete": self.open_delete,
        })
        return table

    def search(self, payload: Dict[str, Any]):
        self.query = payload.get("query") or ""

    def open_edit(self, payload: Dict[str, Any]):
        course = self.courses.find(payload.get("course_id"))
        if course:
            self.edit_form.open_edit(course)

    def open_delete(self, payload: Dict[str, Any]):
        course = self.courses.find(payload.get("course_id"))
        if course:
            self.delete_form.open_for(course, f"{course.course_id} - {course.course_name}")

    def server_stats(self) -> Optional[CourseStats]:
        raw = self.courses.envelope.get("stats")
        return CourseStats.model_validate(raw) if isinstance(raw, dict) else None

    def render(self) -> List[Dict[str, Any]]:
        blocks = [
            heading(self.title, "Manage course offerings and schedules"),
            button("Add Course", ui_action("open_add"), icon="plus"),
        ]
        blocks += render_notice(self.add_form, self.edit_form, self.delete_form)

        server = self.server_stats()
        total = server.totalCourses if server and server.totalCourses is not None else self.courses.count()
        blocks.append(views.course_kpis(
            total,
            self.courses.count_where("status", CourseStatus.ACTIVE.value),
            self.courses.total("enrollmentCount"),
            self.courses.average("credit_hours"),
        ))
        blocks += render_section(
            self.courses,
            lambda: [views.course_table(self.courses.search(self.query), self.query)],
            has_data=bool(self.courses.items),
            loading="Loading courses...",
            empty="No courses found.",
        )

        blocks += render_form("add", self.add_form, "Add New Course", views.COURSE_FIELDS, "Add Course",
                              description="Enter course details to add it to the catalog")
        blocks += render_form("edit", self.edit_form, "Edit Course", views.COURSE_FIELDS, "Save Changes")
        blocks += render_confirmation(
            "delete", self.delete_form, "Delete Course",
            f"Delete {self.delete_form.target_label}? This cannot be undone.",
        )
        return blocks
