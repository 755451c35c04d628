# edudesk/console/pages/student/dashboard.py
from typing import Any, Dict, List, Optional

from edudesk.core.errors import SessionError
from edudesk.core.http import ApiClient
from edudesk.core.logging import log
from edudesk.console.base import DashboardPage, render_section
from edudesk.console.blocks import error_block, heading, loading_block, route_action
from edudesk.console.pages.student import views
from edudesk.console.pages.student.attendance import AttendancePage
from edudesk.console.pages.student.grades import GradesPage
from edudesk.console.resources import STUDENTS
from edudesk.console.synchronizer import RecordLoader
from edudesk.schemas.student import StudentDetail
from edudesk.state.session import SessionContext


class StudentDashboardPage(DashboardPage):
    """Needs a session carrying a student_id; without one nothing is fetched."""

    name = "student_dashboard"
    title = "Student Dashboard"

    def __init__(self, http: ApiClient, session: SessionContext):
        super().__init__(http, session)
        self.session_error: Optional[str] = None
        self.student_id: Optional[str] = None
        self.detail: Optional[RecordLoader] = None

    async def on_mount(self):
        try:
            self.student_id = self.session.require_student_id()
        except SessionError as e:
            self.session_error = e.message
            log.warning("student_dashboard_no_session", error=e.message)
            return
        self.detail = RecordLoader(
            self.http, STUDENTS.item_path(self.student_id), StudentDetail,
            "Failed to load dashboard data. Please try refreshing.",
        )
        await self.detail.mount()

    def remotes(self):
        return (self.detail,) if self.detail else ()

    def child_factories(self):
        if not self.student_id:
            return {}
        return {
            "grades": lambda: GradesPage(self.http, self.session, self.student_id),
            "attendance": lambda: AttendancePage(self.http, self.session, self.student_id),
        }

    def action_table(self):
        table = super().action_table()
        if self.detail:
            table["refresh"] = lambda payload: self.detail.refresh()
        return table

    def render(self) -> List[Dict[str, Any]]:
        if self.session_error:
            return [error_block(self.session_error, retry=route_action("/"))]
        return super().render()

    def render_home(self) -> List[Dict[str, Any]]:
        detail = self.detail.data if self.detail else None
        title = f"Welcome back, {detail.student.first_name}" if detail else self.title
        blocks = [heading(title, "Your academic overview")]
        if self.detail is None:
            return blocks + [loading_block("Loading dashboard...")]
        blocks += render_section(
            self.detail,
            lambda: views.profile(detail),
            has_data=detail is not None,
            loading="Loading dashboard...",
            empty="Student data could not be loaded.",
        )
        if detail is not None:
            blocks.append(views.student_navigation())
        return blocks
