# edudesk/console/pages/student/attendance.py
from urllib.parse import quote

from edudesk.core.http import ApiClient
from edudesk.console.base import BasePage, render_section
from edudesk.console.blocks import heading
from edudesk.console.pages.student import views
from edudesk.console.synchronizer import RecordLoader
from edudesk.schemas.attendance import AttendanceReport
from edudesk.state.session import SessionContext


class AttendancePage(BasePage):
    name = "attendance"
    title = "Attendance Record"

    def __init__(self, http: ApiClient, session: SessionContext, student_id: str):
        super().__init__(http, session)
        self.attendance = RecordLoader(
            http, f"/api/attendance/{quote(student_id, safe='')}/current", AttendanceReport, "Failed to load attendance."
        )

    def remotes(self):
        return (self.attendance,)

    async def on_mount(self):
        await self.attendance.mount()

    def action_table(self):
        table = super().action_table()
        table["refresh"] = lambda payload: self.attendance.refresh()
        return table

    def render(self):
        report = self.attendance.data
        blocks = [heading(self.title, "Track your class attendance")]

        def populated():
            out = [views.attendance_summary(report), views.attendance_table(report)]
            if report.recent:
                out.append(views.recent_attendance(report))
            return out

        blocks += render_section(
            self.attendance,
            populated,
            has_data=report is not None and (report.summary is not None or bool(report.details)),
            loading="Loading attendance...",
            empty="No attendance records yet.",
        )
        return blocks
