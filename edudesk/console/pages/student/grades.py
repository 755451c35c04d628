# edudesk/console/pages/student/grades.py
from urllib.parse import quote

from edudesk.core.http import ApiClient
from edudesk.console.base import BasePage, render_section
from edudesk.console.blocks import heading
from edudesk.console.pages.student import views
from edudesk.console.synchronizer import RecordLoader
from edudesk.schemas.grades import GradeReport
from edudesk.state.session import SessionContext


class GradesPage(BasePage):
    name = "grades"
    title = "Academic Grades"

    def __init__(self, http: ApiClient, session: SessionContext, student_id: str):
        super().__init__(http, session)
        self.grades = RecordLoader(
            http, f"/api/grades/{quote(student_id, safe='')}/current", GradeReport, "Failed to load academic grades."
        )

    def remotes(self):
        return (self.grades,)

    async def on_mount(self):
        await self.grades.mount()

    def action_table(self):
        table = super().action_table()
        table["refresh"] = lambda payload: self.grades.refresh()
        return table

    def render(self):
        report = self.grades.data
        blocks = [heading(self.title, "Current semester performance")]
        blocks += render_section(
            self.grades,
            lambda: [views.grade_summary(report), views.grade_table(report)],
            has_data=report is not None and report.summary is not None,
            loading="Loading grades...",
            empty="No grade summary available.",
        )
        return blocks
