# edudesk/console/pages/admin/reports.py
import asyncio
from typing import Any, Dict, List, Optional

from edudesk.core.http import ApiClient
from edudesk.console.base import BasePage, render_section
from edudesk.console.blocks import heading, text, ui_action
from edudesk.console.pages.admin import views
from edudesk.console.resources import STUDENTS
from edudesk.console.synchronizer import CollectionSynchronizer, RecordLoader
from edudesk.schemas.reports import ReportData
from edudesk.state.session import SessionContext


class ReportsPage(BasePage):
    """Analytics next to the roster; the two sections load and fail independently."""

    name = "reports"
    title = "Reports & Analytics"

    def __init__(self, http: ApiClient, session: SessionContext):
        super().__init__(http, session)
        self.report = RecordLoader(http, "/api/admin/reports-data", ReportData, "Failed to load report data.")
        self.roster = CollectionSynchronizer(http, STUDENTS, "Failed to load students.")
        self.query = ""

    def remotes(self):
        return (self.report, self.roster)

    async def on_mount(self):
        await asyncio.gather(self.report.mount(), self.roster.mount())

    def action_table(self):
        table = super().action_table()
        table.update({
            "refresh": self.refresh,
            "refresh_report": lambda payload: self.report.refresh(),
            "refresh_roster": lambda payload: self.roster.refresh(),
            "search": self.search,
        })
        return table

    async def refresh(self, payload: Optional[Dict[str, Any]] = None):
        await asyncio.gather(self.report.refresh(), self.roster.refresh())

    def search(self, payload: Dict[str, Any]):
        self.query = payload.get("query") or ""

    def render(self) -> List[Dict[str, Any]]:
        blocks = [heading(self.title, "Institution-wide statistics and trends")]
        blocks += render_section(
            self.report,
            lambda: views.report_blocks(self.report.data),
            has_data=self.report.data is not None,
            loading="Loading reports...",
            empty="No report data available.",
            retry=ui_action("refresh_report"),
        )
        blocks.append(text("**Student Roster**"))
        blocks += render_section(
            self.roster,
            lambda: [views.student_table(self.roster.search(self.query), self.query, with_actions=False)],
            has_data=bool(self.roster.items),
            loading="Loading students...",
            empty="No students found.",
            retry=ui_action("refresh_roster"),
        )
        return blocks
