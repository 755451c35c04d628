# edudesk/console/pages/admin/dashboard.py
from typing import Any, Dict, List, Optional

from edudesk.core.http import ApiClient
from edudesk.console.base import DashboardPage, render_section
from edudesk.console.blocks import heading
from edudesk.console.pages.admin import views
from edudesk.console.pages.admin.courses import CourseManagementPage
from edudesk.console.pages.admin.reports import ReportsPage
from edudesk.console.pages.admin.students import StudentManagementPage
from edudesk.console.synchronizer import RecordLoader
from edudesk.schemas.reports import AdminStats
from edudesk.state.session import SessionContext


class AdminDashboardPage(DashboardPage):
    name = "admin_dashboard"
    title = "Admin Dashboard"

    def __init__(self, http: ApiClient, session: SessionContext):
        super().__init__(http, session)
        self.stats = RecordLoader(
            http, "/api/admin/dashboard-stats", AdminStats, "Failed to load dashboard statistics."
        )

    def child_factories(self):
        return {
            "students": lambda: StudentManagementPage(self.http, self.session),
            "courses": lambda: CourseManagementPage(self.http, self.session),
            "reports": lambda: ReportsPage(self.http, self.session),
        }

    def remotes(self):
        return (self.stats,)

    async def on_mount(self):
        await self.stats.mount()

    def action_table(self):
        table = super().action_table()
        table["refresh"] = self.refresh
        return table

    async def refresh(self, payload: Optional[Dict[str, Any]] = None):
        await self.stats.refresh()

    def render_home(self) -> List[Dict[str, Any]]:
        user = self.session.user
        name = user.display_name if user else "Admin User"
        blocks = [heading(f"Welcome back, {name}", "Institution overview")]
        blocks += render_section(
            self.stats,
            lambda: views.admin_home_stats(self.stats.data),
            has_data=self.stats.data is not None,
            loading="Loading stats...",
            empty="No statistics available.",
        )
        blocks.append(views.admin_navigation())
        return blocks
