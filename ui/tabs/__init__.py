from ui.tabs.auth import render_auth_tab
from ui.tabs.banks import render_banks_tab
from ui.tabs.content import render_content_tab
from ui.tabs.dashboard import render_dashboard_tab
from ui.tabs.dealers import render_dealers_tab
from ui.tabs.loans import render_loans_tab
from ui.tabs.profile import render_profile_tab
from ui.tabs.users import render_users_tab

__all__ = [
    "render_auth_tab",
    "render_banks_tab",
    "render_content_tab",
    "render_dashboard_tab",
    "render_dealers_tab",
    "render_loans_tab",
    "render_profile_tab",
    "render_users_tab",
]
