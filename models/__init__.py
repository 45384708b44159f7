# =============================================================================
# 📦 models/__init__.py
# -----------------------------------------------------------------------------
# Importing this package registers every table on Base.metadata.
# =============================================================================

from .category import Category, Subcategory
from .plan import Plan
from .faq import FAQ
from .site_settings import SiteSettings, SETTINGS_ROW_ID
from .about_page import AboutPageContent, ABOUT_ROW_ID
from .admin_user import AdminUser
from .team_member import TeamMember

__all__ = [
    "Category",
    "Subcategory",
    "Plan",
    "FAQ",
    "SiteSettings",
    "SETTINGS_ROW_ID",
    "AboutPageContent",
    "ABOUT_ROW_ID",
    "AdminUser",
    "TeamMember",
]
