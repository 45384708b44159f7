# =============================================================================
# 🧾 utils/defaults.py
# -----------------------------------------------------------------------------
# Default copy for the two singleton rows (site settings, about page).
# Used to seed the rows, to fill null/empty columns on read and as the
# degraded response when the database is unreachable.
# Keys are the snake_case column names.
# =============================================================================

from __future__ import annotations

DISCORD_LINK = "https://discord.gg/EX6Dydyar5"
BACKGROUND_IMAGE = "https://i.pinimg.com/1200x/7f/b2/61/7fb2612d4b9630d91a70416fd7b8379c.jpg"

CURRENCIES = ("usd", "inr")
PERIODS = ("month", "year")

SETTINGS_DEFAULTS: dict[str, str] = {
    "currency": "usd",
    "support_link": DISCORD_LINK,
    "redirect_link": DISCORD_LINK,
    "instagram_link": "",
    "youtube_link": "",
    "email": "pheonixcloud.offical@gmail.com",
    "documentation_link": "",
    "hero_title_line1": "Cloud Hosting That",
    "hero_title_line2": "Rises Above",
    "hero_description": "Experience blazing-fast performance with Phoenix Cloud.",
    "stat1_value": "99.9%",
    "stat1_label": "Uptime SLA",
    "stat2_value": "50+",
    "stat2_label": "Global Locations",
    "stat3_value": "24/7",
    "stat3_label": "Expert Support",
    "features_section_title": "Why Choose Phoenix Cloud?",
    "features_section_description": "Built for performance, reliability, and ease of use.",
    "feature1_title": "Blazing Fast",
    "feature1_description": "NVMe SSD storage and optimized infrastructure.",
    "feature2_title": "DDoS Protection",
    "feature2_description": "Enterprise-grade protection.",
    "feature3_title": "Global Network",
    "feature3_description": "Low latency worldwide.",
    "feature4_title": "Instant Scaling",
    "feature4_description": "Scale on demand.",
    "feature5_title": "24/7 Support",
    "feature5_description": "Expert support team.",
    "feature6_title": "99.9% Uptime",
    "feature6_description": "Industry-leading SLA.",
    "cta_title": "Ready to Rise Above?",
    "cta_description": "Get started in minutes.",
    "background_image_light": BACKGROUND_IMAGE,
    "background_image_dark": BACKGROUND_IMAGE,
}

ABOUT_DEFAULTS: dict[str, str] = {
    "hero_title": "Powering the Next Generation of the Web",
    "hero_subtitle": "About Us",
    "hero_image_url": "",
    "company_name": "Phoenix Cloud",
    "company_description": (
        "Phoenix Cloud provides VPS, dedicated and game server hosting "
        "built on enterprise hardware with round-the-clock support."
    ),
    "company_address": "",
    "support_email": "pheonixcloud.offical@gmail.com",
    "story_title": "Our Story",
    "story_content": (
        "We started Phoenix Cloud to give developers and communities fast, "
        "affordable infrastructure without the complexity."
    ),
    "years_experience": "5+",
    "story_image1_url": "",
    "story_image2_url": "",
    "vision_title": "Our Vision",
    "vision_content": "A reliable cloud that anyone can build on.",
    "mission_title": "Our Mission",
    "mission_content": "Deliver high-performance hosting with honest pricing and real support.",
    "team_section_title": "Meet the Team",
    "team_section_subtitle": "The people behind Phoenix Cloud",
    "stat1_value": "10K+",
    "stat1_label": "Active Customers",
    "stat2_value": "99.9%",
    "stat2_label": "Uptime",
    "stat3_value": "50+",
    "stat3_label": "Locations",
    "stat4_value": "24/7",
    "stat4_label": "Support",
}


def fill_defaults(values: dict[str, object], defaults: dict[str, str]) -> dict[str, str]:
    """
    Returns a complete mapping over ``defaults``.

    Missing, null and empty values take the default.
    """
    filled: dict[str, str] = {}
    for key, default in defaults.items():
        value = values.get(key)
        if value is None or value == "":
            filled[key] = default
        else:
            filled[key] = str(value)
    return filled
