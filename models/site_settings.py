# =============================================================================
# ⚙️ models/site_settings.py
# -----------------------------------------------------------------------------
# Singleton row (id=1) with the site-wide copy: currency, links, hero,
# feature grid, call-to-action and background images.
# Columns are nullable; the storage layer fills gaps from utils/defaults.py.
# =============================================================================

from __future__ import annotations

from typing import Optional

from sqlalchemy import Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from database import Base

SETTINGS_ROW_ID = 1


class SiteSettings(Base):
    __tablename__ = "settings"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, default=SETTINGS_ROW_ID)

    # 🔹 General
    currency: Mapped[Optional[str]] = mapped_column(String(10), default="usd")
    support_link: Mapped[Optional[str]] = mapped_column(String(500))
    redirect_link: Mapped[Optional[str]] = mapped_column(String(500))
    instagram_link: Mapped[Optional[str]] = mapped_column(String(500))
    youtube_link: Mapped[Optional[str]] = mapped_column(String(500))
    email: Mapped[Optional[str]] = mapped_column(String(255))
    documentation_link: Mapped[Optional[str]] = mapped_column(String(500))

    # 🔹 Hero
    hero_title_line1: Mapped[Optional[str]] = mapped_column(String(255))
    hero_title_line2: Mapped[Optional[str]] = mapped_column(String(255))
    hero_description: Mapped[Optional[str]] = mapped_column(Text)
    stat1_value: Mapped[Optional[str]] = mapped_column(String(50))
    stat1_label: Mapped[Optional[str]] = mapped_column(String(100))
    stat2_value: Mapped[Optional[str]] = mapped_column(String(50))
    stat2_label: Mapped[Optional[str]] = mapped_column(String(100))
    stat3_value: Mapped[Optional[str]] = mapped_column(String(50))
    stat3_label: Mapped[Optional[str]] = mapped_column(String(100))

    # 🔹 Feature grid
    features_section_title: Mapped[Optional[str]] = mapped_column(String(255))
    features_section_description: Mapped[Optional[str]] = mapped_column(Text)
    feature1_title: Mapped[Optional[str]] = mapped_column(String(255))
    feature1_description: Mapped[Optional[str]] = mapped_column(Text)
    feature2_title: Mapped[Optional[str]] = mapped_column(String(255))
    feature2_description: Mapped[Optional[str]] = mapped_column(Text)
    feature3_title: Mapped[Optional[str]] = mapped_column(String(255))
    feature3_description: Mapped[Optional[str]] = mapped_column(Text)
    feature4_title: Mapped[Optional[str]] = mapped_column(String(255))
    feature4_description: Mapped[Optional[str]] = mapped_column(Text)
    feature5_title: Mapped[Optional[str]] = mapped_column(String(255))
    feature5_description: Mapped[Optional[str]] = mapped_column(Text)
    feature6_title: Mapped[Optional[str]] = mapped_column(String(255))
    feature6_description: Mapped[Optional[str]] = mapped_column(Text)

    # 🔹 Call to action
    cta_title: Mapped[Optional[str]] = mapped_column(String(255))
    cta_description: Mapped[Optional[str]] = mapped_column(Text)

    # 🔹 Backgrounds
    background_image_light: Mapped[Optional[str]] = mapped_column(String(500))
    background_image_dark: Mapped[Optional[str]] = mapped_column(String(500))
