# =============================================================================
# 🏢 models/about_page.py
# Singleton row (id=1) with the copy of the about page.
# =============================================================================

from __future__ import annotations

from typing import Optional

from sqlalchemy import Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from database import Base

ABOUT_ROW_ID = 1


class AboutPageContent(Base):
    __tablename__ = "about_page_content"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, default=ABOUT_ROW_ID)

    hero_title: Mapped[Optional[str]] = mapped_column(String(255))
    hero_subtitle: Mapped[Optional[str]] = mapped_column(String(255))
    hero_image_url: Mapped[Optional[str]] = mapped_column(String(500))

    company_name: Mapped[Optional[str]] = mapped_column(String(255))
    company_description: Mapped[Optional[str]] = mapped_column(Text)
    company_address: Mapped[Optional[str]] = mapped_column(String(500))
    support_email: Mapped[Optional[str]] = mapped_column(String(255))

    story_title: Mapped[Optional[str]] = mapped_column(String(255))
    story_content: Mapped[Optional[str]] = mapped_column(Text)
    years_experience: Mapped[Optional[str]] = mapped_column(String(50))
    story_image1_url: Mapped[Optional[str]] = mapped_column(String(500))
    story_image2_url: Mapped[Optional[str]] = mapped_column(String(500))

    vision_title: Mapped[Optional[str]] = mapped_column(String(255))
    vision_content: Mapped[Optional[str]] = mapped_column(Text)
    mission_title: Mapped[Optional[str]] = mapped_column(String(255))
    mission_content: Mapped[Optional[str]] = mapped_column(Text)

    team_section_title: Mapped[Optional[str]] = mapped_column(String(255))
    team_section_subtitle: Mapped[Optional[str]] = mapped_column(String(255))

    stat1_value: Mapped[Optional[str]] = mapped_column(String(50))
    stat1_label: Mapped[Optional[str]] = mapped_column(String(100))
    stat2_value: Mapped[Optional[str]] = mapped_column(String(50))
    stat2_label: Mapped[Optional[str]] = mapped_column(String(100))
    stat3_value: Mapped[Optional[str]] = mapped_column(String(50))
    stat3_label: Mapped[Optional[str]] = mapped_column(String(100))
    stat4_value: Mapped[Optional[str]] = mapped_column(String(50))
    stat4_label: Mapped[Optional[str]] = mapped_column(String(100))
