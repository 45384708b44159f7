# =============================================================================
# 📦 models/plan.py
# -----------------------------------------------------------------------------
# Hosting plans shown in the storefront catalog.
# =============================================================================

from __future__ import annotations

import json
import uuid
from typing import Optional

from sqlalchemy import Boolean, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from database import Base


class Plan(Base):
    """
    A sellable hosting plan (e.g. "Starter VPS").

    Prices are display strings in both currencies. ``features`` is stored as
    JSON text; use ``get_features`` / ``set_features`` instead of touching the
    column directly. Category and subcategory references are nulled, not
    cascaded, when the referenced row goes away.
    """
    __tablename__ = "plans"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text)

    # 🔹 Pricing
    price_usd: Mapped[Optional[str]] = mapped_column(String(50))
    price_inr: Mapped[Optional[str]] = mapped_column(String(50))
    period: Mapped[str] = mapped_column(String(50), nullable=False, default="month")

    # 🔹 Presentation
    features: Mapped[str] = mapped_column(Text, nullable=False, default="[]")
    popular: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    sort_order: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    # 🔗 Catalog placement
    category_id: Mapped[Optional[str]] = mapped_column(
        String(36), ForeignKey("categories.id", ondelete="SET NULL"), index=True
    )
    subcategory_id: Mapped[Optional[str]] = mapped_column(
        String(36), ForeignKey("subcategories.id", ondelete="SET NULL"), index=True
    )

    def get_features(self) -> list[str]:
        raw = self.features
        if not raw:
            return []
        try:
            value = json.loads(raw)
        except (TypeError, ValueError):
            return []
        if not isinstance(value, list):
            return []
        return [str(item) for item in value]

    def set_features(self, features: list[str]) -> None:
        self.features = json.dumps(list(features), ensure_ascii=False)

    def __repr__(self) -> str:
        return f"<Plan(name='{self.name}', period='{self.period}', popular={self.popular})>"
