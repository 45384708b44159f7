# =============================================================================
# 🧩 schemas.py
# -----------------------------------------------------------------------------
# Pydantic models for the JSON API.
#   - *Create / *Update: request bodies, validated before any mutation
#   - entity models:      what the storage layer returns and routes serialize
# Field names are snake_case in Python and camelCase on the wire.
# =============================================================================

from __future__ import annotations

import re
from typing import Annotated, ClassVar, Literal, Optional

from pydantic import (
    AfterValidator,
    AnyHttpUrl,
    BaseModel,
    ConfigDict,
    Field,
    StringConstraints,
    TypeAdapter,
    model_validator,
)
from pydantic.alias_generators import to_camel

SLUG_PATTERN = r"^[a-z0-9]+(?:-[a-z0-9]+)*$"
EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")

_http_url = TypeAdapter(AnyHttpUrl)


def _check_link(value: str) -> str:
    """Empty, or an absolute http(s) URL. The original text is kept."""
    value = value.strip()
    if value:
        try:
            _http_url.validate_python(value)
        except ValueError:
            raise ValueError("must be an absolute http(s) URL") from None
    return value


def _check_email(value: str) -> str:
    value = value.strip()
    if value and not EMAIL_RE.match(value):
        raise ValueError("must be a valid email address")
    return value


# column widths in models/; MySQL TEXT holds 65535 bytes, i.e. 16383 utf8mb4 chars
SHORT_MAX = 50
LABEL_MAX = 100
LINE_MAX = 255
LINK_MAX = 500
TEXT_MAX = 16000
ID_MAX = 36
PASSWORD_MAX = 1024
FEATURES_MAX = 50


def _bounded(max_length: int, min_length: int = 0) -> StringConstraints:
    return StringConstraints(strip_whitespace=True, min_length=min_length, max_length=max_length)


NonEmptyStr = Annotated[str, _bounded(LINE_MAX, min_length=1)]
NonEmptyText = Annotated[str, _bounded(TEXT_MAX, min_length=1)]
Slug = Annotated[str, StringConstraints(strip_whitespace=True, max_length=LINE_MAX, pattern=SLUG_PATTERN)]
RefId = Annotated[str, _bounded(ID_MAX, min_length=1)]
Price = Annotated[str, _bounded(SHORT_MAX, min_length=1)]
Feature = Annotated[str, StringConstraints(max_length=LINE_MAX)]
Password = Annotated[str, StringConstraints(min_length=1, max_length=PASSWORD_MAX)]

ShortStr = Annotated[str, StringConstraints(max_length=SHORT_MAX)]
LabelStr = Annotated[str, StringConstraints(max_length=LABEL_MAX)]
LineStr = Annotated[str, StringConstraints(max_length=LINE_MAX)]
LinkText = Annotated[str, StringConstraints(max_length=LINK_MAX)]
TextStr = Annotated[str, StringConstraints(max_length=TEXT_MAX)]
LinkStr = Annotated[str, StringConstraints(max_length=LINK_MAX), AfterValidator(_check_link)]
EmailText = Annotated[str, StringConstraints(max_length=LINE_MAX), AfterValidator(_check_email)]
Period = Literal["month", "year"]
Currency = Literal["usd", "inr"]


class ApiModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class PatchModel(ApiModel):
    """
    Partial update body: any subset of fields may be sent. Explicit nulls are
    rejected except for the fields named in ``nullable_fields``.
    """

    nullable_fields: ClassVar[frozenset[str]] = frozenset()

    @model_validator(mode="after")
    def _reject_nulls(self):
        for name in self.model_fields_set:
            if getattr(self, name) is None and name not in self.nullable_fields:
                raise ValueError(f"{to_camel(name)} may not be null")
        return self

    def changes(self) -> dict[str, object]:
        return self.model_dump(exclude_unset=True)


# -------------------------------------------------------------------------
# 🗂️ Categories
# -------------------------------------------------------------------------
class CategoryCreate(ApiModel):
    name: NonEmptyStr
    slug: Slug


class CategoryUpdate(PatchModel):
    name: Optional[NonEmptyStr] = None
    slug: Optional[Slug] = None


class Category(ApiModel):
    id: str
    name: str
    slug: str


class SubcategoryCreate(ApiModel):
    name: NonEmptyStr
    slug: Slug
    category_id: RefId
    sort_order: int = Field(default=0, alias="order")


class SubcategoryUpdate(PatchModel):
    name: Optional[NonEmptyStr] = None
    slug: Optional[Slug] = None
    category_id: Optional[RefId] = None
    sort_order: Optional[int] = Field(default=None, alias="order")


class Subcategory(ApiModel):
    id: str
    name: str
    slug: str
    category_id: str
    sort_order: int = Field(default=0, alias="order")


class CategoryWithSubcategories(Category):
    subcategories: list[Subcategory] = Field(default_factory=list)


# -------------------------------------------------------------------------
# 📦 Plans
# -------------------------------------------------------------------------
class PlanCreate(ApiModel):
    name: NonEmptyStr
    description: NonEmptyText
    price_usd: Price
    price_inr: Price
    period: Period
    features: list[Feature] = Field(default_factory=list, max_length=FEATURES_MAX)
    popular: bool = False
    category_id: RefId
    subcategory_id: RefId
    sort_order: int = Field(default=0, alias="order")


class PlanUpdate(PatchModel):
    nullable_fields: ClassVar[frozenset[str]] = frozenset({"category_id", "subcategory_id"})

    name: Optional[NonEmptyStr] = None
    description: Optional[NonEmptyText] = None
    price_usd: Optional[Price] = None
    price_inr: Optional[Price] = None
    period: Optional[Period] = None
    features: Optional[list[Feature]] = Field(default=None, max_length=FEATURES_MAX)
    popular: Optional[bool] = None
    category_id: Optional[RefId] = None
    subcategory_id: Optional[RefId] = None
    sort_order: Optional[int] = Field(default=None, alias="order")


class Plan(ApiModel):
    id: str
    name: str
    description: str = ""
    price_usd: str = ""
    price_inr: str = ""
    period: str = "month"
    features: list[str] = Field(default_factory=list)
    popular: bool = False
    category_id: Optional[str] = None
    subcategory_id: Optional[str] = None
    sort_order: int = Field(default=0, alias="order")


# -------------------------------------------------------------------------
# ❓ FAQs
# -------------------------------------------------------------------------
class FAQCreate(ApiModel):
    question: NonEmptyText
    answer: NonEmptyText


class FAQUpdate(PatchModel):
    question: Optional[NonEmptyText] = None
    answer: Optional[NonEmptyText] = None


class FAQ(ApiModel):
    id: str
    question: str
    answer: str


# -------------------------------------------------------------------------
# 👥 Team members
# -------------------------------------------------------------------------
class TeamMemberCreate(ApiModel):
    name: NonEmptyStr
    role: NonEmptyStr
    description: TextStr = ""
    image_url: LinkStr = ""
    sort_order: int = Field(default=0, alias="order")


class TeamMemberUpdate(PatchModel):
    name: Optional[NonEmptyStr] = None
    role: Optional[NonEmptyStr] = None
    description: Optional[TextStr] = None
    image_url: Optional[LinkStr] = None
    sort_order: Optional[int] = Field(default=None, alias="order")


class TeamMember(ApiModel):
    id: str
    name: str
    role: str
    description: str = ""
    image_url: str = ""
    sort_order: int = Field(default=0, alias="order")


# -------------------------------------------------------------------------
# 👤 Admin users
# -------------------------------------------------------------------------
class AdminUserCreate(ApiModel):
    username: NonEmptyStr
    password: Password


class AdminPasswordUpdate(ApiModel):
    password: Password


class AdminUser(ApiModel):
    id: str
    username: str


class LoginRequest(ApiModel):
    username: LineStr = ""
    password: Annotated[str, StringConstraints(max_length=PASSWORD_MAX)] = ""


# -------------------------------------------------------------------------
# ⚙️ Site settings (singleton)
# -------------------------------------------------------------------------
class SettingsUpdate(ApiModel):
    """Full replace: omitted or empty fields fall back to their defaults."""

    currency: Optional[Currency] = None
    support_link: Optional[LinkStr] = None
    redirect_link: Optional[LinkStr] = None
    instagram_link: Optional[LinkStr] = None
    youtube_link: Optional[LinkStr] = None
    email: Optional[EmailText] = None
    documentation_link: Optional[LinkStr] = None
    hero_title_line1: Optional[LineStr] = None
    hero_title_line2: Optional[LineStr] = None
    hero_description: Optional[TextStr] = None
    stat1_value: Optional[ShortStr] = None
    stat1_label: Optional[LabelStr] = None
    stat2_value: Optional[ShortStr] = None
    stat2_label: Optional[LabelStr] = None
    stat3_value: Optional[ShortStr] = None
    stat3_label: Optional[LabelStr] = None
    features_section_title: Optional[LineStr] = None
    features_section_description: Optional[TextStr] = None
    feature1_title: Optional[LineStr] = None
    feature1_description: Optional[TextStr] = None
    feature2_title: Optional[LineStr] = None
    feature2_description: Optional[TextStr] = None
    feature3_title: Optional[LineStr] = None
    feature3_description: Optional[TextStr] = None
    feature4_title: Optional[LineStr] = None
    feature4_description: Optional[TextStr] = None
    feature5_title: Optional[LineStr] = None
    feature5_description: Optional[TextStr] = None
    feature6_title: Optional[LineStr] = None
    feature6_description: Optional[TextStr] = None
    cta_title: Optional[LineStr] = None
    cta_description: Optional[TextStr] = None
    background_image_light: Optional[LinkStr] = None
    background_image_dark: Optional[LinkStr] = None


class Settings(ApiModel):
    currency: Currency
    support_link: str
    redirect_link: str
    instagram_link: str
    youtube_link: str
    email: str
    documentation_link: str
    hero_title_line1: str
    hero_title_line2: str
    hero_description: str
    stat1_value: str
    stat1_label: str
    stat2_value: str
    stat2_label: str
    stat3_value: str
    stat3_label: str
    features_section_title: str
    features_section_description: str
    feature1_title: str
    feature1_description: str
    feature2_title: str
    feature2_description: str
    feature3_title: str
    feature3_description: str
    feature4_title: str
    feature4_description: str
    feature5_title: str
    feature5_description: str
    feature6_title: str
    feature6_description: str
    cta_title: str
    cta_description: str
    background_image_light: str
    background_image_dark: str


# -------------------------------------------------------------------------
# 🏢 About page (singleton)
# -------------------------------------------------------------------------
class AboutPageUpdate(ApiModel):
    hero_title: Optional[LineStr] = None
    hero_subtitle: Optional[LineStr] = None
    hero_image_url: Optional[LinkStr] = None
    company_name: Optional[LineStr] = None
    company_description: Optional[TextStr] = None
    company_address: Optional[LinkText] = None
    support_email: Optional[EmailText] = None
    story_title: Optional[LineStr] = None
    story_content: Optional[TextStr] = None
    years_experience: Optional[ShortStr] = None
    story_image1_url: Optional[LinkStr] = None
    story_image2_url: Optional[LinkStr] = None
    vision_title: Optional[LineStr] = None
    vision_content: Optional[TextStr] = None
    mission_title: Optional[LineStr] = None
    mission_content: Optional[TextStr] = None
    team_section_title: Optional[LineStr] = None
    team_section_subtitle: Optional[LineStr] = None
    stat1_value: Optional[ShortStr] = None
    stat1_label: Optional[LabelStr] = None
    stat2_value: Optional[ShortStr] = None
    stat2_label: Optional[LabelStr] = None
    stat3_value: Optional[ShortStr] = None
    stat3_label: Optional[LabelStr] = None
    stat4_value: Optional[ShortStr] = None
    stat4_label: Optional[LabelStr] = None


class AboutPageContent(ApiModel):
    hero_title: str
    hero_subtitle: str
    hero_image_url: str
    company_name: str
    company_description: str
    company_address: str
    support_email: str
    story_title: str
    story_content: str
    years_experience: str
    story_image1_url: str
    story_image2_url: str
    vision_title: str
    vision_content: str
    mission_title: str
    mission_content: str
    team_section_title: str
    team_section_subtitle: str
    stat1_value: str
    stat1_label: str
    stat2_value: str
    stat2_label: str
    stat3_value: str
    stat3_label: str
    stat4_value: str
    stat4_label: str
