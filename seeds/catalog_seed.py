# =============================================================================
# 🌍 seeds/catalog_seed.py
# -----------------------------------------------------------------------------
# Sample storefront catalog: two categories, the VPS subcategories, a starter
# plan and the support-page FAQs. Safe to run repeatedly: rows whose slug
# (or plan name / FAQ question) already exists are skipped.
# =============================================================================

from __future__ import annotations

from schemas import CategoryCreate, FAQCreate, PlanCreate, SubcategoryCreate
from storage import Storage

CATEGORIES = [
    {"name": "VPS Hosting", "slug": "vps"},
    {"name": "Dedicated Servers", "slug": "dedicated"},
]

SUBCATEGORIES = [
    {"name": "Linux VPS", "slug": "linux", "category": "vps", "order": 1},
    {"name": "Windows VPS", "slug": "windows", "category": "vps", "order": 2},
]

PLANS = [
    {
        "name": "Starter VPS",
        "description": "Perfect for small projects",
        "priceUsd": "9.99",
        "priceInr": "849",
        "period": "month",
        "features": ["2 vCPU Cores", "4 GB RAM", "50 GB NVMe SSD", "1 TB Bandwidth", "DDoS Protection"],
        "popular": True,
        "category": "vps",
        "subcategory": "linux",
    },
]

FAQS = [
    (
        "How do I get started with Phoenix Cloud?",
        "Simply choose a plan that fits your needs, click 'Order Now', and you'll be redirected "
        "to our Discord server where our team will help you set up your hosting within minutes.",
    ),
    (
        "What is your uptime guarantee?",
        "We offer a 99.9% uptime SLA across all our hosting plans. If we fail to meet this "
        "guarantee, you'll receive service credits as compensation.",
    ),
    (
        "Do you offer DDoS protection?",
        "Yes, all our plans include enterprise-grade DDoS protection at no extra cost.",
    ),
    (
        "Can I upgrade my plan later?",
        "Absolutely! You can upgrade your plan at any time. Our team will help migrate your "
        "services with minimal downtime.",
    ),
]


def seed_catalog(storage: Storage) -> dict[str, int]:
    """Inserts the missing sample rows and returns how many of each were added."""
    added = {"categories": 0, "subcategories": 0, "plans": 0, "faqs": 0}

    categories = {c.slug: c for c in storage.list_categories()}
    for data in CATEGORIES:
        if data["slug"] not in categories:
            categories[data["slug"]] = storage.create_category(CategoryCreate(**data))
            added["categories"] += 1

    subcategories = {s.slug: s for s in storage.list_subcategories()}
    for data in SUBCATEGORIES:
        if data["slug"] in subcategories:
            continue
        subcategories[data["slug"]] = storage.create_subcategory(
            SubcategoryCreate(
                name=data["name"],
                slug=data["slug"],
                categoryId=categories[data["category"]].id,
                order=data["order"],
            )
        )
        added["subcategories"] += 1

    plan_names = {p.name for p in storage.list_plans()}
    for data in PLANS:
        if data["name"] in plan_names:
            continue
        fields = {k: v for k, v in data.items() if k not in {"category", "subcategory"}}
        storage.create_plan(
            PlanCreate(
                **fields,
                categoryId=categories[data["category"]].id,
                subcategoryId=subcategories[data["subcategory"]].id,
            )
        )
        added["plans"] += 1

    questions = {f.question for f in storage.list_faqs()}
    for question, answer in FAQS:
        if question not in questions:
            storage.create_faq(FAQCreate(question=question, answer=answer))
            added["faqs"] += 1

    return added
