"""Category manifest: human-readable metadata for every tool category.

Descriptions here are what ``list_categories`` shows the caller, so they are
written to help an LLM decide which category to enable.
"""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class CategoryDefinition:
    key: str
    display_name: str
    description: str
    keywords: list[str] = field(default_factory=list)


CATEGORY_MANIFEST: list[CategoryDefinition] = [
    CategoryDefinition(
        key="contacts",
        display_name="Contact Management",
        description=(
            "Create, search, update, delete contacts. Manage tags, tasks, notes "
            "and workflow enrollment for contacts."
        ),
        keywords=["contact", "lead", "crm", "tag", "task", "note", "follower"],
    ),
    CategoryDefinition(
        key="conversations",
        display_name="Conversations & Messaging",
        description=(
            "Send SMS and email messages. Search, create, update conversations. "
            "Read messages and cancel scheduled messages."
        ),
        keywords=["conversation", "message", "sms", "chat", "inbox", "email", "send"],
    ),
    CategoryDefinition(
        key="blog",
        display_name="Blog Management",
        description=(
            "Create, update, list blog posts. Get blog sites, authors, categories. "
            "Check URL slug availability."
        ),
        keywords=["blog", "post", "article", "content", "author"],
    ),
    CategoryDefinition(
        key="opportunities",
        display_name="Opportunity & Pipeline Management",
        description=(
            "Manage sales opportunities and pipelines. Create, search, update deals. "
            "Track status (won/lost) and manage followers."
        ),
        keywords=["opportunity", "pipeline", "deal", "stage", "sales", "won", "lost"],
    ),
    CategoryDefinition(
        key="calendar",
        display_name="Calendar & Appointments",
        description=(
            "Manage calendars, calendar groups, events, and appointments. "
            "Book appointments, check availability, block time slots."
        ),
        keywords=["calendar", "appointment", "event", "booking", "schedule", "availability", "slot"],
    ),
    CategoryDefinition(
        key="associations",
        display_name="Record Associations",
        description="Create and manage associations between records. Get association schemas and linked records.",
        keywords=["association", "link", "relationship", "record"],
    ),
    CategoryDefinition(
        key="custom-fields-v2",
        display_name="Custom Fields V2",
        description="CRUD operations on custom fields (V2 API). Manage field definitions and field folders.",
        keywords=["custom field", "field", "definition", "option"],
    ),
    CategoryDefinition(
        key="workflows",
        display_name="Workflow Management",
        description="Get workflow details and configuration.",
        keywords=["workflow", "automation"],
    ),
    CategoryDefinition(
        key="surveys",
        display_name="Survey Management",
        description="List surveys and get survey submissions.",
        keywords=["survey", "form", "submission", "response"],
    ),
    CategoryDefinition(
        key="store",
        display_name="Store & E-Commerce",
        description="Manage online store settings, shipping zones, shipping rates, and shipping carriers.",
        keywords=["store", "ecommerce", "shop", "shipping", "carrier"],
    ),
    CategoryDefinition(
        key="products",
        display_name="Product Management",
        description="Create, get, update, delete products. Manage product prices, inventory, and collections.",
        keywords=["product", "price", "listing", "catalog", "inventory"],
    ),
    CategoryDefinition(
        key="invoices",
        display_name="Invoices & Billing",
        description=(
            "Create and manage invoice templates, invoices and estimates. "
            "Generate invoice and estimate numbers."
        ),
        keywords=["invoice", "billing", "estimate", "template", "schedule"],
    ),
    CategoryDefinition(
        key="users",
        display_name="User Management",
        description="Search, get, create, update, delete users. Manage user permissions and roles.",
        keywords=["user", "account", "permission", "role"],
    ),
]

_BY_KEY: dict[str, CategoryDefinition] = {c.key: c for c in CATEGORY_MANIFEST}


def get_category_definition(key: str) -> CategoryDefinition | None:
    return _BY_KEY.get(key)


def category_description(key: str) -> str:
    """Description shown for *key*; falls back to the key itself."""
    definition = _BY_KEY.get(key)
    return definition.description if definition is not None else key
