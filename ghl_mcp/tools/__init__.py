"""GoHighLevel domain modules, one per tool category."""

from ghl_mcp.tools.associations import AssociationTools
from ghl_mcp.tools.blog import BlogTools
from ghl_mcp.tools.calendar import CalendarTools
from ghl_mcp.tools.contacts import ContactTools
from ghl_mcp.tools.conversations import ConversationTools
from ghl_mcp.tools.custom_fields_v2 import CustomFieldV2Tools
from ghl_mcp.tools.invoices import InvoicesTools
from ghl_mcp.tools.opportunities import OpportunityTools
from ghl_mcp.tools.products import ProductsTools
from ghl_mcp.tools.store import StoreTools
from ghl_mcp.tools.surveys import SurveyTools
from ghl_mcp.tools.users import UsersTools
from ghl_mcp.tools.workflows import WorkflowTools

# Category key -> module class, in registration order.
DOMAIN_MODULES: dict[str, type] = {
    "contacts": ContactTools,
    "conversations": ConversationTools,
    "blog": BlogTools,
    "opportunities": OpportunityTools,
    "calendar": CalendarTools,
    "associations": AssociationTools,
    "custom-fields-v2": CustomFieldV2Tools,
    "workflows": WorkflowTools,
    "surveys": SurveyTools,
    "store": StoreTools,
    "products": ProductsTools,
    "invoices": InvoicesTools,
    "users": UsersTools,
}

__all__ = [
    "DOMAIN_MODULES",
    "AssociationTools",
    "BlogTools",
    "CalendarTools",
    "ContactTools",
    "ConversationTools",
    "CustomFieldV2Tools",
    "InvoicesTools",
    "OpportunityTools",
    "ProductsTools",
    "StoreTools",
    "SurveyTools",
    "UsersTools",
    "WorkflowTools",
]
