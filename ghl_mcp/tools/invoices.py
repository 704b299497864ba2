"""Invoice, invoice template and estimate operations.

Invoice endpoints scope by ``altId``/``altType`` rather than ``locationId``;
``_alt()`` fills those from the configured location.
"""

from __future__ import annotations

from typing import Any

from ghl_mcp.tools.base import ToolModule, _arr, _bool, _drop_none, _int, _obj, _str, _td

_ITEMS = {
    "type": "array",
    "description": "Line items",
    "items": {
        "type": "object",
        "properties": {
            "name": {"type": "string"},
            "description": {"type": "string"},
            "amount": {"type": "number"},
            "qty": {"type": "number"},
            "currency": {"type": "string"},
        },
        "required": ["name", "amount", "qty"],
    },
}
_PAGING = {
    "limit": _int("Number of results to return (default: 10)"),
    "offset": _int("Number of results to skip (default: 0)"),
}


class InvoicesTools(ToolModule):
    DEFINITIONS = [
        _td("create_invoice_template", "Create a new invoice template", {
            "name": _str("Template name"),
            "title": _str("Invoice title"),
            "currency": _str("Currency code (e.g., USD)"),
            "items": _ITEMS,
            "terms_notes": _str("Terms and notes printed on the invoice"),
        }, ["name", "currency"]),
        _td("list_invoice_templates", "List all invoice templates", {
            **_PAGING,
            "search": _str("Search term"),
        }, read_only=True),
        _td("get_invoice_template", "Get an invoice template by ID", {
            "template_id": _str("Template ID"),
        }, ["template_id"], read_only=True),
        _td("create_invoice", "Create a new invoice", {
            "contact_id": _str("Contact ID to bill"),
            "title": _str("Invoice title"),
            "name": _str("Invoice name"),
            "currency": _str("Currency code (default: USD)"),
            "items": _ITEMS,
            "issue_date": _str("Issue date (YYYY-MM-DD)"),
            "due_date": _str("Due date (YYYY-MM-DD)"),
            "invoice_number": _str("Invoice number (see generate_invoice_number)"),
            "business_details": _obj("Business name, address and logo shown on the invoice"),
        }, ["contact_id", "name", "items"]),
        _td("list_invoices", "List invoices with optional filtering", {
            **_PAGING,
            "status": {"type": "string", "enum": ["draft", "sent", "paid", "void", "partially_paid"],
                       "description": "Filter by status"},
            "contact_id": _str("Filter by contact ID"),
            "search": _str("Search term"),
        }, read_only=True),
        _td("get_invoice", "Get invoice by ID", {
            "invoice_id": _str("Invoice ID"),
        }, ["invoice_id"], read_only=True),
        _td("send_invoice", "Send an invoice to the customer", {
            "invoice_id": _str("Invoice ID"),
            "user_id": _str("User ID sending the invoice"),
            "action": {"type": "string", "enum": ["email", "sms", "sms_and_email", "send_manually"],
                       "description": "Delivery method (default: email)"},
            "live_mode": _bool("Send in live mode rather than test mode (default: true)"),
        }, ["invoice_id"]),
        _td("void_invoice", "Void an invoice", {
            "invoice_id": _str("Invoice ID"),
        }, ["invoice_id"]),
        _td("create_estimate", "Create a new estimate", {
            "contact_id": _str("Contact ID"),
            "title": _str("Estimate title"),
            "name": _str("Estimate name"),
            "currency": _str("Currency code (default: USD)"),
            "items": _ITEMS,
            "issue_date": _str("Issue date (YYYY-MM-DD)"),
            "expiry_date": _str("Expiry date (YYYY-MM-DD)"),
        }, ["contact_id", "name", "items"]),
        _td("list_estimates", "List estimates with optional filtering", {
            **_PAGING,
            "status": {"type": "string", "enum": ["all", "draft", "sent", "accepted", "declined"],
                       "description": "Filter by status"},
            "search": _str("Search term"),
        }, read_only=True),
        _td("generate_invoice_number", "Generate the next invoice number", read_only=True),
        _td("generate_estimate_number", "Generate the next estimate number", read_only=True),
    ]

    def get_tools(self):
        return self._definitions()

    async def handle_tool_call(self, name: str, args: dict[str, Any]) -> Any:
        return await self._dispatch(name, args)

    def _alt(self, **fields: Any) -> dict[str, Any]:
        return _drop_none(altId=self._client.location_id, altType="location", **fields)

    # ------------------------------------------------------------------

    async def create_invoice_template(
        self,
        name: str,
        currency: str,
        title: str | None = None,
        items: list[dict] | None = None,
        terms_notes: str | None = None,
    ) -> Any:
        payload = self._alt(name=name, title=title, currency=currency, items=items or [], termsNotes=terms_notes)
        return await self._client.post("/invoices/template", payload)

    async def list_invoice_templates(self, limit: int = 10, offset: int = 0, search: str | None = None) -> Any:
        params = self._alt(limit=str(limit), offset=str(offset), search=search)
        return await self._client.get("/invoices/template", params)

    async def get_invoice_template(self, template_id: str) -> Any:
        return await self._client.get(f"/invoices/template/{template_id}", self._alt())

    async def create_invoice(
        self,
        contact_id: str,
        name: str,
        items: list[dict],
        title: str | None = None,
        currency: str = "USD",
        issue_date: str | None = None,
        due_date: str | None = None,
        invoice_number: str | None = None,
        business_details: dict | None = None,
    ) -> Any:
        payload = self._alt(
            name=name, title=title, currency=currency, items=items,
            contactDetails={"id": contact_id}, issueDate=issue_date, dueDate=due_date,
            invoiceNumber=invoice_number, businessDetails=business_details,
        )
        return await self._client.post("/invoices/", payload)

    async def list_invoices(
        self,
        limit: int = 10,
        offset: int = 0,
        status: str | None = None,
        contact_id: str | None = None,
        search: str | None = None,
    ) -> Any:
        params = self._alt(
            limit=str(limit), offset=str(offset), status=status, contactId=contact_id, search=search,
        )
        return await self._client.get("/invoices/", params)

    async def get_invoice(self, invoice_id: str) -> Any:
        return await self._client.get(f"/invoices/{invoice_id}", self._alt())

    async def send_invoice(
        self, invoice_id: str, user_id: str | None = None, action: str = "email", live_mode: bool = True,
    ) -> Any:
        payload = self._alt(userId=user_id, action=action, liveMode=live_mode)
        return await self._client.post(f"/invoices/{invoice_id}/send", payload)

    async def void_invoice(self, invoice_id: str) -> Any:
        return await self._client.post(f"/invoices/{invoice_id}/void", self._alt())

    async def create_estimate(
        self,
        contact_id: str,
        name: str,
        items: list[dict],
        title: str | None = None,
        currency: str = "USD",
        issue_date: str | None = None,
        expiry_date: str | None = None,
    ) -> Any:
        payload = self._alt(
            name=name, title=title, currency=currency, items=items, contactDetails={"id": contact_id},
            issueDate=issue_date, expiryDate=expiry_date,
        )
        return await self._client.post("/invoices/estimate", payload)

    async def list_estimates(
        self, limit: int = 10, offset: int = 0, status: str | None = None, search: str | None = None,
    ) -> Any:
        params = self._alt(limit=str(limit), offset=str(offset), status=status, search=search)
        return await self._client.get("/invoices/estimate/list", params)

    async def generate_invoice_number(self) -> Any:
        return await self._client.get("/invoices/generate-invoice-number", self._alt())

    async def generate_estimate_number(self) -> Any:
        return await self._client.get("/invoices/estimate/number/generate", self._alt())
