"""Product, price, inventory and collection operations."""

from __future__ import annotations

from typing import Any

from ghl_mcp.tools.base import ToolModule, _arr, _bool, _drop_none, _int, _num, _str, _td

_PRODUCT_ID = {"product_id": _str("Product ID")}
_PRODUCT_TYPE = {"type": "string", "enum": ["DIGITAL", "PHYSICAL", "SERVICE", "PHYSICAL/DIGITAL"],
                 "description": "Type of product"}
_PAGING = {
    "limit": _int("Maximum number of results"),
    "offset": _int("Number of results to skip"),
}


class ProductsTools(ToolModule):
    DEFINITIONS = [
        _td("ghl_create_product", "Create a new product in GoHighLevel", {
            "name": _str("Product name"),
            "product_type": _PRODUCT_TYPE,
            "description": _str("Product description"),
            "image": _str("Product image URL"),
            "available_in_store": _bool("Whether the product is available in the store"),
            "slug": _str("URL slug for the product"),
        }, ["name", "product_type"]),
        _td("ghl_list_products", "List products with optional filtering", {
            **_PAGING,
            "search": _str("Search term for product names"),
            "collection_ids": _arr("Filter by collection IDs"),
            "available_in_store": _bool("Filter by store availability"),
        }, read_only=True),
        _td("ghl_get_product", "Get a specific product by ID", _PRODUCT_ID, ["product_id"], read_only=True),
        _td("ghl_update_product", "Update an existing product", {
            **_PRODUCT_ID,
            "name": _str("Product name"),
            "product_type": _PRODUCT_TYPE,
            "description": _str("Product description"),
            "image": _str("Product image URL"),
            "available_in_store": _bool("Whether the product is available in the store"),
        }, ["product_id"]),
        _td("ghl_delete_product", "Delete a product by ID", _PRODUCT_ID, ["product_id"]),
        _td("ghl_create_price", "Create a price for a product", {
            **_PRODUCT_ID,
            "name": _str("Price name/variant name"),
            "type": {"type": "string", "enum": ["one_time", "recurring"], "description": "Price type"},
            "currency": _str("Currency code (e.g., USD)"),
            "amount": _num("Price amount in cents"),
            "interval": {"type": "string", "enum": ["day", "week", "month", "year"],
                         "description": "Billing interval for recurring prices"},
            "interval_count": _int("Number of intervals between billings"),
            "compare_at_price": _num("Compare-at price in cents"),
            "sku": _str("Stock keeping unit"),
            "track_inventory": _bool("Whether to track inventory"),
            "available_quantity": _int("Available quantity when tracking inventory"),
        }, ["product_id", "name", "type", "currency", "amount"]),
        _td("ghl_list_prices", "List prices for a product", {
            **_PRODUCT_ID, **_PAGING,
        }, ["product_id"], read_only=True),
        _td("ghl_list_inventory", "List inventory items with stock levels", {
            **_PAGING,
            "search": _str("Search term for inventory items"),
        }, read_only=True),
        _td("ghl_create_product_collection", "Create a new product collection", {
            "name": _str("Collection name"),
            "slug": _str("URL slug for the collection"),
            "image": _str("Collection image URL"),
            "seo_title": _str("SEO title"),
            "seo_description": _str("SEO description"),
        }, ["name", "slug"]),
        _td("ghl_list_product_collections", "List product collections", {
            **_PAGING,
            "name": _str("Search by collection name"),
        }, read_only=True),
    ]

    def get_tools(self):
        return self._definitions()

    async def execute_products_tool(self, name: str, args: dict[str, Any]) -> Any:
        return await self._dispatch(name, args)

    # ------------------------------------------------------------------

    async def ghl_create_product(
        self,
        name: str,
        product_type: str,
        description: str | None = None,
        image: str | None = None,
        available_in_store: bool | None = None,
        slug: str | None = None,
    ) -> Any:
        payload = _drop_none(
            locationId=self._client.location_id, name=name, productType=product_type,
            description=description, image=image, availableInStore=available_in_store, slug=slug,
        )
        return await self._client.post("/products/", payload)

    async def ghl_list_products(
        self,
        limit: int | None = None,
        offset: int | None = None,
        search: str | None = None,
        collection_ids: list[str] | None = None,
        available_in_store: bool | None = None,
    ) -> Any:
        params = _drop_none(
            locationId=self._client.location_id, limit=limit, offset=offset, search=search,
            collectionIds=",".join(collection_ids) if collection_ids else None,
            availableInStore=available_in_store,
        )
        return await self._client.get("/products/", params)

    async def ghl_get_product(self, product_id: str) -> Any:
        return await self._client.get(f"/products/{product_id}", {"locationId": self._client.location_id})

    async def ghl_update_product(
        self,
        product_id: str,
        name: str | None = None,
        product_type: str | None = None,
        description: str | None = None,
        image: str | None = None,
        available_in_store: bool | None = None,
    ) -> Any:
        payload = _drop_none(
            locationId=self._client.location_id, name=name, productType=product_type,
            description=description, image=image, availableInStore=available_in_store,
        )
        return await self._client.put(f"/products/{product_id}", payload)

    async def ghl_delete_product(self, product_id: str) -> Any:
        return await self._client.delete(f"/products/{product_id}", {"locationId": self._client.location_id})

    async def ghl_create_price(
        self,
        product_id: str,
        name: str,
        type: str,
        currency: str,
        amount: float,
        interval: str | None = None,
        interval_count: int | None = None,
        compare_at_price: float | None = None,
        sku: str | None = None,
        track_inventory: bool | None = None,
        available_quantity: int | None = None,
    ) -> Any:
        recurring = _drop_none(interval=interval, intervalCount=interval_count) if type == "recurring" else None
        payload = _drop_none(
            locationId=self._client.location_id, name=name, type=type, currency=currency, amount=amount,
            recurring=recurring or None, compareAtPrice=compare_at_price, sku=sku,
            trackInventory=track_inventory, availableQuantity=available_quantity,
        )
        return await self._client.post(f"/products/{product_id}/price", payload)

    async def ghl_list_prices(self, product_id: str, limit: int | None = None, offset: int | None = None) -> Any:
        params = _drop_none(locationId=self._client.location_id, limit=limit, offset=offset)
        return await self._client.get(f"/products/{product_id}/price", params)

    async def ghl_list_inventory(
        self, limit: int | None = None, offset: int | None = None, search: str | None = None,
    ) -> Any:
        params = _drop_none(
            altId=self._client.location_id, altType="location", limit=limit, offset=offset, search=search,
        )
        return await self._client.get("/products/inventory", params)

    async def ghl_create_product_collection(
        self,
        name: str,
        slug: str,
        image: str | None = None,
        seo_title: str | None = None,
        seo_description: str | None = None,
    ) -> Any:
        seo = _drop_none(title=seo_title, description=seo_description)
        payload = _drop_none(
            altId=self._client.location_id, altType="location", name=name, slug=slug,
            image=image, seo=seo or None,
        )
        return await self._client.post("/products/collections", payload)

    async def ghl_list_product_collections(
        self, limit: int | None = None, offset: int | None = None, name: str | None = None,
    ) -> Any:
        params = _drop_none(
            altId=self._client.location_id, altType="location", limit=limit, offset=offset, name=name,
        )
        return await self._client.get("/products/collections", params)
