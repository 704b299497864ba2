"""Store shipping zone, shipping rate and store settings operations."""

from __future__ import annotations

from typing import Any

from ghl_mcp.tools.base import ToolModule, _arr, _bool, _drop_none, _int, _num, _obj, _str, _td

_ZONE_ID = {"shipping_zone_id": _str("ID of the shipping zone")}
_COUNTRIES = {
    "type": "array",
    "description": "Countries (and optionally states) covered by the zone",
    "items": {
        "type": "object",
        "properties": {
            "code": {"type": "string", "description": "ISO country code (e.g., \"US\")"},
            "states": {"type": "array", "items": {"type": "object"}},
        },
        "required": ["code"],
    },
}


class StoreTools(ToolModule):
    DEFINITIONS = [
        _td("ghl_create_shipping_zone", "Create a new shipping zone with specific countries and states", {
            "name": _str("Name of the shipping zone"),
            "countries": _COUNTRIES,
        }, ["name", "countries"]),
        _td("ghl_list_shipping_zones", "List all shipping zones for a location", {
            "limit": _int("Number of zones to return"),
            "offset": _int("Number of zones to skip"),
            "with_shipping_rate": _bool("Include shipping rates in the response"),
        }, read_only=True),
        _td("ghl_get_shipping_zone", "Get details of a specific shipping zone",
            _ZONE_ID, ["shipping_zone_id"], read_only=True),
        _td("ghl_update_shipping_zone", "Update a shipping zone", {
            **_ZONE_ID,
            "name": _str("Name of the shipping zone"),
            "countries": _COUNTRIES,
        }, ["shipping_zone_id"]),
        _td("ghl_delete_shipping_zone", "Delete a shipping zone", _ZONE_ID, ["shipping_zone_id"]),
        _td("ghl_create_shipping_rate", "Create a new shipping rate for a shipping zone", {
            **_ZONE_ID,
            "name": _str("Name of the shipping rate"),
            "currency": _str("Currency code (e.g., USD)"),
            "amount": _num("Shipping rate amount"),
            "condition_type": {"type": "string", "enum": ["none", "price", "weight"],
                               "description": "Condition type for the rate"},
            "min_condition": _num("Minimum condition value"),
            "max_condition": _num("Maximum condition value"),
        }, ["shipping_zone_id", "name", "currency", "amount", "condition_type"]),
        _td("ghl_list_shipping_rates", "List shipping rates for a shipping zone", {
            **_ZONE_ID,
            "limit": _int("Number of rates to return"),
            "offset": _int("Number of rates to skip"),
        }, ["shipping_zone_id"], read_only=True),
        _td("ghl_create_store_setting", "Create or update store settings", {
            "shipping_origin": _obj("Shipping origin address (name, country, state, city, street1, zip)"),
            "store_order_notification": _obj("Order notification settings"),
            "store_order_fulfillment_notification": _obj("Fulfillment notification settings"),
        }, ["shipping_origin"]),
        _td("ghl_get_store_setting", "Get store settings for a location", read_only=True),
        _td("ghl_list_available_shipping_carriers", "List shipping carriers available to the store", {
            "carrier_ids": _arr("Optional carrier IDs to filter by"),
        }, read_only=True),
    ]

    def get_tools(self):
        return self._definitions()

    async def execute_store_tool(self, name: str, args: dict[str, Any]) -> Any:
        return await self._dispatch(name, args)

    def _alt(self, **fields: Any) -> dict[str, Any]:
        return _drop_none(altId=self._client.location_id, altType="location", **fields)

    # ------------------------------------------------------------------

    async def ghl_create_shipping_zone(self, name: str, countries: list[dict]) -> Any:
        return await self._client.post("/store/shipping-zone", self._alt(name=name, countries=countries))

    async def ghl_list_shipping_zones(
        self, limit: int | None = None, offset: int | None = None, with_shipping_rate: bool | None = None,
    ) -> Any:
        params = self._alt(limit=limit, offset=offset, withShippingRate=with_shipping_rate)
        return await self._client.get("/store/shipping-zone", params)

    async def ghl_get_shipping_zone(self, shipping_zone_id: str) -> Any:
        return await self._client.get(f"/store/shipping-zone/{shipping_zone_id}", self._alt())

    async def ghl_update_shipping_zone(
        self, shipping_zone_id: str, name: str | None = None, countries: list[dict] | None = None,
    ) -> Any:
        payload = self._alt(name=name, countries=countries)
        return await self._client.put(f"/store/shipping-zone/{shipping_zone_id}", payload)

    async def ghl_delete_shipping_zone(self, shipping_zone_id: str) -> Any:
        return await self._client.delete(f"/store/shipping-zone/{shipping_zone_id}", self._alt())

    async def ghl_create_shipping_rate(
        self,
        shipping_zone_id: str,
        name: str,
        currency: str,
        amount: float,
        condition_type: str,
        min_condition: float | None = None,
        max_condition: float | None = None,
    ) -> Any:
        payload = self._alt(
            name=name, currency=currency, amount=amount, conditionType=condition_type,
            minCondition=min_condition, maxCondition=max_condition,
        )
        return await self._client.post(f"/store/shipping-zone/{shipping_zone_id}/shipping-rate", payload)

    async def ghl_list_shipping_rates(
        self, shipping_zone_id: str, limit: int | None = None, offset: int | None = None,
    ) -> Any:
        params = self._alt(limit=limit, offset=offset)
        return await self._client.get(f"/store/shipping-zone/{shipping_zone_id}/shipping-rate", params)

    async def ghl_create_store_setting(
        self,
        shipping_origin: dict,
        store_order_notification: dict | None = None,
        store_order_fulfillment_notification: dict | None = None,
    ) -> Any:
        payload = self._alt(
            shippingOrigin=shipping_origin,
            storeOrderNotification=store_order_notification,
            storeOrderFulfillmentNotification=store_order_fulfillment_notification,
        )
        return await self._client.post("/store/store-setting", payload)

    async def ghl_get_store_setting(self) -> Any:
        return await self._client.get("/store/store-setting", self._alt())

    async def ghl_list_available_shipping_carriers(self, carrier_ids: list[str] | None = None) -> Any:
        params = self._alt(ids=",".join(carrier_ids) if carrier_ids else None)
        return await self._client.get("/store/shipping-carrier", params)
