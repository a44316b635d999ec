"""
Sales analytics schemas (camelCase on the wire)
"""
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel
from typing import List
from decimal import Decimal


class TopSellingItem(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    menu_item_id: int
    name: str
    quantity: int
    revenue: Decimal


class SalesAnalytics(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    total_sales: Decimal
    total_orders: int
    avg_order_value: Decimal
    top_selling_items: List[TopSellingItem]
