"""Pydantic schemas for transaction resources."""
from __future__ import annotations

from datetime import datetime, timezone
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field, field_validator


class TransactionSeed(BaseModel):
    """Record shape delivered by the seed source."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    title: str
    description: str = ""
    price: Decimal
    category: str = Field(..., min_length=1)
    image: str | None = None
    sold: bool
    date_of_sale: datetime = Field(..., alias="dateOfSale")

    @field_validator("date_of_sale")
    @classmethod
    def _normalise_to_utc(cls, value: datetime) -> datetime:
        if value.tzinfo is None:
            return value
        return value.astimezone(timezone.utc).replace(tzinfo=None)


class TransactionRead(BaseModel):
    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    id: int
    title: str
    description: str
    price: float
    category: str
    image: str | None = None
    sold: bool
    date_of_sale: datetime = Field(..., alias="dateOfSale")


class StatisticsResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    total_sales_amount: float = Field(default=0, alias="totalSalesAmount")
    total_sold_items: int = Field(default=0, alias="totalSoldItems")
    total_not_sold_items: int = Field(default=0, alias="totalNotSoldItems")


class PriceRangeCount(BaseModel):
    range: str
    count: int


class CategoryCount(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    category: str = Field(..., alias="_id")
    count: int


class CombinedResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    statistics: StatisticsResponse
    bar_chart_data: list[PriceRangeCount] = Field(..., alias="barChartData")
    pie_chart_data: list[CategoryCount] = Field(..., alias="pieChartData")


class MessageResponse(BaseModel):
    message: str


class ErrorResponse(BaseModel):
    message: str
    error: str | None = None


__all__ = [
    "CategoryCount",
    "CombinedResponse",
    "ErrorResponse",
    "MessageResponse",
    "PriceRangeCount",
    "StatisticsResponse",
    "TransactionRead",
    "TransactionSeed",
]
