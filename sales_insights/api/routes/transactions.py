"""Transaction listing, chart and seeding routes."""
from __future__ import annotations

from fastapi import APIRouter, Depends, Query

from sales_insights.api.deps import get_seeding_service, get_transaction_service
from sales_insights.schemas import (
    CategoryCount,
    CombinedResponse,
    ErrorResponse,
    MessageResponse,
    PriceRangeCount,
    StatisticsResponse,
    TransactionRead,
)
from sales_insights.services import TransactionQueryService

router = APIRouter()

_ERROR_RESPONSES = {
    400: {"model": ErrorResponse, "description": "Missing or invalid query parameter"},
    500: {"model": ErrorResponse, "description": "Record store or seed source failure"},
}
_MONTH_QUERY = Query(default=None, description="Month name, e.g. 'March'. Matches every year.")


@router.get(
    "/initialize",
    response_model=MessageResponse,
    responses={500: _ERROR_RESPONSES[500]},
    summary="Seed the store from the upstream source",
)
def initialize(service: TransactionQueryService = Depends(get_seeding_service)) -> MessageResponse:
    result = service.seed()
    return MessageResponse(message=result.message)


@router.get("/transactions", response_model=list[TransactionRead], responses=_ERROR_RESPONSES)
def list_transactions(
    month: str | None = _MONTH_QUERY,
    search: str | None = Query(default=None, description="Title/description substring or exact price."),
    page: str | None = Query(default=None),
    per_page: str | None = Query(default=None, alias="perPage"),
    service: TransactionQueryService = Depends(get_transaction_service),
) -> list[TransactionRead]:
    """List the month's transactions in insertion order."""

    transactions = service.list_transactions(month, search=search, page=page, per_page=per_page)
    return [TransactionRead.model_validate(transaction) for transaction in transactions]


@router.get("/statistics", response_model=StatisticsResponse, responses=_ERROR_RESPONSES)
def get_statistics(
    month: str | None = _MONTH_QUERY,
    service: TransactionQueryService = Depends(get_transaction_service),
) -> StatisticsResponse:
    return service.statistics(month)


@router.get("/barchart", response_model=list[PriceRangeCount], responses=_ERROR_RESPONSES)
def get_bar_chart(
    month: str | None = _MONTH_QUERY,
    service: TransactionQueryService = Depends(get_transaction_service),
) -> list[PriceRangeCount]:
    return service.bar_chart(month)


@router.get("/piechart", response_model=list[CategoryCount], responses=_ERROR_RESPONSES)
def get_pie_chart(
    month: str | None = _MONTH_QUERY,
    service: TransactionQueryService = Depends(get_transaction_service),
) -> list[CategoryCount]:
    return service.pie_chart(month)


@router.get("/combined", response_model=CombinedResponse, responses=_ERROR_RESPONSES)
def get_combined(
    month: str | None = _MONTH_QUERY,
    service: TransactionQueryService = Depends(get_transaction_service),
) -> CombinedResponse:
    """Statistics, bar chart and pie chart for one month in a single payload."""

    return service.combined(month)


__all__ = [
    "get_bar_chart",
    "get_combined",
    "get_pie_chart",
    "get_statistics",
    "initialize",
    "list_transactions",
    "router",
]
