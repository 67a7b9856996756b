"""Month-scoped transaction queries, chart aggregates and store seeding."""
from __future__ import annotations

import logging
import re
import threading
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation

from sqlalchemy import ColumnElement, case, extract, func, or_, select

from sales_insights.core.config import Settings, get_settings
from sales_insights.models import Transaction
from sales_insights.obs import record_seed_run
from sales_insights.schemas import (
    CategoryCount,
    CombinedResponse,
    PriceRangeCount,
    StatisticsResponse,
)
from sales_insights.services.errors import (
    InvalidParameterError,
    MissingParameterError,
    SourceUnavailableError,
    StoreReadError,
    StoreWriteError,
)
from sales_insights.services.seed_source import SeedSourceClient
from sales_insights.services.store import TransactionStore

logger = logging.getLogger(__name__)

_MONTH_NAMES = (
    "january",
    "february",
    "march",
    "april",
    "may",
    "june",
    "july",
    "august",
    "september",
    "october",
    "november",
    "december",
)
MONTHS: dict[str, int] = {name: index for index, name in enumerate(_MONTH_NAMES, start=1)}
MONTHS.update({name[:3]: index for name, index in list(MONTHS.items())})

ALREADY_SEEDED_MESSAGE = "Data already exists in the database."
SEEDED_MESSAGE = "Database initialized successfully!"

# Guards the count-then-replace sequence against concurrent seeds in this process.
_SEED_LOCK = threading.Lock()

_LEADING_NUMBER = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")


@dataclass(slots=True, frozen=True)
class PriceBand:
    """Histogram bucket with inclusive whole-number bounds; ``maximum=None`` is unbounded."""

    label: str
    minimum: int
    maximum: int | None


PRICE_BANDS: tuple[PriceBand, ...] = (
    PriceBand("0-100", 0, 100),
    PriceBand("101-200", 101, 200),
    PriceBand("201-300", 201, 300),
    PriceBand("301-400", 301, 400),
    PriceBand("401-500", 401, 500),
    PriceBand("501-600", 501, 600),
    PriceBand("601-700", 601, 700),
    PriceBand("701-800", 701, 800),
    PriceBand("801-900", 801, 900),
    PriceBand("901-above", 901, None),
)


@dataclass(slots=True, frozen=True)
class PageRequest:
    page: int
    per_page: int

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.per_page

    @classmethod
    def from_params(
        cls,
        page: int | str | None,
        per_page: int | str | None,
        *,
        default_page: int = 1,
        default_per_page: int = 10,
    ) -> "PageRequest":
        return cls(
            page=_positive_int("page", page, default_page),
            per_page=_positive_int("perPage", per_page, default_per_page),
        )


@dataclass(slots=True, frozen=True)
class SeedResult:
    message: str
    inserted: int = 0
    already_seeded: bool = False


def _positive_int(name: str, value: int | str | None, default: int) -> int:
    if value is None or (isinstance(value, str) and not value.strip()):
        return default
    try:
        number = int(value)
    except (TypeError, ValueError) as exc:
        raise InvalidParameterError(f"{name} must be a positive integer", f"got {value!r}") from exc
    if number < 1:
        raise InvalidParameterError(f"{name} must be a positive integer", f"got {value!r}")
    return number


def parse_month(value: str | None) -> int:
    """Translate a month name such as ``"March"`` or ``"mar"`` to its number (1-12)."""
    if value is None or not value.strip():
        raise MissingParameterError("Month is required")
    month = MONTHS.get(value.strip().lower())
    if month is None:
        raise InvalidParameterError(
            f"Invalid month '{value}'",
            "expected an English month name such as 'January' or 'Jan'",
        )
    return month


def parse_search_price(search: str) -> Decimal | None:
    """Return ``search`` as a finite number, or ``None`` when it is not numeric."""
    try:
        price = Decimal(search.strip())
    except InvalidOperation:
        return None
    return price if price.is_finite() else None


def parse_leading_price(search: str) -> Decimal:
    """Read the number at the start of ``search``; text without one reads as 0."""
    match = _LEADING_NUMBER.match(search.lstrip())
    if match is None:
        return Decimal(0)
    return Decimal(match.group(0))


def month_criterion(month: int) -> ColumnElement[bool]:
    """Match the month of ``date_of_sale`` regardless of year."""
    return extract("month", Transaction.date_of_sale) == month


def _contains(column: ColumnElement[str], text: str) -> ColumnElement[bool]:
    escaped = text.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return column.ilike(f"%{escaped}%", escape="\\")


def _price_band_expression() -> ColumnElement[str]:
    # Ordered upper bounds: a fractional price between bands falls into the next band up.
    whens = [
        (Transaction.price <= band.maximum, band.label)
        for band in PRICE_BANDS
        if band.maximum is not None
    ]
    return case(*whens, else_=PRICE_BANDS[-1].label)


@contextmanager
def _store_errors(message: str) -> Iterator[None]:
    try:
        yield
    except StoreReadError as exc:
        raise StoreReadError(message, exc.detail) from exc


class TransactionQueryService:
    """Reads and seeds the transaction store."""

    def __init__(
        self,
        store: TransactionStore,
        *,
        seed_source: SeedSourceClient | None = None,
        settings: Settings | None = None,
    ) -> None:
        self._store = store
        self._seed_source = seed_source
        self._settings = settings or get_settings()

    def seed(self) -> SeedResult:
        """Populate an empty store from the seed source; a populated store is left untouched."""

        with _SEED_LOCK:
            with _store_errors("Error fetching data"):
                existing = self._store.count()
            if existing > 0:
                logger.info("Skipping seed, store already holds %d transactions", existing)
                record_seed_run("skipped")
                return SeedResult(message=ALREADY_SEEDED_MESSAGE, already_seeded=True)

            if self._seed_source is None:
                record_seed_run("failed")
                raise SourceUnavailableError("Error fetching data", "no seed source configured")

            logger.info("Seeding transactions from %s", self._seed_source.url)
            try:
                records = self._seed_source.fetch()
                inserted = self._store.replace_all(records)
            except (SourceUnavailableError, StoreWriteError):
                record_seed_run("failed")
                raise

        logger.info("Seeded %d transactions", inserted)
        record_seed_run("seeded", inserted)
        return SeedResult(message=SEEDED_MESSAGE, inserted=inserted)

    def list_transactions(
        self,
        month: str | None,
        *,
        search: str | None = None,
        page: int | str | None = None,
        per_page: int | str | None = None,
    ) -> list[Transaction]:
        """Return one page of the month's transactions, optionally narrowed by ``search``."""

        month_number = parse_month(month)
        paging = PageRequest.from_params(
            page,
            per_page,
            default_page=self._settings.default_page,
            default_per_page=self._settings.default_per_page,
        )

        criteria = [month_criterion(month_number)]
        if search and search.strip():
            criteria.append(self._search_criterion(search.strip()))

        with _store_errors("Error fetching transactions"):
            return self._store.find(*criteria, offset=paging.offset, limit=paging.per_page)

    def _search_criterion(self, search: str) -> ColumnElement[bool]:
        alternatives = [_contains(Transaction.title, search), _contains(Transaction.description, search)]
        if self._settings.search_legacy_price_fallback:
            price: Decimal | None = parse_leading_price(search)
        else:
            price = parse_search_price(search)
        if price is not None:
            alternatives.append(Transaction.price == price)
        return or_(*alternatives)

    def statistics(self, month: str | None) -> StatisticsResponse:
        month_number = parse_month(month)
        in_month = month_criterion(month_number)

        with _store_errors("Error fetching statistics"):
            sold_rows = self._store.aggregate(
                select(func.coalesce(func.sum(Transaction.price), 0), func.count()).where(
                    in_month, Transaction.sold.is_(True)
                )
            )
            not_sold = self._store.count(in_month, Transaction.sold.is_(False))

        total_amount, total_sold = sold_rows[0] if sold_rows else (0, 0)
        return StatisticsResponse(
            total_sales_amount=float(total_amount or 0),
            total_sold_items=int(total_sold or 0),
            total_not_sold_items=not_sold,
        )

    def bar_chart(self, month: str | None) -> list[PriceRangeCount]:
        month_number = parse_month(month)
        banded = (
            select(_price_band_expression().label("band"))
            .where(month_criterion(month_number), Transaction.price >= 0)
            .subquery()
        )

        with _store_errors("Error fetching bar chart data"):
            rows = self._store.aggregate(select(banded.c.band, func.count()).group_by(banded.c.band))

        counts = {label: int(count) for label, count in rows}
        return [PriceRangeCount(range=item.label, count=counts.get(item.label, 0)) for item in PRICE_BANDS]

    def pie_chart(self, month: str | None) -> list[CategoryCount]:
        month_number = parse_month(month)

        with _store_errors("Error fetching pie chart data"):
            rows = self._store.aggregate(
                select(Transaction.category, func.count())
                .where(month_criterion(month_number))
                .group_by(Transaction.category)
                .order_by(Transaction.category)
            )

        return [CategoryCount(category=category, count=int(count)) for category, count in rows]

    def combined(self, month: str | None) -> CombinedResponse:
        parse_month(month)

        with _store_errors("Error fetching combined data"):
            return CombinedResponse(
                statistics=self.statistics(month),
                bar_chart_data=self.bar_chart(month),
                pie_chart_data=self.pie_chart(month),
            )


__all__ = [
    "ALREADY_SEEDED_MESSAGE",
    "MONTHS",
    "PRICE_BANDS",
    "PageRequest",
    "PriceBand",
    "SEEDED_MESSAGE",
    "SeedResult",
    "TransactionQueryService",
    "month_criterion",
    "parse_leading_price",
    "parse_month",
    "parse_search_price",
]
