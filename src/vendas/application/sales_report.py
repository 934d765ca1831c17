"""Application service: Sales Report use case (query).

Periods are measured against the moment the sale was recorded
(``created_at``), not the date typed on the sale. Calendar days are
taken in the timezone of ``now``.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, time, timedelta, timezone

from vendas.application.dto import ProductSalesDTO
from vendas.application.sales_summary import top_products, total_revenue
from vendas.domain.exceptions import RuleViolationError
from vendas.domain.formatters import calendar_date
from vendas.domain.model.sale import Sale
from vendas.domain.repository.sale_repository import SaleRepository

PERIODS = ("all", "today", "week", "month", "custom")
TOP_PRODUCTS_LIMIT = 10
DAILY_WINDOW = 7

_WEEKDAYS = ("seg", "ter", "qua", "qui", "sex", "sáb", "dom")


@dataclass(frozen=True)
class DailyRevenueDTO:
    day: str  # DD/MM/AAAA
    weekday: str
    sales_count: int
    revenue: str


@dataclass(frozen=True)
class SalesReportDTO:
    period: str
    sales_count: int
    revenue: str
    average_ticket: str
    top_products: list[ProductSalesDTO]
    daily: list[DailyRevenueDTO]


class SalesReportHandler:

    def __init__(self, sale_repo: SaleRepository) -> None:
        self._sale_repo = sale_repo

    def handle(
        self,
        period: str = "all",
        start: date | None = None,
        end: date | None = None,
        now: datetime | None = None,
    ) -> SalesReportDTO:
        """Summarise the sales recorded in *period*.

        ``custom`` covers ``start`` through ``end`` inclusive and falls
        back to every sale when either bound is missing. The per-day
        breakdown always covers the last seven days of all sales,
        whatever the period.
        """
        if period not in PERIODS:
            raise RuleViolationError(
                f"Unknown period '{period}', expected one of {', '.join(PERIODS)}"
            )
        if now is None or now.tzinfo is None:
            now = (now or datetime.now()).astimezone()

        sales = self._sale_repo.list_all()
        selected = [s for s in sales if self._in_period(s, period, start, end, now)]

        revenue = total_revenue(selected)
        average = revenue / len(selected) if selected else revenue

        return SalesReportDTO(
            period=period,
            sales_count=len(selected),
            revenue=str(revenue),
            average_ticket=str(average),
            top_products=top_products(selected, TOP_PRODUCTS_LIMIT),
            daily=self._daily(sales, now),
        )

    # --- Internal helpers -----------------------------------------------------

    @staticmethod
    def _local(moment: datetime, now: datetime) -> datetime:
        if moment.tzinfo is None:
            moment = moment.replace(tzinfo=timezone.utc)
        return moment.astimezone(now.tzinfo)

    def _in_period(
        self,
        sale: Sale,
        period: str,
        start: date | None,
        end: date | None,
        now: datetime,
    ) -> bool:
        recorded = self._local(sale.created_at, now)
        if period == "today":
            return recorded.date() == now.date()
        if period == "week":
            return recorded >= now - timedelta(days=7)
        if period == "month":
            month_ago = calendar_date(now.day, now.month - 1, now.year)
            return recorded >= datetime.combine(month_ago, time.min, tzinfo=now.tzinfo)
        if period == "custom" and start is not None and end is not None:
            return start <= recorded.date() <= end
        return True

    def _daily(self, sales: list[Sale], now: datetime) -> list[DailyRevenueDTO]:
        by_day: dict[date, list[Sale]] = {}
        for sale in sales:
            by_day.setdefault(self._local(sale.created_at, now).date(), []).append(sale)

        result = []
        for offset in range(DAILY_WINDOW - 1, -1, -1):
            day = now.date() - timedelta(days=offset)
            day_sales = by_day.get(day, [])
            result.append(
                DailyRevenueDTO(
                    day=day.strftime("%d/%m/%Y"),
                    weekday=_WEEKDAYS[day.weekday()],
                    sales_count=len(day_sales),
                    revenue=str(total_revenue(day_sales)),
                )
            )
        return result
