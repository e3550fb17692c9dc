"""Aggregate totals over a user's transactions."""

from collections import defaultdict
from datetime import date
from decimal import Decimal
from typing import Callable, Iterable, Optional

from dateutil.relativedelta import relativedelta

from pocketbook.database.base import Database
from pocketbook.domain.context import RequestContext, require_context
from pocketbook.domain.entities import (
    CategoryTotal,
    PeriodTotal,
    TagSetTotal,
    Transaction,
    TransactionFilter,
)
from pocketbook.utils.date_parser import month_start, year_start

PeriodFn = Callable[[date], date]


def _kind_order(kind) -> int:
    return ("spend", "earn", "save").index(kind.value)


class TotalsService:
    """Service computing monthly, yearly, category and tag-set totals.

    Periods are reported as their first day. Rows are ordered newest period
    first, then by kind (spend, earn, save) and name.
    """

    def __init__(self, db: Database):
        """Initialize totals service.

        Args:
            db: Database instance
        """
        self.db = db

    def _transactions(
        self,
        ctx: RequestContext,
        start: Optional[date] = None,
        length: Optional[relativedelta] = None,
        tags_any: Iterable[str] = (),
    ) -> list[Transaction]:
        end = start + length - relativedelta(days=1) if start is not None and length is not None else None
        filters = TransactionFilter(
            start_date=start,
            end_date=end,
            tags_any=tuple(tags_any),
            order_by="date",
            descending=False,
        )
        return self.db.list_transactions(require_context(ctx), filters)

    @staticmethod
    def _period_totals(transactions: list[Transaction], period_of: PeriodFn) -> list[PeriodTotal]:
        totals: dict[tuple, Decimal] = defaultdict(Decimal)
        for txn in transactions:
            totals[(period_of(txn.date), txn.kind)] += txn.amount
        rows = [PeriodTotal(period=period, kind=kind, total=total) for (period, kind), total in totals.items()]
        rows.sort(key=lambda r: (-r.period.toordinal(), _kind_order(r.kind)))
        return rows

    @staticmethod
    def _category_totals(transactions: list[Transaction], period_of: PeriodFn) -> list[CategoryTotal]:
        totals: dict[tuple, Decimal] = defaultdict(Decimal)
        for txn in transactions:
            totals[(period_of(txn.date), txn.kind, txn.category_name)] += txn.amount
        rows = [
            CategoryTotal(period=period, kind=kind, category=category, total=total)
            for (period, kind, category), total in totals.items()
        ]
        # Uncategorized rows sort after named ones
        rows.sort(
            key=lambda r: (
                -r.period.toordinal(),
                _kind_order(r.kind),
                r.category is None,
                r.category or "",
            )
        )
        return rows

    @staticmethod
    def _tag_set_totals(transactions: list[Transaction], period_of: Optional[PeriodFn]) -> list[TagSetTotal]:
        totals: dict[tuple, Decimal] = defaultdict(Decimal)
        for txn in transactions:
            period = period_of(txn.date) if period_of is not None else None
            totals[(period, txn.kind, tuple(sorted(txn.tags)))] += txn.amount
        rows = [
            TagSetTotal(period=period, kind=kind, tags=tags, total=total)
            for (period, kind, tags), total in totals.items()
        ]
        rows.sort(
            key=lambda r: (
                -r.period.toordinal() if r.period is not None else 0,
                _kind_order(r.kind),
                r.tags,
            )
        )
        return rows

    def monthly_totals(self, ctx: RequestContext, month: Optional[date] = None) -> list[PeriodTotal]:
        """Total per month and kind.

        Args:
            ctx: Acting user
            month: Optional date inside the only month to report

        Returns:
            List of PeriodTotal rows
        """
        start = month_start(month) if month is not None else None
        transactions = self._transactions(ctx, start, relativedelta(months=1))
        return self._period_totals(transactions, month_start)

    def yearly_totals(self, ctx: RequestContext, year: Optional[date] = None) -> list[PeriodTotal]:
        """Total per year and kind."""
        start = year_start(year) if year is not None else None
        transactions = self._transactions(ctx, start, relativedelta(years=1))
        return self._period_totals(transactions, year_start)

    def monthly_category_totals(self, ctx: RequestContext, month: Optional[date] = None) -> list[CategoryTotal]:
        """Total per month, kind and category name (None for uncategorized)."""
        start = month_start(month) if month is not None else None
        transactions = self._transactions(ctx, start, relativedelta(months=1))
        return self._category_totals(transactions, month_start)

    def yearly_category_totals(self, ctx: RequestContext, year: Optional[date] = None) -> list[CategoryTotal]:
        """Total per year, kind and category name."""
        start = year_start(year) if year is not None else None
        transactions = self._transactions(ctx, start, relativedelta(years=1))
        return self._category_totals(transactions, year_start)

    def monthly_tagged_type_totals(
        self,
        ctx: RequestContext,
        month: Optional[date] = None,
        tags_any: Iterable[str] = (),
    ) -> list[TagSetTotal]:
        """Total per month, kind and exact tag set.

        Args:
            ctx: Acting user
            month: Optional date inside the only month to report
            tags_any: Only count transactions carrying at least one of these tags

        Returns:
            List of TagSetTotal rows; untagged transactions have an empty tag set
        """
        start = month_start(month) if month is not None else None
        transactions = self._transactions(ctx, start, relativedelta(months=1), tags_any)
        return self._tag_set_totals(transactions, month_start)

    def yearly_tagged_type_totals(
        self,
        ctx: RequestContext,
        year: Optional[date] = None,
        tags_any: Iterable[str] = (),
    ) -> list[TagSetTotal]:
        """Total per year, kind and exact tag set."""
        start = year_start(year) if year is not None else None
        transactions = self._transactions(ctx, start, relativedelta(years=1), tags_any)
        return self._tag_set_totals(transactions, year_start)

    def tagged_type_totals(self, ctx: RequestContext, tags_any: Iterable[str] = ()) -> list[TagSetTotal]:
        """All-time total per kind and exact tag set."""
        transactions = self._transactions(ctx, tags_any=tags_any)
        return self._tag_set_totals(transactions, None)

    def current_month_category_totals(self, ctx: RequestContext) -> list[CategoryTotal]:
        return self.monthly_category_totals(ctx, date.today())

    def current_year_category_totals(self, ctx: RequestContext) -> list[CategoryTotal]:
        return self.yearly_category_totals(ctx, date.today())
