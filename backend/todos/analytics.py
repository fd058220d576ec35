# todos/analytics.py
import logging
from dataclasses import dataclass
from datetime import date, datetime, timezone as dt_timezone
from decimal import ROUND_HALF_UP, Decimal
from typing import List, Optional

from django.db import DEFAULT_DB_ALIAS, transaction
from django.db.models import Count, Q
from django.db.models.functions import TruncDate
from django.utils import timezone

from .models import Priority, Todo

logger = logging.getLogger(__name__)

SECONDS_PER_DAY = 86400
DAILY_STATS_LIMIT = 30


def round_half_up(value: float, places: int = 2) -> float:
    """Round half away from zero like SQL ROUND (0.125 -> 0.13)."""
    quantum = Decimal(1).scaleb(-places)
    return float(Decimal(str(value)).quantize(quantum, rounding=ROUND_HALF_UP))


def completion_rate(completed: int, total: int) -> float:
    if total == 0:
        return 0.0
    return round_half_up(completed * 100.0 / total)


@dataclass(frozen=True)
class SummaryRow:
    title: str
    priority: int
    priority_text: str
    is_completed: bool
    days_old: int
    is_overdue: bool


@dataclass(frozen=True)
class DailyStatsRow:
    date: str
    todos_created: int
    todos_completed: int
    completion_rate: float


@dataclass(frozen=True)
class AdvancedStats:
    total_todos: int
    completed_todos: int
    pending_todos: int
    overdue_todos: int
    low_priority: int
    medium_priority: int
    high_priority: int
    avg_completion_days: float
    overall_completion_rate: float


class TodoAnalytics:
    """
    Aggregate views over the whole Todo table plus the bulk priority move.

    Each call evaluates "now" once, so every row of one response is judged
    against the same instant. Callers may pass ``now`` explicitly.
    """

    def __init__(self, using: str = DEFAULT_DB_ALIAS):
        self.using = using

    @property
    def todos(self):
        return Todo.objects.using(self.using)

    def summary(self, now: Optional[datetime] = None) -> List[SummaryRow]:
        """
        One row per todo, highest priority first, newest first within a tier.
        """
        now = now or timezone.now()
        rows = self.todos.order_by('-priority', '-created_at', '-id').values_list(
            'title', 'priority', 'is_completed', 'created_at', 'due_date'
        )

        summary = []
        for title, priority, is_completed, created_at, due_date in rows:
            summary.append(SummaryRow(
                title=title,
                priority=priority,
                priority_text=Priority.text_for(priority),
                is_completed=is_completed,
                days_old=max(0, (now - created_at).days),
                is_overdue=due_date is not None and due_date < now and not is_completed,
            ))
        return summary

    def daily_stats(self, from_date=None, to_date=None) -> List[DailyStatsRow]:
        """
        Created/completed counts per calendar day of creation (UTC).

        Args:
            from_date: first day to include (date or datetime), open if None
            to_date: last day to include (date or datetime), open if None

        Returns:
            At most 30 rows, most recent day first.
        """
        query = self.todos.all()
        if from_date is not None:
            query = query.filter(created_at__date__gte=_as_date(from_date))
        if to_date is not None:
            query = query.filter(created_at__date__lte=_as_date(to_date))

        grouped = (
            query
            .annotate(day=TruncDate('created_at'))
            .values('day')
            .annotate(
                created=Count('id'),
                completed=Count('id', filter=Q(is_completed=True)),
            )
            .order_by('-day')[:DAILY_STATS_LIMIT]
        )

        return [
            DailyStatsRow(
                date=row['day'].isoformat(),
                todos_created=row['created'],
                todos_completed=row['completed'],
                completion_rate=completion_rate(row['completed'], row['created']),
            )
            for row in grouped
        ]

    def advanced_stats(self, now: Optional[datetime] = None) -> AdvancedStats:
        now = now or timezone.now()

        counts = self.todos.aggregate(
            total=Count('id'),
            completed=Count('id', filter=Q(is_completed=True)),
            overdue=Count('id', filter=Q(
                due_date__isnull=False, due_date__lt=now, is_completed=False
            )),
            low=Count('id', filter=Q(priority=Priority.LOW)),
            medium=Count('id', filter=Q(priority=Priority.MEDIUM)),
            high=Count('id', filter=Q(priority=Priority.HIGH)),
        )

        # Portable day arithmetic, no julianday().
        durations = [
            (updated_at - created_at).total_seconds() / SECONDS_PER_DAY
            for created_at, updated_at in self.todos.filter(is_completed=True)
            .values_list('created_at', 'updated_at')
        ]
        avg_days = round_half_up(sum(durations) / len(durations)) if durations else 0.0

        total = counts['total']
        completed = counts['completed']
        return AdvancedStats(
            total_todos=total,
            completed_todos=completed,
            pending_todos=total - completed,
            overdue_todos=counts['overdue'],
            low_priority=counts['low'],
            medium_priority=counts['medium'],
            high_priority=counts['high'],
            avg_completion_days=avg_days,
            overall_completion_rate=completion_rate(completed, total),
        )

    def bulk_update_priority(self, old_priority: int, new_priority: int,
                             now: Optional[datetime] = None) -> int:
        """
        Move every todo at ``old_priority`` to ``new_priority`` in one statement.

        Both values are expected to be validated by the caller.
        """
        now = now or timezone.now()
        with transaction.atomic(using=self.using):
            updated = self.todos.filter(priority=old_priority).update(
                priority=new_priority, updated_at=now
            )
        logger.info('Bulk priority update %s -> %s changed %d todo(s)',
                    old_priority, new_priority, updated)
        return updated


def _as_date(value) -> date:
    if isinstance(value, datetime):
        if timezone.is_aware(value):
            value = value.astimezone(dt_timezone.utc)
        return value.date()
    return value
