# smarttask_app/recurrence.py
"""
Recurring-task projection.

Each enabled RecurrenceRule is expanded into concrete Task rows from today up
to the horizon (today + RECURRENCE_HORIZON_DAYS, or the rule's own end_date
when that comes first). Generation is one-shot: tasks carry no link back to
their rule and nothing is deduplicated, so running it twice over the same
window creates every task twice.
"""
import datetime
import logging
import time

from dateutil.relativedelta import relativedelta
from django.conf import settings
from django.db import transaction
from django.utils import timezone

from .models import Cadence, RecurrenceRule, TaskStatus
from .models import create_task as store_task

logger = logging.getLogger(__name__)

DEFAULT_HORIZON_DAYS = 30


def step_date(start, cadence, interval, steps):
    """
    Return the date ``steps`` occurrences after ``start``.

    Monthly steps are taken from ``start`` rather than from the previous
    occurrence, so a rule anchored on the 31st lands on the last day of
    shorter months and returns to the 31st afterwards.
    """
    if cadence == Cadence.DAILY:
        return start + datetime.timedelta(days=interval * steps)
    if cadence == Cadence.WEEKLY:
        return start + datetime.timedelta(days=7 * interval * steps)
    if cadence == Cadence.MONTHLY:
        return start + relativedelta(months=interval * steps)
    raise ValueError(f'Unknown cadence: {cadence!r}')


def horizon_end(rule, today, horizon_days=DEFAULT_HORIZON_DAYS):
    end = today + datetime.timedelta(days=horizon_days)
    if rule.end_date is not None and rule.end_date < end:
        return rule.end_date
    return end


def due_dates(rule, today, horizon_days=DEFAULT_HORIZON_DAYS):
    """
    Yield every due date of ``rule`` from ``today`` through its horizon end, inclusive.

    Args:
        rule: anything with ``cadence``, ``interval`` and ``end_date`` attributes.
        today (datetime.date): first due date; also the start of the horizon.
        horizon_days (int): length of the default horizon.

    Raises:
        ValueError: if the interval is below 1 or the cadence is unknown.
    """
    if rule.interval is None or rule.interval < 1:
        raise ValueError(f'Recurrence interval must be >= 1, got {rule.interval!r}')
    if rule.cadence not in Cadence.values:
        raise ValueError(f'Unknown cadence: {rule.cadence!r}')

    end = horizon_end(rule, today, horizon_days)
    steps = 0
    due = today
    while due <= end:
        yield due
        steps += 1
        try:
            due = step_date(today, rule.cadence, rule.interval, steps)
        except (OverflowError, ValueError):
            # next occurrence lies beyond datetime.date.max, so past any end
            return


def now_ms():
    """Wall-clock milliseconds, used as the order_index of new tasks."""
    return time.time_ns() // 1_000_000


def generate_tasks(user, today=None, create_task=None, horizon_days=None):
    """
    Expand the user's enabled rules into pending tasks.

    Args:
        user: owner of the rules; generated tasks belong to the same user.
        today (datetime.date): projection start. Defaults to the current local date.
        create_task (callable): task writer with the signature of
            models.create_task, which is the default.
        horizon_days (int): defaults to settings.RECURRENCE_HORIZON_DAYS.

    Returns:
        int: number of tasks created.

    The whole batch is one transaction: if any write fails the error
    propagates and none of this call's tasks are kept.
    """
    if today is None:
        today = timezone.localdate()
    if create_task is None:
        create_task = store_task
    if horizon_days is None:
        horizon_days = getattr(settings, 'RECURRENCE_HORIZON_DAYS', DEFAULT_HORIZON_DAYS)

    rules = list(RecurrenceRule.objects.filter(user=user, enabled=True))
    created = 0
    last_index = 0

    with transaction.atomic():
        for rule in rules:
            for due in due_dates(rule, today, horizon_days):
                # strictly increasing even when the clock has not moved
                last_index = max(last_index + 1, now_ms())
                create_task(
                    user=user,
                    title=rule.title,
                    description=rule.description,
                    due_date=due,
                    status=TaskStatus.PENDING,
                    priority=rule.priority,
                    order_index=last_index,
                )
                created += 1

    logger.info(
        'Generated %s tasks from %s rules for user=%s (today=%s, horizon=%sd)',
        created, len(rules), user.pk, today, horizon_days,
    )
    return created
