# smarttask_app/analytics.py
import math

from django.utils import timezone

from .models import FocusMode, TaskStatus

SUMMARY_WINDOW_DAYS = 30


def _round_half_up(value):
    return int(math.floor(value + 0.5))


def task_summary(tasks, days=SUMMARY_WINDOW_DAYS):
    """Completion totals over ``tasks`` averaged across a fixed window of ``days``."""
    total_completed = sum(1 for t in tasks if t.status == TaskStatus.COMPLETED)
    return {
        'total_completed': total_completed,
        'avg_per_day': round(total_completed / days, 2),
        'productivity': _round_half_up(total_completed / days * 100),
    }


def focus_summary(sessions, today=None):
    """
    Summarize focus/break sessions.

    - today_minutes: focus minutes of sessions started on ``today`` (local date)
    - focus_days: distinct local dates with at least one focus session
    - total_minutes: minutes across every session, breaks included
    """
    if today is None:
        today = timezone.localdate()

    today_minutes = 0
    days = set()
    total_minutes = 0
    for session in sessions:
        total_minutes += session.duration_minutes
        if session.mode != FocusMode.FOCUS:
            continue
        started = timezone.localdate(session.started_at)
        days.add(started)
        if started == today:
            today_minutes += session.duration_minutes

    return {
        'today_minutes': today_minutes,
        'focus_days': len(days),
        'total_minutes': total_minutes,
    }
