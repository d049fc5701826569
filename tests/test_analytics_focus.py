# tests/test_analytics_focus.py

from __future__ import annotations

import datetime
from types import SimpleNamespace

from django.utils import timezone

from smarttask_app.analytics import focus_summary, task_summary
from smarttask_app.models import FocusSession, Task


def test_task_summary_math() -> None:
    tasks = [SimpleNamespace(status='completed')] * 9 + [SimpleNamespace(status='pending')] * 4

    assert task_summary(tasks) == {'total_completed': 9, 'avg_per_day': 0.3, 'productivity': 30}


def test_task_summary_rounds_half_up() -> None:
    # 3 / 30 * 100 == 10.000000000000002; 45 / 30 * 100 == 150
    assert task_summary([SimpleNamespace(status='completed')] * 3)['productivity'] == 10
    assert task_summary([SimpleNamespace(status='completed')] * 45)['avg_per_day'] == 1.5


def test_focus_summary() -> None:
    now = timezone.now()
    today = timezone.localdate(now)
    yesterday = now - datetime.timedelta(days=1)
    sessions = [
        SimpleNamespace(mode='focus', duration_minutes=25, started_at=now),
        SimpleNamespace(mode='break', duration_minutes=5, started_at=now),
        SimpleNamespace(mode='focus', duration_minutes=50, started_at=yesterday),
        SimpleNamespace(mode='focus', duration_minutes=25, started_at=yesterday),
    ]

    assert focus_summary(sessions, today=today) == {
        'today_minutes': 25,
        'focus_days': 2,
        'total_minutes': 105,
    }


def test_analytics_endpoint(api, user, other_user) -> None:
    Task.objects.create(user=user, title='a', status='completed')
    Task.objects.create(user=user, title='b', status='pending')
    Task.objects.create(user=other_user, title='c', status='completed')

    body = api.get('/analytics/summary').json()

    assert body == {'total_completed': 1, 'avg_per_day': 0.03, 'productivity': 3}


def test_focus_session_endpoints(api, user) -> None:
    task = Task.objects.create(user=user, title='Deep work')

    resp = api.post(
        '/focus/sessions/',
        {'task': str(task.pk), 'started_at': timezone.now().isoformat(), 'duration_minutes': 25},
        format='json',
    )

    assert resp.status_code == 201
    assert resp.json()['task_title'] == 'Deep work'
    assert resp.json()['mode'] == 'focus'

    summary = api.get('/focus/summary').json()
    assert summary == {'today_minutes': 25, 'focus_days': 1, 'total_minutes': 25}

    session_id = resp.json()['id']
    assert api.delete(f'/focus/sessions/{session_id}/').status_code == 204
    assert api.get('/focus/sessions/').json() == []


def test_focus_session_rejects_foreign_task_and_bad_duration(api, other_user) -> None:
    foreign = Task.objects.create(user=other_user, title='not yours')
    started = timezone.now().isoformat()

    bad_task = api.post('/focus/sessions/', {'task': str(foreign.pk), 'started_at': started, 'duration_minutes': 25}, format='json')
    bad_duration = api.post('/focus/sessions/', {'started_at': started, 'duration_minutes': 0}, format='json')

    assert bad_task.status_code == 400
    assert bad_duration.status_code == 400
    assert FocusSession.objects.count() == 0
