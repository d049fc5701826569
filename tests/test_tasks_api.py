# tests/test_tasks_api.py

from __future__ import annotations

from smarttask_app.models import Task
from smarttask_app.recurrence import now_ms


def create(api, **fields):
    resp = api.post('/tasks/', {'title': 'Task', **fields}, format='json')
    assert resp.status_code == 201, resp.content
    return resp.json()


def test_create_task_defaults(api) -> None:
    before = now_ms()
    task = create(api, title='Write report')

    assert task['status'] == 'pending'
    assert task['priority'] == 'medium'
    assert task['due_date'] is None
    assert before <= task['order_index'] <= now_ms()


def test_create_task_validation(api) -> None:
    for bad in ({'title': ''}, {'title': 'x', 'status': 'done'}, {'title': 'x', 'due_date': '03/04/2026'}):
        resp = api.post('/tasks/', bad, format='json')
        assert resp.status_code == 400
        assert resp.json()['error'] == 'invalid_input'


def test_list_is_ordered_by_order_index(api, user) -> None:
    Task.objects.create(user=user, title='second', order_index=20)
    Task.objects.create(user=user, title='first', order_index=10)

    titles = [t['title'] for t in api.get('/tasks/').json()]

    assert titles == ['first', 'second']


def test_list_filters(api) -> None:
    create(api, title='Pay rent', priority='high', due_date='2026-11-01')
    create(api, title='Buy milk', status='completed', due_date='2026-11-05')
    create(api, title='Call mom')

    def titles(query):
        return sorted(t['title'] for t in api.get('/tasks/', query).json())

    assert titles({'status': 'completed'}) == ['Buy milk']
    assert titles({'priority': 'high'}) == ['Pay rent']
    assert titles({'search': 'MILK'}) == ['Buy milk']
    assert titles({'from': '2026-11-02'}) == ['Buy milk']
    assert titles({'to': '2026-11-02'}) == ['Pay rent']
    assert titles({'from': '2026-10-01', 'to': '2026-12-01'}) == ['Buy milk', 'Pay rent']


def test_list_rejects_malformed_date_filter(api) -> None:
    resp = api.get('/tasks/', {'from': 'yesterday'})

    assert resp.status_code == 400


def test_patch_task(api) -> None:
    task = create(api)

    resp = api.patch(f"/tasks/{task['id']}/", {'status': 'in_progress', 'order_index': 5}, format='json')

    assert resp.status_code == 200
    assert resp.json()['status'] == 'in_progress'
    assert resp.json()['order_index'] == 5


def test_patch_rejects_unknown_fields(api) -> None:
    task = create(api)

    resp = api.patch(f"/tasks/{task['id']}/", {'colour': 'red'}, format='json')

    assert resp.status_code == 400
    assert 'colour' in resp.json()['details']


def test_tasks_are_scoped_to_owner(api, other_api) -> None:
    task = create(api)
    url = f"/tasks/{task['id']}/"

    assert other_api.get('/tasks/').json() == []
    assert other_api.get(url).status_code == 404
    assert other_api.patch(url, {'title': 'mine now'}, format='json').status_code == 404
    assert other_api.delete(url).status_code == 404
    assert api.get(url).json()['title'] == 'Task'


def test_delete_task(api) -> None:
    task = create(api)

    assert api.delete(f"/tasks/{task['id']}/").status_code == 204
    assert api.get(f"/tasks/{task['id']}/").status_code == 404


def test_health_is_public(anon_client) -> None:
    assert anon_client.get('/health').json() == {'ok': True}
