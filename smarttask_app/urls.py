# smarttask_app/urls.py
from django.urls import path
from .views import (
    AnalyticsSummaryView,
    FocusSessionDetailView,
    FocusSessionListView,
    FocusSummaryView,
    GenerateRecurringView,
    RecurrenceRuleDetailView,
    RecurrenceRuleListView,
    TaskDetailView,
    TaskListView,
)

urlpatterns = [
    path('tasks/', TaskListView.as_view(), name='task-list'),
    path('tasks/<uuid:pk>/', TaskDetailView.as_view(), name='task-detail'),
    path('recurring/', RecurrenceRuleListView.as_view(), name='recurring-list'),
    path('recurring/generate/', GenerateRecurringView.as_view(), name='recurring-generate'),
    path('recurring/<uuid:pk>/', RecurrenceRuleDetailView.as_view(), name='recurring-detail'),
    path('analytics/summary', AnalyticsSummaryView.as_view(), name='analytics-summary'),
    path('focus/sessions/', FocusSessionListView.as_view(), name='focus-session-list'),
    path('focus/sessions/<uuid:pk>/', FocusSessionDetailView.as_view(), name='focus-session-detail'),
    path('focus/summary', FocusSummaryView.as_view(), name='focus-summary'),
]
