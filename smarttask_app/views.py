# smarttask_app/views.py
import logging

from django.db import DatabaseError
from rest_framework import status
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.views import APIView

from .analytics import focus_summary, task_summary
from .models import FocusSession, RecurrenceRule, Task
from .recurrence import generate_tasks, now_ms
from .serializers import (
    FocusSessionSerializer,
    RecurrenceRuleSerializer,
    TaskFilterSerializer,
    TaskSerializer,
    TaskUpdateSerializer,
)

logger = logging.getLogger(__name__)

NOT_FOUND = {'error': 'not_found'}


def _invalid_input(serializer):
    return Response({'error': 'invalid_input', 'details': serializer.errors}, status=status.HTTP_400_BAD_REQUEST)


class HealthView(APIView):
    authentication_classes = []
    permission_classes = [AllowAny]

    def get(self, request):
        return Response({'ok': True})


class TaskListView(APIView):
    """
    List and create the caller's tasks.
    """

    def get(self, request):
        """
        Return the caller's tasks ordered by order_index.

        Query Parameters:
            status (str): exact status match.
            priority (str): exact priority match.
            search (str): case-insensitive substring of the title.
            from (str): YYYY-MM-DD, inclusive lower bound on due_date.
            to (str): YYYY-MM-DD, inclusive upper bound on due_date.

        Tasks without a due date are dropped as soon as either date bound is given.
        """
        query = TaskFilterSerializer(data=request.query_params)
        if not query.is_valid():
            return _invalid_input(query)
        params = query.validated_data

        tasks = Task.objects.filter(user=request.user)
        if params.get('status'):
            tasks = tasks.filter(status=params['status'])
        if params.get('priority'):
            tasks = tasks.filter(priority=params['priority'])
        if params.get('search'):
            tasks = tasks.filter(title__icontains=params['search'])
        if params.get('from'):
            tasks = tasks.filter(due_date__isnull=False, due_date__gte=params['from'])
        if params.get('to'):
            tasks = tasks.filter(due_date__isnull=False, due_date__lte=params['to'])

        return Response(TaskSerializer(tasks.order_by('order_index', 'created_at'), many=True).data)

    def post(self, request):
        serializer = TaskSerializer(data=request.data)
        if not serializer.is_valid():
            return _invalid_input(serializer)
        task = serializer.save(user=request.user, order_index=now_ms())
        logger.info('Task created id=%s user=%s title=%r', task.pk, request.user.pk, task.title)
        return Response(TaskSerializer(task).data, status=status.HTTP_201_CREATED)


class TaskDetailView(APIView):
    """
    Read, patch or delete one task. Tasks of other users answer 404.
    """

    def _get(self, request, pk):
        return Task.objects.filter(pk=pk, user=request.user).first()

    def get(self, request, pk):
        task = self._get(request, pk)
        if task is None:
            return Response(NOT_FOUND, status=status.HTTP_404_NOT_FOUND)
        return Response(TaskSerializer(task).data)

    def patch(self, request, pk):
        task = self._get(request, pk)
        if task is None:
            return Response(NOT_FOUND, status=status.HTTP_404_NOT_FOUND)
        serializer = TaskUpdateSerializer(task, data=request.data, partial=True)
        if not serializer.is_valid():
            return _invalid_input(serializer)
        serializer.save()
        return Response(serializer.data)

    def delete(self, request, pk):
        deleted, _ = Task.objects.filter(pk=pk, user=request.user).delete()
        if not deleted:
            return Response(NOT_FOUND, status=status.HTTP_404_NOT_FOUND)
        return Response(status=status.HTTP_204_NO_CONTENT)


class RecurrenceRuleListView(APIView):
    def get(self, request):
        rules = RecurrenceRule.objects.filter(user=request.user)
        return Response(RecurrenceRuleSerializer(rules, many=True).data)

    def post(self, request):
        serializer = RecurrenceRuleSerializer(data=request.data)
        if not serializer.is_valid():
            return _invalid_input(serializer)
        rule = serializer.save(user=request.user)
        logger.info('Recurrence rule created id=%s user=%s cadence=%s interval=%s',
                    rule.pk, request.user.pk, rule.cadence, rule.interval)
        return Response(RecurrenceRuleSerializer(rule).data, status=status.HTTP_201_CREATED)


class RecurrenceRuleDetailView(APIView):
    """
    Patch or delete a rule. Deleting a rule leaves tasks it already generated untouched.
    """

    def patch(self, request, pk):
        rule = RecurrenceRule.objects.filter(pk=pk, user=request.user).first()
        if rule is None:
            return Response(NOT_FOUND, status=status.HTTP_404_NOT_FOUND)
        serializer = RecurrenceRuleSerializer(rule, data=request.data, partial=True)
        if not serializer.is_valid():
            return _invalid_input(serializer)
        serializer.save()
        return Response(serializer.data)

    def delete(self, request, pk):
        deleted, _ = RecurrenceRule.objects.filter(pk=pk, user=request.user).delete()
        if not deleted:
            return Response(NOT_FOUND, status=status.HTTP_404_NOT_FOUND)
        return Response(status=status.HTTP_204_NO_CONTENT)


class GenerateRecurringView(APIView):
    """
    Project the caller's enabled rules into tasks over the coming horizon.

    Returns:
        Response: {"created": <count>} on success; {"error": "internal_error"}
        with HTTP 500 when a task write fails (nothing from this call is kept).
    """

    def post(self, request):
        try:
            created = generate_tasks(request.user)
        except DatabaseError:
            logger.exception('Recurring task generation failed for user=%s', request.user.pk)
            return Response({'error': 'internal_error'}, status=status.HTTP_500_INTERNAL_SERVER_ERROR)
        return Response({'created': created})


class AnalyticsSummaryView(APIView):
    def get(self, request):
        tasks = Task.objects.filter(user=request.user).only('status')
        return Response(task_summary(tasks))


class FocusSessionListView(APIView):
    def get(self, request):
        sessions = FocusSession.objects.filter(user=request.user)
        return Response(FocusSessionSerializer(sessions, many=True).data)

    def post(self, request):
        serializer = FocusSessionSerializer(data=request.data, context={'request': request})
        if not serializer.is_valid():
            return _invalid_input(serializer)
        session = serializer.save(user=request.user)
        return Response(FocusSessionSerializer(session).data, status=status.HTTP_201_CREATED)


class FocusSessionDetailView(APIView):
    def delete(self, request, pk):
        deleted, _ = FocusSession.objects.filter(pk=pk, user=request.user).delete()
        if not deleted:
            return Response(NOT_FOUND, status=status.HTTP_404_NOT_FOUND)
        return Response(status=status.HTTP_204_NO_CONTENT)


class FocusSummaryView(APIView):
    def get(self, request):
        sessions = FocusSession.objects.filter(user=request.user)
        return Response(focus_summary(sessions))
