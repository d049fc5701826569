# smarttask_app/models.py
import uuid
from django.conf import settings
from django.core.validators import MinValueValidator
from django.db import models


class Priority(models.TextChoices):
    LOW = 'low', 'Low'
    MEDIUM = 'medium', 'Medium'
    HIGH = 'high', 'High'


class TaskStatus(models.TextChoices):
    PENDING = 'pending', 'Pending'
    IN_PROGRESS = 'in_progress', 'In progress'
    COMPLETED = 'completed', 'Completed'


class Cadence(models.TextChoices):
    DAILY = 'daily', 'Daily'
    WEEKLY = 'weekly', 'Weekly'
    MONTHLY = 'monthly', 'Monthly'


class Task(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4)
    user = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='tasks')
    title = models.CharField(max_length=200)
    description = models.TextField(null=True, blank=True)
    due_date = models.DateField(null=True, blank=True)
    status = models.CharField(max_length=11, choices=TaskStatus.choices, default=TaskStatus.PENDING)
    priority = models.CharField(max_length=6, choices=Priority.choices, default=Priority.MEDIUM)
    # Manual drag-reorder position; not unique, not related to due dates.
    order_index = models.BigIntegerField(default=0)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['order_index', 'created_at']
        indexes = [
            models.Index(fields=['user', 'status'], name='task_user_status_idx'),
            models.Index(fields=['user', 'priority'], name='task_user_priority_idx'),
            models.Index(fields=['due_date'], name='task_due_date_idx'),
            models.Index(fields=['order_index'], name='task_order_index_idx'),
        ]

    def __str__(self):
        return self.title


def create_task(user, title, description, due_date, status, priority, order_index):
    """Insert one Task row. Persistence failures propagate as django.db.DatabaseError."""
    return Task.objects.create(
        user=user,
        title=title,
        description=description,
        due_date=due_date,
        status=status,
        priority=priority,
        order_index=order_index,
    )


class RecurrenceRule(models.Model):
    # Generated tasks keep no reference back to the rule that produced them.
    id = models.UUIDField(primary_key=True, default=uuid.uuid4)
    user = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='recurrence_rules')
    title = models.CharField(max_length=200)
    description = models.TextField(null=True, blank=True)
    priority = models.CharField(max_length=6, choices=Priority.choices, default=Priority.MEDIUM)
    cadence = models.CharField(max_length=7, choices=Cadence.choices)
    interval = models.PositiveIntegerField(validators=[MinValueValidator(1)])
    end_date = models.DateField(null=True, blank=True)
    enabled = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['created_at']
        constraints = [
            models.CheckConstraint(condition=models.Q(interval__gte=1), name='recurrence_rule_interval_gte_1'),
        ]

    def __str__(self):
        return f'{self.title} ({self.cadence} x{self.interval})'


class FocusMode(models.TextChoices):
    FOCUS = 'focus', 'Focus'
    BREAK = 'break', 'Break'


class FocusSession(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4)
    user = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='focus_sessions')
    task = models.ForeignKey(
        Task, on_delete=models.SET_NULL, null=True, blank=True, related_name='focus_sessions'
    )
    task_title = models.CharField(max_length=200, blank=True, default='')
    started_at = models.DateTimeField()
    duration_minutes = models.PositiveIntegerField(validators=[MinValueValidator(1)])
    mode = models.CharField(max_length=5, choices=FocusMode.choices, default=FocusMode.FOCUS)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ['-started_at']
