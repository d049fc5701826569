from rest_framework import serializers
from .models import FocusSession, Priority, RecurrenceRule, Task, TaskStatus

# ten years of daily steps
MAX_INTERVAL = 3650


class TaskSerializer(serializers.ModelSerializer):
    class Meta:
        model = Task
        fields = [
            'id', 'title', 'description', 'due_date', 'status', 'priority',
            'order_index', 'created_at', 'updated_at',
        ]
        read_only_fields = ['id', 'order_index', 'created_at', 'updated_at']


class TaskUpdateSerializer(TaskSerializer):
    """Partial task patch. Unlike creation, the client may move order_index."""

    class Meta(TaskSerializer.Meta):
        read_only_fields = ['id', 'created_at', 'updated_at']

    def validate(self, attrs):
        writable = {name for name, field in self.fields.items() if not field.read_only}
        unknown = sorted(set(self.initial_data) - writable)
        if unknown:
            raise serializers.ValidationError({name: ['Unknown or read-only field.'] for name in unknown})
        return attrs


class TaskFilterSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=TaskStatus.choices, required=False)
    priority = serializers.ChoiceField(choices=Priority.choices, required=False)
    search = serializers.CharField(required=False, allow_blank=True)
    to = serializers.DateField(required=False)

    def get_fields(self):
        fields = super().get_fields()
        # "from" is a keyword, so it cannot be declared as a class attribute
        fields['from'] = serializers.DateField(required=False)
        return fields


class RecurrenceRuleSerializer(serializers.ModelSerializer):
    interval = serializers.IntegerField(min_value=1, max_value=MAX_INTERVAL)

    class Meta:
        model = RecurrenceRule
        fields = [
            'id', 'title', 'description', 'priority', 'cadence', 'interval',
            'end_date', 'enabled', 'created_at', 'updated_at',
        ]
        read_only_fields = ['id', 'created_at', 'updated_at']


class FocusSessionSerializer(serializers.ModelSerializer):
    task = serializers.PrimaryKeyRelatedField(
        queryset=Task.objects.none(),
        allow_null=True,
        required=False
    )
    duration_minutes = serializers.IntegerField(min_value=1)

    class Meta:
        model = FocusSession
        fields = ['id', 'task', 'task_title', 'started_at', 'duration_minutes', 'mode', 'created_at']
        read_only_fields = ['id', 'created_at']

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        # only the caller's own tasks may be referenced
        request = self.context.get('request')
        if request is not None and request.user.is_authenticated:
            self.fields['task'].queryset = Task.objects.filter(user=request.user)

    def validate(self, attrs):
        task = attrs.get('task')
        if task is not None and not attrs.get('task_title'):
            attrs['task_title'] = task.title
        return attrs
