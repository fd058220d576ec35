# todos/serializers.py
from rest_framework import serializers

from .models import Priority, Todo
from .repository import TodoFilter

PRIORITY_ERROR = 'Priority must be between 1 (Low) and 3 (High)'


def priority_field(**kwargs):
    return serializers.IntegerField(
        min_value=Priority.LOW,
        max_value=Priority.HIGH,
        error_messages={'min_value': PRIORITY_ERROR, 'max_value': PRIORITY_ERROR},
        **kwargs
    )


class TodoSerializer(serializers.ModelSerializer):
    """Outgoing representation, camelCase to match the front end."""
    isCompleted = serializers.BooleanField(source='is_completed')
    createdAt = serializers.DateTimeField(source='created_at')
    updatedAt = serializers.DateTimeField(source='updated_at')
    dueDate = serializers.DateTimeField(source='due_date', allow_null=True)
    isOverdue = serializers.SerializerMethodField()
    priorityText = serializers.CharField(source='priority_text')

    class Meta:
        model = Todo
        fields = [
            'id', 'title', 'description', 'isCompleted', 'createdAt',
            'updatedAt', 'dueDate', 'priority', 'isOverdue', 'priorityText',
        ]

    def get_isOverdue(self, obj):
        now = self.context.get('now')
        return obj.is_overdue_at(now) if now else obj.is_overdue


class CreateTodoSerializer(serializers.Serializer):
    title = serializers.CharField(
        max_length=500,
        error_messages={
            'required': 'Title is required',
            'blank': 'Title is required',
            'max_length': 'Title must be between 1 and 500 characters',
        },
    )
    description = serializers.CharField(
        max_length=2000, required=False, allow_null=True, allow_blank=True,
        error_messages={'max_length': 'Description cannot exceed 2000 characters'},
    )
    dueDate = serializers.DateTimeField(source='due_date', required=False, allow_null=True)
    priority = priority_field(default=Priority.LOW)

    def to_todo(self) -> Todo:
        data = self.validated_data
        return Todo(
            title=data['title'],
            description=data.get('description'),
            due_date=data.get('due_date'),
            priority=data['priority'],
        )


class UpdateTodoSerializer(CreateTodoSerializer):
    isCompleted = serializers.BooleanField(source='is_completed', default=False)

    def apply(self, todo: Todo) -> Todo:
        data = self.validated_data
        todo.title = data['title']
        todo.description = data.get('description')
        todo.is_completed = data['is_completed']
        todo.due_date = data.get('due_date')
        todo.priority = data['priority']
        return todo


class TodoFilterSerializer(serializers.Serializer):
    isCompleted = serializers.BooleanField(source='is_completed', required=False, allow_null=True, default=None)
    priority = priority_field(required=False, allow_null=True, default=None)
    searchTerm = serializers.CharField(source='search_term', required=False, allow_blank=True, default=None)
    dueDateFrom = serializers.DateTimeField(source='due_date_from', required=False, default=None)
    dueDateTo = serializers.DateTimeField(source='due_date_to', required=False, default=None)
    page = serializers.IntegerField(min_value=1, required=False, default=None)
    pageSize = serializers.IntegerField(source='page_size', min_value=1, max_value=500, required=False, default=None)

    def to_filter(self) -> TodoFilter:
        return TodoFilter(**self.validated_data)


class BulkPriorityUpdateSerializer(serializers.Serializer):
    oldPriority = priority_field(source='old_priority')
    newPriority = priority_field(source='new_priority')


class DailyStatsQuerySerializer(serializers.Serializer):
    fromDate = serializers.DateTimeField(source='from_date', required=False, default=None)
    toDate = serializers.DateTimeField(source='to_date', required=False, default=None)


class SummaryRowSerializer(serializers.Serializer):
    title = serializers.CharField()
    priority = serializers.IntegerField()
    priorityText = serializers.CharField(source='priority_text')
    isCompleted = serializers.BooleanField(source='is_completed')
    daysOld = serializers.IntegerField(source='days_old')
    isOverdue = serializers.BooleanField(source='is_overdue')


class DailyStatsRowSerializer(serializers.Serializer):
    date = serializers.CharField()
    todosCreated = serializers.IntegerField(source='todos_created')
    todosCompleted = serializers.IntegerField(source='todos_completed')
    completionRate = serializers.FloatField(source='completion_rate')


class AdvancedStatsSerializer(serializers.Serializer):
    totalTodos = serializers.IntegerField(source='total_todos')
    completedTodos = serializers.IntegerField(source='completed_todos')
    pendingTodos = serializers.IntegerField(source='pending_todos')
    overdueTodos = serializers.IntegerField(source='overdue_todos')
    lowPriority = serializers.IntegerField(source='low_priority')
    mediumPriority = serializers.IntegerField(source='medium_priority')
    highPriority = serializers.IntegerField(source='high_priority')
    avgCompletionDays = serializers.FloatField(source='avg_completion_days')
    overallCompletionRate = serializers.FloatField(source='overall_completion_rate')
