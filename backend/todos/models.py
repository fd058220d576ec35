from django.core.validators import MaxLengthValidator, MinLengthValidator
from django.db import models
from django.utils import timezone


class Priority(models.IntegerChoices):
    LOW = 1, 'Low'
    MEDIUM = 2, 'Medium'
    HIGH = 3, 'High'

    @classmethod
    def text_for(cls, value) -> str:
        """Human-readable label for a stored priority, 'Unknown' when out of range."""
        try:
            return cls(value).label
        except ValueError:
            return 'Unknown'


class Todo(models.Model):
    title = models.CharField(max_length=500, validators=[MinLengthValidator(1)])
    description = models.TextField(
        blank=True, null=True, validators=[MaxLengthValidator(2000)]
    )
    is_completed = models.BooleanField(default=False)
    priority = models.IntegerField(choices=Priority.choices, default=Priority.LOW)
    created_at = models.DateTimeField(default=timezone.now)
    updated_at = models.DateTimeField(default=timezone.now)
    due_date = models.DateTimeField(blank=True, null=True)

    class Meta:
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['is_completed'], name='IX_Todos_IsCompleted'),
            models.Index(fields=['due_date'], name='IX_Todos_DueDate'),
            models.Index(fields=['is_completed', 'priority'], name='IX_Todos_IsCompleted_Priority'),
        ]

    def __str__(self):
        return self.title

    def is_overdue_at(self, now) -> bool:
        return self.due_date is not None and self.due_date < now and not self.is_completed

    @property
    def is_overdue(self) -> bool:
        return self.is_overdue_at(timezone.now())

    @property
    def priority_text(self) -> str:
        return Priority.text_for(self.priority)
