# todos/tests/test_models.py
from datetime import timedelta

from django.test import TestCase
from django.utils import timezone

from ..models import Priority, Todo


class TodoModelTestCase(TestCase):
    """Derived, never-persisted fields on Todo."""

    def setUp(self):
        self.now = timezone.now()

    def test_overdue_when_past_due_and_open(self):
        """An open todo with a past due date is overdue."""
        todo = Todo(title='Pay rent', due_date=self.now - timedelta(hours=1))
        self.assertTrue(todo.is_overdue_at(self.now))

    def test_completed_todo_is_never_overdue(self):
        """Completion wins over any due date."""
        todo = Todo(title='Pay rent', is_completed=True, due_date=self.now - timedelta(days=10))
        self.assertFalse(todo.is_overdue_at(self.now))
        self.assertFalse(todo.is_overdue)

    def test_no_due_date_is_not_overdue(self):
        todo = Todo(title='Someday')
        self.assertFalse(todo.is_overdue_at(self.now))

    def test_future_due_date_is_not_overdue(self):
        todo = Todo(title='Later', due_date=self.now + timedelta(days=1))
        self.assertFalse(todo.is_overdue_at(self.now))

    def test_priority_text_lookup(self):
        """Known tiers map to their labels, anything else is 'Unknown'."""
        self.assertEqual(Todo(title='a', priority=1).priority_text, 'Low')
        self.assertEqual(Todo(title='a', priority=2).priority_text, 'Medium')
        self.assertEqual(Todo(title='a', priority=3).priority_text, 'High')
        self.assertEqual(Todo(title='a', priority=7).priority_text, 'Unknown')
        self.assertEqual(Priority.text_for(None), 'Unknown')

    def test_defaults(self):
        todo = Todo.objects.create(title='Defaults')
        self.assertFalse(todo.is_completed)
        self.assertEqual(todo.priority, Priority.LOW)
        self.assertIsNone(todo.due_date)
        self.assertGreaterEqual(todo.updated_at, todo.created_at)
