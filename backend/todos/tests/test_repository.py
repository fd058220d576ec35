# todos/tests/test_repository.py
from datetime import timedelta

from django.test import TestCase
from django.utils import timezone

from ..exceptions import TodoNotFound
from ..models import Todo
from ..repository import TodoFilter, TodoRepository


class TodoRepositoryTestCase(TestCase):
    """CRUD and filtering through TodoRepository."""

    def setUp(self):
        self.repository = TodoRepository()

    def _create(self, title, **fields):
        return self.repository.create(Todo(title=title, **fields))

    def test_create_then_get_round_trip(self):
        """A created todo reads back with every client field intact."""
        due = timezone.now() + timedelta(days=2)
        created = self._create('Write report', description='Q1 numbers', priority=3, due_date=due)

        self.assertIsNotNone(created.pk)
        fetched = self.repository.get_by_id(created.pk)

        self.assertEqual(fetched.title, 'Write report')
        self.assertEqual(fetched.description, 'Q1 numbers')
        self.assertEqual(fetched.priority, 3)
        self.assertEqual(fetched.due_date, due)
        self.assertFalse(fetched.is_completed)
        self.assertEqual(fetched.created_at, fetched.updated_at)

    def test_get_missing_returns_none(self):
        self.assertIsNone(self.repository.get_by_id(9999))

    def test_create_stamps_server_timestamps(self):
        """Client supplied timestamps are replaced on create."""
        stale = timezone.now() - timedelta(days=365)
        todo = self._create('Fresh', created_at=stale, updated_at=stale)
        self.assertGreater(todo.created_at, stale)
        self.assertEqual(todo.created_at, todo.updated_at)

    def test_update_overwrites_fields_and_advances_updated_at(self):
        todo = self._create('Draft')
        previous = todo.updated_at

        todo.title = 'Final'
        todo.description = 'Done properly'
        todo.is_completed = True
        todo.priority = 2
        updated = self.repository.update(todo)

        self.assertGreaterEqual(updated.updated_at, previous)
        stored = self.repository.get_by_id(todo.pk)
        self.assertEqual(stored.title, 'Final')
        self.assertEqual(stored.description, 'Done properly')
        self.assertTrue(stored.is_completed)
        self.assertEqual(stored.priority, 2)
        self.assertGreaterEqual(stored.updated_at, stored.created_at)

    def test_update_never_moves_updated_at_backwards(self):
        todo = self._create('Clock skew')
        future = timezone.now() + timedelta(hours=1)
        Todo.objects.filter(pk=todo.pk).update(updated_at=future)
        todo.refresh_from_db()

        updated = self.repository.update(todo)
        self.assertGreaterEqual(updated.updated_at, future)

    def test_update_missing_row_raises_not_found(self):
        """Updating a deleted todo surfaces TodoNotFound instead of a silent no-op."""
        todo = self._create('Short lived')
        self.assertTrue(self.repository.delete(todo.pk))

        with self.assertRaises(TodoNotFound) as ctx:
            self.repository.update(todo)
        self.assertEqual(ctx.exception.todo_id, todo.pk)

    def test_delete_is_idempotent_absence(self):
        """Deleting twice, or deleting an unknown id, reports False."""
        todo = self._create('Delete me')
        self.assertTrue(self.repository.delete(todo.pk))
        self.assertFalse(self.repository.delete(todo.pk))
        self.assertFalse(self.repository.delete(424242))

    def test_ids_not_reused_after_delete(self):
        first = self._create('First')
        self.repository.delete(first.pk)
        second = self._create('Second')
        self.assertNotEqual(first.pk, second.pk)

    def test_exists(self):
        todo = self._create('Here')
        self.assertTrue(self.repository.exists(todo.pk))
        self.assertFalse(self.repository.exists(todo.pk + 1000))

    def test_toggle_flips_completion_and_stamps(self):
        todo = self._create('Flip')
        previous = todo.updated_at

        toggled = self.repository.toggle(todo.pk)
        self.assertTrue(toggled.is_completed)
        self.assertGreaterEqual(toggled.updated_at, previous)

        toggled_back = self.repository.toggle(todo.pk)
        self.assertFalse(toggled_back.is_completed)

    def test_toggle_missing_returns_none(self):
        self.assertIsNone(self.repository.toggle(9999))

    def test_list_newest_first(self):
        a = self._create('A')
        b = self._create('B')
        c = self._create('C')
        ids = [t.pk for t in self.repository.list()]
        self.assertEqual(ids, [c.pk, b.pk, a.pk], "Newest todos should come first")

    def test_list_filters_are_combined(self):
        """Completion, priority and search predicates are ANDed."""
        match = self._create('Buy milk', priority=2)
        self._create('Buy bread', priority=1)
        done = self._create('Buy eggs', priority=2)
        done.is_completed = True
        self.repository.update(done)
        self._create('Call mom', priority=2)

        result = self.repository.list(TodoFilter(is_completed=False, priority=2, search_term='buy'))
        self.assertEqual([t.pk for t in result], [match.pk])

    def test_list_search_matches_description(self):
        hit = self._create('Errands', description='pick up the dry cleaning')
        self._create('Errands too', description=None)

        result = self.repository.list(TodoFilter(search_term='dry clean'))
        self.assertEqual([t.pk for t in result], [hit.pk])

    def test_list_due_date_range(self):
        now = timezone.now()
        soon = self._create('Soon', due_date=now + timedelta(days=1))
        self._create('Later', due_date=now + timedelta(days=10))
        self._create('Never')

        result = self.repository.list(TodoFilter(
            due_date_from=now, due_date_to=now + timedelta(days=2)
        ))
        self.assertEqual([t.pk for t in result], [soon.pk])

    def test_list_pagination(self):
        """page/page_size slice the ordered result; either alone is ignored."""
        created = [self._create(f'Todo {i}') for i in range(5)]
        newest_first = [t.pk for t in reversed(created)]

        page_two = self.repository.list(TodoFilter(page=2, page_size=2))
        self.assertEqual([t.pk for t in page_two], newest_first[2:4])

        last_page = self.repository.list(TodoFilter(page=3, page_size=2))
        self.assertEqual([t.pk for t in last_page], newest_first[4:])

        unpaged = self.repository.list(TodoFilter(page_size=2))
        self.assertEqual(len(unpaged), 5)

    def test_search_ranking(self):
        """Exact title, then title prefix, then description prefix, then the rest."""
        anywhere = self._create('Weekly report')
        desc_prefix = self._create('Finish', description='report for Q1')
        title_prefix = self._create('Report draft')
        exact = self._create('report')
        self._create('Unrelated')

        result = self.repository.search('report')
        self.assertEqual(
            [t.pk for t in result],
            [exact.pk, title_prefix.pk, desc_prefix.pk, anywhere.pk],
        )

    def test_search_empty_term(self):
        self._create('Anything')
        self.assertEqual(self.repository.search(''), [])

    def test_search_exact_title_is_case_sensitive(self):
        """Only an exact-case title outranks prefix matches."""
        capitalised = self._create('Report')
        exact = self._create('report')
        newer_capitalised = self._create('REPORT')

        result = self.repository.search('report')
        self.assertEqual(result[0].pk, exact.pk)
        self.assertEqual([t.pk for t in result[1:]], [newer_capitalised.pk, capitalised.pk])
