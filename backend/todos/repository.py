# todos/repository.py
import logging
from dataclasses import dataclass
from datetime import datetime
from typing import List, Optional

from django.db import DEFAULT_DB_ALIAS
from django.db.models import Case, IntegerField, Q, Value, When
from django.utils import timezone

from .exceptions import TodoNotFound
from .models import Todo

logger = logging.getLogger(__name__)

# Fields a caller may overwrite through update(); id and created_at are fixed.
MUTABLE_FIELDS = ['title', 'description', 'is_completed', 'priority', 'due_date', 'updated_at']


@dataclass
class TodoFilter:
    """
    Conjunction of optional predicates for TodoRepository.list().

    Pagination is applied only when both page and page_size are set;
    page is 1-based.
    """
    is_completed: Optional[bool] = None
    priority: Optional[int] = None
    search_term: Optional[str] = None
    due_date_from: Optional[datetime] = None
    due_date_to: Optional[datetime] = None
    page: Optional[int] = None
    page_size: Optional[int] = None


class TodoRepository:
    """
    Data access for Todo rows.

    Every call is a self-contained unit of work against the database named by
    ``using``; row-level isolation is left to the database itself.
    """

    def __init__(self, using: str = DEFAULT_DB_ALIAS):
        self.using = using

    @property
    def todos(self):
        return Todo.objects.using(self.using)

    def list(self, filter: Optional[TodoFilter] = None) -> List[Todo]:
        query = self.todos.all()

        if filter is not None:
            if filter.is_completed is not None:
                query = query.filter(is_completed=filter.is_completed)

            if filter.priority is not None:
                query = query.filter(priority=filter.priority)

            if filter.search_term:
                query = query.filter(
                    Q(title__icontains=filter.search_term)
                    | Q(description__icontains=filter.search_term)
                )

            if filter.due_date_from is not None:
                query = query.filter(due_date__gte=filter.due_date_from)

            if filter.due_date_to is not None:
                query = query.filter(due_date__lte=filter.due_date_to)

        query = query.order_by('-created_at', '-id')

        if filter is not None and filter.page and filter.page_size:
            offset = (filter.page - 1) * filter.page_size
            query = query[offset:offset + filter.page_size]

        return list(query)

    def get_by_id(self, todo_id: int) -> Optional[Todo]:
        return self.todos.filter(pk=todo_id).first()

    def create(self, todo: Todo) -> Todo:
        now = timezone.now()
        todo.created_at = now
        todo.updated_at = now
        todo.save(using=self.using, force_insert=True)
        logger.info('Todo created id=%s priority=%s', todo.pk, todo.priority)
        return todo

    def update(self, todo: Todo) -> Todo:
        """
        Overwrite every mutable field of row ``todo.id``.

        Raises:
            TodoNotFound: the row no longer exists.
        """
        now = timezone.now()
        todo.updated_at = max(now, todo.updated_at) if todo.updated_at else now

        changed = self.todos.filter(pk=todo.pk).update(
            **{field: getattr(todo, field) for field in MUTABLE_FIELDS}
        )
        if changed == 0:
            raise TodoNotFound(todo.pk)

        logger.debug('Todo updated id=%s', todo.pk)
        return todo

    def toggle(self, todo_id: int) -> Optional[Todo]:
        todo = self.get_by_id(todo_id)
        if todo is None:
            return None
        todo.is_completed = not todo.is_completed
        return self.update(todo)

    def delete(self, todo_id: int) -> bool:
        deleted, _ = self.todos.filter(pk=todo_id).delete()
        if deleted:
            logger.info('Todo deleted id=%s', todo_id)
        return deleted > 0

    def exists(self, todo_id: int) -> bool:
        return self.todos.filter(pk=todo_id).exists()

    def search(self, term: str) -> List[Todo]:
        """
        Substring search over title and description, best matches first.

        Rank 1: exact title (case-sensitive), 2: title prefix, 3: description prefix, 4: anything
        else that contains the term. Equal ranks fall back to newest first.
        """
        if not term:
            return []

        rank = Case(
            When(title__exact=term, then=Value(1)),
            When(title__istartswith=term, then=Value(2)),
            When(description__istartswith=term, then=Value(3)),
            default=Value(4),
            output_field=IntegerField(),
        )
        query = (
            self.todos
            .filter(Q(title__icontains=term) | Q(description__icontains=term))
            .annotate(match_rank=rank)
            .order_by('match_rank', '-created_at', '-id')
        )
        return list(query)
