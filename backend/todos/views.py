# todos/views.py
import logging
from datetime import timedelta

from django.db import DatabaseError
from django.utils import timezone
from rest_framework import status
from rest_framework.decorators import api_view
from rest_framework.response import Response

from .analytics import TodoAnalytics
from .exceptions import TodoNotFound
from .repository import TodoRepository
from .serializers import (
    AdvancedStatsSerializer,
    BulkPriorityUpdateSerializer,
    CreateTodoSerializer,
    DailyStatsQuerySerializer,
    DailyStatsRowSerializer,
    SummaryRowSerializer,
    TodoFilterSerializer,
    TodoSerializer,
    UpdateTodoSerializer,
)

logger = logging.getLogger(__name__)


def _not_found(todo_id):
    return Response({
        'success': False,
        'error': f'Todo with ID {todo_id} not found.'
    }, status=status.HTTP_404_NOT_FOUND)


def _invalid(errors):
    return Response({
        'success': False,
        'errors': errors
    }, status=status.HTTP_400_BAD_REQUEST)


def _store_failure(exc):
    logger.exception('Store failure')
    return Response({
        'success': False,
        'error': str(exc)
    }, status=status.HTTP_500_INTERNAL_SERVER_ERROR)


@api_view(['GET', 'POST'])
def todo_collection(request):
    """
    GET  /api/todo/  - list todos, newest first
    POST /api/todo/  - create a todo

    Query (GET): isCompleted, priority, searchTerm, dueDateFrom, dueDateTo,
    page, pageSize. Pagination only applies when both page and pageSize are given.
    """
    repository = TodoRepository()
    try:
        if request.method == 'POST':
            serializer = CreateTodoSerializer(data=request.data)
            if not serializer.is_valid():
                return _invalid(serializer.errors)

            todo = repository.create(serializer.to_todo())
            return Response(TodoSerializer(todo).data, status=status.HTTP_201_CREATED)

        query = TodoFilterSerializer(data=request.query_params.dict())
        if not query.is_valid():
            return _invalid(query.errors)

        todos = repository.list(query.to_filter())
        context = {'now': timezone.now()}
        return Response(TodoSerializer(todos, many=True, context=context).data)

    except DatabaseError as e:
        return _store_failure(e)


@api_view(['GET', 'PUT', 'DELETE'])
def todo_detail(request, todo_id):
    """
    GET    /api/todo/<id>/
    PUT    /api/todo/<id>/  - overwrite title, description, isCompleted, dueDate, priority
    DELETE /api/todo/<id>/
    """
    repository = TodoRepository()
    try:
        if request.method == 'DELETE':
            if not repository.delete(todo_id):
                return _not_found(todo_id)
            return Response(status=status.HTTP_204_NO_CONTENT)

        todo = repository.get_by_id(todo_id)
        if todo is None:
            return _not_found(todo_id)

        if request.method == 'GET':
            return Response(TodoSerializer(todo).data)

        serializer = UpdateTodoSerializer(data=request.data)
        if not serializer.is_valid():
            return _invalid(serializer.errors)

        todo = repository.update(serializer.apply(todo))
        return Response(TodoSerializer(todo).data)

    except TodoNotFound:
        return _not_found(todo_id)
    except DatabaseError as e:
        return _store_failure(e)


@api_view(['PATCH'])
def toggle_todo(request, todo_id):
    """
    PATCH /api/todo/<id>/toggle/

    Flip completion status.
    """
    try:
        todo = TodoRepository().toggle(todo_id)
    except TodoNotFound:
        return _not_found(todo_id)
    except DatabaseError as e:
        return _store_failure(e)

    if todo is None:
        return _not_found(todo_id)
    return Response(TodoSerializer(todo).data)


@api_view(['GET'])
def search_todos(request):
    """
    GET /api/todo/search/?q=term

    Substring search ranked exact title > title prefix > description prefix > rest.
    """
    term = request.GET.get('q', '').strip()
    if not term:
        return _invalid({'q': ['Search term is required']})

    try:
        todos = TodoRepository().search(term)
    except DatabaseError as e:
        return _store_failure(e)
    return Response(TodoSerializer(todos, many=True).data)


@api_view(['GET'])
def todo_summary(request):
    """
    GET /api/todo/summary/
    """
    try:
        rows = TodoAnalytics().summary()
    except DatabaseError as e:
        return _store_failure(e)
    return Response(SummaryRowSerializer(rows, many=True).data)


@api_view(['GET'])
def daily_stats(request):
    """
    GET /api/todo/daily-stats/?fromDate=...&toDate=...

    Defaults to the last 30 days when bounds are omitted.
    """
    query = DailyStatsQuerySerializer(data=request.query_params.dict())
    if not query.is_valid():
        return _invalid(query.errors)

    now = timezone.now()
    from_date = query.validated_data['from_date'] or now - timedelta(days=30)
    to_date = query.validated_data['to_date'] or now

    try:
        rows = TodoAnalytics().daily_stats(from_date, to_date)
    except DatabaseError as e:
        return _store_failure(e)
    return Response(DailyStatsRowSerializer(rows, many=True).data)


@api_view(['GET'])
def advanced_stats(request):
    """
    GET /api/todo/advanced-stats/
    GET /api/todo/stats/
    """
    try:
        stats = TodoAnalytics().advanced_stats()
    except DatabaseError as e:
        return _store_failure(e)
    return Response(AdvancedStatsSerializer(stats).data)


@api_view(['PUT'])
def bulk_update_priority(request):
    """
    PUT /api/todo/bulk-update-priority/?oldPriority=2&newPriority=3
    """
    query = BulkPriorityUpdateSerializer(data=request.query_params.dict())
    if not query.is_valid():
        return _invalid(query.errors)

    old_priority = query.validated_data['old_priority']
    new_priority = query.validated_data['new_priority']

    try:
        updated = TodoAnalytics().bulk_update_priority(old_priority, new_priority)
    except DatabaseError as e:
        return _store_failure(e)

    return Response({
        'success': True,
        'message': f'Updated {updated} todos from priority {old_priority} to {new_priority}',
        'updated_count': updated
    }, status=status.HTTP_200_OK)


@api_view(['GET'])
def health_check(request):
    """
    GET /api/health/

    Simple health check endpoint to verify API is running.
    """
    return Response({
        'status': 'healthy',
        'message': 'Todo API is running',
        'timestamp': timezone.now().isoformat()
    }, status=status.HTTP_200_OK)
