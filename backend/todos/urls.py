# todos/urls.py
from django.urls import path
from . import views

# Fixed paths must stay ahead of the <int:todo_id> routes.
urlpatterns = [
    path('', views.todo_collection, name='todo_collection'),
    path('summary/', views.todo_summary, name='todo_summary'),
    path('daily-stats/', views.daily_stats, name='daily_stats'),
    path('advanced-stats/', views.advanced_stats, name='advanced_stats'),
    path('stats/', views.advanced_stats, name='todo_stats'),
    path('search/', views.search_todos, name='search_todos'),
    path('bulk-update-priority/', views.bulk_update_priority, name='bulk_update_priority'),
    path('<int:todo_id>/', views.todo_detail, name='todo_detail'),
    path('<int:todo_id>/toggle/', views.toggle_todo, name='toggle_todo'),
]
