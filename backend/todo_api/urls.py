# todo_api/urls.py
from django.contrib import admin
from django.urls import include, path

from todos import views as todo_views

urlpatterns = [
    path('admin/', admin.site.urls),
    path('api/health/', todo_views.health_check, name='health_check'),
    path('api/todo/', include('todos.urls')),
]
