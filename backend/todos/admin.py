from django.contrib import admin
from .models import Todo
from .repository import TodoRepository


@admin.register(Todo)
class TodoAdmin(admin.ModelAdmin):
    list_display = ['title', 'priority', 'is_completed', 'due_date', 'created_at', 'updated_at']
    list_filter = ['is_completed', 'priority', 'created_at']
    search_fields = ['title', 'description']
    ordering = ['-priority', '-created_at']
    readonly_fields = ['created_at', 'updated_at']

    def save_model(self, request, obj, form, change):
        # Timestamps are owned by the repository.
        repository = TodoRepository()
        if change:
            repository.update(obj)
        else:
            repository.create(obj)
