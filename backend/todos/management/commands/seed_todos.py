# todos/management/commands/seed_todos.py
from django.core.management.base import BaseCommand

from todos.models import Priority, Todo
from todos.repository import TodoRepository

STARTER_TODOS = [
    {
        'title': 'Welcome to your Todo App!',
        'description': 'This is your first todo item. You can edit or delete it.',
        'priority': Priority.MEDIUM,
    },
    {
        'title': 'Learn about the Django ORM',
        'description': 'Understanding models, querysets and migrations is key to Django development.',
        'priority': Priority.HIGH,
    },
]


class Command(BaseCommand):
    help = 'Insert the starter todos into an empty table.'

    def add_arguments(self, parser):
        parser.add_argument('--database', default='default', help='Database alias to seed.')

    def handle(self, *args, **options):
        repository = TodoRepository(using=options['database'])
        if repository.todos.exists():
            self.stdout.write('Todos already present, nothing seeded.')
            return

        for fields in STARTER_TODOS:
            repository.create(Todo(**fields))
        self.stdout.write(self.style.SUCCESS(f'Seeded {len(STARTER_TODOS)} todo(s).'))
