# todos/exceptions.py


class TodoNotFound(Exception):
    """Raised when a mutation targets a todo id that does not exist."""

    def __init__(self, todo_id):
        self.todo_id = todo_id
        super().__init__(f'Todo with ID {todo_id} not found.')
