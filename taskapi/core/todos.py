# taskapi/core/todos.py

import logging
from sqlalchemy.orm import Session
from taskapi.core.errors import NotFoundError, ValidationError
from taskapi.models.todo import Todo


logger = logging.getLogger(__name__)

# largest id a 64-bit INTEGER primary key can hold
MAX_TODO_ID = 2**63 - 1


def get_owned_todo(db: Session, owner_id: int, todo_id: int) -> Todo:
    """
    Looks a todo up by id and owner together.
    Someone else's todo is reported exactly like a missing one.
    """
    if not 1 <= todo_id <= MAX_TODO_ID:
        raise NotFoundError("Todo not found")

    todo = (
        db.query(Todo)
        .filter(Todo.id == todo_id, Todo.owner_id == owner_id)
        .first()
    )
    if todo is None:
        raise NotFoundError("Todo not found")
    return todo


def list_todos(db: Session, owner_id: int) -> list[Todo]:
    return (
        db.query(Todo)
        .filter(Todo.owner_id == owner_id)
        .order_by(Todo.done.asc(), Todo.id.asc())
        .all()
    )


def create_todo(db: Session, owner_id: int, title: str | None, done: bool = False) -> Todo:
    if title is None or not title.strip():
        raise ValidationError("Title required")

    todo = Todo(title=title.strip(), done=done, owner_id=owner_id)
    db.add(todo)
    db.commit()
    logger.debug("Created todo", extra={"user_id": owner_id, "todo_id": todo.id})
    return todo


def update_todo(db: Session, owner_id: int, todo_id: int, title: str | None, done: bool) -> Todo:
    todo = get_owned_todo(db, owner_id, todo_id)

    # a blank title keeps the current one
    if title is not None and title.strip():
        todo.title = title.strip()
    todo.done = done
    db.commit()
    return todo


def delete_todo(db: Session, owner_id: int, todo_id: int):
    todo = get_owned_todo(db, owner_id, todo_id)
    db.delete(todo)
    db.commit()
    logger.debug("Deleted todo", extra={"user_id": owner_id, "todo_id": todo_id})
