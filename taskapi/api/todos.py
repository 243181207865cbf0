# taskapi/api/todos.py

from pydantic import BaseModel
from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session
from taskapi.api.auth import get_current_user
from taskapi.core.todos import create_todo, delete_todo, list_todos, update_todo
from taskapi.database import get_db
from taskapi.models.user import User


# Every route here sits behind the authorization gate
router = APIRouter(prefix="/todos", dependencies=[Depends(get_current_user)])


class TodoCreateRequest(BaseModel):
    title: str | None = None
    done: bool = False


class TodoUpdateRequest(BaseModel):
    title: str | None = None
    done: bool = False


class TodoOut(BaseModel):
    id: int
    title: str
    done: bool


def serialize(todo) -> dict:
    return {"id": todo.id, "title": todo.title, "done": todo.done}


@router.get("", response_model=list[TodoOut])
def get_todos(user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    """
    Lists the caller's todos, unfinished ones first, oldest first within each group.
    """
    return [serialize(t) for t in list_todos(db, user.id)]


@router.post("", status_code=status.HTTP_201_CREATED, response_model=TodoOut)
def add_todo(
    req: TodoCreateRequest,
    response: Response,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    todo = create_todo(db, user.id, req.title, req.done)
    response.headers["Location"] = f"/todos/{todo.id}"
    return serialize(todo)


@router.put("/{todo_id}", status_code=status.HTTP_204_NO_CONTENT, response_class=Response)
def edit_todo(
    todo_id: int,
    req: TodoUpdateRequest,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    update_todo(db, user.id, todo_id, req.title, req.done)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete("/{todo_id}", status_code=status.HTTP_204_NO_CONTENT, response_class=Response)
def remove_todo(
    todo_id: int,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    delete_todo(db, user.id, todo_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
