from fastapi import APIRouter, HTTPException
from typing import List
from ...core.exceptions import TaskboardError
from ...db.base import db_dependency
from .params import RowId
from ...schemas.task import (
    SubtaskCreate,
    SubtaskResponse,
    SuccessResponse,
    TaskCreate,
    TaskResponse,
    TaskStats,
    TaskUpdate,
)
from ...services.auth import user_dependency
from ...services.task_service import TaskService

router = APIRouter(prefix='/api', tags=['tasks'])


@router.get("/tasks", response_model=List[TaskResponse])
async def get_tasks(user: user_dependency, db: db_dependency):
    try:
        task_service = TaskService(db, user)
        return task_service.list_tasks()
    except Exception:
        raise HTTPException(status_code=500, detail="Failed to load tasks")


@router.post("/tasks", response_model=TaskResponse)
async def create_task(task_data: TaskCreate, user: user_dependency, db: db_dependency):
    try:
        task_service = TaskService(db, user)
        return task_service.create_task(task_data)
    except TaskboardError:
        raise
    except Exception:
        raise HTTPException(status_code=500, detail="Failed to create task")


@router.put("/tasks/{task_id}", response_model=SuccessResponse)
async def update_task(
    task_id: RowId,
    task_data: TaskUpdate,
    user: user_dependency,
    db: db_dependency
):
    try:
        task_service = TaskService(db, user)
        task_service.update_task(task_id, task_data)
        return {"success": True}
    except TaskboardError:
        raise
    except Exception:
        raise HTTPException(status_code=500, detail="Failed to update task")


@router.delete("/tasks/{task_id}", response_model=SuccessResponse)
async def delete_task(task_id: RowId, user: user_dependency, db: db_dependency):
    try:
        task_service = TaskService(db, user)
        task_service.delete_task(task_id)
        return {"success": True}
    except Exception:
        raise HTTPException(status_code=500, detail="Failed to delete task")


@router.get("/tasks/{task_id}/subtasks", response_model=List[SubtaskResponse])
async def get_subtasks(task_id: RowId, user: user_dependency, db: db_dependency):
    try:
        task_service = TaskService(db, user)
        return task_service.list_subtasks(task_id)
    except Exception:
        raise HTTPException(status_code=500, detail="Failed to load subtasks")


@router.post("/tasks/{task_id}/subtasks", response_model=SubtaskResponse)
async def create_subtask(
    task_id: RowId,
    subtask_data: SubtaskCreate,
    user: user_dependency,
    db: db_dependency
):
    try:
        task_service = TaskService(db, user)
        return task_service.create_subtask(task_id, subtask_data.title)
    except TaskboardError:
        raise
    except Exception:
        raise HTTPException(status_code=500, detail="Failed to create subtask")


@router.get("/stats", response_model=TaskStats)
async def get_task_stats(user: user_dependency, db: db_dependency):
    try:
        task_service = TaskService(db, user)
        return task_service.get_task_stats()
    except Exception:
        raise HTTPException(status_code=500, detail="Failed to load stats")
