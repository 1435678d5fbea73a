from fastapi import APIRouter, HTTPException
from ...db.base import db_dependency
from .params import RowId
from ...schemas.task import SubtaskUpdate, SuccessResponse
from ...services.auth import user_dependency
from ...services.task_service import TaskService

router = APIRouter(prefix='/api/subtasks', tags=['subtasks'])


@router.put("/{subtask_id}", response_model=SuccessResponse)
async def update_subtask(
    subtask_id: RowId,
    subtask_data: SubtaskUpdate,
    user: user_dependency,
    db: db_dependency
):
    try:
        task_service = TaskService(db, user)
        task_service.update_subtask(subtask_id, subtask_data.completed)
        return {"success": True}
    except Exception:
        raise HTTPException(status_code=500, detail="Failed to update subtask")


@router.delete("/{subtask_id}", response_model=SuccessResponse)
async def delete_subtask(subtask_id: RowId, user: user_dependency, db: db_dependency):
    try:
        task_service = TaskService(db, user)
        task_service.delete_subtask(subtask_id)
        return {"success": True}
    except Exception:
        raise HTTPException(status_code=500, detail="Failed to delete subtask")
