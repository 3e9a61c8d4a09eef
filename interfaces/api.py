# interfaces/api.py
from fastapi import APIRouter, Body, HTTPException, Depends, Request, status
from schemas.task import TaskCreate, TaskUpdate, TaskResponse, MessageResponse, ErrorResponse
from application.use_cases import TaskUseCases
from domain.errors import PersistenceError, TaskValidationError
from typing import List, Optional
import logging

logger = logging.getLogger(__name__)

router = APIRouter(tags=["tasks"])

ERROR_RESPONSES = {
    400: {"model": ErrorResponse},
    404: {"model": ErrorResponse},
    500: {"model": ErrorResponse},
}


def get_use_cases(request: Request) -> TaskUseCases:
    """Builds the use cases around the store handle opened at startup."""
    return TaskUseCases(request.app.state.db)


@router.get("/tasks", response_model=List[TaskResponse], responses=ERROR_RESPONSES)
@router.get("/tasks/", response_model=List[TaskResponse], include_in_schema=False)
async def list_tasks(use_cases: TaskUseCases = Depends(get_use_cases)):
    """Returns every task, newest first."""
    try:
        tasks = use_cases.list_tasks()
    except PersistenceError as e:
        logger.error(f"Listing tasks failed: {e}")
        raise HTTPException(status_code=500, detail=str(e))
    return [TaskResponse.from_task(task) for task in tasks]


@router.post("/tasks", response_model=TaskResponse, status_code=status.HTTP_201_CREATED, responses=ERROR_RESPONSES)
@router.post("/tasks/", response_model=TaskResponse, status_code=status.HTTP_201_CREATED, include_in_schema=False)
async def create_task(task: TaskCreate, use_cases: TaskUseCases = Depends(get_use_cases)):
    """Creates a new task."""
    logger.debug(f"POST body: {task.model_dump()}")
    try:
        created_task = use_cases.create_task(task.title)
    except TaskValidationError as e:
        logger.info(f"Rejected task: {e}")
        raise HTTPException(status_code=400, detail=str(e))
    except PersistenceError as e:
        logger.error(f"Creating task failed: {e}")
        raise HTTPException(status_code=400, detail=str(e))
    logger.info(f"Task created: {created_task.id}")
    return TaskResponse.from_task(created_task)


@router.put("/tasks/{task_id}", response_model=TaskResponse, responses=ERROR_RESPONSES)
async def update_task(task_id: str, task: Optional[TaskUpdate] = Body(default=None), use_cases: TaskUseCases = Depends(get_use_cases)):
    """Applies a partial update (title and/or completed) to a task."""
    # A bodiless update changes nothing and returns the task as stored.
    fields = task.model_dump(exclude_unset=True) if task is not None else {}
    try:
        updated_task = use_cases.update_task(task_id, fields)
    except PersistenceError as e:
        logger.error(f"Updating task {task_id} failed: {e}")
        raise HTTPException(status_code=400, detail=str(e))
    if not updated_task:
        raise HTTPException(status_code=404, detail="Task not found")
    logger.info(f"Task {task_id} updated: {sorted(fields)}")
    return TaskResponse.from_task(updated_task)


@router.delete("/tasks/{task_id}", response_model=MessageResponse, responses=ERROR_RESPONSES)
async def delete_task(task_id: str, use_cases: TaskUseCases = Depends(get_use_cases)):
    """Deletes a task. Unknown ids are not an error."""
    try:
        use_cases.delete_task(task_id)
    except PersistenceError as e:
        logger.error(f"Deleting task {task_id} failed: {e}")
        raise HTTPException(status_code=400, detail=str(e))
    logger.info(f"Task deleted: {task_id}")
    return {"message": "Todo deleted"}
