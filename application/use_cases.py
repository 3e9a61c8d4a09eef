from typing import Any, List, Mapping, Optional
from domain.entities import Task
from domain.errors import TaskValidationError
from infrastructure.database import Database

TITLE_REQUIRED = "Title is required and must be a non-empty string."


class TaskUseCases:
    def __init__(self, db: Database):
        self.db = db

    def list_tasks(self) -> List[Task]:
        return self.db.list_all()

    def create_task(self, title: Any) -> Task:
        if not isinstance(title, str) or not title.strip():
            raise TaskValidationError(TITLE_REQUIRED)
        return self.db.insert(title)

    def update_task(self, task_id: str, fields: Mapping[str, Any]) -> Optional[Task]:
        # No field-level checks here: an update may clear a title.
        return self.db.find_and_update(task_id, fields)

    def delete_task(self, task_id: str) -> None:
        self.db.delete_by_id(task_id)
