# tests/test_use_cases.py

import pytest

from application.use_cases import TITLE_REQUIRED, TaskUseCases
from domain.errors import TaskValidationError


@pytest.mark.parametrize("title", [None, "", "   ", "\t\n", 42, ["Buy milk"]])
def test_create_rejects_bad_titles(db, title) -> None:
    use_cases = TaskUseCases(db)
    with pytest.raises(TaskValidationError, match=TITLE_REQUIRED):
        use_cases.create_task(title)
    assert use_cases.list_tasks() == []


def test_create_keeps_title_as_given(db) -> None:
    use_cases = TaskUseCases(db)
    task = use_cases.create_task("  Buy milk ")
    assert task.title == "  Buy milk "


def test_update_allows_clearing_title(db) -> None:
    use_cases = TaskUseCases(db)
    task = use_cases.create_task("Buy milk")
    updated = use_cases.update_task(task.id, {"title": ""})
    assert updated.title == ""


def test_delete_then_list(db) -> None:
    use_cases = TaskUseCases(db)
    task = use_cases.create_task("Buy milk")
    use_cases.delete_task(task.id)
    assert use_cases.list_tasks() == []
