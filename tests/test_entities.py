from datetime import datetime, timedelta, timezone
from uuid import UUID, uuid4

import pytest

from todo_api.domain import TaskList, TodoTask, ValidationError

NIL_ID = UUID(int=0)
DESCRIPTION = "Submit the quarterly report"


class TestTaskList:
    def test_construct_trims_name_and_assigns_id(self):
        task_list = TaskList("  Work  ")
        assert task_list.name == "Work"
        assert isinstance(task_list.id, UUID)
        assert task_list.id != NIL_ID

    def test_each_list_gets_a_distinct_id(self):
        assert TaskList("A").id != TaskList("B").id

    @pytest.mark.parametrize("name", ["", "   ", "\t\n", None])
    def test_construct_rejects_blank_name(self, name):
        with pytest.raises(ValidationError) as exc_info:
            TaskList(name)
        assert exc_info.value.message == "List name cannot be empty."
        assert exc_info.value.details == {"field": "name"}

    def test_name_length_bounds(self):
        assert TaskList("x" * 80).name == "x" * 80
        # Surrounding whitespace does not count towards the limit
        assert TaskList("  " + "x" * 80 + "  ").name == "x" * 80
        with pytest.raises(ValidationError, match="cannot exceed 80"):
            TaskList("x" * 81)

    def test_rename_validates_and_keeps_old_name_on_failure(self):
        task_list = TaskList("Home")
        task_list.rename("  Chores ")
        assert task_list.name == "Chores"

        with pytest.raises(ValidationError):
            task_list.rename("   ")
        with pytest.raises(ValidationError):
            task_list.rename("y" * 81)
        assert task_list.name == "Chores"

    def test_name_cannot_be_assigned_directly(self):
        task_list = TaskList("Home")
        with pytest.raises(AttributeError):
            task_list.name = ""  # type: ignore[misc]

    def test_restore_keeps_id(self):
        list_id = uuid4()
        restored = TaskList.restore(list_id, "Work")
        assert restored.id == list_id
        assert restored.name == "Work"


class TestTodoTask:
    def test_construct_defaults(self):
        list_id = uuid4()
        task = TodoTask(list_id, "  Submit report ", f"  {DESCRIPTION}  ")
        assert task.list_id == list_id
        assert task.title == "Submit report"
        assert task.description == DESCRIPTION
        assert task.is_completed is False
        assert task.deadline is None
        assert task.id != NIL_ID

    @pytest.mark.parametrize("list_id", [NIL_ID, None])
    def test_construct_requires_list_id(self, list_id):
        with pytest.raises(ValidationError) as exc_info:
            TodoTask(list_id, "Title", DESCRIPTION)
        assert exc_info.value.message == "ListId is required."
        assert exc_info.value.field == "list_id"

    def test_title_bounds(self):
        list_id = uuid4()
        assert TodoTask(list_id, "t" * 200, DESCRIPTION).title == "t" * 200
        with pytest.raises(ValidationError, match="Task title cannot be empty"):
            TodoTask(list_id, "   ", DESCRIPTION)
        with pytest.raises(ValidationError, match="Task title cannot exceed 200"):
            TodoTask(list_id, "t" * 201, DESCRIPTION)

    @pytest.mark.parametrize(
        "description, message",
        [
            ("", "at least 10"),
            ("   short   ", "at least 10"),
            ("x" * 9, "at least 10"),
            ("x" * 2001, "cannot exceed 2000"),
        ],
    )
    def test_construct_rejects_description_out_of_bounds(self, description, message):
        with pytest.raises(ValidationError, match=message) as exc_info:
            TodoTask(uuid4(), "Title", description)
        assert exc_info.value.field == "description"

    @pytest.mark.parametrize("length", [10, 11, 1999, 2000])
    def test_construct_accepts_description_within_bounds(self, length):
        task = TodoTask(uuid4(), "Title", " " + "d" * length + " ")
        assert len(task.description) == length

    def test_title_and_description_errors_are_distinct(self):
        with pytest.raises(ValidationError) as title_error:
            TodoTask(uuid4(), "", DESCRIPTION)
        with pytest.raises(ValidationError) as description_error:
            TodoTask(uuid4(), "Title", "")
        assert title_error.value.field == "title"
        assert description_error.value.field == "description"
        assert title_error.value.message != description_error.value.message

    def test_update_title_touches_only_title(self):
        task = TodoTask(uuid4(), "Old", DESCRIPTION)
        task.update_title("  New  ")
        assert task.title == "New"
        assert task.description == DESCRIPTION

        with pytest.raises(ValidationError):
            task.update_title("")
        assert task.title == "New"

    def test_update_description_revalidates(self):
        task = TodoTask(uuid4(), "Title", DESCRIPTION)
        task.update_description("  A much longer description  ")
        assert task.description == "A much longer description"
        assert task.title == "Title"

        with pytest.raises(ValidationError):
            task.update_description("too short")
        with pytest.raises(ValidationError):
            task.update_description("z" * 2001)
        assert task.description == "A much longer description"

    def test_move_to_list(self):
        task = TodoTask(uuid4(), "Title", DESCRIPTION)
        destination = uuid4()
        task.move_to_list(destination)
        assert task.list_id == destination

        with pytest.raises(ValidationError):
            task.move_to_list(NIL_ID)
        assert task.list_id == destination

    def test_completion_round_trip_is_idempotent(self):
        task = TodoTask(uuid4(), "Title", DESCRIPTION)
        task.mark_completed()
        task.mark_completed()
        assert task.is_completed is True
        task.mark_in_progress()
        task.mark_in_progress()
        assert task.is_completed is False

    def test_completion_ignores_deadline(self):
        task = TodoTask(uuid4(), "Title", DESCRIPTION)
        task.set_deadline(datetime(2000, 1, 1, tzinfo=timezone.utc))
        task.mark_completed()
        assert task.is_completed is True
        task.mark_in_progress()
        assert task.is_completed is False

    def test_set_deadline_accepts_past_and_none(self):
        task = TodoTask(uuid4(), "Title", DESCRIPTION)
        past = datetime.now(timezone.utc) - timedelta(days=365)
        task.set_deadline(past)
        assert task.deadline == past
        task.set_deadline(None)
        assert task.deadline is None

    def test_restore_keeps_state(self):
        task_id, list_id = uuid4(), uuid4()
        deadline = datetime(2030, 5, 1, tzinfo=timezone.utc)
        task = TodoTask.restore(task_id, list_id, "Title", DESCRIPTION, True, deadline)
        assert task.id == task_id
        assert task.list_id == list_id
        assert task.is_completed is True
        assert task.deadline == deadline
