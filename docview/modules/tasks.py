# File: /docview/modules/tasks.py | Version: 1.1 | Title: Tasks module seed data
from docview.engine.operators import ViewType
from docview.modules._factory import module, options, prop, rule, sort_by, timestamps, view, where

STATUS = options(
    ("todo", "To Do", "gray"),
    ("in_progress", "In Progress", "blue"),
    ("done", "Done", "green"),
    ("cancelled", "Cancelled", "red"),
)
PRIORITY = options(
    ("low", "Low", "green"),
    ("medium", "Medium", "yellow"),
    ("high", "High", "orange"),
    ("urgent", "Urgent", "red"),
)

TASKS = module(
    "tasks",
    "Task",
    "Tasks",
    description="Manage your tasks and to-dos",
    icon="✅",
    properties=[
        prop("title", "Title", "text", 0, frozen=True, required=True, width=280),
        prop("description", "Description", "rich_text", 1),
        prop("status", "Status", "select", 2, frozen=True, required=True, choices=STATUS),
        prop("priority", "Priority", "select", 3, frozen=True, required=True, choices=PRIORITY),
        prop("dueDate", "Due Date", "date", 4),
        prop("assignee", "Assignee", "text", 5),
        prop("tags", "Tags", "multi_select", 6),
        prop("project", "Project", "relation", 7),
        *timestamps(8),
    ],
    rules=[
        rule("title", "Core task property", allow_edit=True),
        rule("status", "Core task property", allow_edit=True),
        rule("priority", "Core task property", allow_edit=True),
    ],
    views=[
        view(
            "all-tasks",
            "All Tasks",
            default=True,
            frozen=True,
            visible=["title", "status", "priority", "dueDate", "assignee"],
            sorts=[sort_by("createdAt", "DESC")],
        ),
        view(
            "active-tasks",
            "Active Tasks",
            visible=["title", "status", "priority", "dueDate"],
            filters=[
                where("status", "not_equals", "done", order=0),
                where("status", "not_equals", "cancelled", order=1),
            ],
            sorts=[sort_by("priority", "DESC", custom_comparator="option_order")],
        ),
        view(
            "kanban-board",
            "Kanban Board",
            ViewType.BOARD,
            group_by="status",
            visible=["title", "priority", "dueDate"],
            config={"colorProperty": "priority"},
        ),
        view(
            "calendar-view",
            "Calendar",
            ViewType.CALENDAR,
            visible=["title", "status", "priority"],
            sorts=[sort_by("dueDate")],
            config={"dateProperty": "dueDate", "colorProperty": "priority"},
        ),
    ],
    supported_view_types=[ViewType.TABLE, ViewType.BOARD, ViewType.CALENDAR, ViewType.LIST, ViewType.TIMELINE],
)
