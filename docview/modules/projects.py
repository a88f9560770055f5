# File: /docview/modules/projects.py | Version: 1.0 | Title: Projects module seed data
from docview.engine.operators import ViewType
from docview.modules._factory import module, options, prop, rule, sort_by, timestamps, view, where

PROJECTS = module(
    "projects",
    "Project",
    "Projects",
    description="Plan and follow projects",
    icon="📁",
    properties=[
        prop("name", "Name", "text", 0, frozen=True, required=True, width=260),
        prop("description", "Description", "rich_text", 1),
        prop(
            "status",
            "Status",
            "select",
            2,
            frozen=True,
            choices=options(
                ("planning", "Planning", "gray"),
                ("active", "Active", "blue"),
                ("on_hold", "On Hold", "yellow"),
                ("completed", "Completed", "green"),
            ),
        ),
        prop("progress", "Progress", "progress", 3),
        prop("startDate", "Start Date", "date", 4),
        prop("dueDate", "Due Date", "date", 5),
        prop("owner", "Owner", "text", 6),
        prop("team", "Team", "relation", 7),
        prop("budget", "Budget", "number", 8),
        prop("tags", "Tags", "multi_select", 9),
        *timestamps(10),
    ],
    rules=[rule("name", "Core project property", allow_edit=True), rule("status", "Drives the board", allow_edit=True)],
    views=[
        view(
            "all-projects",
            "All Projects",
            default=True,
            frozen=True,
            visible=["name", "status", "progress", "dueDate", "owner"],
            sorts=[sort_by("createdAt", "DESC")],
        ),
        view(
            "active-projects",
            "Active Projects",
            filters=[where("status", "equals", "active")],
            visible=["name", "progress", "dueDate"],
            sorts=[sort_by("dueDate")],
        ),
        view(
            "project-board",
            "Project Board",
            ViewType.BOARD,
            frozen=True,
            group_by="status",
            visible=["name", "owner", "dueDate"],
        ),
        view(
            "timeline-view",
            "Timeline",
            ViewType.TIMELINE,
            visible=["name", "startDate", "dueDate"],
            sorts=[sort_by("startDate")],
            config={"startProperty": "startDate", "endProperty": "dueDate"},
        ),
    ],
    supported_view_types=[ViewType.TABLE, ViewType.BOARD, ViewType.TIMELINE, ViewType.GALLERY, ViewType.LIST],
)
