# File: /docview/modules/goals.py | Version: 1.0 | Title: Goals module seed data
from docview.engine.operators import ViewType
from docview.modules._factory import module, options, prop, sort_by, timestamps, view, where

GOALS = module(
    "goals",
    "Goal",
    "Goals",
    description="Track long-term goals and their progress",
    icon="🎯",
    properties=[
        prop("title", "Title", "text", 0, frozen=True, required=True, width=260),
        prop("description", "Description", "rich_text", 1),
        prop(
            "category",
            "Category",
            "select",
            2,
            choices=options(
                ("personal", "Personal", "purple"),
                ("career", "Career", "blue"),
                ("health", "Health", "green"),
                ("finance", "Finance", "yellow"),
            ),
        ),
        prop(
            "status",
            "Status",
            "select",
            3,
            choices=options(
                ("not_started", "Not Started", "gray"),
                ("active", "Active", "blue"),
                ("achieved", "Achieved", "green"),
                ("abandoned", "Abandoned", "red"),
            ),
        ),
        prop("progress", "Progress", "progress", 4),
        prop("targetDate", "Target Date", "date", 5),
        prop("tags", "Tags", "multi_select", 6),
        *timestamps(7),
    ],
    views=[
        view(
            "all-goals",
            "All Goals",
            default=True,
            frozen=True,
            visible=["title", "category", "status", "progress", "targetDate"],
            sorts=[sort_by("createdAt", "DESC")],
        ),
        view(
            "active-goals",
            "Active Goals",
            visible=["title", "progress", "targetDate"],
            filters=[where("status", "equals", "active")],
            sorts=[sort_by("targetDate", nulls_first=False)],
        ),
        view("by-category", "By Category", ViewType.BOARD, group_by="category", visible=["title", "progress"]),
        view(
            "progress-tracker",
            "Progress Tracker",
            visible=["title", "progress", "status"],
            sorts=[sort_by("progress", "DESC")],
        ),
    ],
)
