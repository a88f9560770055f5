# File: /docview/modules/notes.py | Version: 1.0 | Title: Notes module seed data
from docview.engine.operators import ViewType
from docview.modules._factory import module, options, prop, sort_by, timestamps, view, where

NOTES = module(
    "notes",
    "Note",
    "Notes",
    description="Capture ideas and references",
    icon="📝",
    properties=[
        prop("title", "Title", "text", 0, frozen=True, required=True, width=260),
        prop("content", "Content", "rich_text", 1),
        prop(
            "category",
            "Category",
            "select",
            2,
            choices=options(("idea", "Idea", "yellow"), ("reference", "Reference", "blue"), ("meeting", "Meeting", "gray")),
        ),
        prop("tags", "Tags", "multi_select", 3),
        prop("favorite", "Favorite", "boolean", 4),
        *timestamps(5),
    ],
    views=[
        view(
            "all-notes",
            "All Notes",
            default=True,
            frozen=True,
            visible=["title", "category", "tags", "updatedAt"],
            sorts=[sort_by("updatedAt", "DESC")],
        ),
        view(
            "favorites",
            "Favorites",
            filters=[where("favorite", "is_true")],
            visible=["title", "category"],
            sorts=[sort_by("updatedAt", "DESC")],
        ),
        view("by-category", "By Category", ViewType.BOARD, group_by="category", visible=["title"]),
        view("gallery-view", "Gallery", ViewType.GALLERY, visible=["title", "content"]),
    ],
)
