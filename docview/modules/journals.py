# File: /docview/modules/journals.py | Version: 1.0 | Title: Journal module seed data
from docview.engine.operators import ViewType
from docview.modules._factory import module, options, prop, rule, sort_by, timestamps, view, where
from docview.schemas.module import Capabilities

JOURNALS = module(
    "journals",
    "Journal Entry",
    "Journal",
    description="Daily journal entries",
    icon="📔",
    properties=[
        prop("title", "Title", "text", 0, frozen=True, required=True, width=240),
        prop("content", "Content", "rich_text", 1),
        prop("date", "Date", "date", 2, frozen=True, required=True),
        prop(
            "mood",
            "Mood",
            "select",
            3,
            choices=options(
                ("great", "Great", "green"),
                ("good", "Good", "blue"),
                ("okay", "Okay", "yellow"),
                ("bad", "Bad", "red"),
            ),
        ),
        prop("tags", "Tags", "multi_select", 4),
        prop("isPrivate", "Private", "boolean", 5),
        prop("wordCount", "Word Count", "number", 6, frozen=True),
        *timestamps(7),
    ],
    rules=[
        rule("title", "Core journal property", allow_edit=True),
        rule("date", "Entries are keyed by day", allow_edit=True),
        rule("wordCount", "Computed from content", allow_hide=True),
    ],
    views=[
        view(
            "all-entries",
            "All Entries",
            default=True,
            frozen=True,
            visible=["title", "date", "mood"],
            sorts=[sort_by("date", "DESC")],
        ),
        view(
            "this-week",
            "This Week",
            ViewType.LIST,
            filters=[where("date", "is_this_week")],
            visible=["title", "mood"],
            sorts=[sort_by("date")],
        ),
        view("by-mood", "By Mood", ViewType.BOARD, group_by="mood", visible=["title", "date"]),
        view(
            "calendar-view",
            "Calendar",
            ViewType.CALENDAR,
            visible=["title", "mood"],
            sorts=[sort_by("date")],
            config={"dateProperty": "date"},
        ),
    ],
    # Journal schema is curated; entries only get new views
    capabilities=Capabilities(can_add_properties=False, can_delete_properties=False),
)
