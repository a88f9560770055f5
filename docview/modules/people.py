# File: /docview/modules/people.py | Version: 1.0 | Title: People module seed data
from docview.engine.operators import ViewType
from docview.modules._factory import module, options, prop, sort_by, timestamps, view, where

PEOPLE = module(
    "people",
    "Person",
    "People",
    description="Contacts and relationships",
    icon="👥",
    properties=[
        prop("name", "Name", "text", 0, frozen=True, required=True, width=220),
        prop("email", "Email", "email", 1),
        prop("phone", "Phone", "phone", 2),
        prop("company", "Company", "text", 3),
        prop(
            "relationship",
            "Relationship",
            "select",
            4,
            choices=options(
                ("family", "Family", "red"),
                ("friend", "Friend", "green"),
                ("colleague", "Colleague", "blue"),
                ("acquaintance", "Acquaintance", "gray"),
            ),
        ),
        prop("tags", "Tags", "multi_select", 5),
        prop("lastContact", "Last Contact", "date", 6),
        *timestamps(7),
    ],
    views=[
        view(
            "all-people",
            "All People",
            default=True,
            frozen=True,
            visible=["name", "email", "company", "relationship"],
            sorts=[sort_by("name", locale="en")],
        ),
        view(
            "recently-contacted",
            "Recently Contacted",
            filters=[where("lastContact", "is_past_month")],
            visible=["name", "lastContact"],
            sorts=[sort_by("lastContact", "DESC")],
        ),
        view(
            "by-company",
            "By Company",
            group_by="company",
            visible=["name", "company", "email"],
            sorts=[sort_by("company", empty_string_handling="last"), sort_by("name", order=1)],
        ),
        view("relationship-board", "Relationships", ViewType.BOARD, group_by="relationship", visible=["name"]),
        view("gallery-view", "Gallery", ViewType.GALLERY, visible=["name", "company"]),
    ],
)
