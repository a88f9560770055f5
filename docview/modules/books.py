# File: /docview/modules/books.py | Version: 1.0 | Title: Books module seed data
from docview.engine.operators import ViewType
from docview.modules._factory import module, options, prop, sort_by, timestamps, view, where

BOOKS = module(
    "books",
    "Book",
    "Books",
    description="Keep a reading log",
    icon="📚",
    properties=[
        prop("title", "Title", "text", 0, frozen=True, required=True, width=260),
        prop("author", "Author", "text", 1),
        prop("isbn", "ISBN", "text", 2),
        prop(
            "genre",
            "Genre",
            "select",
            3,
            choices=options(
                ("fiction", "Fiction", "blue"),
                ("non_fiction", "Non-fiction", "green"),
                ("biography", "Biography", "orange"),
                ("technical", "Technical", "gray"),
            ),
        ),
        prop(
            "status",
            "Status",
            "select",
            4,
            choices=options(
                ("want_to_read", "Want to Read", "gray"),
                ("reading", "Reading", "blue"),
                ("finished", "Finished", "green"),
            ),
        ),
        prop("rating", "Rating", "number", 5),
        prop("pages", "Pages", "number", 6),
        prop("startDate", "Started", "date", 7),
        prop("finishDate", "Finished", "date", 8),
        prop("tags", "Tags", "multi_select", 9),
        *timestamps(10),
    ],
    views=[
        view(
            "all-books",
            "All Books",
            default=True,
            frozen=True,
            visible=["title", "author", "status", "rating"],
            sorts=[sort_by("createdAt", "DESC")],
        ),
        view(
            "currently-reading",
            "Currently Reading",
            filters=[where("status", "equals", "reading")],
            visible=["title", "author", "startDate"],
            sorts=[sort_by("startDate", "DESC")],
        ),
        view("by-genre", "By Genre", ViewType.BOARD, group_by="genre", visible=["title", "author"]),
        view(
            "reading-list",
            "Reading List",
            ViewType.LIST,
            filters=[where("status", "equals", "want_to_read")],
            visible=["title", "author"],
            sorts=[sort_by("title", locale="en")],
        ),
    ],
)
