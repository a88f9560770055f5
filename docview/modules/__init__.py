# File: /docview/modules/__init__.py | Version: 1.0 | Title: Built-in module seed definitions
from .books import BOOKS
from .goals import GOALS
from .journals import JOURNALS
from .notes import NOTES
from .people import PEOPLE
from .projects import PROJECTS
from .tasks import TASKS

DEFAULT_MODULES = [TASKS, GOALS, BOOKS, PROJECTS, NOTES, PEOPLE, JOURNALS]

__all__ = ["DEFAULT_MODULES", "TASKS", "GOALS", "BOOKS", "PROJECTS", "NOTES", "PEOPLE", "JOURNALS"]
