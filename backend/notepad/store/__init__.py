# Store package init
"""
Notepad Backend — Store Layer
==============================

What:  Persistence abstraction for note records.
Why:   Keeps SQL out of the service layer. The service decides *what* to
       change (update semantics, archive toggling); the store decides *how*
       rows are read and written.
How:   NoteStore wraps one AsyncSession (one request, one unit of work) and
       exposes CRUD plus predicate scans. Predicates are SQLAlchemy
       expressions built by the criteria helpers in note_store.py.

Store Inventory:
    - NoteStore: create / get / list_all / list_where / count_where /
                 update / delete / clear
"""

from notepad.store.note_store import (
    NoteStore,
    content_contains,
    created_after,
    is_archived,
    title_contains,
    title_or_content_contains,
    updated_after,
)

__all__ = [
    "NoteStore",
    "content_contains",
    "created_after",
    "is_archived",
    "title_contains",
    "title_or_content_contains",
    "updated_after",
]
