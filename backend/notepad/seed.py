"""
Notepad Backend — Sample Data Seeding
======================================

What:  Replaces the contents of the notes table with five sample notes.
Why:   Gives a fresh deployment or a demo something to list, search and toggle.
How:   Clears every row, then inserts the samples in order through NoteStore.
       "Ideas" is inserted already archived.
When:  At startup when SEED_SAMPLE_DATA=true, or called directly:

    async with async_session_factory() as session:
        await seed_sample_notes(session)
        await session.commit()

The caller owns the transaction; this module only flushes.
"""

import logging
from typing import List, NamedTuple

from sqlalchemy.ext.asyncio import AsyncSession

from notepad.models.note import Note
from notepad.store import NoteStore

logger = logging.getLogger(__name__)


class SampleNote(NamedTuple):
    title: str
    content: str
    archived: bool = False


SAMPLE_NOTES: List[SampleNote] = [
    SampleNote(
        "Welcome Note",
        "Welcome to your new notepad application! This is your first note.",
    ),
    SampleNote(
        "Shopping List",
        "Milk\nBread\nEggs\nButter\nCheese",
    ),
    SampleNote(
        "Meeting Notes",
        "Team meeting scheduled for Friday at 2 PM.\nAgenda:\n"
        "- Project updates\n- New features discussion\n- Q&A session",
    ),
    SampleNote(
        "Ideas",
        "App ideas:\n- Task manager\n- Recipe book\n- Travel planner\n- Budget tracker",
        archived=True,
    ),
    SampleNote(
        "Quick Reminder",
        "Don't forget to:\n- Call mom\n- Pay bills\n- Buy groceries\n"
        "- Schedule dentist appointment",
    ),
]


async def seed_sample_notes(session: AsyncSession) -> List[Note]:
    """Clear all notes and insert SAMPLE_NOTES. Returns the inserted notes."""
    store = NoteStore(session)

    removed = await store.clear()
    if removed:
        logger.info("Cleared %d existing notes before seeding", removed)

    notes: List[Note] = []
    for sample in SAMPLE_NOTES:
        notes.append(await store.create(sample.title, sample.content, archived=sample.archived))

    logger.info("Sample notes created. Total notes: %d", await store.count_where())
    return notes
