"""Export/import file format and saved-set shape for flashcards.

Exported files are a bare JSON array of ``{id, question, answer}``.
Imports accept the same array with ``id`` optional; ids are always
re-assigned so imported cards never collide with existing ones.
"""
from __future__ import annotations

import json
import time
import uuid
from typing import Any, Dict, Iterable, List, Mapping, Optional

from pydantic import BaseModel, Field

from flashcard_ai.generation.models import Flashcard
from flashcard_ai.utils import get_logger

LOG = get_logger()


class FlashcardImportError(Exception):
    pass


class StoredFlashcard(BaseModel):
    id: str
    question: str
    answer: str


class SavedFlashcardSet(BaseModel):
    id: str
    name: str
    timestamp: int
    flashcards: List[StoredFlashcard] = Field(default_factory=list)


class ImportReport(BaseModel):
    flashcards: List[StoredFlashcard] = Field(default_factory=list)
    successful_files: int = 0
    failed_files: Dict[str, str] = Field(default_factory=dict)


def _new_id() -> str:
    return str(uuid.uuid4())


def assign_ids(flashcards: Iterable[Flashcard]) -> List[StoredFlashcard]:
    return [StoredFlashcard(id=_new_id(), question=c.question, answer=c.answer) for c in flashcards]


def export_flashcards(cards: Iterable[StoredFlashcard]) -> str:
    return json.dumps([c.model_dump() for c in cards], indent=2, ensure_ascii=False)


def import_flashcards(text: str) -> List[StoredFlashcard]:
    try:
        data: Any = json.loads(text)
    except (json.JSONDecodeError, TypeError) as e:
        raise FlashcardImportError('Error parsing file. Please ensure it is valid JSON.') from e
    if not isinstance(data, list) or not all(isinstance(c, dict) and c.get('question') and c.get('answer') for c in data):
        raise FlashcardImportError('Invalid format. Please ensure it is a valid flashcards JSON file.')
    try:
        return [StoredFlashcard(id=_new_id(), question=c['question'], answer=c['answer']) for c in data]
    except ValueError as e:
        raise FlashcardImportError(f'Invalid flashcard values: {e}') from e


def import_flashcard_files(files: Mapping[str, str]) -> ImportReport:
    """Import several exported files, keeping the successes of a partial batch."""
    report = ImportReport()
    for name, text in files.items():
        try:
            cards = import_flashcards(text)
        except FlashcardImportError as e:
            report.failed_files[name] = str(e)
            continue
        report.flashcards.extend(cards)
        report.successful_files += 1
    LOG.info('flashcard_import', extra={
        'successful_files': report.successful_files,
        'failed_files': len(report.failed_files),
        'flashcard_count': len(report.flashcards),
    })
    return report


def new_saved_set(name: str, flashcards: Iterable[StoredFlashcard], set_id: Optional[str] = None) -> SavedFlashcardSet:
    return SavedFlashcardSet(
        id=set_id or _new_id(),
        name=name,
        timestamp=int(time.time() * 1000),
        flashcards=list(flashcards),
    )
