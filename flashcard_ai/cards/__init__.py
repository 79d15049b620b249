"""Flashcard identity, export/import and saved-set shapes."""

from .transfer import (
	StoredFlashcard,
	SavedFlashcardSet,
	ImportReport,
	FlashcardImportError,
	assign_ids,
	export_flashcards,
	import_flashcards,
	import_flashcard_files,
	new_saved_set,
)

__all__ = [
	'StoredFlashcard',
	'SavedFlashcardSet',
	'ImportReport',
	'FlashcardImportError',
	'assign_ids',
	'export_flashcards',
	'import_flashcards',
	'import_flashcard_files',
	'new_saved_set',
]
