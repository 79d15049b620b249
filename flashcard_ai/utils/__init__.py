"""Utility subpackage for flashcard AI modules"""

from .logger import (
	get_logger,
	log_error,
	log_llm_call,
	log_flashcard_generation,
	log_card_summary,
	log_mindmap_generation,
	log_pdf_extraction,
	set_request_context,
	get_request_context,
)

__all__ = [
	'get_logger',
	'log_error',
	'log_llm_call',
	'log_flashcard_generation',
	'log_card_summary',
	'log_mindmap_generation',
	'log_pdf_extraction',
	'set_request_context',
	'get_request_context',
]
