"""Producers of prompt inputs: image references and PDF text."""

from .media import ImageUploader, MediaError
from .pdf_extractor import extract_pdf_text, extract_pdf_file, PdfExtractionError

__all__ = [
	'ImageUploader',
	'MediaError',
	'extract_pdf_text',
	'extract_pdf_file',
	'PdfExtractionError',
]
