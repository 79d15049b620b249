"""PDF text extraction for use as auxiliary prompt context.

Extraction is best effort: page order is kept, layout is not. A document
with no extractable text yields an empty string rather than an error.
"""
import io
import pathlib
import time
from typing import Optional

from PyPDF2 import PdfReader

from flashcard_ai.config import settings
from flashcard_ai.utils import get_logger, log_pdf_extraction

LOG = get_logger()


class PdfExtractionError(Exception):
    pass


def extract_pdf_text(data: bytes, max_size_mb: Optional[int] = None) -> str:
    max_size_mb = max_size_mb if max_size_mb is not None else settings.MAX_PDF_SIZE_MB
    if not data:
        raise PdfExtractionError('Empty PDF')
    if len(data) > max_size_mb * 1024 * 1024:
        raise PdfExtractionError(f'PDF too large (max {max_size_mb} MB)')

    start = time.time()
    try:
        reader = PdfReader(io.BytesIO(data))
        if reader.is_encrypted and not reader.decrypt(''):
            raise PdfExtractionError('PDF is encrypted')
        pages = list(reader.pages)
    except PdfExtractionError:
        raise
    except Exception as e:
        LOG.exception('pdf_read_failed', exc_info=True)
        raise PdfExtractionError(f'Failed to process PDF: {e}') from e

    parts = []
    for index, page in enumerate(pages):
        try:
            text = page.extract_text() or ''
        except Exception:
            LOG.warning('pdf_page_extract_failed', extra={'page': index}, exc_info=True)
            text = ''
        if text:
            parts.append(text)

    result = '\n'.join(parts)
    log_pdf_extraction(len(pages), len(result), len(data), int((time.time() - start) * 1000))
    return result


def extract_pdf_file(file_path: str, max_size_mb: Optional[int] = None) -> str:
    path = pathlib.Path(file_path)
    if not path.exists():
        raise PdfExtractionError(f'File does not exist: {file_path}')
    return extract_pdf_text(path.read_bytes(), max_size_mb=max_size_mb)
