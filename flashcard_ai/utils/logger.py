import sys
import logging
import pathlib
import contextvars
from logging.handlers import RotatingFileHandler
from pythonjsonlogger import jsonlogger

from flashcard_ai.config import settings

_request_ctx_var = contextvars.ContextVar('request_ctx', default={})


def set_request_context(request_id: str, user_id: str = None):
    _request_ctx_var.set({'request_id': request_id, 'user_id': user_id})


def get_request_context():
    return _request_ctx_var.get()


def _inject_request_context(record):
    ctx = get_request_context()
    # explicit extra={'request_id': ...} wins over the context
    if getattr(record, 'request_id', None) is None:
        record.request_id = ctx.get('request_id')
    record.user_id = ctx.get('user_id')
    return True


def get_logger(name: str = 'flashcard_ai'):
    logger = logging.getLogger(name)
    if logger.handlers:
        return logger

    logger.setLevel(settings.LOG_LEVEL.upper())

    ch = logging.StreamHandler(sys.stdout)
    if settings.LOG_FORMAT == 'json':
        fmt = jsonlogger.JsonFormatter('%(asctime)s %(levelname)s %(name)s %(message)s %(request_id)s')
    else:
        fmt = logging.Formatter('%(asctime)s %(levelname)s %(name)s %(message)s')
    ch.setFormatter(fmt)
    logger.addHandler(ch)

    if settings.LOG_TO_FILE:
        # relative paths resolve against the working directory for local dev
        log_path = pathlib.Path(settings.LOG_FILE_PATH)
        if not log_path.is_absolute():
            log_path = pathlib.Path.cwd() / log_path
        log_path.mkdir(parents=True, exist_ok=True)

        combined = RotatingFileHandler(log_path / 'combined.log', maxBytes=settings.LOG_MAX_SIZE, backupCount=settings.LOG_MAX_FILES)
        combined.setFormatter(fmt)
        logger.addHandler(combined)

        errors = RotatingFileHandler(log_path / 'error.log', maxBytes=settings.LOG_MAX_SIZE, backupCount=settings.LOG_MAX_FILES)
        errors.setLevel(logging.ERROR)
        errors.setFormatter(fmt)
        logger.addHandler(errors)

    f = logging.Filter()
    f.filter = _inject_request_context
    logger.addFilter(f)

    logging.captureWarnings(True)

    return logger


def log_error(error: Exception, context: dict = None):
    logger = get_logger()
    logger.exception('error', exc_info=True, extra={'error_type': type(error).__name__, **(context or {})})


def log_llm_call(request_id: str, model: str, prompt_tokens: int, completion_tokens: int, duration_ms: float, purpose: str = None):
    logger = get_logger()
    logger.info('llm_call', extra={'request_id': request_id, 'model': model, 'prompt_tokens': prompt_tokens, 'completion_tokens': completion_tokens, 'duration_ms': duration_ms, 'purpose': purpose})


def log_flashcard_generation(request_id: str, flashcard_count: int, repaired: bool, dropped_count: int, duration_ms: float, image_count: int = 0):
    logger = get_logger()
    logger.info('flashcard_generation', extra={
        'request_id': request_id,
        'flashcard_count': flashcard_count,
        'repaired': repaired,
        'dropped_count': dropped_count,
        'image_count': image_count,
        'duration_ms': duration_ms,
    })


def log_card_summary(request_id: str, summary_length: int, duration_ms: float, cache_hit: bool = False):
    logger = get_logger()
    logger.info('card_summary', extra={
        'request_id': request_id,
        'summary_length': summary_length,
        'duration_ms': duration_ms,
        'cache_hit': cache_hit,
    })


def log_mindmap_generation(request_id: str, card_count: int, linked_count: int, unknown_count: int, duration_ms: float):
    logger = get_logger()
    logger.info('mindmap_generation', extra={
        'request_id': request_id,
        'card_count': card_count,
        'linked_count': linked_count,
        'unknown_count': unknown_count,
        'duration_ms': duration_ms,
    })


def log_pdf_extraction(page_count: int, text_length: int, size_bytes: int, duration_ms: float):
    logger = get_logger()
    logger.info('pdf_extraction', extra={
        'page_count': page_count,
        'text_length': text_length,
        'size_bytes': size_bytes,
        'duration_ms': duration_ms,
    })
