"""Error taxonomy for flashcard generation.

Every error carries the offending text (``raw_text``) and the progress
entries recorded before the failure (``logs``) so callers can show a
message and, optionally, a debug view of the model output.
"""
from typing import Iterable, Optional


class FlashcardGeneratorError(Exception):
    def __init__(self, message: str, raw_text: str = '', logs: Optional[Iterable[str]] = None):
        super().__init__(message)
        self.message = message
        self.raw_text = raw_text
        self.logs = tuple(logs or ())


class FlashcardInputError(FlashcardGeneratorError):
    pass


class FlashcardAPIError(FlashcardGeneratorError):
    pass


class FlashcardTimeoutError(FlashcardGeneratorError):
    pass


class NoJsonFoundError(FlashcardGeneratorError):
    pass


class JSONParseError(FlashcardGeneratorError):
    def __init__(self, message: str, raw_text: str = '', parser_message: str = '', logs: Optional[Iterable[str]] = None):
        super().__init__(message, raw_text=raw_text, logs=logs)
        self.parser_message = parser_message


class MalformedOutputError(FlashcardGeneratorError):
    pass


class SchemaValidationError(FlashcardGeneratorError):
    def __init__(self, message: str, raw_text: str = '', detail: str = '', logs: Optional[Iterable[str]] = None):
        super().__init__(message, raw_text=raw_text, logs=logs)
        self.detail = detail
