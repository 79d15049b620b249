"""Pydantic models shared by the flashcard generation pipeline.

The wire shape of a result is ``{flashcards, rawOutput, logs}``; Python
code uses ``raw_output`` and serialises with ``by_alias=True``.
"""
from typing import List

from pydantic import BaseModel, ConfigDict, Field


class ImageReference(BaseModel):
    """Handle to an already uploaded image; the pipeline never owns the bytes."""
    model_config = ConfigDict(populate_by_name=True)

    uri: str = Field(..., min_length=1)
    content_type: str = Field(..., alias='contentType', min_length=1)


class GenerationRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    text: str = ''
    images: List[ImageReference] = Field(default_factory=list)
    extracted_document_text: str = Field('', alias='extractedDocumentText')


class Flashcard(BaseModel):
    model_config = ConfigDict(extra='ignore')

    question: str = Field(..., min_length=1)
    answer: str = Field(..., min_length=1)


class FlashcardBatch(BaseModel):
    """Post-filter payload checked by the final schema validation stage."""
    model_config = ConfigDict(populate_by_name=True)

    flashcards: List[Flashcard]
    raw_output: str = Field(..., alias='rawOutput')


class GenerationResult(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    flashcards: List[Flashcard]
    raw_output: str = Field(..., alias='rawOutput')
    logs: List[str] = Field(default_factory=list)


class PromptPayload(BaseModel):
    """Rendered prompt: one text segment plus zero or more inline media parts."""
    text: str
    media: List[ImageReference] = Field(default_factory=list)
