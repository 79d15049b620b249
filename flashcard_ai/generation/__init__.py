"""
Flashcard generation pipeline: prompt composition, model call and
normalization of the model's free-form reply into validated flashcards.
"""
from .models import ImageReference, GenerationRequest, Flashcard, FlashcardBatch, GenerationResult, PromptPayload
from .errors import (
	FlashcardGeneratorError,
	FlashcardInputError,
	FlashcardAPIError,
	FlashcardTimeoutError,
	NoJsonFoundError,
	JSONParseError,
	MalformedOutputError,
	SchemaValidationError,
)
from .progress import GenerationLog
from .prompt_composer import PromptComposer, compose_prompt, to_chat_messages
from .response_normalizer import (
	ResponseNormalizer,
	BraceSpanLocator,
	JsonObjectLocator,
	RepairRule,
	REPAIR_RULES,
	NormalizationStats,
	normalize_response,
	strip_code_fences,
)
from .model_client import ModelClient, OpenAIModelClient
from .generator import FlashcardGenerator, generate_flashcards

__all__ = [
	'ImageReference', 'GenerationRequest', 'Flashcard', 'FlashcardBatch', 'GenerationResult', 'PromptPayload',
	'FlashcardGeneratorError', 'FlashcardInputError', 'FlashcardAPIError', 'FlashcardTimeoutError',
	'NoJsonFoundError', 'JSONParseError', 'MalformedOutputError', 'SchemaValidationError',
	'GenerationLog',
	'PromptComposer', 'compose_prompt', 'to_chat_messages',
	'ResponseNormalizer', 'BraceSpanLocator', 'JsonObjectLocator', 'RepairRule', 'REPAIR_RULES',
	'NormalizationStats', 'normalize_response', 'strip_code_fences',
	'ModelClient', 'OpenAIModelClient',
	'FlashcardGenerator', 'generate_flashcards',
]
