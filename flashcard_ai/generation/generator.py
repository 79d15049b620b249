from __future__ import annotations

import time
from typing import Any, Dict, Optional

from flashcard_ai.config import settings
from flashcard_ai.utils import get_logger, log_flashcard_generation
from .errors import FlashcardGeneratorError, FlashcardInputError
from .model_client import ModelClient
from .models import GenerationRequest, GenerationResult
from .progress import GenerationLog
from .prompt_composer import PromptComposer
from .response_normalizer import ResponseNormalizer

LOG = get_logger()


class FlashcardGenerator:
    """Runs one generation: compose prompt, call the model, normalize the reply.

    The generator holds no per-request state, so one instance can serve
    concurrent calls as long as its model client can.
    """

    def __init__(
        self,
        client: ModelClient,
        composer: Optional[PromptComposer] = None,
        normalizer: Optional[ResponseNormalizer] = None,
        max_tokens: Optional[int] = None,
        temperature: Optional[float] = None,
        min_text_length: Optional[int] = None,
    ):
        self.client = client
        self.composer = composer or PromptComposer()
        self.normalizer = normalizer or ResponseNormalizer()
        self.max_tokens = max_tokens if max_tokens is not None else settings.FLASHCARD_MAX_TOKENS
        self.temperature = temperature if temperature is not None else settings.FLASHCARD_TEMPERATURE
        self.min_text_length = min_text_length if min_text_length is not None else settings.FLASHCARD_MIN_TEXT_LENGTH

    def check_request(self, request: GenerationRequest) -> None:
        if request.images:
            return
        if len(request.text.strip()) < self.min_text_length:
            raise FlashcardInputError('Text is too short. Please provide more text to generate flashcards.', raw_text=request.text)

    def generate(self, request: GenerationRequest, request_id: Optional[str] = None) -> GenerationResult:
        self.check_request(request)
        log = GenerationLog()
        start = time.time()
        try:
            log.append('Sending text to AI...')
            payload = self.composer.compose(request)
            raw = self.client.complete(
                payload,
                max_tokens=self.max_tokens,
                temperature=self.temperature,
                request_id=request_id,
                purpose='flashcards',
            )
            log.append('Received response from AI. Parsing...')
            result, stats = self.normalizer.process(raw, log)
        except FlashcardGeneratorError as e:
            e.logs = log.entries
            LOG.warning('flashcard_generation_failed', extra={'request_id': request_id, 'error_type': type(e).__name__, 'error': e.message})
            raise

        duration_ms = int((time.time() - start) * 1000)
        log_flashcard_generation(request_id, len(result.flashcards), stats.repaired, stats.dropped_count, duration_ms, image_count=len(request.images))
        return result


def generate_flashcards(request: GenerationRequest, client: ModelClient, request_id: Optional[str] = None) -> Dict[str, Any]:
    gen = FlashcardGenerator(client)
    result = gen.generate(request, request_id=request_id)
    return result.model_dump(by_alias=True)
