from __future__ import annotations

import time
from typing import Optional

from flashcard_ai.config import settings
from flashcard_ai.generation.model_client import ModelClient
from flashcard_ai.generation.models import PromptPayload
from flashcard_ai.generation.response_normalizer import strip_code_fences
from flashcard_ai.utils import get_logger, log_card_summary

from .cache_manager import CacheManager

LOG = get_logger()


class SummarizerError(Exception):
    pass


class CardSummarizer:
    """Condenses one flashcard into a short Markdown study note."""

    def __init__(self, client: ModelClient, cache: Optional[CacheManager] = None, max_tokens: Optional[int] = None, temperature: Optional[float] = None):
        self.client = client
        self.cache = cache
        self.max_tokens = max_tokens or settings.SUMMARIZER_MAX_TOKENS
        self.temperature = temperature if temperature is not None else settings.SUMMARIZER_TEMPERATURE

    def _build_prompt(self, question: str, answer: str) -> str:
        return (
            "You are an expert in creating highly concise and effective study notes.\n"
            "A user has a flashcard with the following question and answer:\n"
            f"Question: {question}\n"
            f"Answer: {answer}\n\n"
            "Write a summary that is extremely straight to the point and captures only the essential information. "
            "Lose no crucial information but remove any redundancy. "
            "Highlight the most important keywords, values and key terms using Markdown (bold, italics, lists). "
            "Only provide the summarized note, with no introduction or conclusion."
        )

    def summarize(self, question: str, answer: str, request_id: Optional[str] = None) -> str:
        if not question or not answer:
            raise SummarizerError('Missing question or answer')

        if self.cache:
            cached = self.cache.get_summary(question, answer)
            if cached and cached.get('summary'):
                log_card_summary(request_id, len(cached['summary']), 0, cache_hit=True)
                return cached['summary']

        start = time.time()
        payload = PromptPayload(text=self._build_prompt(question, answer))
        raw = self.client.complete(payload, max_tokens=self.max_tokens, temperature=self.temperature, request_id=request_id, purpose='card_summary')
        summary = strip_code_fences(raw)
        if not summary:
            raise SummarizerError('Model returned an empty summary')

        if self.cache:
            self.cache.set_summary(question, answer, {'summary': summary})
        log_card_summary(request_id, len(summary), int((time.time() - start) * 1000), cache_hit=False)
        return summary
