"""Model clients used by the generators.

Clients are constructed explicitly and handed to the generators that use
them. ``OpenAIModelClient`` retries transport failures only; it never
looks at the content of a response.
"""
from __future__ import annotations

import time
from abc import ABC, abstractmethod
from typing import Any, Optional

import openai
from tenacity import Retrying, retry_if_exception_type, stop_after_attempt, wait_exponential

from flashcard_ai.config import settings
from flashcard_ai.utils import get_logger, log_error, log_llm_call
from .errors import FlashcardAPIError, FlashcardGeneratorError, FlashcardTimeoutError
from .models import PromptPayload
from .prompt_composer import to_chat_messages

LOG = get_logger()


class ModelClient(ABC):
    model: str = 'unknown'

    @abstractmethod
    def complete(self, payload: PromptPayload, *, max_tokens: int, temperature: float, request_id: Optional[str] = None, purpose: Optional[str] = None) -> str:
        """Send one prompt and return the model's free-form text."""


class OpenAIModelClient(ModelClient):
    def __init__(
        self,
        api_key: Optional[str] = None,
        model: Optional[str] = None,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        retry_attempts: Optional[int] = None,
        retry_multiplier: Optional[float] = None,
        retry_max_wait: Optional[float] = None,
        client: Any = None,
    ):
        self.model = model or settings.OPENAI_MODEL
        self.timeout = timeout if timeout is not None else settings.OPENAI_TIMEOUT
        self.retry_attempts = retry_attempts if retry_attempts is not None else settings.OPENAI_RETRY_ATTEMPTS
        self.retry_multiplier = retry_multiplier if retry_multiplier is not None else settings.OPENAI_RETRY_MULTIPLIER
        self.retry_max_wait = retry_max_wait if retry_max_wait is not None else settings.OPENAI_RETRY_MAX_WAIT
        if client is None:
            key = api_key or settings.OPENAI_API_KEY
            if not key:
                raise FlashcardGeneratorError('OPENAI_API_KEY not set')
            # retries are handled here with tenacity, not by the SDK
            client = openai.OpenAI(api_key=key, base_url=base_url or settings.OPENAI_BASE_URL, timeout=self.timeout, max_retries=0)
        self._client = client
        LOG.info('OpenAIModelClient initialized', extra={'model': self.model})

    def complete(self, payload: PromptPayload, *, max_tokens: int, temperature: float, request_id: Optional[str] = None, purpose: Optional[str] = None) -> str:
        retrying = Retrying(
            stop=stop_after_attempt(self.retry_attempts),
            wait=wait_exponential(multiplier=self.retry_multiplier, max=self.retry_max_wait),
            retry=retry_if_exception_type((FlashcardAPIError, FlashcardTimeoutError)),
            reraise=True,
        )
        for attempt in retrying:
            with attempt:
                return self._call_openai(payload, max_tokens, temperature, request_id, purpose)
        raise FlashcardAPIError('No attempt was made to call the model')

    def _call_openai(self, payload: PromptPayload, max_tokens: int, temperature: float, request_id: Optional[str], purpose: Optional[str]) -> str:
        start = time.time()
        try:
            resp = self._client.chat.completions.create(
                model=self.model,
                messages=to_chat_messages(payload),
                temperature=temperature,
                max_tokens=max_tokens,
            )
        except openai.APITimeoutError as e:
            log_error(e, {'event': 'openai_timeout', 'model': self.model, 'request_id': request_id, 'purpose': purpose})
            raise FlashcardTimeoutError(str(e)) from e
        except openai.APIError as e:
            log_error(e, {'event': 'openai_api_error', 'model': self.model, 'request_id': request_id, 'purpose': purpose})
            raise FlashcardAPIError(str(e)) from e

        duration_ms = int((time.time() - start) * 1000)
        usage = getattr(resp, 'usage', None)
        prompt_tokens = getattr(usage, 'prompt_tokens', 0) or 0
        completion_tokens = getattr(usage, 'completion_tokens', 0) or 0
        log_llm_call(request_id, self.model, prompt_tokens, completion_tokens, duration_ms, purpose=purpose)

        if not resp.choices:
            raise FlashcardAPIError('No choices returned')
        return resp.choices[0].message.content or ''
