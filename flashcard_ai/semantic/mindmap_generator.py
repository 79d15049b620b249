import json
import re
import time
from typing import Any, Dict, List, Optional, Sequence

from pydantic import BaseModel, Field

from flashcard_ai.cards.transfer import StoredFlashcard
from flashcard_ai.config import settings
from flashcard_ai.generation.model_client import ModelClient
from flashcard_ai.generation.models import PromptPayload
from flashcard_ai.generation.response_normalizer import strip_code_fences
from flashcard_ai.utils import get_logger, log_mindmap_generation

LOG = get_logger()

CARD_LINK_RE = re.compile(r'\]\(flashcard://([^)\s]+)\)')


class MindmapGeneratorError(Exception):
    pass


class MindmapResult(BaseModel):
    markdown: str
    linked_card_ids: List[str] = Field(default_factory=list)
    unknown_card_ids: List[str] = Field(default_factory=list)
    metadata: Dict[str, Any] = Field(default_factory=dict)


class MindmapGenerator:
    def __init__(self, client: ModelClient, max_tokens: Optional[int] = None, temperature: Optional[float] = None):
        self.client = client
        self.max_tokens = max_tokens or settings.MINDMAP_MAX_TOKENS
        self.temperature = temperature if temperature is not None else settings.MINDMAP_TEMPERATURE

    def _build_prompt(self, cards: Sequence[StoredFlashcard]) -> str:
        cards_json = json.dumps([c.model_dump() for c in cards], ensure_ascii=False)
        return (
            "You are an expert at creating mind maps in Markdown format.\n"
            "Analyze the following flashcards and generate a mind map that represents the relationships "
            "between their concepts in a clear, hierarchical and logical manner.\n\n"
            "Instructions:\n"
            "1. Do not leave out any information from the flashcards.\n"
            "2. Identify the overarching topic and make it the central theme (the root).\n"
            "3. Use Markdown headings (#, ##, ###, ...) for the hierarchy.\n"
            "4. Keep every label a brief, descriptive phrase or keyword.\n"
            "5. Every node must be a link containing the flashcard id, for example: "
            "[Flashcard Title](flashcard://<flashcard_id>)\n\n"
            "Your response MUST be Markdown and nothing else.\n\n"
            f"Flashcards:\n{cards_json}\n"
        )

    def _collect_links(self, markdown: str, known_ids: set):
        linked: List[str] = []
        unknown: List[str] = []
        for card_id in CARD_LINK_RE.findall(markdown):
            bucket = linked if card_id in known_ids else unknown
            if card_id not in bucket:
                bucket.append(card_id)
        return linked, unknown

    def generate(self, cards: Sequence[StoredFlashcard], request_id: Optional[str] = None) -> MindmapResult:
        if not cards:
            raise MindmapGeneratorError('At least one flashcard is required to build a mind map')
        start = time.time()
        payload = PromptPayload(text=self._build_prompt(cards))
        raw = self.client.complete(payload, max_tokens=self.max_tokens, temperature=self.temperature, request_id=request_id, purpose='mindmap')
        markdown = strip_code_fences(raw)
        if not markdown:
            raise MindmapGeneratorError('Model returned an empty mind map')

        linked, unknown = self._collect_links(markdown, {c.id for c in cards})
        if unknown:
            LOG.warning('mindmap_unknown_card_links', extra={'request_id': request_id, 'unknown_card_ids': unknown})
        duration_ms = int((time.time() - start) * 1000)
        log_mindmap_generation(request_id, len(cards), len(linked), len(unknown), duration_ms)
        metadata = {'processing_time_ms': duration_ms, 'model_used': self.client.model, 'card_count': len(cards)}
        return MindmapResult(markdown=markdown, linked_card_ids=linked, unknown_card_ids=unknown, metadata=metadata)


def generate_mindmap(cards: Sequence[StoredFlashcard], client: ModelClient, request_id: Optional[str] = None) -> Dict[str, Any]:
    res = MindmapGenerator(client).generate(cards, request_id=request_id)
    return res.model_dump()
