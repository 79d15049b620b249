"""Prompt Composer: renders the fixed flashcard instruction template.

Composition is a pure transformation of a ``GenerationRequest``; it does no
validation, so an empty request still yields a (minimal) prompt.
"""
from typing import Any, Dict, List

from .models import GenerationRequest, PromptPayload

FLASHCARD_RULES = (
    "You are an expert at creating flashcards. Analyze the input below and produce "
    "question and answer pairs from it.\n"
    "Follow these rules strictly:\n"
    "- Make every flashcard atomic: one fact or concept per card.\n"
    "- Do not leave out any information from the source; include all content accurately and completely.\n"
    "- The user should be able to master the material and reconstruct the source from the flashcards alone.\n"
    "\n"
    "Your response MUST be a valid JSON object and nothing else.\n"
    "- The root of the object must be a single key named \"flashcards\".\n"
    "- The value of \"flashcards\" must be an array of objects.\n"
    "- Each object in the array must have a \"question\" key and an \"answer\" key.\n"
    "\n"
    "How to process the input:\n"
    "1. Formatted text: where a line starts with \"Question:\" and a following line starts with "
    "\"Answer:\", use that exact content for the flashcard.\n"
    "2. Unformatted text: generate meaningful question and answer pairs.\n"
    "3. Mixed content: handle both cases and combine all flashcards into a single array.\n"
    "4. Unwanted text: ignore anything that cannot be made into a flashcard.\n"
    "5. Images: treat attached images as part of the source material.\n"
    "\n"
    "Important:\n"
    "- Output ONLY the JSON object. Do not add introductory text such as \"Here are the flashcards\".\n"
    "- If no meaningful flashcards can be created, return an empty \"flashcards\" array.\n"
    "\n"
    "Example of a valid response:\n"
    "{\n"
    "  \"flashcards\": [\n"
    "    {\n"
    "      \"question\": \"What is the capital of France?\",\n"
    "      \"answer\": \"Paris.\"\n"
    "    }\n"
    "  ]\n"
    "}\n"
)

INPUT_TEXT_SECTION = "\nInput Text:\n{text}\n"
DOCUMENT_TEXT_SECTION = "\nText extracted from attached documents:\n{pdf_text}\n"


class PromptComposer:
    def __init__(self, rules: str = FLASHCARD_RULES):
        self.rules = rules

    def compose(self, request: GenerationRequest) -> PromptPayload:
        parts = [self.rules, INPUT_TEXT_SECTION.format(text=request.text)]
        if request.extracted_document_text:
            parts.append(DOCUMENT_TEXT_SECTION.format(pdf_text=request.extracted_document_text))
        return PromptPayload(text=''.join(parts), media=list(request.images))


def to_chat_messages(payload: PromptPayload) -> List[Dict[str, Any]]:
    """Render a payload as a single multimodal chat message (text part first)."""
    content: List[Dict[str, Any]] = [{'type': 'text', 'text': payload.text}]
    for image in payload.media:
        content.append({'type': 'image_url', 'image_url': {'url': image.uri}})
    return [{'role': 'user', 'content': content}]


def compose_prompt(request: GenerationRequest) -> PromptPayload:
    return PromptComposer().compose(request)
