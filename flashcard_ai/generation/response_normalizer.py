"""Response Normalizer: raw model text -> validated flashcards.

Stages run strictly in order and every failure is terminal:

1. strip markdown code fences
2. locate the JSON object (first ``{`` to last ``}``)
3. strict parse, or one pass of the repair rules and a single re-parse
4. shape check (non-empty ``flashcards`` array)
5. drop records without a truthy question and answer
6. re-validate the filtered payload against ``FlashcardBatch``

Each stage appends one entry to the ``GenerationLog`` it is given.
"""
import json
import re
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Match, NamedTuple, Optional, Pattern, Protocol, Sequence, Tuple, Union

from pydantic import ValidationError

from flashcard_ai.utils import get_logger
from .errors import JSONParseError, MalformedOutputError, NoJsonFoundError, SchemaValidationError
from .models import FlashcardBatch, GenerationResult
from .progress import GenerationLog

LOG = get_logger()

FENCE_OPENER_RE = re.compile(r'^```[\w+-]*[ \t]*\n?')
FENCE_CLOSER = '```'


class RepairRule(NamedTuple):
    name: str
    pattern: Pattern[str]
    replacement: Union[str, Callable[[Match[str]], str]]


# Matches a whole string literal (group 1) so commas inside card text are left alone.
STRING_LITERAL = r'("(?:\\.|[^"\\])*")'


def _keep_strings(match: Match[str]) -> str:
    return match.group(1) or ''


# Applied once each, in this order, before the single re-parse.
REPAIR_RULES: Tuple[RepairRule, ...] = (
    RepairRule('trailing_comma_before_bracket', re.compile(STRING_LITERAL + r'|,\s*(?=\])'), _keep_strings),
    RepairRule('trailing_comma_before_brace', re.compile(STRING_LITERAL + r'|,\s*(?=\})'), _keep_strings),
)


def strip_code_fences(text: str) -> str:
    cleaned = text.strip()
    if cleaned.startswith(FENCE_CLOSER):
        cleaned = FENCE_OPENER_RE.sub('', cleaned, count=1)
    if cleaned.endswith(FENCE_CLOSER):
        cleaned = cleaned[:-len(FENCE_CLOSER)]
    return cleaned.strip()


def apply_repairs(text: str, rules: Sequence[RepairRule] = REPAIR_RULES) -> str:
    for rule in rules:
        text = rule.pattern.sub(rule.replacement, text)
    return text


def filter_complete_records(records: List[Any]) -> List[Dict[str, Any]]:
    return [r for r in records if isinstance(r, dict) and r.get('question') and r.get('answer')]


class JsonObjectLocator(Protocol):
    def locate(self, text: str) -> Optional[str]:
        """Return the candidate JSON object text, or None when there is none."""


class BraceSpanLocator:
    """Takes everything from the first ``{`` to the last ``}``.

    Prose around the payload must not contain braces; a single JSON object
    per response is part of the prompting contract.
    """

    def locate(self, text: str) -> Optional[str]:
        start = text.find('{')
        end = text.rfind('}')
        if start == -1 or end == -1 or end < start:
            return None
        return text[start:end + 1]


@dataclass
class NormalizationStats:
    repaired: bool = False
    received_count: int = 0
    dropped_count: int = 0


class ResponseNormalizer:
    def __init__(self, locator: Optional[JsonObjectLocator] = None, repair_rules: Sequence[RepairRule] = REPAIR_RULES):
        self.locator = locator or BraceSpanLocator()
        self.repair_rules = tuple(repair_rules)

    def normalize(self, raw_response: str, log: Optional[GenerationLog] = None) -> GenerationResult:
        result, _ = self.process(raw_response, log)
        return result

    def process(self, raw_response: str, log: Optional[GenerationLog] = None) -> Tuple[GenerationResult, NormalizationStats]:
        log = log if log is not None else GenerationLog()
        stats = NormalizationStats()

        log.append('Stripping code fences from AI response...')
        cleaned = strip_code_fences(raw_response or '')

        log.append('Locating JSON payload...')
        candidate = self.locator.locate(cleaned)
        if candidate is None:
            raise NoJsonFoundError(
                f'Failed to find valid JSON in AI response. Raw output: {raw_response}',
                raw_text=raw_response or '',
                logs=log.entries,
            )

        parsed, stats.repaired = self._parse(candidate, log)
        records = self._require_flashcards(parsed, cleaned, log)
        stats.received_count = len(records)

        log.append('Filtering incomplete flashcards...')
        kept = filter_complete_records(records)
        stats.dropped_count = len(records) - len(kept)
        if stats.dropped_count:
            LOG.debug('flashcard_records_dropped', extra={'dropped': stats.dropped_count, 'received': len(records)})
        log.append(f'Generated {len(kept)} flashcards.')
        if not kept:
            raise MalformedOutputError(
                'Every flashcard in the AI response was missing a question or an answer. Please try again.',
                raw_text=cleaned,
                logs=log.entries,
            )

        batch = self._validate(kept, cleaned, log)
        log.append('Flashcard generation complete!')
        result = GenerationResult(flashcards=batch.flashcards, raw_output=batch.raw_output, logs=list(log.entries))
        return result, stats

    def _parse(self, candidate: str, log: GenerationLog) -> Tuple[Any, bool]:
        try:
            parsed = json.loads(candidate)
        except (ValueError, RecursionError):
            log.append('Parse failed, attempting repair...')
        else:
            log.append('AI response parsed successfully.')
            return parsed, False

        repaired = apply_repairs(candidate, self.repair_rules)
        # ValueError also covers over-long integer literals, RecursionError very deep nesting
        try:
            parsed = json.loads(repaired)
        except (ValueError, RecursionError) as e:
            raise JSONParseError(
                f'Failed to parse AI response as JSON: {e}. Attempted to parse: {repaired}',
                raw_text=repaired,
                parser_message=str(e),
                logs=log.entries,
            ) from e
        LOG.debug('flashcard_parse_repaired', extra={'rules': [r.name for r in self.repair_rules]})
        log.append('Repaired JSON parsed successfully.')
        return parsed, True

    def _require_flashcards(self, parsed: Any, cleaned: str, log: GenerationLog) -> List[Any]:
        log.append('Validating flashcard list...')
        records = parsed.get('flashcards') if isinstance(parsed, dict) else None
        if not isinstance(records, list) or not records:
            raise MalformedOutputError(
                'The AI model returned a malformed or empty response. Please try again.',
                raw_text=cleaned,
                logs=log.entries,
            )
        return records

    def _validate(self, kept: List[Dict[str, Any]], cleaned: str, log: GenerationLog) -> FlashcardBatch:
        log.append('Validating flashcard schema...')
        payload = {'flashcards': kept, 'rawOutput': cleaned}
        try:
            return FlashcardBatch.model_validate(payload)
        except ValidationError as e:
            processed = json.dumps(payload)
            raise SchemaValidationError(
                f'Schema validation failed after filtering: {e}. Processed output: {processed}',
                raw_text=processed,
                detail=str(e),
                logs=log.entries,
            ) from e


def normalize_response(raw_response: str, log: Optional[GenerationLog] = None) -> GenerationResult:
    return ResponseNormalizer().normalize(raw_response, log)
