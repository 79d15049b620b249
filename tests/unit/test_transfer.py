import json
import pytest

from flashcard_ai.cards.transfer import (
    FlashcardImportError,
    StoredFlashcard,
    assign_ids,
    export_flashcards,
    import_flashcards,
    import_flashcard_files,
    new_saved_set,
)
from flashcard_ai.generation.models import Flashcard


@pytest.mark.unit
def test_assign_ids_gives_unique_ids():
    cards = assign_ids([Flashcard(question='Q1', answer='A1'), Flashcard(question='Q1', answer='A1')])
    assert [c.question for c in cards] == ['Q1', 'Q1']
    assert len({c.id for c in cards}) == 2


@pytest.mark.unit
def test_export_is_bare_array():
    cards = [StoredFlashcard(id='1', question='Q', answer='A')]
    text = export_flashcards(cards)
    assert json.loads(text) == [{'id': '1', 'question': 'Q', 'answer': 'A'}]
    assert text.startswith('[\n  {')


@pytest.mark.unit
def test_import_reassigns_ids():
    text = json.dumps([{'id': 'old', 'question': 'Q', 'answer': 'A'}, {'question': 'Q2', 'answer': 'A2'}])
    cards = import_flashcards(text)
    assert [(c.question, c.answer) for c in cards] == [('Q', 'A'), ('Q2', 'A2')]
    assert all(c.id and c.id != 'old' for c in cards)


@pytest.mark.unit
def test_export_then_import_keeps_content():
    cards = assign_ids([Flashcard(question='Capital of Peru?', answer='Lima')])
    back = import_flashcards(export_flashcards(cards))
    assert [(c.question, c.answer) for c in back] == [('Capital of Peru?', 'Lima')]


@pytest.mark.unit
@pytest.mark.parametrize('text', [
    'not json',
    json.dumps({'flashcards': [{'question': 'Q', 'answer': 'A'}]}),
    json.dumps([{'question': 'Q', 'answer': 'A'}, {'question': 'Q2'}]),
    json.dumps([{'question': 'Q', 'answer': 7}, 'x']),
    json.dumps([{'question': 'Q', 'answer': 7}]),
])
def test_invalid_files_rejected_whole(text):
    with pytest.raises(FlashcardImportError):
        import_flashcards(text)


@pytest.mark.unit
def test_import_many_files_keeps_successes():
    report = import_flashcard_files({
        'good.json': json.dumps([{'question': 'Q', 'answer': 'A'}]),
        'bad.json': '{oops',
        'also_good.json': json.dumps([{'question': 'Q2', 'answer': 'A2'}]),
    })
    assert report.successful_files == 2
    assert list(report.failed_files) == ['bad.json']
    assert [c.question for c in report.flashcards] == ['Q', 'Q2']


def test_new_saved_set():
    cards = [StoredFlashcard(id='1', question='Q', answer='A')]
    saved = new_saved_set('Biology', cards)
    assert saved.name == 'Biology'
    assert saved.flashcards == cards
    assert saved.timestamp > 1_600_000_000_000
    assert new_saved_set('x', [], set_id='fixed').id == 'fixed'
