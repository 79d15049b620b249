import pytest

from flashcard_ai.generation.generator import FlashcardGenerator, generate_flashcards
from flashcard_ai.generation.models import GenerationRequest, ImageReference
from flashcard_ai.generation.errors import (
    FlashcardAPIError,
    FlashcardInputError,
    MalformedOutputError,
    NoJsonFoundError,
)
from tests.fixtures.sample_data import CLEAN_CARDS


@pytest.mark.unit
def test_generate_returns_result_with_full_log(fake_client, clean_response, source_text):
    client = fake_client(clean_response)
    result = FlashcardGenerator(client).generate(GenerationRequest(text=source_text), request_id='req-1')
    assert [c.model_dump() for c in result.flashcards] == CLEAN_CARDS
    assert result.logs[:2] == ['Sending text to AI...', 'Received response from AI. Parsing...']
    assert result.logs[-1] == 'Flashcard generation complete!'
    call = client.calls[0]
    assert call['request_id'] == 'req-1'
    assert call['purpose'] == 'flashcards'
    assert source_text in call['payload'].text


@pytest.mark.unit
def test_generation_settings_are_passed_to_client(fake_client, clean_response, source_text):
    client = fake_client(clean_response)
    FlashcardGenerator(client, max_tokens=123, temperature=0.1).generate(GenerationRequest(text=source_text))
    assert client.calls[0]['max_tokens'] == 123
    assert client.calls[0]['temperature'] == 0.1


@pytest.mark.unit
def test_short_text_is_rejected_before_model_call(fake_client, clean_response):
    client = fake_client(clean_response)
    with pytest.raises(FlashcardInputError):
        FlashcardGenerator(client).generate(GenerationRequest(text='   too short   '))
    assert client.calls == []


@pytest.mark.unit
def test_images_allow_empty_text(fake_client, clean_response):
    client = fake_client(clean_response)
    req = GenerationRequest(images=[ImageReference(uri='https://cdn.test/a.png', content_type='image/png')])
    result = FlashcardGenerator(client).generate(req)
    assert len(result.flashcards) == 2
    assert client.calls[0]['payload'].media == req.images


@pytest.mark.unit
def test_failure_carries_progress_log(fake_client, source_text):
    client = fake_client('I cannot help with that.')
    with pytest.raises(NoJsonFoundError) as exc:
        FlashcardGenerator(client).generate(GenerationRequest(text=source_text))
    assert exc.value.logs == (
        'Sending text to AI...',
        'Received response from AI. Parsing...',
        'Stripping code fences from AI response...',
        'Locating JSON payload...',
    )


@pytest.mark.unit
def test_transport_failure_carries_progress_log(fake_client, source_text):
    client = fake_client(FlashcardAPIError('boom'))
    with pytest.raises(FlashcardAPIError) as exc:
        FlashcardGenerator(client).generate(GenerationRequest(text=source_text))
    assert exc.value.logs == ('Sending text to AI...',)


@pytest.mark.unit
def test_empty_card_list_is_a_failure(fake_client, source_text):
    client = fake_client('{"flashcards": []}')
    with pytest.raises(MalformedOutputError):
        FlashcardGenerator(client).generate(GenerationRequest(text=source_text))


@pytest.mark.unit
def test_each_call_is_independent(fake_client, clean_response, source_text):
    client = fake_client(['no json here', clean_response])
    gen = FlashcardGenerator(client)
    with pytest.raises(NoJsonFoundError):
        gen.generate(GenerationRequest(text=source_text))
    result = gen.generate(GenerationRequest(text=source_text))
    assert result.logs[0] == 'Sending text to AI...'
    assert result.logs.count('Sending text to AI...') == 1


@pytest.mark.unit
def test_generate_flashcards_returns_wire_shape(fake_client, clean_response, source_text):
    out = generate_flashcards(GenerationRequest(text=source_text), fake_client(clean_response))
    assert set(out) == {'flashcards', 'rawOutput', 'logs'}
    assert out['flashcards'] == CLEAN_CARDS
    assert out['rawOutput'] == clean_response
