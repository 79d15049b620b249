import base64
import pytest

from flashcard_ai.documents.media import ImageUploader, MediaError


@pytest.mark.unit
def test_upload_returns_data_uri(sample_image_bytes):
    ref = ImageUploader().upload(sample_image_bytes, 'image/png')
    assert ref.content_type == 'image/png'
    assert ref.uri.startswith('data:image/png;base64,')
    assert base64.b64decode(ref.uri.split(',', 1)[1]) == sample_image_bytes


@pytest.mark.unit
def test_same_bytes_give_same_uri(sample_image_bytes):
    up = ImageUploader()
    assert up.upload(sample_image_bytes, 'image/png').uri == up.upload(sample_image_bytes, 'IMAGE/PNG').uri


@pytest.mark.unit
@pytest.mark.parametrize('content_type', ['application/pdf', 'image/tiff', '', 'text/plain'])
def test_unsupported_types_rejected(sample_image_bytes, content_type):
    with pytest.raises(MediaError):
        ImageUploader().upload(sample_image_bytes, content_type)


@pytest.mark.unit
def test_oversize_rejected(sample_image_bytes):
    up = ImageUploader(max_size_mb=0)
    with pytest.raises(MediaError) as exc:
        up.upload(sample_image_bytes, 'image/png')
    assert 'too large' in str(exc.value)


@pytest.mark.unit
def test_undecodable_bytes_rejected():
    with pytest.raises(MediaError):
        ImageUploader().upload(b'definitely not an image', 'image/png')


@pytest.mark.unit
def test_upload_file_guesses_mime(tmp_path, sample_image):
    path = tmp_path / 'figure.jpg'
    sample_image.save(path, format='JPEG')
    ref = ImageUploader().upload_file(str(path))
    assert ref.content_type == 'image/jpeg'


def test_upload_missing_file(tmp_path):
    with pytest.raises(MediaError):
        ImageUploader().upload_file(str(tmp_path / 'missing.png'))
