import base64
import hashlib
import io
import mimetypes
import pathlib
from typing import Iterable, Optional

from PIL import Image, UnidentifiedImageError

from flashcard_ai.config import settings
from flashcard_ai.generation.models import ImageReference
from flashcard_ai.utils import get_logger

LOG = get_logger()


class MediaError(Exception):
    """Raised when an image cannot be turned into a prompt reference."""


class ImageUploader:
    """Turns image bytes into an ``ImageReference`` usable in a prompt.

    The reference is a base64 ``data:`` URI, so the same bytes always give
    the same URI and nothing has to be stored server side.
    """

    def __init__(self, max_size_mb: Optional[int] = None, supported_formats: Optional[Iterable[str]] = None):
        self.max_size_mb = max_size_mb if max_size_mb is not None else settings.MAX_IMAGE_SIZE_MB
        self.max_size_bytes = self.max_size_mb * 1024 * 1024
        formats = supported_formats if supported_formats is not None else settings.supported_image_formats
        self.supported_formats = [f.lower() for f in formats]

    def validate(self, data: bytes, content_type: str):
        if not data:
            return False, 'Empty image'
        if len(data) > self.max_size_bytes:
            return False, f'Image too large (max {self.max_size_mb} MB)'
        major, _, subtype = (content_type or '').lower().partition('/')
        if major != 'image' or subtype not in self.supported_formats:
            return False, f'Unsupported MIME type: {content_type}'
        try:
            with Image.open(io.BytesIO(data)) as img:
                img.verify()
        except (UnidentifiedImageError, OSError, SyntaxError) as e:
            return False, f'Image could not be decoded: {e}'
        return True, None

    def upload(self, data: bytes, content_type: str) -> ImageReference:
        valid, err = self.validate(data, content_type)
        if not valid:
            raise MediaError(err)
        content_type = content_type.lower()
        encoded = base64.b64encode(data).decode('ascii')
        ref = ImageReference(uri=f'data:{content_type};base64,{encoded}', content_type=content_type)
        LOG.info('image_reference_created', extra={
            'content_type': content_type,
            'size_bytes': len(data),
            'sha256': hashlib.sha256(data).hexdigest()[:16],
        })
        return ref

    def upload_file(self, file_path: str, content_type: Optional[str] = None) -> ImageReference:
        path = pathlib.Path(file_path)
        if not path.exists():
            raise MediaError(f'File does not exist: {file_path}')
        if content_type is None:
            content_type, _ = mimetypes.guess_type(path.name)
        return self.upload(path.read_bytes(), content_type or '')
