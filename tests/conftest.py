import os
import pytest
from io import BytesIO
from pathlib import Path

from dotenv import load_dotenv

# load test env first
env_path = Path(__file__).resolve().parents[1] / '.env.test'
if env_path.exists():
    load_dotenv(env_path)

os.environ.setdefault('TESTING', '1')
os.environ.setdefault('LOG_TO_FILE', 'false')
os.environ.setdefault('LOG_FORMAT', 'text')

from tests.fixtures.fake_model_client import FakeModelClient  # noqa: E402
from tests.fixtures import sample_data  # noqa: E402


@pytest.fixture
def fake_client():
    # factory so each test scripts its own replies
    def _make(replies):
        return FakeModelClient(replies)
    return _make


@pytest.fixture
def clean_response():
    return sample_data.CLEAN_RESPONSE


@pytest.fixture
def source_text():
    return sample_data.SOURCE_TEXT


@pytest.fixture
def sample_image():
    from PIL import Image
    img = Image.new('RGB', (100, 100), color=(255, 255, 255))
    return img


@pytest.fixture
def sample_image_bytes(sample_image):
    buf = BytesIO()
    sample_image.save(buf, format='PNG')
    buf.seek(0)
    return buf.getvalue()


@pytest.fixture
def sample_pdf_bytes():
    return sample_data.build_text_pdf('Hello World')


@pytest.fixture
def blank_pdf_bytes():
    from PyPDF2 import PdfWriter
    w = PdfWriter()
    w.add_blank_page(width=200, height=200)
    buf = BytesIO()
    w.write(buf)
    return buf.getvalue()


@pytest.fixture
def mock_redis_client():
    from tests.fixtures.mock_redis import MockRedisClient
    return MockRedisClient()
