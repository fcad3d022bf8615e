import io
import json
import pytest
import sys
from pathlib import Path
from PIL import Image

# Add src to sys.path so we can import picture_toolkit
SRC_PATH = Path(__file__).resolve().parent.parent / "src"
if SRC_PATH.as_posix() not in sys.path:
    sys.path.insert(0, SRC_PATH.as_posix())


# Common test fixtures
@pytest.fixture
def jpeg_bytes() -> bytes:
    """Encoded 200x150 JPEG."""
    img = Image.new("RGB", (200, 150), color=(200, 80, 40))
    buffer = io.BytesIO()
    img.save(buffer, format="JPEG")
    return buffer.getvalue()


@pytest.fixture
def sample_jpeg(tmp_path: Path, jpeg_bytes: bytes) -> Path:
    """Create a 200x150 JPEG test image."""
    img_path = tmp_path / "sample.jpg"
    img_path.write_bytes(jpeg_bytes)
    return img_path


@pytest.fixture
def sample_png(tmp_path: Path) -> Path:
    """Create a 200x100 PNG test image with transparency."""
    img = Image.new("RGBA", (200, 100), color=(0, 120, 255, 128))
    img_path = tmp_path / "sample.png"
    img.save(img_path)
    return img_path


@pytest.fixture
def definitions_dir(tmp_path: Path) -> Path:
    """Directory holding a 'thumb' and a 'hero' definition file."""
    directory = tmp_path / "definitions"
    directory.mkdir()
    thumb = {
        "img": {
            "src": {"width": 50},
            "srcset": None,
            "attributes": {"alt": "Thumb"},
        },
        "sources": [],
        "attributes": {},
        "options": {},
    }
    hero = {
        "img": {
            "src": {"width": 120, "height": 60},
            "srcset": [{"width": 240, "descriptor": "2x"}],
            "attributes": {},
        },
        "sources": [
            {
                "srcset": [{"width": 100}],
                "attributes": {"media": "(min-width: 800px)", "type": "image/webp"},
            }
        ],
        "attributes": {"class": "hero"},
        "options": {"quality": {"image/webp": 70}},
    }
    (directory / "thumb.json").write_text(json.dumps(thumb))
    (directory / "hero.json").write_text(json.dumps(hero))
    return directory
