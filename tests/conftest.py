import pytest
import sys
from pathlib import Path
from PIL import Image

# Add src to sys.path so we can import pairframe
SRC_PATH = Path(__file__).resolve().parent.parent / "src"
if SRC_PATH.as_posix() not in sys.path:
    sys.path.insert(0, SRC_PATH.as_posix())

from pairframe.compositor import CompositorConfig
from pairframe.core.models import SourcePhoto


# Common test fixtures
@pytest.fixture
def fast_config():
    """Default geometry without the pause between composites."""
    return CompositorConfig(yield_interval_s=0)


@pytest.fixture
def photo_factory(tmp_path: Path):
    """Create solid-colour photos on disk and wrap them as SourcePhotos."""
    def _create(
        name: str,
        size: tuple[int, int] = (960, 1080),
        color: str = "red",
        folder: str = "photos",
        transform=None,
    ) -> SourcePhoto:
        directory = tmp_path / folder
        directory.mkdir(parents=True, exist_ok=True)
        path = directory / name
        Image.new("RGB", size, color=color).save(path)
        return SourcePhoto.from_path(path, transform)
    return _create


@pytest.fixture
def sample_image(tmp_path: Path):
    """Create a simple test image."""
    img = Image.new("RGB", (200, 100), color="white")
    img_path = tmp_path / "sample.png"
    img.save(img_path)
    return img_path
