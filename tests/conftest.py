import pytest
import sys
from pathlib import Path
from PIL import Image

# Add src to sys.path so we can import handwriting_toolkit
SRC_PATH = Path(__file__).resolve().parent.parent / "src"
if SRC_PATH.as_posix() not in sys.path:
    sys.path.insert(0, SRC_PATH.as_posix())

from handwriting_toolkit.core.models import HandwritingStyle, PageConfig  # noqa: E402
from handwriting_toolkit.core.utils.random_source import ConstantRandom  # noqa: E402


# Common test fixtures
@pytest.fixture
def still_style():
    """A style with every random effect switched off."""
    return HandwritingStyle(
        font="DejaVuSans",
        size=24.0,
        color="#000000",
        perturbation=0.0,
        rotation=0.0,
        slant=0.0,
        baseline_shift=0.0,
    )


@pytest.fixture
def handwriting_style():
    """A visibly messy style."""
    return HandwritingStyle(
        font="DejaVuSans",
        size=24.0,
        color="#000000",
        perturbation=2.0,
        rotation=4.0,
        slant=0.0,
        baseline_shift=2.0,
    )


@pytest.fixture
def page_config():
    """Default A4 ruled page."""
    return PageConfig()


@pytest.fixture
def small_page():
    """Small page that keeps full-pipeline tests fast."""
    return PageConfig(width=400, height=300, margin_left=40, margin_top=80)


@pytest.fixture
def constant_rng():
    """Random source whose symmetric draws are all zero."""
    return ConstantRandom(0.5)


@pytest.fixture
def white_surface(page_config):
    """Blank white RGB surface of the default page size."""
    return Image.new("RGB", page_config.size, "white")


@pytest.fixture
def sample_image(tmp_path: Path):
    """Create a blank test image on disk."""
    img = Image.new("RGB", (200, 100), color="white")
    img_path = tmp_path / "sample.png"
    img.save(img_path)
    return img_path
