from pathlib import Path

import pytest
from PIL import Image, ImageDraw

from assetpipe.models import Task


def make_image(path: Path, mode: str = "RGB", size: tuple[int, int] = (64, 48)) -> Path:
    """Write a small deterministic test image; the format follows the suffix."""
    path.parent.mkdir(parents=True, exist_ok=True)
    background = (30, 120, 200, 128) if mode == "RGBA" else (30, 120, 200)
    image = Image.new(mode, size, background)
    draw = ImageDraw.Draw(image)
    draw.rectangle((8, 8, size[0] - 8, size[1] - 8), fill=(240, 200, 40) if mode == "RGB" else (240, 200, 40, 255))
    draw.line((0, 0, size[0], size[1]), fill=(10, 10, 10) if mode == "RGB" else (10, 10, 10, 255), width=3)
    image.save(path)
    return path


def write_bytes(path: Path, data: bytes) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(data)
    return path


SVG_BYTES = b'<svg xmlns="http://www.w3.org/2000/svg" width="4" height="4"><rect width="4" height="4"/></svg>\n'


@pytest.fixture
def input_dir(tmp_path):
    path = tmp_path / "src" / "assets" / "images"
    path.mkdir(parents=True)
    return path


@pytest.fixture
def task(tmp_path, input_dir):
    return Task(input_dir, tmp_path / "dist" / "assets" / "images")


@pytest.fixture
def messages():
    return []
