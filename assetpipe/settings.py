from __future__ import annotations

from pathlib import Path

from .models import AssetKind, EncodeSettings, Task

SOURCE_DIR = Path("src/assets/images")
OUTPUT_DIRS = [Path("dist/assets/images"), Path("demo/assets/images")]

TASKS: list[Task] = [Task(SOURCE_DIR, output_dir) for output_dir in OUTPUT_DIRS]

ENCODE_SETTINGS: dict[str, EncodeSettings] = {
    "jpeg": EncodeSettings(quality=80, progressive=True),
    "png": EncodeSettings(quality=80, compress_level=9),
    "webp": EncodeSettings(quality=75, method=6),
    "avif": EncodeSettings(quality=65),
}

RASTER_KINDS = frozenset({AssetKind.JPEG, AssetKind.PNG})
VERBATIM_KINDS = frozenset({AssetKind.SVG, AssetKind.GIF, AssetKind.ICO})

DERIVATIVE_FORMATS: list[tuple[str, str]] = [("webp", ".webp"), ("avif", ".avif")]
