from __future__ import annotations

from pathlib import Path
from typing import Callable, Iterable

from PIL import Image

from .models import AssetKind, EncodeSettings, FileEntry, FileResult, Task, resolve_output_path
from .settings import DERIVATIVE_FORMATS, ENCODE_SETTINGS

Encoder = Callable[[Image.Image, Path, EncodeSettings], None]
ENCODE_ERRORS = (OSError, ValueError, Image.DecompressionBombError)

_ENCODER_REGISTRY: dict[str, Encoder] = {}
_ORIGINAL_FORMATS: dict[AssetKind, str] = {
    AssetKind.JPEG: "jpeg",
    AssetKind.PNG: "png",
}


def optimize_files(
    files: Iterable[FileEntry],
    task: Task,
    settings: dict[str, EncodeSettings] | None = None,
    log: Callable[[str], None] = print,
) -> list[FileResult]:
    results = []
    for entry in files:
        results.append(optimize_file(entry, task, settings, log))
    return results


def optimize_file(
    entry: FileEntry,
    task: Task,
    settings: dict[str, EncodeSettings] | None = None,
    log: Callable[[str], None] = print,
) -> FileResult:
    settings = settings or ENCODE_SETTINGS
    registry = get_encoder_registry()
    source = entry.path
    outputs: list[Path] = []
    original_format = _ORIGINAL_FORMATS[entry.kind]
    output = resolve_output_path(source, task)
    try:
        output.parent.mkdir(parents=True, exist_ok=True)
        original_size = source.stat().st_size
        with Image.open(source) as decoded:
            decoded.load()
            image = to_8bit(decoded)
            registry[original_format](image, output, settings[original_format])
            outputs.append(output)
            for format_name, suffix in DERIVATIVE_FORMATS:
                target = output.with_suffix(suffix)
                registry[format_name](image, target, settings[format_name])
                outputs.append(target)
        optimized_size = output.stat().st_size
    except ENCODE_ERRORS as exc:
        log(f"Error processing {source}: {exc}")
        return FileResult(source, outputs, "optimized", False, str(exc))
    relative = source.relative_to(task.input_dir)
    log(f"Optimized: {relative.as_posix()}")
    return FileResult(source, outputs, "optimized", True, "ok", original_size, optimized_size)


def encode_jpeg(image: Image.Image, output: Path, settings: EncodeSettings) -> None:
    prepared = image if image.mode in {"RGB", "L", "CMYK"} else image.convert("RGB")
    prepared.save(
        output,
        format="JPEG",
        quality=clamp_quality(settings.quality),
        optimize=True,
        progressive=settings.progressive,
    )


def encode_png(image: Image.Image, output: Path, settings: EncodeSettings) -> None:
    quality = clamp_quality(settings.quality)
    colors = max(16, int(256 * quality / 100))
    save_kwargs: dict[str, object] = {"optimize": True}
    if settings.compress_level is not None:
        save_kwargs["compress_level"] = settings.compress_level
    quantize_image(image, colors).save(output, format="PNG", **save_kwargs)


def encode_webp(image: Image.Image, output: Path, settings: EncodeSettings) -> None:
    save_kwargs: dict[str, object] = {"lossless": False, "quality": clamp_quality(settings.quality)}
    if settings.method is not None:
        save_kwargs["method"] = settings.method
    to_rgb_or_rgba(image).save(output, format="WEBP", **save_kwargs)


def encode_avif(image: Image.Image, output: Path, settings: EncodeSettings) -> None:
    to_rgb_or_rgba(image).save(output, format="AVIF", quality=clamp_quality(settings.quality))


def has_alpha(image: Image.Image) -> bool:
    if image.mode in {"RGBA", "LA", "PA"}:
        return True
    return image.mode == "P" and "transparency" in image.info


def to_8bit(image: Image.Image) -> Image.Image:
    # 16-bit grayscale decodes as I;16 or I
    if image.mode.startswith("I;16"):
        image = image.convert("I")
    if image.mode == "I":
        return image.point(lambda value: value * (1 / 256)).convert("L")
    return image


def to_rgb_or_rgba(image: Image.Image) -> Image.Image:
    if has_alpha(image):
        return image if image.mode == "RGBA" else image.convert("RGBA")
    return image if image.mode == "RGB" else image.convert("RGB")


def quantize_image(image: Image.Image, colors: int) -> Image.Image:
    fast_octree = 2
    median_cut = 0
    if has_alpha(image):
        return image.convert("RGBA").quantize(colors=colors, method=fast_octree)
    return image.convert("RGB").quantize(colors=colors, method=median_cut)


def clamp_quality(quality: int) -> int:
    return max(1, min(100, quality))


def get_encoder_registry() -> dict[str, Encoder]:
    global _ENCODER_REGISTRY
    if not _ENCODER_REGISTRY:
        _ENCODER_REGISTRY = {
            "jpeg": encode_jpeg,
            "png": encode_png,
            "webp": encode_webp,
            "avif": encode_avif,
        }
    return _ENCODER_REGISTRY


def set_encoder_registry(registry: dict[str, Encoder]) -> None:
    global _ENCODER_REGISTRY
    _ENCODER_REGISTRY = dict(registry)
