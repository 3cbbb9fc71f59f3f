from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Iterable


class AssetKind(Enum):
    JPEG = "jpeg"
    PNG = "png"
    SVG = "svg"
    GIF = "gif"
    ICO = "ico"

    @property
    def is_raster(self) -> bool:
        return self in (AssetKind.JPEG, AssetKind.PNG)

    @classmethod
    def from_path(cls, path: Path) -> AssetKind | None:
        return _SUFFIX_KINDS.get(path.suffix.lower())


_SUFFIX_KINDS: dict[str, AssetKind] = {
    ".jpg": AssetKind.JPEG,
    ".jpeg": AssetKind.JPEG,
    ".png": AssetKind.PNG,
    ".svg": AssetKind.SVG,
    ".gif": AssetKind.GIF,
    ".ico": AssetKind.ICO,
}


@dataclass(frozen=True)
class Task:
    input_dir: Path
    output_dir: Path


@dataclass(frozen=True)
class EncodeSettings:
    quality: int
    progressive: bool = False
    compress_level: int | None = None
    method: int | None = None


@dataclass(frozen=True)
class FileEntry:
    path: Path
    kind: AssetKind


@dataclass(frozen=True)
class FileResult:
    source: Path
    outputs: list[Path]
    action: str
    success: bool
    message: str
    original_size: int = 0
    optimized_size: int = 0


@dataclass(frozen=True)
class Stats:
    processed: int = 0
    copied: int = 0
    errors: int = 0
    original_bytes: int = 0
    optimized_bytes: int = 0

    @classmethod
    def from_results(cls, results: Iterable[FileResult]) -> Stats:
        processed = copied = errors = original_bytes = optimized_bytes = 0
        for result in results:
            if not result.success:
                errors += 1
            elif result.action == "optimized":
                processed += 1
                original_bytes += result.original_size
                optimized_bytes += result.optimized_size
            else:
                copied += 1
        return cls(processed, copied, errors, original_bytes, optimized_bytes)

    def __add__(self, other: Stats) -> Stats:
        if not isinstance(other, Stats):
            return NotImplemented
        return Stats(
            processed=self.processed + other.processed,
            copied=self.copied + other.copied,
            errors=self.errors + other.errors,
            original_bytes=self.original_bytes + other.original_bytes,
            optimized_bytes=self.optimized_bytes + other.optimized_bytes,
        )


def resolve_output_path(source: Path, task: Task) -> Path:
    # relative_to raises ValueError for paths outside input_dir
    relative = source.relative_to(task.input_dir)
    return task.output_dir / relative


def iter_asset_files(root: Path, kinds: Iterable[AssetKind]) -> list[FileEntry]:
    wanted = set(kinds)
    entries = []
    for path in root.rglob("*"):
        relative = path.relative_to(root)
        if any(part.startswith(".") for part in relative.parts):
            continue
        if not path.is_file():
            continue
        kind = AssetKind.from_path(path)
        if kind is not None and kind in wanted:
            entries.append(FileEntry(path, kind))
    entries.sort(key=lambda entry: entry.path.relative_to(root).as_posix())
    return entries
