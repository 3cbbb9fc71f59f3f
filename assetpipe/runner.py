from __future__ import annotations

from typing import Callable, Iterable

from .models import EncodeSettings, Stats, Task, iter_asset_files
from .optimize import optimize_files
from .settings import ENCODE_SETTINGS, RASTER_KINDS, TASKS, VERBATIM_KINDS
from .verbatim import copy_files


def run_tasks(
    tasks: Iterable[Task],
    settings: dict[str, EncodeSettings] | None = None,
    log: Callable[[str], None] = print,
) -> Stats:
    stats = Stats()
    for task in tasks:
        stats = stats + run_task(task, settings, log)
    return stats


def run_task(
    task: Task,
    settings: dict[str, EncodeSettings] | None = None,
    log: Callable[[str], None] = print,
) -> Stats:
    if not task.input_dir.is_dir():
        log(f"Warning: input directory {task.input_dir} not found, skipping")
        return Stats()
    task.output_dir.mkdir(parents=True, exist_ok=True)
    rasters = iter_asset_files(task.input_dir, RASTER_KINDS)
    verbatim = iter_asset_files(task.input_dir, VERBATIM_KINDS)
    results = optimize_files(rasters, task, settings or ENCODE_SETTINGS, log)
    results += copy_files(verbatim, task, log)
    return Stats.from_results(results)


def format_report(stats: Stats) -> list[str]:
    lines = [
        "Image optimization complete:",
        f"  - {stats.processed} images optimized",
        f"  - {stats.copied} files copied",
    ]
    if stats.original_bytes:
        saved = stats.original_bytes - stats.optimized_bytes
        ratio = saved / stats.original_bytes
        lines.append(f"  - originals re-encoded with {ratio:.1%} saved")
    if stats.errors > 0:
        lines.append(f"  - {stats.errors} errors encountered")
    return lines


def print_report(stats: Stats, log: Callable[[str], None] = print) -> None:
    for line in format_report(stats):
        log(line)


def main() -> None:
    print("Starting image optimization...")
    stats = run_tasks(TASKS)
    print()
    print_report(stats)
