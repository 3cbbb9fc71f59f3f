from __future__ import annotations

import shutil
from typing import Callable, Iterable

from .models import FileEntry, FileResult, Task, resolve_output_path


def copy_files(
    files: Iterable[FileEntry],
    task: Task,
    log: Callable[[str], None] = print,
) -> list[FileResult]:
    results = []
    for entry in files:
        results.append(copy_file(entry, task, log))
    return results


def copy_file(entry: FileEntry, task: Task, log: Callable[[str], None] = print) -> FileResult:
    source = entry.path
    output = resolve_output_path(source, task)
    try:
        output.parent.mkdir(parents=True, exist_ok=True)
        shutil.copyfile(source, output)
    except OSError as exc:
        log(f"Error copying {source}: {exc}")
        return FileResult(source, [], "copied", False, str(exc))
    relative = source.relative_to(task.input_dir)
    log(f"Copied: {relative.as_posix()}")
    return FileResult(source, [output], "copied", True, "ok")
