import os
from pathlib import Path

import ui_config as cfg


def normalize_file_picker_result(result) -> tuple[list[str], list[str]]:
    """
    Normalize Flet FilePicker results across versions.

    Returns:
      (paths, errors)

    - `paths`: unique filesystem paths we can read, in selection order.
    - `errors`: human-readable notes for items where no readable path was provided.
    """
    file_items = getattr(result, "files", None) or []
    paths: list[str] = []
    errors: list[str] = []

    if file_items:
        for item in file_items:
            if isinstance(item, str):
                if item:
                    paths.append(item)
                continue

            path = getattr(item, "path", None)
            if isinstance(path, str) and path:
                paths.append(path)
                continue

            name = getattr(item, "name", None)
            if isinstance(name, str) and name and os.path.exists(name):
                paths.append(name)
                continue

            label = name if isinstance(name, str) and name else "Unknown file"
            errors.append(f"{label}: file picker did not provide a readable path.")
    else:
        path = getattr(result, "path", None)
        if isinstance(path, str) and path:
            paths.append(path)

    seen: set[str] = set()
    uniq_paths: list[str] = []
    for p in paths:
        if p in seen:
            continue
        seen.add(p)
        uniq_paths.append(p)

    return uniq_paths, errors


def expand_folder(folder: str | Path) -> list[str]:
    # Non-recursive: only supported files sitting directly in the folder.
    base = Path(folder)
    try:
        entries = sorted(base.iterdir(), key=lambda p: p.name)
    except OSError as exc:
        print(f"[filepicker] unable to list {base}: {exc}")
        return []
    return [str(p) for p in entries if p.is_file() and p.suffix.lower() in cfg.SUPPORTED_EXTENSIONS]


def allowed_extensions() -> list[str]:
    return [ext.lstrip(".") for ext in cfg.SUPPORTED_EXTENSIONS]
