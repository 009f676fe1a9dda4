def format_bytes(value) -> str:
    try:
        value = float(value)
    except (TypeError, ValueError):
        return "--"
    if value <= 0:
        return "0 B"
    units = ["B", "KB", "MB", "GB", "TB"]
    idx = 0
    while value >= 1024 and idx < len(units) - 1:
        value /= 1024
        idx += 1
    if idx == 0:
        return f"{value:.0f} {units[idx]}"
    # 1.0 KB reads as "1 KB", 1.5 KB stays "1.5 KB".
    text = f"{value:.1f}".rstrip("0").rstrip(".")
    return f"{text} {units[idx]}"


def truncate_text(text: str | None, max_length: int) -> str:
    raw = text or ""
    if len(raw) <= max_length:
        return raw
    return raw[:max_length] + "..."


def files_loaded_label(count: int) -> str:
    return f"{count} files loaded"
