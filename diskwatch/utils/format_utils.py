"""Formatting helpers for drive figures shown on surfaces and in logs."""

_UNITS = ("KB", "MB", "GB", "TB")


def format_bytes(bytes_value: int) -> str:
    if bytes_value < 1024:
        return f"{bytes_value} B"

    value = float(bytes_value)
    unit = "B"
    for unit in _UNITS:
        value /= 1024
        if value < 1024 or unit == _UNITS[-1]:
            break
    return f"{value:.1f} {unit}"


def format_usage(used: int, total: int, percent: int) -> str:
    return f"{format_bytes(used)} / {format_bytes(total)} ({percent}%)"
