"""Host status: CPU, memory and disk usage."""

from __future__ import annotations

import math

import psutil


def _round(value: float) -> float:
    return float(math.floor(abs(value) + 0.5)) * (1 if value >= 0 else -1)


def _num(value: float) -> str:
    return str(int(value)) if float(value).is_integer() else str(value)


def cpu_percent() -> float:
    """CPU usage over one second, rounded; -1 if it cannot be read."""
    try:
        return _round(psutil.cpu_percent(interval=1))
    except Exception:
        return -1.0


def mem_percent() -> float:
    """Memory usage, rounded; -1 if it cannot be read."""
    try:
        return _round(psutil.virtual_memory().percent)
    except Exception:
        return -1.0


def disk_report() -> str:
    """One line per mounted partition in use, or the error text."""
    try:
        parts = psutil.disk_partitions(all=True)
    except Exception as exc:
        return str(exc)
    lines = []
    for part in parts:
        try:
            usage = psutil.disk_usage(part.mountpoint)
        except Exception as exc:
            lines.append("\n  - " + str(exc))
            continue
        pc = int(_round(usage.percent))
        if pc > 0:
            lines.append(f"\n  - {part.mountpoint}({usage.total // 1024 // 1024}M) {pc}%")
    return "".join(lines)


def status_text() -> str:
    """The full status message."""
    return (
        f"* CPU占用: {_num(cpu_percent())}%\n"
        f"* RAM占用: {_num(mem_percent())}%\n"
        f"* 硬盘使用: {disk_report()}"
    )