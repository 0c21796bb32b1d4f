import math
import re

_zero_percent = re.compile(r"^-|^0(?:\.0+)$").match


def add_percent(
    change: float, good_emoji: str = "", bad_emoji: str = ":small_red_triangle:"
) -> str:
    """
    Generates a user-readable string from a relative change

    Args:
        change (float): the relative change, `0.1` meaning +10%
        good_emoji (str): appended on reduction (or no change)
        bad_emoji (str): appended on increase
    """
    formatted = f"{change * 100:.2f}"
    if _zero_percent(formatted):
        return f"{formatted}% {good_emoji}".rstrip()
    return f"+{formatted}% {bad_emoji}".rstrip()


def format_relative_diff(relative_diff: float) -> str:
    # a bundle that didn't exist before has an infinite relative change
    if math.isinf(relative_diff) and relative_diff > 0:
        return "added"
    if relative_diff == -1:
        return "removed"
    if math.isnan(relative_diff):
        return "--"
    return add_percent(relative_diff, "", "")


_byte_units = ["B", "kB", "MB", "GB", "TB", "PB", "EB", "ZB", "YB"]


def pretty_bytes(size: float, signed: bool = False) -> str:
    """
    Human readable byte size with decimal (1000 based) units and three
    significant digits, e.g. `1.34 kB`. With `signed`, increases get a `+`.
    """
    if signed and size == 0:
        return " 0 B"
    prefix = "-" if size < 0 else ("+" if signed else "")
    size = abs(size)
    if size < 1:
        return f"{prefix}{size:g} B"
    exponent = min(int(math.log10(size) // 3), len(_byte_units) - 1)
    value = float(f"{size / 1000 ** exponent:.3g}")
    return f"{prefix}{value:g} {_byte_units[exponent]}"


def format_size_diff(absolute_diff: float, relative_diff: float) -> str:
    """A size change as shown in the comparison tables: `▲ +1.2 kB (+10.00%)`"""
    if absolute_diff == 0:
        return "--"
    trend_icon = "▼" if absolute_diff < 0 else "▲"
    return (
        f"{trend_icon} {pretty_bytes(absolute_diff, signed=True)} "
        f"({format_relative_diff(relative_diff)})"
    )
