# src/tdlite/render/string_width.py

"""
Terminal column width of strings.

This is an approximation of East Asian Width plus an emoji heuristic,
not full UAX #11: a fixed table of wide ranges, zero width for control
characters and combining diacritical marks, one column for the rest.
"""

from __future__ import annotations

# Inclusive code point ranges that occupy two columns.
_WIDE_RANGES: tuple[tuple[int, int], ...] = (
    # CJK ideographs
    (0x4E00, 0x9FFF),  # CJK Unified Ideographs
    (0x3400, 0x4DBF),  # Extension A
    (0x20000, 0x2A6DF),  # Extension B
    (0x2A700, 0x2B73F),  # Extension C
    (0x2B740, 0x2B81F),  # Extension D
    (0x2B820, 0x2CEAF),  # Extension E
    (0xF900, 0xFAFF),  # Compatibility Ideographs
    (0x2F800, 0x2FA1F),  # Compatibility Ideographs Supplement
    # Hangul
    (0x1100, 0x11FF),  # Jamo
    (0xAC00, 0xD7AF),  # Syllables
    (0xA960, 0xA97F),  # Jamo Extended-A
    (0xD7B0, 0xD7FF),  # Jamo Extended-B
    # Kana
    (0x3040, 0x309F),  # Hiragana
    (0x30A0, 0x30FF),  # Katakana
    # Fullwidth ASCII variants and brackets (half-width katakana FF61+ stays narrow)
    (0xFF01, 0xFF60),
    # CJK punctuation and symbols
    (0x2E80, 0x2EFF),  # Radicals Supplement
    (0x3000, 0x303F),  # Symbols and Punctuation, incl. ideographic space
    (0x3200, 0x32FF),  # Enclosed CJK Letters and Months
    (0xFE10, 0xFE1F),  # Vertical Forms
    (0xFE30, 0xFE4F),  # Compatibility Forms
    (0xFE50, 0xFE6F),  # Small Form Variants
    # Emoji
    (0x1F300, 0x1F9FF),
)


def _is_wide(code: int) -> bool:
    return any(lo <= code <= hi for lo, hi in _WIDE_RANGES)


def char_width(ch: str) -> int:
    code = ord(ch)
    if (code <= 0x1F and code != 0x20) or 0x7F <= code <= 0x9F:
        return 0
    if 0x0300 <= code <= 0x036F:
        return 0
    return 2 if _is_wide(code) else 1


def string_width(s: str | None) -> int:
    if not s:
        return 0
    return sum(char_width(ch) for ch in s)


def truncate(s: str | None, max_width: int, ellipsis: str = "...") -> str:
    """Cut `s` to at most `max_width` columns, ending with `ellipsis`."""
    if not s or max_width <= 0:
        return ""
    if string_width(s) <= max_width:
        return s

    ellipsis_width = string_width(ellipsis)
    if max_width <= ellipsis_width:
        return ellipsis[:max_width]

    budget = max_width - ellipsis_width
    used = 0
    out: list[str] = []
    for ch in s:
        w = char_width(ch)
        if used + w > budget:
            break
        out.append(ch)
        used += w
    return "".join(out) + ellipsis


def pad_end(s: str, target_width: int, fill_char: str = " ") -> str:
    """Right-pad to `target_width` columns; never shortens."""
    current = string_width(s)
    if current >= target_width:
        return s
    fill_width = string_width(fill_char)
    if fill_width <= 0:
        return s
    return s + fill_char * ((target_width - current) // fill_width)
