from __future__ import annotations

from pathlib import Path

_COMMENT_PREFIXES = ("#", "!")
_SEPARATORS = "=:"


def parse_properties(text: str) -> dict[str, str]:
    """Parse Java-style ``.properties`` text into a flat dict.

    Supports ``#``/``!`` comments, ``=``, ``:`` or whitespace separators and
    backslash line continuations. Unicode escapes are not interpreted.
    """
    result: dict[str, str] = {}
    for line in _logical_lines(text):
        key, value = _split_entry(line)
        if key:
            result[key] = value
    return result


def load_properties(path: Path) -> dict[str, str]:
    return parse_properties(path.read_text(encoding="utf-8"))


def _logical_lines(text: str) -> list[str]:
    lines: list[str] = []
    pending = ""
    for raw in text.splitlines():
        stripped = raw.strip()
        if not pending and (not stripped or stripped.startswith(_COMMENT_PREFIXES)):
            continue
        segment = stripped if not pending else raw.lstrip()
        if _ends_with_continuation(segment):
            pending += segment[:-1]
            continue
        lines.append(pending + segment)
        pending = ""
    if pending:
        lines.append(pending)
    return lines


def _ends_with_continuation(segment: str) -> bool:
    trailing = len(segment) - len(segment.rstrip("\\"))
    return trailing % 2 == 1


def _split_entry(line: str) -> tuple[str, str]:
    idx = 0
    length = len(line)
    while idx < length:
        ch = line[idx]
        if ch == "\\":
            idx += 2
            continue
        if ch in _SEPARATORS or ch.isspace():
            break
        idx += 1

    key = line[:idx]
    rest = line[idx:].lstrip()
    if rest[:1] and rest[0] in _SEPARATORS:
        rest = rest[1:].lstrip()
    return _unescape(key), _unescape(rest.strip())


def _unescape(value: str) -> str:
    if "\\" not in value:
        return value
    out: list[str] = []
    chars = iter(value)
    for ch in chars:
        if ch != "\\":
            out.append(ch)
            continue
        nxt = next(chars, "")
        out.append({"t": "\t", "n": "\n", "r": "\r", "f": "\f"}.get(nxt, nxt))
    return "".join(out)
