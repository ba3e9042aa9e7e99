from __future__ import annotations
from typing import List


def tokenize_line(line: str) -> List[str]:
    """Split one CSV line into trimmed fields.

    Commas inside double quotes are literal and ``""`` inside quotes is an
    escaped quote. Blank fields are kept so column positions stay stable.
    An unterminated quote simply runs to the end of the line.
    """
    result: List[str] = []
    current: List[str] = []
    in_quotes = False
    i = 0
    n = len(line)
    while i < n:
        ch = line[i]
        if ch == '"':
            if in_quotes and i + 1 < n and line[i + 1] == '"':
                current.append('"')
                i += 2
                continue
            in_quotes = not in_quotes
        elif ch == "," and not in_quotes:
            result.append("".join(current).strip())
            current = []
        else:
            current.append(ch)
        i += 1
    result.append("".join(current).strip())
    return result


def has_unterminated_quote(line: str) -> bool:
    in_quotes = False
    i = 0
    while i < len(line):
        if line[i] == '"':
            if in_quotes and line[i + 1 : i + 2] == '"':
                i += 2
                continue
            in_quotes = not in_quotes
        i += 1
    return in_quotes
