"""
INI-style text format: line parser and serializer.

    [section-name]
    key = value      ; trailing comment

Comments (``#`` or ``;`` up to end of line) and blank lines are dropped on
read and never written back. Lines before the first header belong to the
section named "" (empty string).

Files are UTF-8. Undecodable bytes are carried through as surrogate escapes
and written back unchanged, so a stray Latin-1 byte never loses the file.
"""

from __future__ import annotations
import logging
from pathlib import Path
from typing import Dict, Iterable, Optional

ConfigData = Dict[str, Dict[str, str]]

COMMENT_MARKERS = ("#", ";")
_TRIM_CHARS = " \t"
ENCODING = "utf-8"
ENCODING_ERRORS = "surrogateescape"


def trim(text: str) -> str:
    """Strip spaces and tabs only (not newlines or other whitespace)."""
    return text.strip(_TRIM_CHARS)


def strip_comment(line: str) -> str:
    """Cut `line` at the first comment marker, whichever comes first."""
    positions = [pos for pos in (line.find(m) for m in COMMENT_MARKERS) if pos != -1]
    if positions:
        return line[:min(positions)]
    return line


def normalize_value(raw_value: str) -> str:
    """
    A raw value made of spaces only (or nothing at all) becomes a single
    space; anything else is trimmed. An all-tab value therefore trims to "".
    """
    if all(c == " " for c in raw_value):
        return " "
    return trim(raw_value)


def parse_lines(lines: Iterable[str], log: logging.Logger, data: Optional[ConfigData] = None) -> ConfigData:
    """
    Parse INI lines into `data` (a new dict if None) and return it.

    Malformed lines (no ``=``, not a header) are logged and skipped.
    A repeated ``[section]`` header resumes the existing section.
    """
    if data is None:
        data = {}
    current_section = ""

    for raw_line in lines:
        line = trim(strip_comment(raw_line.rstrip("\n")))
        if not line:
            continue

        if line.startswith("[") and line.endswith("]"):
            current_section = trim(line[1:-1])
            continue

        key, sep, raw_value = line.partition("=")
        if not sep:
            log.warning("Invalid line in config file: %s", line)
            continue

        data.setdefault(current_section, {})[trim(key)] = normalize_value(raw_value)

    return data


def parse_config_file(path: Path, log: logging.Logger, data: Optional[ConfigData] = None) -> ConfigData:
    """
    Parse the file at `path` into `data`.

    An unreadable file is logged and contributes no entries; `data` is only
    touched once the whole file has been read.
    """
    if data is None:
        data = {}
    try:
        with open(path, "r", encoding=ENCODING, errors=ENCODING_ERRORS) as f:
            parsed = parse_lines(f, log)
    except OSError as e:
        log.error("Unable to open config file: %s (%s)", path, e)
        return data

    for section, key_values in parsed.items():
        data.setdefault(section, {}).update(key_values)
    return data


def render_config(data: ConfigData, log: logging.Logger) -> bytes:
    """
    Serialize `data` to file content, one blank line after every section.

    Raises:
        UnicodeEncodeError: a value holds text UTF-8 cannot represent.
    """
    lines = []
    for section, key_values in data.items():
        log.debug("Writing section: [%s]", section)
        lines.append(f"[{section}]\n")
        for key, value in key_values.items():
            log.debug("  %s = %s", key, value)
            lines.append(f"{key} = {value}\n")
        lines.append("\n")
    return "".join(lines).encode(ENCODING, ENCODING_ERRORS)
