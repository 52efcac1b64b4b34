from __future__ import annotations
from dataclasses import dataclass
from pathlib import Path
import re
from typing import List, Optional, Sequence

from headerlint.io import read_head, write_file_if_changed
from headerlint.languages import Classifier, comment_prefix, guess_language

# Only the leading comment block is inspected
HEAD_LINES = 5

COPYRIGHT_MARKER = "Copyright "
LICENSE_MARKER = "SPDX-License-Identifier: "


@dataclass(frozen=True)
class SourceFile:
    """
    Header fields of one scanned file.

    copyright and license hold the comment text after the prefix and a single space,
    marker included (e.g. 'SPDX-License-Identifier: MIT'), or '' when absent.
    """
    path: Path
    comment_prefix: str
    copyright: str = ""
    license: str = ""


def _find(lines: Sequence[str], start: str) -> Optional[int]:
    for i, line in enumerate(lines[:HEAD_LINES]):
        if line.startswith(start):
            return i
    return None


def parse_lines(path: Path, prefix: str, lines: Sequence[str]) -> SourceFile:
    """
    Extracts the header fields from already-read lines. The first matching line per field wins.
    """
    copyright_at = _find(lines, f"{prefix} {COPYRIGHT_MARKER}")
    license_at = _find(lines, f"{prefix} {LICENSE_MARKER}")
    skip = len(prefix) + 1
    return SourceFile(
        path=path,
        comment_prefix=prefix,
        copyright=lines[copyright_at][skip:] if copyright_at is not None else "",
        license=lines[license_at][skip:] if license_at is not None else "",
    )


def parse_file(path: Path, classifier: Classifier = guess_language) -> SourceFile:
    """
    Reads the header of the file at path.

    UnknownLanguageError propagates as is so callers can skip the file, OSError is fatal.
    """
    prefix = comment_prefix(path, classifier)
    with open(path, 'rb') as f:
        lines = read_head(f, HEAD_LINES)
    return parse_lines(path, prefix, lines)


##################################################################################################
# Rewriting
##################################################################################################

_LINE_BREAK = re.compile(r"(?<=\n)")


def split_lines(text: str) -> List[str]:
    """
    Splits text after every '\\n', the way the head reader sees lines. Each line keeps its own
    terminator ('\\n' or '\\r\\n'), so ''.join(split_lines(text)) == text, mixed endings included.
    """
    return [line for line in _LINE_BREAK.split(text) if line]


def _ending(line: str) -> str:
    for newline in ('\r\n', '\n'):
        if line.endswith(newline):
            return newline
    return ''


def _newline_near(lines: Sequence[str], i: int, default: str) -> str:
    for j in (i, i - 1):
        if 0 <= j < len(lines) and _ending(lines[j]):
            return _ending(lines[j])
    return default


def _insert_top(lines: List[str], block: Sequence[str], default: str) -> None:
    insert_at = 1 if lines and lines[0].startswith('#!') else 0
    newline = _newline_near(lines, insert_at, default)
    new_lines = [line + newline for line in block]
    if insert_at < len(lines) and lines[insert_at].strip():
        new_lines.append(newline)
    lines[insert_at:insert_at] = new_lines


def apply_header(lines: List[str], prefix: str, copyright: str, license: str) -> List[str]:
    """
    Returns lines (with their terminators, as produced by split_lines) with the copyright and
    license comments set to the given values.

    Existing header lines are replaced where they are. A missing copyright goes right above the
    license line, a missing license right below the copyright line, as long as both stay within
    the first HEAD_LINES lines. Otherwise both are moved to the top, after a shebang, followed
    by a blank line. New lines take the line ending of their neighbours.
    """
    copyright_line = f"{prefix} {copyright}"
    license_line = f"{prefix} {license}"
    default = next((_ending(line) for line in lines if _ending(line)), '\n')

    copyright_at = _find(lines, f"{prefix} {COPYRIGHT_MARKER}")
    license_at = _find(lines, f"{prefix} {LICENSE_MARKER}")

    result = list(lines)
    if copyright_at is not None:
        result[copyright_at] = copyright_line + _ending(result[copyright_at])
    if license_at is not None:
        result[license_at] = license_line + _ending(result[license_at])

    if copyright_at is None and license_at is None:
        _insert_top(result, [copyright_line, license_line], default)
    elif copyright_at is None:
        if license_at + 1 < HEAD_LINES:
            result.insert(license_at, copyright_line + _newline_near(result, license_at, default))
        else:
            del result[license_at]
            _insert_top(result, [copyright_line, license_line], default)
    elif license_at is None:
        if copyright_at + 1 < HEAD_LINES:
            result.insert(copyright_at + 1, license_line + _newline_near(result, copyright_at, default))
        else:
            del result[copyright_at]
            _insert_top(result, [copyright_line, license_line], default)

    # a former last line may now be followed by inserted ones
    for i in range(len(result) - 1):
        if not _ending(result[i]):
            result[i] += default

    return result


def rewrite_header(source: SourceFile, copyright: str, license: str) -> bool:
    """
    Rewrites the header of source's file in place, keeping every line's own line ending.
    Returns True if the file changed.
    """
    content = source.path.read_bytes()

    # surrogateescape keeps undecodable bytes intact through the round trip
    text = content.decode('utf-8', errors='surrogateescape')
    new_lines = apply_header(split_lines(text), source.comment_prefix, copyright, license)
    new_content = ''.join(new_lines).encode('utf-8', errors='surrogateescape')
    return write_file_if_changed(source.path, new_content)
