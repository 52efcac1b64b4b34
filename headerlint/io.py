from typing import BinaryIO, Generator, List

import os
import hashlib
from pathlib import Path

import pathspec

from headerlint.messages import info

##################################################################################################
# Head Reading
##################################################################################################

def read_head(stream: BinaryIO, n: int) -> List[str]:
    """
    Returns up to the first n lines of a binary stream, with trailing whitespace stripped.

    Reading stops as soon as n lines have been collected, the rest of the stream is never touched.
    A last line without a trailing newline is still returned.
    """
    lines: List[str] = []
    while len(lines) < n:
        raw = stream.readline()
        if not raw:
            break
        lines.append(raw.decode('utf-8', errors='replace').rstrip(' \t\r\n'))
    return lines


##################################################################################################
# Tree Crawling
##################################################################################################

VCS_DIR = '.git'


def _raise(e: OSError) -> None:
    raise e


def crawl_files(root: Path) -> Generator[Path, None, None]:
    """
    Yields every non-directory entry below root, skipping version-control metadata directories.
    """
    assert isinstance(root, Path), f"Expected Path, got {type(root)}"

    if root.name == VCS_DIR:
        return

    for dirpath, dirnames, filenames in os.walk(root, topdown=True, onerror=_raise):
        dirnames[:] = sorted(d for d in dirnames if d != VCS_DIR)
        for name in sorted(filenames):
            yield Path(dirpath) / name


##################################################################################################
# Ignore Files
##################################################################################################

class FileSet:
    def __init__(self, base_path: Path, patterns: List[str]):
        self.base_path = base_path
        self.path_spec = pathspec.PathSpec.from_lines('gitwildmatch', patterns)

    def __call__(self, path: Path) -> bool:
        rel_path = path.relative_to(self.base_path).as_posix()
        return self.path_spec.match_file(rel_path)


def read_ignore_file(path: Path) -> FileSet:
    """
    Loads a gitignore-style file. Unlike optional ignore files, a missing file is an error here.
    """
    assert isinstance(path, Path), f"Expected Path, got {type(path)}"

    with open(path, 'rt', encoding='utf-8') as f:
        lines = [line.rstrip('\r\n') for line in f.readlines()]

    # gitwildmatch already treats comments and blank lines as no-ops
    return FileSet(path.parent, lines)


##################################################################################################
# File Writing
##################################################################################################

def write_file_if_changed(path: Path, content: bytes) -> bool:
    """
    Overwrites path with content unless it already holds exactly those bytes.
    Returns True if the file was written.
    """
    assert isinstance(path, Path), f"Expected Path, got {type(path)}"
    assert path.is_file(), f"File {path} does not exist"

    old_content = path.read_bytes()
    if hashlib.sha256(old_content).digest() == hashlib.sha256(content).digest():
        return False

    from difflib import unified_diff
    diff = unified_diff(
        old_content.decode('utf-8', errors='replace').splitlines(),
        content.decode('utf-8', errors='replace').splitlines(),
        lineterm='')
    total_added = 0
    total_removed = 0
    for line in diff:
        if line.startswith('+') and not line.startswith('+++'):
            total_added += 1
        elif line.startswith('-') and not line.startswith('---'):
            total_removed += 1

    info(f'Modifying {path}: {total_removed} lines removed, {total_added} lines added')
    with open(path, 'wb') as f:
        f.write(content)
    return True
