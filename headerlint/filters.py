'''
Path predicates deciding which crawled files are not source files worth linting.

Every predicate takes the crawled path and returns True when the file should be skipped.
The path heuristics look at the path relative to the scan root, so they are bound to a
root by default_predicates().
'''

import re
from pathlib import Path, PurePosixPath
from typing import Callable, FrozenSet, List, Sequence, Pattern

from headerlint.io import read_ignore_file

Predicate = Callable[[Path], bool]

# --- Constants ---

BINARY_SNIFF_LENGTH = 8000

CONFIGURATION_EXTENSIONS: FrozenSet[str] = frozenset([
    '.json', '.json5', '.jsonc', '.yaml', '.yml', '.toml', '.ini', '.cfg', '.conf', '.xml',
    '.properties', '.plist', '.editorconfig', '.lock', '.mod', '.sum', '.csproj', '.sln',
])

CONFIGURATION_NAMES: FrozenSet[str] = frozenset([
    "go.mod", "go.sum", "go.work", "package.json", "package-lock.json", "yarn.lock", "Cargo.toml",
    "Cargo.lock", "pyproject.toml", "setup.cfg", "requirements.txt", "Pipfile", "Pipfile.lock",
    "composer.json", "composer.lock", "Procfile", "tox.ini", "MANIFEST.in", "CODEOWNERS",
])

IMAGE_EXTENSIONS: FrozenSet[str] = frozenset([
    '.png', '.jpg', '.jpeg', '.gif', '.bmp', '.ico', '.icns', '.webp', '.tif', '.tiff', '.svg', '.psd',
])

DOCUMENTATION_PATTERNS: Sequence[Pattern[str]] = [re.compile(p) for p in [
    r'^[Dd]ocs?/',
    r'(^|/)[Dd]ocumentation/',
    r'(^|/)[Jj]avadoc/',
    r'^[Mm]an/',
    r'^[Ee]xamples/',
    r'^[Dd]emos?/',
    r'^[Ss]amples?/',
    r'(^|/)CITATION(\.cff|S?(\.(bib|md))?)$',
    r'(^|/)CHANGE(S|LOG)?(\.|$)',
    r'(^|/)CONTRIBUTING(\.|$)',
    r'(^|/)COPYING(\.|$)',
    r'(^|/)INSTALL(\.|$)',
    r'(^|/)LICEN[CS]E(\.|$)',
    r'(^|/)[Ll]icen[cs]e(\.|$)',
    r'(^|/)README(\.|$)',
    r'(^|/)[Rr]eadme(\.|$)',
    r'(^|/)NOTICE(\.|$)',
    r'(^|/)AUTHORS(\.|$)',
    r'\.(md|markdown|rst|adoc)$',
]]

VENDOR_PATTERNS: Sequence[Pattern[str]] = [re.compile(p) for p in [
    r'(^|/)vendor/',
    r'(^|/)_vendor/',
    r'(^|/)node_modules/',
    r'(^|/)bower_components/',
    r'(^|/)third[-_]?party/',
    r'(^|/)3rd[-_]?party/',
    r'(^|/)[Dd]ependencies/',
    r'(^|/)Godeps/',
    r'(^|/)deps/',
    r'(^|/)venv/',
    r'(^|/)site-packages/',
    r'(^|/)__pycache__/',
    r'(^|/)dist/',
    r'(^|/)cache/',
    r'(\.|-)min\.(js|css)$',
    r'(^|/)gradlew(\.bat)?$',
    r'(^|/)mvnw(\.cmd)?$',
]]

DOTFILE_PATTERN: Pattern[str] = re.compile(r'(^|/)\.([^/.]|\.[^/])')

# --- Path heuristics (relative posix paths) ---

def is_configuration(rel_path: str) -> bool:
    path = PurePosixPath(rel_path)
    return path.name in CONFIGURATION_NAMES or path.suffix.lower() in CONFIGURATION_EXTENSIONS


def is_documentation(rel_path: str) -> bool:
    return any(p.search(rel_path) for p in DOCUMENTATION_PATTERNS)


def is_dotfile(rel_path: str) -> bool:
    return DOTFILE_PATTERN.search(rel_path) is not None


def is_image(rel_path: str) -> bool:
    return PurePosixPath(rel_path).suffix.lower() in IMAGE_EXTENSIONS


def is_vendor(rel_path: str) -> bool:
    return any(p.search(rel_path) for p in VENDOR_PATTERNS)

# --- Content heuristics ---

def is_binary(path: Path) -> bool:
    """
    Reads the file and reports whether it looks binary (a NUL byte near the start).
    Read errors are not swallowed: a file we cannot read is a fatal condition.
    """
    with open(path, 'rb') as f:
        head = f.read(BINARY_SNIFF_LENGTH)
    return b'\x00' in head

# --- Composition ---

def relative_to(root: Path, heuristic: Callable[[str], bool]) -> Predicate:
    def predicate(path: Path) -> bool:
        return heuristic(path.relative_to(root).as_posix())
    predicate.__name__ = heuristic.__name__
    return predicate


def gitignore_predicate(root: Path, ignore_file_name: str = '.gitignore') -> Predicate:
    """
    Loads the ignore file at the scan root once. A missing or unreadable file raises OSError.
    """
    return read_ignore_file(root / ignore_file_name)


def default_predicates(root: Path, ignore_file_name: str = '.gitignore') -> List[Predicate]:
    """
    Builds the exclusion predicates for one run over root.
    The cheap path checks come first so binary sniffing only reads files that survive them.
    """
    return [
        relative_to(root, is_configuration),
        relative_to(root, is_documentation),
        relative_to(root, is_dotfile),
        relative_to(root, is_image),
        relative_to(root, is_vendor),
        is_binary,
        gitignore_predicate(root, ignore_file_name),
    ]


def ignore_file(path: Path, predicates: Sequence[Predicate]) -> bool:
    for predicate in predicates:
        if predicate(path):
            return True
    return False
