from __future__ import annotations
from typing import Callable, Dict
from pathlib import Path
import re

# A classifier maps (path, content) to a language name, or '' when it cannot tell.
Classifier = Callable[[Path, bytes], str]


class UnknownLanguageError(ValueError):
    """
    Raised when a file's language has no configured single-line comment prefix.
    """
    def __init__(self, language: str, path: Path):
        self.language = language
        self.path = path
        super().__init__(f"unknown language {language!r} for {str(path)!r}")


# ============================================================
# Single-line comment prefix by language
# ============================================================
COMMENT_PREFIXES: Dict[str, str] = {
    # -- C family --
    "Go":              "//",
    "C":               "//",
    "C++":             "//",
    "C#":              "//",
    "Java":            "//",
    "JavaScript":      "//",
    "TypeScript":      "//",
    "Kotlin":          "//",
    "Scala":           "//",
    "Rust":            "//",
    "Swift":           "//",
    "Dart":            "//",
    "Groovy":          "//",
    "Protocol Buffer": "//",

    # -- Hash comments --
    "Python":          "#",
    "Shell":           "#",
    "Ruby":            "#",
    "Perl":            "#",
    "R":               "#",
    "Starlark":        "#",
    "Makefile":        "#",
    "Dockerfile":      "#",
    "CMake":           "#",
    "PowerShell":      "#",
}

# ============================================================
# Language by Specific Filename (Case Sensitive)
# ============================================================
LANGUAGES_BY_NAME: Dict[str, str] = {
    "Makefile":       "Makefile",
    "makefile":       "Makefile",
    "GNUmakefile":    "Makefile",
    "Dockerfile":     "Dockerfile",
    "dockerfile":     "Dockerfile",
    "Rakefile":       "Ruby",
    "Gemfile":        "Ruby",
    "Podfile":        "Ruby",
    "Vagrantfile":    "Ruby",
    "Jenkinsfile":    "Groovy",
    "BUILD":          "Starlark",
    "BUILD.bazel":    "Starlark",
    "WORKSPACE":      "Starlark",
    "CMakeLists.txt": "CMake",
    "SConstruct":     "Python",
    "SConscript":     "Python",
}

# ============================================================
# Language by Extension (Lower Case)
# ============================================================
LANGUAGES_BY_EXTENSION: Dict[str, str] = {
    ".go":     "Go",
    ".c":      "C",
    ".h":      "C",
    ".cc":     "C++",
    ".cpp":    "C++",
    ".cxx":    "C++",
    ".hh":     "C++",
    ".hpp":    "C++",
    ".hxx":    "C++",
    ".cs":     "C#",
    ".java":   "Java",
    ".js":     "JavaScript",
    ".mjs":    "JavaScript",
    ".cjs":    "JavaScript",
    ".jsx":    "JavaScript",
    ".ts":     "TypeScript",
    ".tsx":    "TypeScript",
    ".mts":    "TypeScript",
    ".kt":     "Kotlin",
    ".kts":    "Kotlin",
    ".scala":  "Scala",
    ".sc":     "Scala",
    ".rs":     "Rust",
    ".swift":  "Swift",
    ".dart":   "Dart",
    ".groovy": "Groovy",
    ".gradle": "Groovy",
    ".proto":  "Protocol Buffer",

    ".py":     "Python",
    ".pyi":    "Python",
    ".pyw":    "Python",
    ".sh":     "Shell",
    ".bash":   "Shell",
    ".zsh":    "Shell",
    ".ksh":    "Shell",
    ".rb":     "Ruby",
    ".rake":   "Ruby",
    ".pl":     "Perl",
    ".pm":     "Perl",
    ".r":      "R",
    ".bzl":    "Starlark",
    ".star":   "Starlark",
    ".mk":     "Makefile",
    ".mak":    "Makefile",
    ".cmake":  "CMake",
    ".ps1":    "PowerShell",
    ".psm1":   "PowerShell",

    # Recognized, but without a single-line comment syntax we can handle
    ".html":   "HTML",
    ".css":    "CSS",
    ".sql":    "SQL",
    ".lua":    "Lua",
    ".hs":     "Haskell",
    ".clj":    "Clojure",
}

# ============================================================
# Language by Shebang Interpreter
# ============================================================
LANGUAGES_BY_INTERPRETER: Dict[str, str] = {
    "sh":      "Shell",
    "bash":    "Shell",
    "zsh":     "Shell",
    "ksh":     "Shell",
    "dash":    "Shell",
    "python":  "Python",
    "ruby":    "Ruby",
    "perl":    "Perl",
    "node":    "JavaScript",
    "Rscript": "R",
    "pwsh":    "PowerShell",
}

_SHEBANG = re.compile(rb'^#!\s*(\S+)(?:[ \t]+(\S+))?')
_VERSION_SUFFIX = re.compile(r'[\d.]+$')


def _interpreter(content: bytes) -> str:
    match = _SHEBANG.match(content)
    if match is None:
        return ""
    program = match.group(1).decode('utf-8', errors='replace').rsplit('/', 1)[-1]
    if program == "env" and match.group(2):
        program = match.group(2).decode('utf-8', errors='replace')
    # python3.12 -> python
    return _VERSION_SUFFIX.sub('', program)


def guess_language(path: Path, content: bytes) -> str:
    name = path.name
    ext = path.suffix.lower() # Ensure extension is lower case for lookup

    # Prioritize lookup by full name (case sensitive based on dict keys)
    if name in LANGUAGES_BY_NAME:
        return LANGUAGES_BY_NAME[name]

    # Fallback to lookup by extension (case insensitive due to .lower())
    if ext in LANGUAGES_BY_EXTENSION:
        return LANGUAGES_BY_EXTENSION[ext]

    # Extensionless scripts
    return LANGUAGES_BY_INTERPRETER.get(_interpreter(content), "")


def comment_prefix(path: Path, classifier: Classifier = guess_language) -> str:
    """
    Returns the single-line comment prefix for the language of the file at path.

    Raises UnknownLanguageError when the classifier's answer has no configured prefix,
    and OSError when the file cannot be read.
    """
    content = path.read_bytes()
    language = classifier(path, content)

    prefix = COMMENT_PREFIXES.get(language)
    if prefix is None:
        raise UnknownLanguageError(language, path)
    return prefix
