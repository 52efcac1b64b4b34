from __future__ import annotations
from collections import Counter
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional, Sequence
import logging
import sys

from headerlint.checks.base import Issue
from headerlint.checks.file_headers import HeaderConsistencyCheck
from headerlint.filters import Predicate, default_predicates, ignore_file
from headerlint.headers import SourceFile, parse_file
from headerlint.io import crawl_files
from headerlint.languages import Classifier, UnknownLanguageError, guess_language
from headerlint.majority import Majority, find_majority, top
from headerlint.messages import diag, error, success

logger = logging.getLogger(__name__)

BANNER = "^^^ These files should contain these comments at the top:"


@dataclass
class LintConfig:
    root: Path = Path('.')
    update: bool = False
    verbose: bool = False
    ignore_file_name: str = '.gitignore'
    classifier: Classifier = guess_language
    # None means default_predicates(root), built fresh for every run
    predicates: Optional[Sequence[Predicate]] = None


@dataclass
class LintResult:
    majority: Majority
    candidates: List[SourceFile]
    # Violating files in scan order
    issues: Dict[Path, List[Issue]] = field(default_factory=dict)
    comment_prefixes: Counter = field(default_factory=Counter)

    @property
    def files_to_update(self) -> List[Path]:
        return list(self.issues.keys())

    @property
    def suggested_prefix(self) -> Optional[str]:
        if not self.comment_prefixes:
            return None
        return top(self.comment_prefixes)


def collect_candidates(config: LintConfig) -> List[SourceFile]:
    """
    Crawls the tree and parses every file that survives the exclusion predicates
    and has a known comment syntax.
    """
    predicates = config.predicates
    if predicates is None:
        predicates = default_predicates(config.root, config.ignore_file_name)

    candidates: List[SourceFile] = []
    for path in crawl_files(config.root):
        if ignore_file(path, predicates):
            continue
        try:
            candidates.append(parse_file(path, config.classifier))
        except UnknownLanguageError as e:
            logger.debug("Skipping %s: %s", path, e)
    return candidates


def lint(config: LintConfig) -> LintResult:
    candidates = collect_candidates(config)
    majority = find_majority(candidates)
    logger.debug("Majority copyright: %r, license: %r", majority.copyright, majority.license)

    check = HeaderConsistencyCheck(majority)
    result = LintResult(majority=majority, candidates=candidates)
    for source in candidates:
        issues = check.check(source)
        if not issues:
            continue
        result.issues[source.path] = issues
        # one vote per issue, so files missing both lines weigh more
        result.comment_prefixes[source.comment_prefix] += len(issues)
    return result


def report(result: LintResult, config: LintConfig) -> None:
    """
    Prints the per-file findings to stderr and, in report mode, the suggested header to stdout.
    In update mode the suggested header is written into every violating file instead.
    """
    for path, issues in result.issues.items():
        if config.verbose:
            for issue in issues:
                error(f'file "{issue.location.path}" {issue.message}')
        diag(f" M {path}")

        if config.update:
            # every issue of a file carries the same whole-header fix
            fix = issues[0].fix
            assert fix is not None, f"Issue without a fix for {path}"
            fix()

    if not result.issues:
        if config.verbose:
            success(f"All {len(result.candidates)} source files carry the majority header.")
        return

    if config.update:
        return

    diag()
    diag(BANNER)
    pfx = result.suggested_prefix
    print(f"{pfx} {result.majority.copyright}")
    print(f"{pfx} {result.majority.license}")
    print()
    sys.stdout.flush()


def run(config: LintConfig) -> LintResult:
    result = lint(config)
    report(result, config)
    return result
