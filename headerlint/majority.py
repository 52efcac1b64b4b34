from collections import Counter
from dataclasses import dataclass
from typing import Iterable, List, Mapping

from headerlint.headers import SourceFile


class NoConsensusError(ValueError):
    """
    Raised when not a single file in the tree carries a value to agree on.
    """


@dataclass(frozen=True)
class Majority:
    copyright: str
    license: str


def tally(values: Iterable[str]) -> Counter:
    """
    Counts how many times each non-empty value occurs.
    """
    counts = Counter(values)
    del counts[""]
    return counts


def sort_desc(counts: Mapping[str, int]) -> List[str]:
    """
    Returns the non-empty keys of counts, most frequent first.
    Keys with equal counts are ordered lexicographically so the result is stable across runs.
    """
    keys = [k for k in counts if k != ""]
    return sorted(keys, key=lambda k: (-counts[k], k))


def top(counts: Mapping[str, int]) -> str:
    return sort_desc(counts)[0]


def find_majority(files: Iterable[SourceFile]) -> Majority:
    files = list(files)
    copyrights = tally(f.copyright for f in files)
    licenses = tally(f.license for f in files)

    if not copyrights:
        raise NoConsensusError("cannot find any copyright notice in any source file")
    if not licenses:
        raise NoConsensusError("cannot find any SPDX-License-Identifier tag in any source file")

    return Majority(copyright=top(copyrights), license=top(licenses))
