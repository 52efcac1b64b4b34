"""
* [x] Check for Inconsistent/Missing Copyright/License Headers: Scan source files for the presence
      and consistency of copyright notices and SPDX license identifiers. The expected values are
      whatever the majority of the tree already uses.
"""
from typing import List
import json

from headerlint.checks.base import SourceFileCheck, Issue, IssueType, IssueList
from headerlint.headers import SourceFile, rewrite_header
from headerlint.majority import Majority


# want and got are passed already quoted, see quote()
E_MISSING_COPYRIGHT  = IssueType("0f6b7c34-5d1e-4b8a-9a63-2c4e8d1f7b02", "is missing the copyright notice")
E_MINORITY_COPYRIGHT = IssueType("a9d3e2c1-7b4f-4e6a-8c15-3f2b9e7d6a40", "has minority copyright notice: want: {want}, got: {got}")
E_MISSING_LICENSE    = IssueType("5e1c8b7a-2d93-4f06-b4a8-9c7e1d3f5a26", "is missing the license identifier")
E_MINORITY_LICENSE   = IssueType("c47a1f92-8e3b-4d5c-a6f0-1b2d9e8c7f53", "has minority license identifier: want: {want}, got: {got}")


def quote(value: str) -> str:
    """
    Double-quotes value with embedded quotes, backslashes and control characters escaped.
    """
    return json.dumps(value, ensure_ascii=False)


class HeaderConsistencyCheck(SourceFileCheck):
    """
    Compares a file's copyright and license lines against the majority of the tree.
    Both fields are checked independently, so one file can yield two issues.
    Every issue is fixable by rewriting the file's header with the majority values.
    """
    def __init__(self, majority: Majority):
        self.majority = majority

    def check(self, source: SourceFile) -> List[Issue]:
        issues = IssueList()

        def fix() -> None:
            rewrite_header(source, self.majority.copyright, self.majority.license)

        if source.copyright == "":
            issues.append(E_MISSING_COPYRIGHT.at(source.path).fixable(fix))
        elif source.copyright != self.majority.copyright:
            issues.append(E_MINORITY_COPYRIGHT.make(
                want=quote(self.majority.copyright),
                got=quote(source.copyright),
            ).at(source.path).fixable(fix))

        if source.license == "":
            issues.append(E_MISSING_LICENSE.at(source.path).fixable(fix))
        elif source.license != self.majority.license:
            issues.append(E_MINORITY_LICENSE.make(
                want=quote(self.majority.license),
                got=quote(source.license),
            ).at(source.path).fixable(fix))

        return issues.issues
