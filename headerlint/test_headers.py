from pathlib import Path

import pytest

from headerlint.headers import SourceFile, apply_header, parse_file, parse_lines, rewrite_header, split_lines
from headerlint.languages import UnknownLanguageError

COPYRIGHT = "Copyright 2020 VMware, Inc."
LICENSE = "SPDX-License-Identifier: BSD-2-Clause"


def test_parse_lines_both_present():
    f = parse_lines(Path("main.go"), "//", [f"// {COPYRIGHT}", f"// {LICENSE}", "", "package main"])
    assert f == SourceFile(Path("main.go"), "//", COPYRIGHT, LICENSE)


def test_parse_lines_neither_present():
    f = parse_lines(Path("main.go"), "//", ["package main", "", "func main() {}"])
    assert f.copyright == ""
    assert f.license == ""


def test_parse_lines_only_one_present():
    f = parse_lines(Path("main.go"), "//", [f"// {LICENSE}", "package main"])
    assert f.copyright == ""
    assert f.license == LICENSE

    f = parse_lines(Path("app.py"), "#", ["#!/usr/bin/env python3", "# Copyright 2021 Acme"])
    assert f.copyright == "Copyright 2021 Acme"
    assert f.license == ""


def test_parse_lines_requires_matching_prefix():
    f = parse_lines(Path("main.go"), "//", [f"# {COPYRIGHT}", f"//{LICENSE}", f"/* {COPYRIGHT} */"])
    assert f.copyright == ""
    assert f.license == ""


def test_parse_lines_first_occurrence_wins():
    f = parse_lines(Path("main.go"), "//", ["// Copyright 2019 First", "// Copyright 2020 Second"])
    assert f.copyright == "Copyright 2019 First"


def test_parse_file(tmp_path):
    path = tmp_path / "main.go"
    path.write_text(f"// {COPYRIGHT}\r\n// {LICENSE}\r\n\r\npackage main\r\n")

    assert parse_file(path) == SourceFile(path, "//", COPYRIGHT, LICENSE)


def test_parse_file_only_scans_first_five_lines(tmp_path):
    path = tmp_path / "main.go"
    path.write_text("\n".join(["package main", "", "import \"fmt\"", "", "", f"// {COPYRIGHT}", f"// {LICENSE}", ""]))

    f = parse_file(path)
    assert f.copyright == ""
    assert f.license == ""


def test_parse_file_unknown_language(tmp_path):
    path = tmp_path / "notes.xyz"
    path.write_text(f"// {COPYRIGHT}\n")

    with pytest.raises(UnknownLanguageError):
        parse_file(path)

    assert parse_file(path, lambda p, c: "Go").copyright == COPYRIGHT


def test_split_lines_keeps_terminators():
    text = "// a\n// b\r\n\npackage c\r\nfunc F() {}"
    assert split_lines(text) == ["// a\n", "// b\r\n", "\n", "package c\r\n", "func F() {}"]
    assert "".join(split_lines(text)) == text
    assert split_lines("") == []


def test_apply_header_replaces_existing_lines():
    lines = ["// Copyright 2019 Other\n", "// SPDX-License-Identifier: MIT\n", "\n", "package main\n"]
    assert apply_header(lines, "//", COPYRIGHT, LICENSE) == [
        f"// {COPYRIGHT}\n", f"// {LICENSE}\n", "\n", "package main\n",
    ]


def test_apply_header_inserts_missing_block():
    assert apply_header(["package main\n"], "//", COPYRIGHT, LICENSE) == [
        f"// {COPYRIGHT}\n", f"// {LICENSE}\n", "\n", "package main\n",
    ]
    assert apply_header(["\n", "package main\n"], "//", COPYRIGHT, LICENSE) == [
        f"// {COPYRIGHT}\n", f"// {LICENSE}\n", "\n", "package main\n",
    ]
    assert apply_header([], "//", COPYRIGHT, LICENSE) == [f"// {COPYRIGHT}\n", f"// {LICENSE}\n"]


def test_apply_header_without_final_newline():
    assert apply_header(["package d"], "//", COPYRIGHT, LICENSE) == [
        f"// {COPYRIGHT}\n", f"// {LICENSE}\n", "\n", "package d",
    ]
    assert apply_header([f"// {COPYRIGHT}"], "//", COPYRIGHT, LICENSE) == [
        f"// {COPYRIGHT}\n", f"// {LICENSE}\n",
    ]


def test_apply_header_keeps_shebang_first():
    lines = ["#!/bin/sh\n", "echo hi\n"]
    assert apply_header(lines, "#", "Copyright 2021 Acme", "SPDX-License-Identifier: MIT") == [
        "#!/bin/sh\n", "# Copyright 2021 Acme\n", "# SPDX-License-Identifier: MIT\n", "\n", "echo hi\n",
    ]


def test_apply_header_inserts_single_missing_line():
    assert apply_header([f"// {LICENSE}\n", "package main\n"], "//", COPYRIGHT, LICENSE) == [
        f"// {COPYRIGHT}\n", f"// {LICENSE}\n", "package main\n",
    ]
    assert apply_header([f"// {COPYRIGHT}\n", "package main\n"], "//", COPYRIGHT, LICENSE) == [
        f"// {COPYRIGHT}\n", f"// {LICENSE}\n", "package main\n",
    ]


def test_apply_header_inserted_line_takes_neighbour_ending():
    assert apply_header([f"// {COPYRIGHT}\r\n", "package main\n"], "//", COPYRIGHT, LICENSE) == [
        f"// {COPYRIGHT}\r\n", f"// {LICENSE}\r\n", "package main\n",
    ]
    assert apply_header(["\n", "package main\r\n"], "//", COPYRIGHT, LICENSE) == [
        f"// {COPYRIGHT}\n", f"// {LICENSE}\n", "\n", "package main\r\n",
    ]


COMMENTS = ["// one\n", "// two\n", "// three\n", "// four\n"]


def test_apply_header_moves_copyright_off_last_scanned_line():
    lines = COMMENTS + [f"// {COPYRIGHT}\n", "package c\n"]
    assert apply_header(lines, "//", COPYRIGHT, LICENSE) == [
        f"// {COPYRIGHT}\n", f"// {LICENSE}\n", "\n", *COMMENTS, "package c\n",
    ]


def test_apply_header_moves_license_off_last_scanned_line():
    lines = COMMENTS + [f"// {LICENSE}\n", "package c\n"]
    assert apply_header(lines, "//", COPYRIGHT, LICENSE) == [
        f"// {COPYRIGHT}\n", f"// {LICENSE}\n", "\n", *COMMENTS, "package c\n",
    ]


def test_apply_header_inserts_next_to_fourth_line():
    lines = COMMENTS[:3] + [f"// {LICENSE}\n", "package c\n"]
    assert apply_header(lines, "//", COPYRIGHT, LICENSE) == [
        *COMMENTS[:3], f"// {COPYRIGHT}\n", f"// {LICENSE}\n", "package c\n",
    ]


@pytest.mark.parametrize("marker", [COPYRIGHT, LICENSE])
def test_rewrite_header_keeps_both_lines_in_scanned_head(tmp_path, marker):
    path = tmp_path / "c.go"
    path.write_text("".join(COMMENTS) + f"// {marker}\npackage c\n")

    assert rewrite_header(parse_file(path), COPYRIGHT, LICENSE)
    assert parse_file(path) == SourceFile(path, "//", COPYRIGHT, LICENSE)
    assert path.read_text().count(f"// {LICENSE}") == 1

    assert not rewrite_header(parse_file(path), COPYRIGHT, LICENSE)


def test_rewrite_header_preserves_line_endings(tmp_path):
    path = tmp_path / "main.go"
    path.write_bytes(b"// Copyright 2019 Other\r\npackage main\r\n")
    source = parse_file(path)

    assert rewrite_header(source, COPYRIGHT, LICENSE)
    assert path.read_bytes() == (f"// {COPYRIGHT}\r\n// {LICENSE}\r\npackage main\r\n").encode()

    # already correct, nothing to write
    assert not rewrite_header(parse_file(path), COPYRIGHT, LICENSE)


def test_rewrite_header_mixed_line_endings(tmp_path):
    path = tmp_path / "c.go"
    path.write_bytes(
        b"// Copyright 2019 Other\n// SPDX-License-Identifier: BSD-2-Clause\n\npackage c\n\nfunc F() {}\r\n")

    assert rewrite_header(parse_file(path), COPYRIGHT, "SPDX-License-Identifier: BSD-2-Clause")
    assert path.read_bytes() == (
        f"// {COPYRIGHT}\n// SPDX-License-Identifier: BSD-2-Clause\n\npackage c\n\nfunc F() {{}}\r\n").encode()


def test_rewrite_header_keeps_undecodable_bytes(tmp_path):
    path = tmp_path / "main.go"
    path.write_bytes(b"package main\n// \xff\xfe\n")

    assert rewrite_header(parse_file(path), COPYRIGHT, LICENSE)
    assert path.read_bytes() == f"// {COPYRIGHT}\n// {LICENSE}\n\n".encode() + b"package main\n// \xff\xfe\n"
