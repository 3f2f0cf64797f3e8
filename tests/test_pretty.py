import re
from pathlib import Path

import click
import pytest

from sdir import TraversalConfig, render_text
from sdir.render import TerminalTarget, TreeLine, heading_name


def _make_file(p: Path, content: str = "x"):
    p.parent.mkdir(parents=True, exist_ok=True)
    p.write_text(content, encoding="utf-8")


def _tree_lines(s: str):
    """Return the tree lines: everything after the heading and root line, up to the contents."""
    lines = s.split("\n# File Contents\n", 1)[0].splitlines()
    return lines[2:]


def test_heading_and_root_line(tmp_path: Path):
    _make_file(tmp_path / "a.txt")

    out = render_text(tmp_path, contents=False)
    lines = out.splitlines()

    assert lines[0] == f"# tree structure of directory `{tmp_path.name}`"
    assert lines[1] == f"📁 {tmp_path}"


def test_heading_uses_cwd_name_for_dot(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    _make_file(tmp_path / "a.txt")
    monkeypatch.chdir(tmp_path)

    out = render_text(Path("."), contents=False)
    assert out.splitlines()[:3] == [
        f"# tree structure of directory `{tmp_path.name}`",
        "📁 .",
        "└── 📄 a.txt",
    ]


def test_nested_structure(tmp_path: Path):
    # project/
    #   src/
    #     a.py
    #   docs/
    #     readme.md
    _make_file(tmp_path / "src/a.py")
    _make_file(tmp_path / "docs/readme.md")

    out = render_text(tmp_path, contents=False)

    assert _tree_lines(out) == [
        "├── 📁 docs",
        "│   └── 📄 readme.md",
        "└── 📁 src",
        "    └── 📄 a.py",
    ]


def test_continuation_bars_follow_ancestors(tmp_path: Path):
    _make_file(tmp_path / "a/b/c.txt")
    _make_file(tmp_path / "a/z.txt")
    _make_file(tmp_path / "top.txt")

    out = render_text(tmp_path, contents=False)

    assert _tree_lines(out) == [
        "├── 📁 a",
        "│   ├── 📁 b",
        "│   │   └── 📄 c.txt",
        "│   └── 📄 z.txt",
        "└── 📄 top.txt",
    ]


def test_empty_directories_are_annotated(tmp_path: Path):
    (tmp_path / "empty/nested").mkdir(parents=True)
    _make_file(tmp_path / "f.txt")

    out = render_text(tmp_path, contents=False)

    assert _tree_lines(out) == [
        "├── 📁 empty (empty)",
        "│   └── 📁 nested (empty)",
        "└── 📄 f.txt",
    ]


def test_empty_directories_are_hidden_with_include_glob(tmp_path: Path):
    (tmp_path / "empty").mkdir()
    _make_file(tmp_path / "f.txt")

    out = render_text(tmp_path, TraversalConfig(include_glob="*.txt"), contents=False)
    assert _tree_lines(out) == ["└── 📄 f.txt"]


def test_file_contents_section(tmp_path: Path):
    _make_file(tmp_path / "docs/readme.md", "# Title\n")
    _make_file(tmp_path / "a.py", "x = 1")

    out = render_text(tmp_path)

    expected_contents = (
        "\n# File Contents\n"
        f"\n# {tmp_path / 'a.py'}\n"
        "x = 1\n"
        f"\n# {tmp_path / 'docs/readme.md'}\n"
        "# Title\n"
    )
    assert out.endswith(expected_contents)


def test_no_contents_section_without_files(tmp_path: Path):
    (tmp_path / "only_dir").mkdir()

    out = render_text(tmp_path)
    assert "# File Contents" not in out
    assert out.endswith("└── 📁 only_dir (empty)\n")


def test_depth_limit_hides_deeper_files_and_their_contents(tmp_path: Path):
    _make_file(tmp_path / "sub/inner.txt", "INNER")

    out = render_text(tmp_path, TraversalConfig(max_depth=1))

    assert _tree_lines(out) == ["└── 📁 sub"]
    assert "inner.txt" not in out
    assert "INNER" not in out


def test_unreadable_content_is_listed_but_not_collected(tmp_path: Path):
    (tmp_path / "blob.bin").write_bytes(b"\xff\xfe\x00\x01")
    (tmp_path / "nul.txt").write_bytes(b"a\x00b\n")
    (tmp_path / "latin1.txt").write_bytes("café".encode("latin-1"))
    _make_file(tmp_path / "ok.txt", "fine")

    out = render_text(tmp_path)

    assert _tree_lines(out) == [
        "├── 📄 blob.bin",
        "├── 📄 latin1.txt",
        "├── 📄 nul.txt",
        "└── 📄 ok.txt",
    ]
    contents = out.split("\n# File Contents\n", 1)[1]
    assert f"# {tmp_path / 'ok.txt'}" in contents
    # Valid UTF-8 is kept even with NUL bytes in it.
    assert f"# {tmp_path / 'nul.txt'}\na\x00b\n" in contents
    assert "blob.bin" not in contents
    assert "latin1.txt" not in contents


def test_rendering_is_idempotent(tmp_path: Path):
    _make_file(tmp_path / "a/b.txt", "b")
    _make_file(tmp_path / "c.txt", "c")
    (tmp_path / "d").mkdir()

    assert render_text(tmp_path) == render_text(tmp_path)


def test_terminal_output_matches_plain_output(tmp_path: Path, capsys: pytest.CaptureFixture[str]):
    _make_file(tmp_path / "src/a.py")
    (tmp_path / "empty").mkdir()

    out = render_text(tmp_path, targets=[TerminalTarget()])
    captured = capsys.readouterr()

    # Contents are only part of the plain buffer.
    assert captured.out == out.split("\n# File Contents\n", 1)[0]


def test_styled_line_differs_only_by_styling():
    line = TreeLine(prefix="│   ", connector="└──", name="pkg", is_dir=True, is_empty=True)

    styled = line.styled()
    assert styled != line.plain()
    assert click.unstyle(styled) == line.plain() == "│   └── 📁 pkg (empty)"
    assert re.search(r"\x1b\[", styled)


def test_dot_root_keeps_leading_dot_in_content_headings(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    _make_file(tmp_path / "a.txt", "A")
    _make_file(tmp_path / "src/b.txt", "B")
    monkeypatch.chdir(tmp_path)

    out = render_text(Path("."))
    assert out.endswith(
        "\n# File Contents\n"
        "\n# ./a.txt\nA\n"
        "\n# ./src/b.txt\nB\n"
    )

    out2 = render_text("./src")
    assert out2.splitlines()[:3] == [
        "# tree structure of directory `src`",
        "📁 ./src",
        "└── 📄 b.txt",
    ]
    assert out2.endswith("\n# ./src/b.txt\nB\n")


def test_heading_name_falls_back_to_the_typed_path(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    monkeypatch.chdir(tmp_path)

    assert heading_name(".") == tmp_path.name
    assert heading_name("./src") == "src"
    assert heading_name("src/") == "src"
    assert heading_name("./") == "./"
    assert heading_name("foo/..") == "foo/.."
    assert heading_name("/") == "/"
