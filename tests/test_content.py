# tests/test_content.py
import os
import stat
from pathlib import Path

import pytest

from sdir import render_file
from sdir.content import ContentCollector, display_path
from sdir.errors import ReadError


def _make_file(p: Path, content: str = "x"):
    p.parent.mkdir(parents=True, exist_ok=True)
    p.write_text(content, encoding="utf-8")


def test_render_file_relative_to_cwd(tmp_path: Path):
    f = tmp_path / "notes.txt"
    _make_file(f, "hello\nworld\n")

    out = render_file(f, cwd=tmp_path)
    assert out == "./notes.txt\nhello\nworld\n"


def test_render_file_adds_missing_trailing_newline(tmp_path: Path):
    f = tmp_path / "src/main.py"
    _make_file(f, "print('x')")

    out = render_file(f, cwd=tmp_path)
    assert out == "./src/main.py\nprint('x')\n"
    assert out.splitlines() == ["./src/main.py", "print('x')"]


def test_render_file_outside_cwd_uses_given_path(tmp_path: Path):
    f = tmp_path / "data/notes.txt"
    _make_file(f, "hi")
    elsewhere = tmp_path / "elsewhere"
    elsewhere.mkdir()

    out = render_file(f, cwd=elsewhere)
    assert out == f"{f}\nhi\n"


def test_display_path_defaults_to_process_cwd(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    f = tmp_path / "a.txt"
    _make_file(f)
    monkeypatch.chdir(tmp_path)

    assert display_path(Path("a.txt")) == "./a.txt"
    assert display_path(f) == "./a.txt"


def test_render_file_rejects_non_utf8(tmp_path: Path):
    f = tmp_path / "latin1.txt"
    f.write_bytes("café".encode("latin-1"))

    with pytest.raises(ReadError) as excinfo:
        render_file(f, cwd=tmp_path)
    assert excinfo.value.path == f


@pytest.mark.skipif(
    os.name != "posix" or os.geteuid() == 0,
    reason="Permission bits test is POSIX-only and meaningless as root",
)
def test_render_file_unreadable(tmp_path: Path):
    secret = tmp_path / "secret.txt"
    _make_file(secret, "hidden")

    secret.chmod(0)
    try:
        with pytest.raises(ReadError):
            render_file(secret, cwd=tmp_path)
    finally:
        secret.chmod(stat.S_IRWXU)


def test_collector_keeps_traversal_order_and_skips_unreadable(tmp_path: Path):
    _make_file(tmp_path / "b.txt", "B")
    _make_file(tmp_path / "a.txt", "A\n")
    (tmp_path / "c.txt").write_bytes("café".encode("latin-1"))

    collector = ContentCollector()
    for name in ["b.txt", "c.txt", "a.txt", "missing.txt"]:
        collector.collect(tmp_path / name, f"./{name}")

    assert collector.files == [("./b.txt", "B"), ("./a.txt", "A\n")]
    assert collector.render() == (
        "\n# File Contents\n"
        "\n# ./b.txt\nB\n"
        "\n# ./a.txt\nA\n"
    )


def test_collector_keeps_utf8_text_with_nul_bytes(tmp_path: Path):
    nul = tmp_path / "n.txt"
    nul.write_bytes(b"a\x00b\n")

    collector = ContentCollector()
    collector.collect(nul)

    assert collector.files == [(str(nul), "a\x00b\n")]


def test_collector_renders_nothing_when_empty():
    assert ContentCollector().render() == ""
