from __future__ import annotations

import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent / "backend"))
import hosts_file
from hosts_file import (
    SECTION_END,
    SECTION_START,
    HostsFileError,
    apply_hosts_block,
    build_block,
    find_block,
    merge,
)

BODY = "9.9.9.9   a.example.com  # web\n10.0.0.1  b.example.com  # api\n"
NEW_BODY = "5.5.5.5  c.example.com  # shop\n"


def test_build_block_wraps_body():
    assert build_block(BODY) == f"{SECTION_START}\n{BODY}{SECTION_END}\n"


def test_build_block_empty_body():
    assert build_block("") == f"{SECTION_START}\n{SECTION_END}\n"


def test_merge_appends_when_no_block():
    existing = "127.0.0.1 localhost\n"
    assert merge(existing, BODY) == existing + build_block(BODY)


def test_merge_into_empty_file():
    assert merge("", BODY) == build_block(BODY)


def test_merge_appends_after_unterminated_last_line():
    out = merge("127.0.0.1 localhost", BODY)
    assert out == "127.0.0.1 localhost\n" + build_block(BODY)


def test_merge_replaces_existing_block_and_preserves_surroundings():
    existing = "keep-above\n" + build_block(BODY) + "keep-below\n"
    out = merge(existing, NEW_BODY)
    assert out == "keep-above\n" + build_block(NEW_BODY) + "keep-below\n"

    lines = out.splitlines()
    assert lines[0] == "keep-above"
    assert lines[-1] == "keep-below"
    assert lines[1:-1] == [SECTION_START, NEW_BODY.rstrip("\n"), SECTION_END]


def test_merge_idempotent():
    start = "127.0.0.1 localhost\n# user entry\n10.1.1.1 db.internal\n"
    once = merge(start, BODY)
    twice = merge(once, BODY)
    assert once == twice


def test_merge_preserves_crlf_outside_block():
    existing = "127.0.0.1 localhost\r\n" + build_block(BODY) + "::1 localhost\r\n"
    out = merge(existing, NEW_BODY)
    assert out.startswith("127.0.0.1 localhost\r\n")
    assert out.endswith("::1 localhost\r\n")


def test_start_marker_without_end_appends():
    existing = f"{SECTION_START}\nstale\n"
    out = merge(existing, BODY)
    assert out == existing + build_block(BODY)


def test_orphan_start_marker_merge_idempotent():
    start = f"127.0.0.1 localhost\n{SECTION_START}\nuser-line\n"
    once = merge(start, BODY)
    twice = merge(once, BODY)
    assert once == start + build_block(BODY)
    assert twice == once
    assert "user-line\n" in twice


def test_orphan_end_marker_left_alone():
    existing = f"{SECTION_END}\nuser-line\n"
    once = merge(existing, BODY)
    assert once == existing + build_block(BODY)
    assert merge(once, BODY) == once


def test_find_block_uses_nearest_start_before_end():
    lines = [f"{SECTION_START}\n", "user\n", f"{SECTION_START}\n", "x\n", f"{SECTION_END}\n"]
    assert find_block(lines) == (2, 4)


def test_find_block_spans_to_last_end_marker():
    lines = [f"{SECTION_START}\n", "x\n", f"{SECTION_END}\n", "y\n", f"{SECTION_END}\n", "z\n"]
    assert find_block(lines) == (0, 4)


def test_find_block_missing():
    assert find_block(["127.0.0.1 localhost\n"]) is None


def test_apply_writes_file(tmp_path: Path):
    hosts = tmp_path / "hosts"
    hosts.write_text("127.0.0.1 localhost\n")
    updated = apply_hosts_block(hosts, BODY)
    assert hosts.read_text() == updated
    assert SECTION_START in updated


def test_apply_twice_same_content(tmp_path: Path):
    hosts = tmp_path / "hosts"
    hosts.write_text("127.0.0.1 localhost\n")
    apply_hosts_block(hosts, BODY)
    first = hosts.read_bytes()
    apply_hosts_block(hosts, BODY)
    assert hosts.read_bytes() == first


def test_apply_unchanged_content_skips_write(tmp_path: Path, monkeypatch: pytest.MonkeyPatch, caplog):
    hosts = tmp_path / "hosts"
    hosts.write_text("127.0.0.1 localhost\n" + build_block(BODY))
    real_open = open

    def no_write_open(file, mode="r", *args, **kwargs):
        if "w" in mode:
            raise AssertionError("unchanged hosts file must not be rewritten")
        return real_open(file, mode, *args, **kwargs)

    monkeypatch.setattr(hosts_file, "open", no_write_open, raising=False)
    with caplog.at_level("INFO"):
        updated = apply_hosts_block(hosts, BODY)
    assert updated == hosts.read_text()
    assert "already up to date" in caplog.text
    assert "Wrote managed block" not in caplog.text


def test_apply_missing_file_raises_without_writing(tmp_path: Path):
    hosts = tmp_path / "missing-hosts"
    with pytest.raises(HostsFileError) as exc:
        apply_hosts_block(hosts, BODY)
    assert exc.value.action == "read"
    assert not hosts.exists()


def test_apply_write_failure_reported(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    hosts = tmp_path / "hosts"
    hosts.write_text("127.0.0.1 localhost\n")
    real_open = open

    def fake_open(file, mode="r", *args, **kwargs):
        if "w" in mode:
            raise PermissionError("read-only file system")
        return real_open(file, mode, *args, **kwargs)

    monkeypatch.setattr(hosts_file, "open", fake_open, raising=False)
    with pytest.raises(HostsFileError) as exc:
        apply_hosts_block(hosts, BODY)
    assert exc.value.action == "write"
    assert hosts.read_text() == "127.0.0.1 localhost\n"
