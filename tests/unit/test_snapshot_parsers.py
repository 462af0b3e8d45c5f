"""Unit tests for tmux/ps snapshot parsers."""

from tmuxpick.core.models import PaneRecord, SessionActivityEntry, WindowRecord
from tmuxpick.core.parsers import (
    clean_session_name,
    parse_int,
    parse_pane_data,
    parse_process_tree,
    parse_scoped_pane_data,
    parse_scoped_window_data,
    parse_session_activity,
    parse_session_activity_entries,
    parse_window_data,
    strip_ansi,
)

GLYPH = "\U000f06a9"


class TestStripAnsi:
    def test_removes_color_codes(self):
        assert strip_ansi("\x1b[32mmyproject\x1b[0m") == "myproject"

    def test_removes_multiple_codes(self):
        assert strip_ansi(f"\x1b[33mfoo\x1b[35m {GLYPH}\x1b[0m") == f"foo {GLYPH}"

    def test_plain_string_unchanged(self):
        assert strip_ansi("plain") == "plain"

    def test_removes_256_color_codes(self):
        assert strip_ansi("\x1b[38;5;245mgray\x1b[0m") == "gray"


class TestCleanSessionName:
    def test_removes_single_indicator(self):
        assert clean_session_name(f"myproject {GLYPH}", GLYPH) == "myproject"

    def test_removes_multiple_indicators(self):
        assert clean_session_name(f"myproject {GLYPH} {GLYPH}", GLYPH) == "myproject"

    def test_name_without_indicator_unchanged(self):
        assert clean_session_name("myproject", GLYPH) == "myproject"

    def test_custom_glyph_with_regex_characters(self):
        assert clean_session_name("dev * *", "*") == "dev"


class TestParseInt:
    def test_plain_integer(self):
        assert parse_int("12") == 12

    def test_trailing_garbage_ignored(self):
        assert parse_int("3x") == 3

    def test_non_numeric_is_none(self):
        assert parse_int("abc") is None
        assert parse_int("") is None


class TestParsePaneData:
    def test_parses_standard_pane_data(self):
        raw = "dev:0:0:1234\ndev:0:1:5678\nwork:1:0:9012"

        assert parse_pane_data(raw) == [
            PaneRecord(session="dev", window_index=0, pane_index=0, pid="1234"),
            PaneRecord(session="dev", window_index=0, pane_index=1, pid="5678"),
            PaneRecord(session="work", window_index=1, pane_index=0, pid="9012"),
        ]

    def test_empty_input(self):
        assert parse_pane_data("") == []

    def test_skips_malformed_lines(self):
        raw = "good:0:0:1234\nbad:only:two\n::\nalso-good:1:1:5678"

        result = parse_pane_data(raw)

        assert [pane.session for pane in result] == ["good", "also-good"]

    def test_non_numeric_indices_do_not_drop_line(self):
        """A 4-field line always yields a record, even with garbage indices."""
        result = parse_pane_data("dev:x:y:1234")

        assert len(result) == 1
        assert result[0].window_index is None
        assert result[0].pane_index is None
        assert result[0].pid == "1234"

    def test_output_length_matches_four_field_lines(self):
        raw = "a:0:0:1\nb:0\nc:1:2:3:extra\n\nd:0:0"

        assert len(parse_pane_data(raw)) == 2

    def test_target_property(self):
        pane = PaneRecord(session="dev", window_index=2, pane_index=1, pid="99")

        assert pane.target == "dev:2.1"


class TestParseWindowData:
    def test_parses_standard_window_data(self):
        raw = "dev:0:editor:2\ndev:1:server:1\nwork:0:shell:1"

        assert parse_window_data(raw) == [
            WindowRecord(session="dev", index=0, name="editor", pane_count=2),
            WindowRecord(session="dev", index=1, name="server", pane_count=1),
            WindowRecord(session="work", index=0, name="shell", pane_count=1),
        ]

    def test_empty_input(self):
        assert parse_window_data("") == []

    def test_skips_malformed_lines(self):
        raw = "dev:0:editor:2\nbad\nwork:0:shell:1"

        assert len(parse_window_data(raw)) == 2


class TestScopedParsers:
    def test_scoped_panes_take_session_from_argument(self):
        raw = "0:0:100\n1:2:200\nbroken:1"

        assert parse_scoped_pane_data(raw, "dev") == [
            PaneRecord(session="dev", window_index=0, pane_index=0, pid="100"),
            PaneRecord(session="dev", window_index=1, pane_index=2, pid="200"),
        ]

    def test_scoped_windows_take_session_from_argument(self):
        raw = "0:editor:2\n1:claude:1\nbad"

        assert parse_scoped_window_data(raw, "dev") == [
            WindowRecord(session="dev", index=0, name="editor", pane_count=2),
            WindowRecord(session="dev", index=1, name="claude", pane_count=1),
        ]


class TestParseProcessTree:
    def test_parses_pid_ppid_pairs(self):
        raw = "  100   1\n  200   100\n  300   200"

        pid_to_parent = parse_process_tree(raw)

        assert pid_to_parent == {"100": "1", "200": "100", "300": "200"}

    def test_empty_input(self):
        assert parse_process_tree("") == {}

    def test_skips_lines_without_both_tokens(self):
        raw = "100 1\n   \n  42\n\t300\t200  "

        assert parse_process_tree(raw) == {"100": "1", "300": "200"}


class TestParseSessionActivity:
    def test_sorts_by_most_recent_activity(self):
        raw = "100:old\n300:newest\n200:middle"

        assert parse_session_activity(raw) == ["newest", "middle", "old"]

    def test_empty_input(self):
        assert parse_session_activity("") == []

    def test_single_session(self):
        assert parse_session_activity("500:only") == ["only"]

    def test_ties_keep_input_order(self):
        raw = "100:b\n100:a\n200:c\n100:d"

        assert parse_session_activity(raw) == ["c", "b", "a", "d"]

    def test_non_numeric_timestamp_sorts_last(self):
        raw = "?:weird\n100:old\n200:new"

        assert parse_session_activity(raw) == ["new", "old", "weird"]

    def test_entries_carry_timestamps(self):
        assert parse_session_activity_entries("5:a\n9:b") == [
            SessionActivityEntry(timestamp=9, session_name="b"),
            SessionActivityEntry(timestamp=5, session_name="a"),
        ]

    def test_lines_without_separator_dropped(self):
        assert parse_session_activity("garbage\n10:ok") == ["ok"]
