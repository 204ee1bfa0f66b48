"""Tests for pi.pager.keys and pi.pager.events -- key parsing."""

from __future__ import annotations

import pytest

from pi.pager.events import RESIZE_EVENT, InputEvent, decode_input, paste_event
from pi.pager.keys import (
    LEGACY_KEY_SEQUENCES,
    Key,
    is_mouse_sequence,
    parse_key,
)


# ---------------------------------------------------------------------------
# Key helper class
# ---------------------------------------------------------------------------


class TestKeyConstants:
    def test_navigation_keys(self) -> None:
        assert Key.up == "up"
        assert Key.down == "down"
        assert Key.page_up == "pageUp"
        assert Key.page_down == "pageDown"


# ---------------------------------------------------------------------------
# parse_key
# ---------------------------------------------------------------------------


class TestParseKeyLegacy:
    @pytest.mark.parametrize(
        "data,expected",
        [
            ("\x1b[A", "up"),
            ("\x1b[B", "down"),
            ("\x1bOA", "up"),
            ("\x1bOB", "down"),
            ("\x1b[5~", "pageUp"),
            ("\x1b[6~", "pageDown"),
            ("\x1b[H", "home"),
            ("\x1b[4~", "end"),
            ("\x1b[15~", "f5"),
        ],
    )
    def test_sequences(self, data: str, expected: str) -> None:
        assert parse_key(data) == expected

    def test_every_legacy_sequence_parses(self) -> None:
        for seq, name in LEGACY_KEY_SEQUENCES.items():
            assert parse_key(seq) == name


class TestParseKeyModified:
    @pytest.mark.parametrize(
        "data,expected",
        [
            ("\x1b[1;2A", "shift+up"),
            ("\x1b[1;5B", "ctrl+down"),
            ("\x1b[1;3C", "alt+right"),
            ("\x1b[1;6A", "ctrl+shift+up"),
            ("\x1b[5;2~", "shift+pageUp"),
            ("\x1b[6;5~", "ctrl+pageDown"),
        ],
    )
    def test_xterm_modifiers(self, data: str, expected: str) -> None:
        assert parse_key(data) == expected

    def test_lock_bits_ignored(self) -> None:
        # Modifier 1 + shift(1) + caps lock(64)
        assert parse_key("\x1b[1;66A") == "shift+up"

    def test_unknown_tilde_number(self) -> None:
        assert parse_key("\x1b[99;2~") is None


class TestParseKeySimple:
    @pytest.mark.parametrize(
        "data,expected",
        [
            ("q", "q"),
            ("k", "k"),
            ("j", "j"),
            ("Q", "Q"),
            (" ", "space"),
            ("\r", "enter"),
            ("\t", "tab"),
            ("\x7f", "backspace"),
            ("\x1b", "escape"),
            ("\x03", "ctrl+c"),
            ("\x11", "ctrl+q"),
            ("\x1bq", "alt+q"),
            ("\x1bQ", "shift+alt+q"),
            ("é", "é"),
        ],
    )
    def test_keys(self, data: str, expected: str) -> None:
        assert parse_key(data) == expected

    def test_empty(self) -> None:
        assert parse_key("") is None

    def test_unrecognized_sequence(self) -> None:
        assert parse_key("\x1b[?1u") is None


# ---------------------------------------------------------------------------
# Mouse detection and event decoding
# ---------------------------------------------------------------------------


class TestMouse:
    @pytest.mark.parametrize(
        "data", ["\x1b[<0;10;5M", "\x1b[<64;1;1M", "\x1b[<0;3;4m", "\x1b[M !!"]
    )
    def test_mouse_reports(self, data: str) -> None:
        assert is_mouse_sequence(data)

    @pytest.mark.parametrize("data", ["\x1b[A", "q", "\x1b[5~"])
    def test_not_mouse(self, data: str) -> None:
        assert not is_mouse_sequence(data)


class TestDecodeInput:
    def test_key_event(self) -> None:
        assert decode_input("\x1b[B") == InputEvent(kind="key", data="\x1b[B", key="down")

    def test_mouse_event(self) -> None:
        event = decode_input("\x1b[<64;10;5M")
        assert event.kind == "mouse"
        assert event.key is None

    def test_unknown_event(self) -> None:
        event = decode_input("\x1b[?1u")
        assert event.kind == "unknown"
        assert event.key is None

    def test_paste_and_resize_events(self) -> None:
        assert paste_event("abc") == InputEvent(kind="paste", data="abc")
        assert RESIZE_EVENT.kind == "resize"
