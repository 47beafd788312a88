"""Unit tests for round-robin credential rotation."""

import pytest

from emoji_translator.key_rotator import KeyRotator


def test_returns_each_key_once_in_order_then_wraps() -> None:
    keys = ["key1", "key2", "key3"]
    rotator = KeyRotator(keys)

    first_cycle = [rotator.next() for _ in keys]

    assert first_cycle == keys
    assert rotator.next() == "key1"


def test_single_key_is_always_returned() -> None:
    rotator = KeyRotator(["only"])
    assert [rotator.next() for _ in range(3)] == ["only", "only", "only"]


def test_cursor_advances_modulo_length() -> None:
    rotator = KeyRotator(["a", "b"])
    assert rotator.cursor == 0
    rotator.next()
    assert rotator.cursor == 1
    rotator.next()
    assert rotator.cursor == 0
    assert len(rotator) == 2


def test_empty_key_list_fails_fast() -> None:
    with pytest.raises(ValueError, match="at least one credential"):
        KeyRotator([])
