"""Tests for generate_id: 32 lowercase hex characters, fresh each call."""

import re

from proptrack.core.id_generator import generate_id


def test_id_is_32_lowercase_hex_chars():
    assert re.fullmatch(r"[0-9a-f]{32}", generate_id())


def test_ids_differ_between_calls():
    assert len({generate_id() for _ in range(1000)}) == 1000
