# SPDX-FileCopyrightText: 2025 Hugh Walsh
#
# SPDX-License-Identifier: MIT

# This file: tests/test_adder_sequence.py

"""What the adder sequences produce, without a sequencer."""

from __future__ import annotations

import random

from selfcheck.adder.dv.adder_item import AdderItem
from selfcheck.adder.dv.adder_sequence import (
    AdderDirectedSequence,
    AdderRandomSequence,
)


class TestDirectedSequence:
    def test_emits_corner_cases_once_in_order(self):
        seq = AdderDirectedSequence("dir", width=4)
        items = list(seq.produce())
        assert [(t.a, t.b, t.cin) for t in items] == [
            (0, 0, 0),
            (15, 15, 1),
            (15, 15, 0),
            (5, 3, 0),
            (8, 8, 0),
        ]
        assert seq.seq_len == 5

    def test_items_are_fresh_and_uncaptured(self):
        items = list(AdderDirectedSequence("dir").produce())
        assert all(isinstance(t, AdderItem) for t in items)
        assert len({id(t) for t in items}) == len(items)
        assert not any(t.is_captured() or t.frozen for t in items)


class TestRandomSequence:
    def test_default_length(self):
        random.seed(1)
        items = list(AdderRandomSequence("rnd", seq_len=12).produce())
        assert len(items) == 12
        assert all(0 <= t.a < 16 and 0 <= t.b < 16 for t in items)

    def test_length_from_setting(self, monkeypatch):
        monkeypatch.setenv("ADDER_SEQ_LEN", "7")
        seq = AdderRandomSequence("rnd")
        assert seq.seq_len == 7
        assert len(list(seq.produce())) == 7

    def test_length_from_plusarg(self, monkeypatch):
        monkeypatch.setenv("COCOTB_PLUSARGS", "+ADDER_SEQ_LEN=3")
        assert AdderRandomSequence("rnd").seq_len == 3

    def test_width8_range(self):
        random.seed(5)
        items = list(AdderRandomSequence("rnd", seq_len=50, width=8).produce())
        assert all(0 <= t.a < 256 and 0 <= t.b < 256 for t in items)
        assert any(t.a > 15 or t.b > 15 for t in items)

    def test_same_seed_same_stimulus(self):
        random.seed(99)
        first = [(t.a, t.b, t.cin) for t in AdderRandomSequence("r1", 10).produce()]
        random.seed(99)
        again = [(t.a, t.b, t.cin) for t in AdderRandomSequence("r2", 10).produce()]
        assert first == again
