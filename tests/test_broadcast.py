# SPDX-FileCopyrightText: 2025 Hugh Walsh
#
# SPDX-License-Identifier: MIT

# This file: tests/test_broadcast.py

"""Observation fan-out: every subscriber sees every item, in order."""

from __future__ import annotations

import pytest
import pyuvm

from selfcheck.adder.dv.adder_item import AdderItem
from selfcheck.adder.dv.adder_ref_model import AdderRefModel
from selfcheck.adder.dv.adder_sb import AdderSb
from selfcheck.dv import BroadcastPort, BroadcastSealedError


class Recorder(pyuvm.uvm_subscriber):
    def __init__(self, name, parent):
        super().__init__(name, parent)
        self.seen = []

    def write(self, tt):
        self.seen.append(tt)


def _items(n: int) -> list[AdderItem]:
    out = []
    for i in range(n):
        tr = AdderItem(f"obs{i}")
        tr.a, tr.b, tr.cin = i, i, 0
        tr.sum, tr.cout = (2 * i) & 15, (2 * i) >> 4
        out.append(tr.freeze())
    return out


@pytest.fixture
def port(uniq):
    holder = pyuvm.uvm_component(uniq("holder"), None)
    return BroadcastPort("ap", holder)


class TestBroadcastPort:
    def test_all_subscribers_in_publish_order(self, port, uniq):
        r1 = Recorder(uniq("r1"), None)
        r2 = Recorder(uniq("r2"), None)
        port.connect(r1.analysis_export)
        port.connect(r2.analysis_export)
        items = _items(4)
        for tr in items:
            port.write(tr)
        assert r1.seen == items
        assert r2.seen == items
        assert port.publish_count == 4

    def test_no_subscribers_is_fine(self, port):
        for tr in _items(2):
            port.write(tr)
        assert port.publish_count == 2

    def test_connect_after_seal_rejected(self, port, uniq):
        port.seal()
        assert port.sealed
        with pytest.raises(BroadcastSealedError):
            port.connect(Recorder(uniq("late"), None).analysis_export)

    def test_feeds_scoreboard_and_recorder_alike(self, port, uniq):
        sb = AdderSb(uniq("sb"), None, AdderRefModel(width=4))
        rec = Recorder(uniq("rec"), None)
        port.connect(sb.analysis_export)
        port.connect(rec.analysis_export)
        port.seal()
        for tr in _items(9):
            port.write(tr)
        assert sb.summary().total == len(rec.seen) == 9
        assert sb.summary().failed == 0
