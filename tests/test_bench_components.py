# SPDX-FileCopyrightText: 2025 Hugh Walsh
#
# SPDX-License-Identifier: MIT

# This file: tests/test_bench_components.py

"""Agent, environment, driver, monitor and drain on a fake DUT (no simulator).

Clock edges are replaced by plain coroutines that step a list of pin frames,
so the driver's strobe and the monitor's capture rules run under asyncio.
"""

from __future__ import annotations

import asyncio
from types import SimpleNamespace

import pytest
import pyuvm

from selfcheck.adder.dv.adder_bus import AdderBus
from selfcheck.adder.dv.adder_driver import AdderDriver
from selfcheck.adder.dv.adder_env import AdderAgent, AdderEnv
from selfcheck.adder.dv.adder_item import AdderItem
from selfcheck.adder.dv.adder_monitor import AdderMonitor
from selfcheck.dv import BaseDriver, BaseTest, DrainTimeoutError


class Recorder(pyuvm.uvm_subscriber):
    def __init__(self, name, parent):
        super().__init__(name, parent)
        self.seen = []

    def write(self, tt):
        self.seen.append(tt)


class Unresolved:  # pylint: disable=too-few-public-methods
    """A pin read holding X or Z bits."""

    is_resolvable = False


class FramesDone(Exception):
    """No more pin frames to replay."""


def replay_edges(mon: AdderMonitor, dut, frames: list[dict[str, int]]) -> None:
    """Make each sample edge load the next frame onto the fake pins."""
    pending = list(frames)

    async def _edge() -> None:
        if not pending:
            raise FramesDone
        for pin, val in pending.pop(0).items():
            getattr(dut, pin).value = val
        mon.cycle += 1

    mon.sample_dut_edge = _edge


def _item(a: int, b: int, cin: int) -> AdderItem:
    tr = AdderItem()
    tr.a, tr.b, tr.cin = a, b, cin
    return tr


@pytest.fixture
def bus(adder_dut):
    return AdderBus(adder_dut(width=4))


class TestAgent:
    def test_active_builds_all_three(self, bus, uniq):
        agent = AdderAgent(uniq("agent"), None, bus)
        agent.build_phase()
        agent.mon.build_phase()
        agent.connect_phase()
        assert isinstance(agent.drv, AdderDriver)
        assert agent.sqr is not None
        assert isinstance(agent.mon, AdderMonitor)
        assert agent.drv.bus is bus and agent.mon.bus is bus

    def test_passive_builds_only_monitor(self, bus, uniq):
        agent = AdderAgent(uniq("agent"), None, bus, active=False)
        agent.build_phase()
        agent.mon.build_phase()
        agent.connect_phase()
        assert agent.drv is None and agent.sqr is None
        assert isinstance(agent.mon, AdderMonitor)

    def test_monitor_items_reach_agent_port(self, bus, uniq):
        agent = AdderAgent(uniq("agent"), None, bus, active=False)
        agent.build_phase()
        agent.mon.build_phase()
        agent.connect_phase()
        rec = Recorder(uniq("rec"), None)
        agent.ap.connect(rec.analysis_export)
        tr = _item(1, 2, 0)
        agent.mon.ap.write(tr.freeze())
        assert rec.seen == [tr]


class TestEnv:
    def _built(self, bus, uniq, **kw) -> AdderEnv:
        env = AdderEnv(uniq("env"), None, bus, **kw)
        env.build_phase()
        env.agent.build_phase()
        env.agent.mon.build_phase()
        env.agent.connect_phase()
        env.connect_phase()
        return env

    def test_one_agent_feeds_scoreboard_once(self, bus, uniq):
        env = self._built(bus, uniq, coverage_en=False)
        tr = _item(8, 8, 0)
        tr.sum, tr.cout = 0, 1
        env.agent.mon.ap.write(tr.freeze())
        assert env.sb is not None
        assert env.sb.summary().total == 1
        assert env.sb.summary().passed == 1

    def test_check_and_coverage_switches(self, bus, uniq):
        env = self._built(bus, uniq, check_en=False, coverage_en=False)
        assert env.sb is None and env.cov is None


class TestDriver:
    def test_post_edge_skew(self, bus, uniq):
        drv = BaseDriver(uniq("drv"), None, bus, falling=False, frac_after=0.25)
        drv.clock_compute_skew()
        assert drv._postedge_delay_ps == bus.clock_period_ps // 4

    def test_falling_edge_needs_no_skew(self, bus, uniq):
        drv = BaseDriver(uniq("drv"), None, bus)
        drv.clock_compute_skew()
        assert drv._postedge_delay_ps == 0

    @pytest.mark.parametrize("frac", [-0.1, 1.0])
    def test_skew_out_of_range(self, bus, uniq, frac):
        drv = BaseDriver(uniq("drv"), None, bus, falling=False, frac_after=frac)
        with pytest.raises(ValueError):
            drv.clock_compute_skew()

    def test_valid_is_a_one_edge_strobe(self, adder_dut, uniq):
        dut = adder_dut(width=4)
        bus = AdderBus(dut)
        drv = AdderDriver(uniq("drv"), None, bus)
        edges: list[int] = []

        async def _edge() -> None:
            edges.append(dut.valid.value)

        drv.clock_drive_edge = _edge
        asyncio.run(drv.drive_item(bus, _item(5, 3, 1)))
        assert (dut.a.value, dut.b.value, dut.cin.value, dut.valid.value) == (5, 3, 1, 1)
        asyncio.run(drv.drive_idle(bus))
        assert dut.valid.value == 0
        assert (dut.a.value, dut.b.value, dut.cin.value) == (5, 3, 1)
        assert edges == [0, 1]


class TestMonitorCapture:
    @pytest.fixture
    def mon(self, adder_dut, uniq):
        dut = adder_dut(width=4)
        mon = AdderMonitor(uniq("mon"), None, AdderBus(dut))
        mon.build_phase()
        rec = Recorder(uniq("rec"), None)
        mon.ap.connect(rec.analysis_export)
        return mon, dut, rec

    def test_one_item_per_valid_edge(self, mon):
        mon, dut, rec = mon
        replay_edges(
            mon,
            dut,
            [
                {"valid": 0},
                {"valid": 1, "a": 5, "b": 3, "cin": 0, "sum": 8, "cout": 0},
                # operands still on the pins, strobe already gone
                {"valid": 0},
                {"valid": 1, "a": 8, "b": 8, "cin": 0, "sum": 0, "cout": 1},
                {"valid": 0},
            ],
        )
        with pytest.raises(FramesDone):
            asyncio.run(mon.run_phase())
        assert [(t.a, t.b, t.cin, t.sum, t.cout) for t in rec.seen] == [
            (5, 3, 0, 8, 0),
            (8, 8, 0, 0, 1),
        ]
        assert [t.cycle for t in rec.seen] == [2, 4]
        assert all(t.frozen for t in rec.seen)
        assert mon.item_count == 2

    def test_x_operand_reaches_checker_as_none(self, mon):
        mon, dut, rec = mon
        replay_edges(mon, dut, [{"valid": 1, "a": Unresolved(), "b": 3, "sum": 3}])
        with pytest.raises(FramesDone):
            asyncio.run(mon.run_phase())
        assert rec.seen[0].a is None


class FakeEdgeBus:
    """rising_edge yields a fresh awaitable and advances a counter."""

    def __init__(self, on_edge) -> None:
        self.edges = 0
        self._on_edge = on_edge

    @property
    def rising_edge(self):
        self.edges += 1
        self._on_edge(self.edges)
        return asyncio.sleep(0)


class TestDrain:
    def _bench(self, published_at: list[int], timeout: int) -> SimpleNamespace:
        bench = SimpleNamespace(
            observed=0,
            drain_timeout_cycles=timeout,
            logger=SimpleNamespace(debug=lambda *a, **k: None),
        )

        def _on_edge(edge: int) -> None:
            bench.observed += published_at.count(edge)

        bench.bus = FakeEdgeBus(_on_edge)
        bench.observed_count = lambda: bench.observed
        return bench

    def test_waits_for_the_last_capture(self):
        bench = self._bench([1, 3, 5], timeout=10)
        asyncio.run(BaseTest.drain(bench, 3))
        assert bench.bus.edges == 5

    def test_nothing_outstanding(self):
        bench = self._bench([], timeout=1)
        asyncio.run(BaseTest.drain(bench, 0))
        assert bench.bus.edges == 0

    def test_times_out_on_lost_items(self):
        bench = self._bench([1], timeout=4)
        with pytest.raises(DrainTimeoutError, match="observed 1 of 3"):
            asyncio.run(BaseTest.drain(bench, 3))
