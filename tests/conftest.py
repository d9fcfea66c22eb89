# SPDX-FileCopyrightText: 2025 Hugh Walsh
#
# SPDX-License-Identifier: MIT

# This file: tests/conftest.py

"""Shared fixtures: fake DUT handles, unique component names, clean settings."""

from __future__ import annotations

import itertools
from types import SimpleNamespace
from typing import Callable, Iterator

import pytest

_SETTINGS = (
    "PLUSARGS",
    "COCOTB_PLUSARGS",
    "SC_PLUSARGS",
    "ADDER_SEQ_LEN",
    "SC_ADDER_SEQ_LEN",
    "SB_SUMMARY_JSON",
    "COV_YAML",
    "SIM",
    "CMD",
    "WAVES",
    "CHECK_EN",
    "COVERAGE_EN",
    "CLOCK_NAME",
    "CLOCK_PERIOD_PS",
    "DRAIN_TIMEOUT_CYCLES",
    "VERBOSITY",
    "WAVES_FMT",
)


class FakeSignal:
    """Stands in for a cocotb handle: a .value and a bit width."""

    def __init__(self, width: int = 1, value: int = 0) -> None:
        self.value = value
        self._width = width
        self.rising_edge = f"rising:{id(self)}"
        self.falling_edge = f"falling:{id(self)}"

    def __len__(self) -> int:
        return self._width


def make_adder_dut(width: int = 4, **drop: bool) -> SimpleNamespace:
    """adder_tb_top pins; pass e.g. cout=True to leave a pin out."""
    pins = {
        "clk": FakeSignal(),
        "valid": FakeSignal(),
        "a": FakeSignal(width),
        "b": FakeSignal(width),
        "cin": FakeSignal(),
        "sum": FakeSignal(width),
        "cout": FakeSignal(),
    }
    return SimpleNamespace(**{k: v for k, v in pins.items() if not drop.get(k)})


@pytest.fixture(autouse=True)
def clean_settings(monkeypatch: pytest.MonkeyPatch) -> None:
    """No bench setting leaks in from the calling shell."""
    for name in _SETTINGS:
        monkeypatch.delenv(name, raising=False)
    # component loggers stay quiet outside a simulator
    monkeypatch.setenv("COCOTB_LOG_LEVEL", "CRITICAL")


@pytest.fixture
def adder_dut() -> Callable[..., SimpleNamespace]:
    return make_adder_dut


_names = itertools.count()


@pytest.fixture
def uniq() -> Iterator[Callable[[str], str]]:
    """Component names must be unique below uvm_root across the session."""

    def _uniq(base: str) -> str:
        return f"{base}_{next(_names)}"

    yield _uniq
