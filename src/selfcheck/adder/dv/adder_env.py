# SPDX-FileCopyrightText: 2025 Hugh Walsh
#
# SPDX-License-Identifier: MIT

# This file: src/selfcheck/adder/dv/adder_env.py

"""Adder agent and environment."""

from __future__ import annotations

from selfcheck.dv import BaseAgent, BaseEnv

from .adder_bus import AdderBus
from .adder_coverage import AdderCoverage
from .adder_driver import AdderDriver
from .adder_monitor import AdderMonitor
from .adder_ref_model import AdderRefModel
from .adder_sb import AdderSb


class AdderAgent(BaseAgent):
    """Sequencer, AdderDriver, and AdderMonitor on one AdderBus."""

    driver_type = AdderDriver
    monitor_type = AdderMonitor


class AdderEnv(BaseEnv):
    """One adder agent, the adder scoreboard, and adder coverage."""

    agent_type = AdderAgent
    sb_type = AdderSb
    coverage_type = AdderCoverage

    @property
    def width(self) -> int:
        assert isinstance(self.bus, AdderBus)
        return self.bus.operand_width

    def make_ref_model(self) -> AdderRefModel:
        return AdderRefModel(width=self.width)

    def make_coverage(self, name: str) -> AdderCoverage:
        return AdderCoverage(name, self, width=self.width)
