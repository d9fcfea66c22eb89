# SPDX-FileCopyrightText: 2025 Hugh Walsh
#
# SPDX-License-Identifier: MIT

# This file: src/selfcheck/dv/base_env.py

"""Environment scaffold (UVM-style, explicit construction)."""

from __future__ import annotations

import pyuvm

from . import utils_dv
from .base_agent import BaseAgent
from .base_bus import BaseBus
from .base_coverage import BaseCoverage
from .base_ref_model import BaseRefModel
from .base_sb import BaseSb


class BaseEnv(pyuvm.uvm_env):
    """Top-level UVM environment that builds and connects all verification components.

    The environment is responsible for:
    - Creating the one agent that drives and watches the bus
    - Conditionally building coverage and scoreboard components
    - Connecting the agent's broadcast port to the scoreboard and coverage

    Concrete component classes come from class attributes, or from the
    make_* hooks when construction needs more than (name, parent).

    Components:
        agent: The agent bound to the bus
        cov: Coverage collector (optional, controlled by coverage_en)
        sb: Scoreboard for checking (optional, controlled by check_en)

    Constructor options:
        check_en (bool): Build the scoreboard (default: True)
        coverage_en (bool): Build the coverage collector (default: True)
        sb_fail_on_error (bool): Forwarded to the scoreboard
        sb_error_quit_count (int): Forwarded to the scoreboard

    Example:
        >>> # In a test's build_phase
        >>> env = MyEnv("env", self, bus, coverage_en=False)
    """

    agent_type: type[BaseAgent] = BaseAgent
    sb_type: type[BaseSb] = BaseSb
    coverage_type: type[BaseCoverage] | None = None

    def __init__(  # pylint: disable=too-many-arguments
        self,
        name: str,
        parent: pyuvm.uvm_component | None,
        bus: BaseBus,
        *,
        check_en: bool = True,
        coverage_en: bool = True,
        sb_fail_on_error: bool = True,
        sb_error_quit_count: int = 0,
    ) -> None:
        super().__init__(name, parent)
        utils_dv.configure_component_logger(self)
        self.bus: BaseBus = bus
        self.agent: BaseAgent
        self.cov: BaseCoverage | None = None
        self.sb: BaseSb | None = None
        self._check_en: bool = check_en
        self._coverage_en: bool = coverage_en
        self._sb_fail_on_error: bool = sb_fail_on_error
        self._sb_error_quit_count: int = sb_error_quit_count

    def build_phase(self) -> None:
        self.logger.debug("build_phase begin")
        super().build_phase()

        self.agent = self.make_agent("agent")

        if self._coverage_en:
            self.cov = self.make_coverage("coverage")
            if self.cov is None:
                self.logger.debug("coverage_en set but no coverage collector")

        if self._check_en:
            self.sb = self.make_sb("sb")

        self.logger.debug("build_phase end")

    def connect_phase(self) -> None:
        self.logger.debug("connect_phase begin")
        super().connect_phase()
        if self.sb is not None:
            self.agent.ap.connect(self.sb.analysis_export)
        if self.cov is not None:
            self.agent.ap.connect(self.cov.analysis_export)
        self.logger.debug("connect_phase end")

    def make_agent(self, name: str) -> BaseAgent:
        return self.agent_type(name, self, self.bus)

    def make_ref_model(self) -> BaseRefModel:
        """Override to build the golden model used by the scoreboard."""
        raise NotImplementedError("Implement make_ref_model here")

    def make_sb(self, name: str) -> BaseSb:
        return self.sb_type(
            name,
            self,
            self.make_ref_model(),
            fail_on_error=self._sb_fail_on_error,
            error_quit_count=self._sb_error_quit_count,
        )

    def make_coverage(self, name: str) -> BaseCoverage | None:
        if self.coverage_type is None:
            return None
        return self.coverage_type(name, self)
