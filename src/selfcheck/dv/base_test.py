# SPDX-FileCopyrightText: 2025 Hugh Walsh
#
# SPDX-License-Identifier: MIT

# This file: src/selfcheck/dv/base_test.py

"""Base test scaffold (settings + explicit bus/env creation + gated run)."""

from __future__ import annotations

import os

import cocotb
import pyuvm

from . import utils_cli, utils_dv
from .base_bus import BaseBus, BindingError
from .base_clock_driver import BaseClockDriver
from .base_env import BaseEnv
from .base_sequence import BaseSequence
from .completion_gate import CompletionGate


class DrainTimeoutError(RuntimeError):
    """Observed items did not catch up with driven items in time."""


class BaseTest(pyuvm.uvm_test):
    """Base test providing configuration, bus binding, and environment setup.

    This test implements the standard UVM test structure. It binds the DUT
    once into a bus, hands that bus to the clock driver and the environment,
    and runs one sequence on the first agent under a completion gate.

    UVM Phases:
        build_phase: Read settings, bind the bus, create components
        end_of_elaboration_phase: Set logging levels
        start_of_simulation_phase: Log configuration/seed
        run_phase: Execute test sequence and drain

    Components Created:
        clock_driver (BaseClockDriver): Clock generation
        env (BaseEnv): Verification environment with agent, scoreboard and coverage

    Subclasses must set or override:
        bus_type / make_bus(dut): The bus bound to the DUT top
        env_type / make_env(bus): The environment
        make_sequence(): The sequence run in run_phase

    Run Phase:
        The gate is raised before the sequence starts and dropped only after
        the monitors have published as many items as the sequence sent, so
        the last item is always checked before the run phase can end. The
        drain gives up after DRAIN_TIMEOUT_CYCLES clock edges with
        DrainTimeoutError. The gate is dropped on every exit path.

    Configuration Sources (precedence: env > plusargs > defaults):
        Clock: CLOCK_ENABLE, CLOCK_NAME, CLOCK_PERIOD_PS, CLOCK_START_HIGH,
               CLOCK_INIT_DELAY_PS
        Environment: CHECK_EN, COVERAGE_EN, SB_FAIL_ON_ERROR,
                     SB_ERROR_QUIT_COUNT
        Test: DRAIN_TIMEOUT_CYCLES

    Reference:
        UVM Class Reference Manual (Accellera)
        C.E. Cummings, "Applying Stimulus & Sampling Outputs," SNUG 2016

    Example:
        >>> @pyuvm.test()
        ... class MyTest(BaseTest):
        ...     bus_type = MyBus
        ...     env_type = MyEnv
        ...
        ...     def make_sequence(self):
        ...         return MySequence("seq", seq_len=20)
    """

    bus_type: type[BaseBus] = BaseBus
    env_type: type[BaseEnv] = BaseEnv

    def __init__(self, name: str, parent: pyuvm.uvm_component | None) -> None:
        super().__init__(name, parent)
        utils_dv.configure_component_logger(self)

        self.bus: BaseBus
        self.clock_driver: BaseClockDriver
        self.env: BaseEnv
        self.gate: CompletionGate
        self.seq: BaseSequence | None = None
        self.drain_timeout_cycles: int = 100

    def build_phase(self) -> None:
        self.logger.debug("build_phase begin")
        super().build_phase()
        self.build_config()
        self.build_bus()
        self.build_clocks()
        self.build_envs()
        self.gate = CompletionGate(
            f"{self.get_name()}.gate",
            on_raise=self.raise_objection,
            on_clear=self.drop_objection,
        )
        self.logger.debug("build_phase end")

    def end_of_elaboration_phase(self) -> None:
        self.logger.debug("end_of_elaboration_phase begin")
        super().end_of_elaboration_phase()
        self.set_logging_level_hier(utils_dv.desired_log_level())
        self.logger.debug("end_of_elaboration_phase end")

    def start_of_simulation_phase(self) -> None:
        self.logger.debug("start_of_simulation_phase begin")
        super().start_of_simulation_phase()
        self.logger.info(
            "clock=%s period=%d ps drain_timeout_cycles=%d",
            self.bus.clock_name,
            self.bus.clock_period_ps,
            self.drain_timeout_cycles,
        )
        self._log_run_seed()
        self.logger.debug("start_of_simulation_phase end")

    async def run_phase(self) -> None:
        self.logger.debug("run_phase begin")
        self.gate.raise_objection()
        try:
            self.seq = self.make_sequence()
            await self.seq.start(self.env.agent.sqr)
            self.logger.info("sequence done: items_sent=%d", self.seq.items_sent)
            await self.drain(self.seq.items_sent)
        finally:
            self.gate.drop_objection()
        self.logger.debug("run_phase end")

    def build_config(self) -> None:
        """Get testbench config properties."""
        self.drain_timeout_cycles = max(
            1, utils_cli.get_int_setting("DRAIN_TIMEOUT_CYCLES", 100)
        )

    def build_bus(self) -> None:
        """Bind the simulator top into the bench bus."""
        self.bus = self.make_bus(cocotb.top)

    def make_bus(self, dut: object) -> BaseBus:
        if dut is None:
            raise BindingError("cocotb.top is not set; no DUT to bind")
        return self.bus_type(
            dut,
            clock_name=utils_cli.get_str_setting("CLOCK_NAME", "clk"),
            clock_period_ps=utils_cli.get_int_setting("CLOCK_PERIOD_PS", 1_000),
        )

    def build_clocks(self) -> None:
        """
        The default is a single clock on the bus clock pin. If your testbench
        needs more than one clock, override this method.
        """
        self.clock_driver = BaseClockDriver(
            "clock_driver",
            self,
            self.bus,
            enable=utils_cli.get_bool_setting("CLOCK_ENABLE", True),
            start_high=utils_cli.get_bool_setting("CLOCK_START_HIGH", False),
            init_delay_ps=utils_cli.get_int_setting("CLOCK_INIT_DELAY_PS", 0),
        )

    def build_envs(self) -> None:
        """
        The default is a single environment. If your testbench needs more than
        one environment, override this method.
        """
        self.env = self.make_env(self.bus)

    def make_env(self, bus: BaseBus) -> BaseEnv:
        return self.env_type(
            "env",
            self,
            bus,
            check_en=utils_cli.get_bool_setting("CHECK_EN", True),
            coverage_en=utils_cli.get_bool_setting("COVERAGE_EN", True),
            sb_fail_on_error=utils_cli.get_bool_setting("SB_FAIL_ON_ERROR", True),
            sb_error_quit_count=utils_cli.get_int_setting("SB_ERROR_QUIT_COUNT", 0),
        )

    def make_sequence(self) -> BaseSequence:
        """Override in subclasses to build the sequence for run_phase."""
        raise NotImplementedError("Implement make_sequence here")

    def observed_count(self) -> int:
        """Items published so far by the agent's monitor."""
        return self.env.agent.mon.item_count

    def _log_run_seed(self) -> None:
        seed = (
            os.getenv("COCOTB_RANDOM_SEED")  # cocotb 2.x
            or os.getenv("RANDOM_SEED")  # cocotb 1.x
            or os.getenv("COCOTB_SEED")  # legacy/compat
        )
        if seed:
            self.logger.info("Run seed: %s", seed)
        else:
            self.logger.info("Run seed: (unset)")

    async def drain(self, expected: int) -> None:
        """
        Wait on clock edges until the monitors have published ``expected``
        items. pyuvm has no set_drain_time(), and a fixed time would race the
        last capture, so the drain is bounded by a count instead.
        """
        self.logger.debug("drain begin: expected=%d", expected)
        cycles = 0
        while self.observed_count() < expected:
            if cycles >= self.drain_timeout_cycles:
                raise DrainTimeoutError(
                    f"observed {self.observed_count()} of {expected} items "
                    f"after {cycles} drain cycles"
                )
            await self.bus.rising_edge
            cycles += 1
        self.logger.debug("drain end: %d cycles", cycles)
