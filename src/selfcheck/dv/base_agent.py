# SPDX-FileCopyrightText: 2025 Hugh Walsh
#
# SPDX-License-Identifier: MIT

# This file: src/selfcheck/dv/base_agent.py

"""Base agent wiring sequencer, driver, and monitor."""

from __future__ import annotations

import pyuvm

from . import utils_dv
from .base_bus import BaseBus
from .base_driver import BaseDriver
from .base_monitor import BaseMonitor
from .base_sequencer import BaseSequencer
from .broadcast import BroadcastPort


class BaseAgent(pyuvm.uvm_agent):
    """UVM agent that wires together sequencer, driver, and monitor.

    The concrete component classes are plain class attributes (or constructor
    arguments), so a bench picks its driver and monitor by subclassing the
    agent or by passing the types in, without a factory lookup. The bus is
    handed to the driver and the monitor when they are built.

    An active agent builds all three; a passive agent builds only the monitor.

    Components:
        drv: Driver for applying stimulus to DUT inputs (active mode only)
        sqr: Sequencer feeding the driver (active mode only)
        mon: Monitor observing the bus

    Analysis Ports:
        ap: Re-publishes everything the monitor publishes

    Reference:
        https://github.com/paradigm-works/uvmtb_template/blob/main/tb_agent.svh

    Example:
        >>> agent = BaseAgent(
        ...     "agent", env, bus, driver_type=MyDriver, monitor_type=MyMonitor
        ... )
    """

    driver_type: type[BaseDriver] = BaseDriver
    monitor_type: type[BaseMonitor] = BaseMonitor
    sequencer_type: type[BaseSequencer] = BaseSequencer

    def __init__(  # pylint: disable=too-many-arguments
        self,
        name: str,
        parent: pyuvm.uvm_component | None,
        bus: BaseBus,
        *,
        driver_type: type[BaseDriver] | None = None,
        monitor_type: type[BaseMonitor] | None = None,
        sequencer_type: type[BaseSequencer] | None = None,
        active: bool = True,
    ) -> None:
        super().__init__(name, parent)
        utils_dv.configure_component_logger(self)
        self.bus: BaseBus = bus
        if driver_type is not None:
            self.driver_type = driver_type
        if monitor_type is not None:
            self.monitor_type = monitor_type
        if sequencer_type is not None:
            self.sequencer_type = sequencer_type
        self.active: bool = active
        self.ap: BroadcastPort
        self.drv: BaseDriver | None = None
        self.sqr: BaseSequencer | None = None
        self.mon: BaseMonitor

    def build_phase(self) -> None:
        self.logger.debug("build_phase begin")
        super().build_phase()
        if self.active:
            self.drv = self.driver_type("drv", self, self.bus)
            self.sqr = self.sequencer_type("sqr", self)
        self.mon = self.monitor_type("mon", self, self.bus)
        self.ap = BroadcastPort("ap", self)
        self.logger.debug("build_phase end")

    def connect_phase(self) -> None:
        self.logger.debug("connect_phase begin")
        super().connect_phase()
        if self.drv is not None and self.sqr is not None:
            self.drv.seq_item_port.connect(self.sqr.seq_item_export)
        self.mon.ap.connect(self.ap)
        self.logger.debug("connect_phase end")

    def end_of_elaboration_phase(self) -> None:
        self.logger.debug("end_of_elaboration_phase begin")
        super().end_of_elaboration_phase()
        self.ap.seal()
        self.logger.debug("end_of_elaboration_phase end")
