# SPDX-FileCopyrightText: 2025 Hugh Walsh
#
# SPDX-License-Identifier: MIT

# This file: src/selfcheck/dv/__init__.py

"""Shared design verification infrastructure for self-checking benches.

This package provides the base classes and utilities for building UVM-style
testbenches using cocotb and pyuvm. A bench binds its DUT once into a bus,
injects that bus into its components, and checks every observed transaction
against a reference model.

Base Classes:
- BaseEnv: Top-level testbench environment
- BaseTest: Test case framework with completion gating
- BaseAgent: Agent containing driver, monitor, and sequencer
- BaseDriver: Component for driving DUT inputs
- BaseMonitor: Component reconstructing observed transactions
- BaseSequencer: Sequence controller
- BaseSequence: Test sequence definition
- BaseItem: Transaction item base class
- BaseRefModel: Reference model for golden behavior
- BaseSb: Scoreboard for DUT vs reference comparison
- BaseCoverage: Functional coverage collection

Binding, Broadcast, and Gating:
- BaseBus: Bound view of the DUT pins and clock
- BroadcastPort: Analysis port that can be sealed after elaboration
- CompletionGate: Counting keep-alive gate for the run phase

Clock Infrastructure:
- BaseClockDriver: Clock generation component
- BaseClockMixin: Mixin for clock-aware components

Utilities:
- utils_dv: Design verification utility functions
- utils_cli: Command-line interface utilities
"""

from __future__ import annotations

from selfcheck import __version__

from . import utils_cli, utils_dv
from .base_agent import BaseAgent
from .base_bus import BaseBus, BindingError
from .base_clock_driver import BaseClockDriver
from .base_clock_mixin import BaseClockMixin
from .base_coverage import BaseCoverage
from .base_driver import BaseDriver
from .base_env import BaseEnv
from .base_item import BaseItem, ItemFrozenError
from .base_monitor import BaseMonitor
from .base_ref_model import BaseRefModel
from .base_sb import BaseSb, ScoreboardSummary
from .base_sequence import BaseSequence
from .base_sequencer import BaseSequencer
from .base_test import BaseTest, DrainTimeoutError
from .broadcast import BroadcastPort, BroadcastSealedError
from .completion_gate import CompletionGate, GateUnderflowError

__all__ = (
    "BaseAgent",
    "BaseBus",
    "BaseClockDriver",
    "BaseClockMixin",
    "BaseCoverage",
    "BaseDriver",
    "BaseEnv",
    "BaseItem",
    "BaseMonitor",
    "BaseRefModel",
    "BaseSb",
    "BaseSequence",
    "BaseSequencer",
    "BaseTest",
    "BindingError",
    "BroadcastPort",
    "BroadcastSealedError",
    "CompletionGate",
    "DrainTimeoutError",
    "GateUnderflowError",
    "ItemFrozenError",
    "ScoreboardSummary",
    "utils_dv",
    "utils_cli",
    "__version__",
)
