# SPDX-FileCopyrightText: 2025 Hugh Walsh
#
# SPDX-License-Identifier: MIT

# This file: src/selfcheck/dv/base_coverage.py

"""Coverage subscriber base: pyuvm analysis in, cocotb-coverage out."""

from __future__ import annotations

import os
from typing import Generic, TypeVar

import pyuvm
from cocotb_coverage.coverage import coverage_db

from . import utils_dv
from .base_item import BaseItem

T = TypeVar("T", bound=BaseItem)


class BaseCoverage(pyuvm.uvm_subscriber, Generic[T]):
    """Counts and samples every observed item.

    Subclasses implement ``sample`` and hang their ``CoverPoint`` and
    ``CoverCross`` decorators on it; ``write`` is what the monitor's analysis
    port calls. The cocotb-coverage database is global, so the report in
    ``report_phase`` covers every sampler in the run. When ``COV_YAML`` names
    a file the database is exported there as well.
    """

    def __init__(self, name: str, parent: pyuvm.uvm_component | None) -> None:
        super().__init__(name, parent)
        utils_dv.configure_component_logger(self)
        self.yaml_path: str | None = os.getenv("COV_YAML") or None
        self.sampled: int = 0

    def write(self, tt: T) -> None:
        self.sampled += 1
        self.sample(tt)

    def sample(self, tt: T) -> None:  # pragma: no cover - abstract hook
        raise NotImplementedError(f"{type(self).__name__} must implement sample()")

    def report_phase(self) -> None:
        super().report_phase()
        coverage_db.report_coverage(self.logger.debug, bins=False)
        if self.yaml_path is not None:
            coverage_db.export_to_yaml(filename=self.yaml_path)
            self.logger.debug("coverage database exported to %s", self.yaml_path)
