# SPDX-FileCopyrightText: 2025 Hugh Walsh
#
# SPDX-License-Identifier: MIT

# This file: src/selfcheck/dv/base_sb.py

"""Reference-model scoreboard (in-order, zero-time)."""

from __future__ import annotations

import json
import os
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Generic, TypeVar

import pyuvm

from . import utils_dv
from .base_item import BaseItem
from .base_ref_model import BaseRefModel

T = TypeVar("T", bound=BaseItem)


@dataclass(frozen=True)
class ScoreboardSummary:
    """Counts read at report time."""

    total: int
    passed: int
    failed: int

    @property
    def ok(self) -> bool:
        return self.failed == 0

    @property
    def verdict(self) -> str:
        return "PASS" if self.ok else "FAIL"

    def to_dict(self) -> dict[str, object]:
        return {**asdict(self), "verdict": self.verdict}


class BaseSb(pyuvm.uvm_subscriber, Generic[T]):
    """Scoreboard that checks every observed transaction against a model.

    The scoreboard subscribes to a monitor's broadcast port. Each
    :meth:`write` clones the observed item, lets the reference model fill the
    expected outputs on the clone, and compares output fields for exact
    equality. Everything happens inside ``write``, so checking keeps pace
    with the monitor and needs no FIFO.

    Architecture:
        Observed Transaction → clone → Reference Model → Expected
        Observed Transaction ──────────────────────────→ compare_out()

    Statistics (mutated only by write()):
        vect_cnt: Total number of comparisons performed
        pass_cnt: Number of passing comparisons
        err_cnt: Number of failing comparisons
        mismatches: (expected, actual) pairs for every failure
        checked: record() of every observed item, in arrival order

    Environment Variables:
        SB_SUMMARY_JSON: Path to write the summary and mismatches as JSON
                         at report time (optional)

    Constructor options:
        fail_on_error (bool): Raise AssertionError in final_phase if errors
                              occurred (default: True)
        error_quit_count (int): Raise as soon as this many errors were seen
                                (default: 0, never stop early)

    Reference:
        C.E. Cummings, "OVM/UVM Scoreboards - Fundamental Architectures,"
        SNUG 2013 (Silicon Valley)

    Example:
        >>> sb = BaseSb("sb", env, MyRefModel(), error_quit_count=10)
        >>> agent.mon.ap.connect(sb.analysis_export)
    """

    def __init__(
        self,
        name: str,
        parent: pyuvm.uvm_component | None,
        ref_model: BaseRefModel[T],
        *,
        fail_on_error: bool = True,
        error_quit_count: int = 0,
    ) -> None:
        super().__init__(name, parent)
        utils_dv.configure_component_logger(self)
        self.ref_model: BaseRefModel[T] = ref_model
        self.fail_on_error: bool = fail_on_error
        self.error_quit_count: int = max(0, int(error_quit_count))
        self.vect_cnt: int = 0
        self.pass_cnt: int = 0
        self.err_cnt: int = 0
        self.mismatches: list[tuple[T, T]] = []
        self.checked: list[dict[str, object]] = []
        self.summary_path: str | None = os.getenv("SB_SUMMARY_JSON")

    def write(self, tt: T) -> None:
        exp = self.ref_model.calc_exp(tt.clone())
        self.vect_cnt += 1
        self.checked.append(self.record(tt))
        # an expectation the model could not form is a failure, never a match
        if exp.is_captured() and tt.compare_out(exp):
            self.pass_cnt += 1
            self.logger.info(
                "PASS %s vect_cnt=%d", self.describe(exp, tt), self.vect_cnt
            )
        else:
            self.err_cnt += 1
            self.mismatches.append((exp, tt))
            self.logger.error("MISMATCH %s", self.describe(exp, tt))
        if self.error_quit_count and self.err_cnt >= self.error_quit_count:
            raise AssertionError(
                f"Scoreboard error_quit_count exceeded "
                f"(errors={self.err_cnt}, threshold={self.error_quit_count})"
            )

    def describe(self, exp: T, act: T) -> str:
        """One-line record of a check: inputs, expected and actual outputs."""
        return f"in={act.inputs_str()} exp={exp.outputs_str()} act={act.outputs_str()}"

    def record(self, act: T) -> dict[str, object]:
        """Entry for the run log of every check, in arrival order."""
        return act.to_dict()

    def summary(self) -> ScoreboardSummary:
        return ScoreboardSummary(
            total=self.vect_cnt, passed=self.pass_cnt, failed=self.err_cnt
        )

    def write_summary(self, path: Path) -> None:
        """Dump the summary, every mismatch (inputs, expected, actual) and the check log."""
        data = {
            **self.summary().to_dict(),
            "mismatches": [
                {
                    "inputs": {f: getattr(act, f) for f in act._in_fields()},
                    "expected": {f: getattr(exp, f) for f in exp._out_fields()},
                    "actual": {f: getattr(act, f) for f in act._out_fields()},
                }
                for exp, act in self.mismatches
            ],
            "checked": self.checked,
        }
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(data, indent=2), encoding="utf-8")
        self.logger.debug("Scoreboard summary written to %s", path)

    def report_phase(self) -> None:
        self.logger.debug("report_phase begin")
        s = self.summary()
        if s.total == 0:
            self.logger.warning("No transactions checked by scoreboard!")
        self.logger.info(
            "Scoreboard summary: total=%d pass=%d fail=%d",
            s.total,
            s.passed,
            s.failed,
        )
        if s.ok:
            self.logger.info(
                "*** TEST PASSED - %d ran, %d passed ***", s.total, s.passed
            )
        else:
            self.logger.error(
                "*** TEST FAILED - %d ran, %d passed, %d failed ***",
                s.total,
                s.passed,
                s.failed,
            )
        if self.summary_path:
            self.write_summary(Path(self.summary_path))
        self.logger.debug("report_phase end")

    def final_phase(self) -> None:
        self.logger.debug("final_phase begin")
        if self.fail_on_error and self.err_cnt > 0:
            raise AssertionError(
                f"Scoreboard saw {self.err_cnt} error(s); sb_fail_on_error is enabled"
            )
        self.logger.debug("final_phase end")
