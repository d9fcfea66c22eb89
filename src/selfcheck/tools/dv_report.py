# SPDX-FileCopyrightText: 2025 Hugh Walsh
#
# SPDX-License-Identifier: MIT

# This file: src/selfcheck/tools/dv_report.py

"""Summarize the runs dv left under <outdir>/tests.

Every run directory holds a manifest.json with the run's ``status``, the
``expect``-ed outcome, a ``replay_cmd`` and, when the bench got far enough,
the ``scoreboard`` summary. A run is good when its status matches its
expectation, so a negative test that fails is good and one that passes is
not. The exit status is 0 only when every run is good.

Usage:
    dv-report [--outdir=out_dv] [--mismatches]

Example output:
    PASS (EXPECTED) [5/5]: dv --design=adder --test=test_adder --seeds 42
    FAIL (EXPECTED) [1/5]: dv --design=adder ... --param=BROKEN_CARRY=1 --seeds 42
"""

from __future__ import annotations

import argparse
import json
import sys
from collections import Counter
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Sequence

from selfcheck import utils

DEFAULT_OUT_DIR = "out_dv"
DEFAULT_TESTS_SUBDIR = "tests"
OUTCOMES = ("PASS", "FAIL")


@dataclass(frozen=True)
class TestRun:  # pylint: disable=too-many-instance-attributes
    """What one manifest.json says about its run."""

    __test__ = False  # not a pytest class

    path: Path
    status: str
    expect: str
    replay_cmd: str
    total: int | None = None
    passed: int | None = None
    failed: int | None = None
    mismatches: list[dict[str, Any]] = field(default_factory=list)

    @property
    def expected(self) -> bool:
        return self.status == self.expect

    @property
    def tag(self) -> str:
        label = f"{self.status} ({'EXPECTED' if self.expected else 'UNEXPECTED'})"
        return utils.green(label) if self.expected else utils.red(label)

    @property
    def counts(self) -> str:
        """' [passed/total]', or '' for a run without a scoreboard summary."""
        if self.total is None or self.passed is None:
            return ""
        return f" [{self.passed}/{self.total}]"


def _count(x: Any) -> int | None:
    return x if isinstance(x, int) and not isinstance(x, bool) else None


def _load_run(run_dir: Path) -> TestRun | None:
    """Parse run_dir/manifest.json; None for anything unreadable or incomplete."""
    try:
        data = json.loads((run_dir / "manifest.json").read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, json.JSONDecodeError):
        return None
    if not isinstance(data, dict):
        return None

    status = str(data.get("status", "")).strip().upper()
    expect = str(data.get("expect", "PASS")).strip().upper()
    replay_cmd = str(data.get("replay_cmd", "")).strip()
    if status not in OUTCOMES or expect not in OUTCOMES or not replay_cmd:
        return None

    sb = data.get("scoreboard") if isinstance(data.get("scoreboard"), dict) else {}
    mismatches = sb.get("mismatches")
    return TestRun(
        path=run_dir,
        status=status,
        expect=expect,
        replay_cmd=replay_cmd,
        total=_count(sb.get("total")),
        passed=_count(sb.get("passed")),
        failed=_count(sb.get("failed")),
        mismatches=mismatches if isinstance(mismatches, list) else [],
    )


def collect(tests_root: Path) -> list[TestRun]:
    """Every valid run below tests_root, ordered by directory."""
    if not tests_root.is_dir():
        print(f"\n[dv_report] No directory found at {tests_root}", file=sys.stderr)
        return []
    print(f"\n[dv_report] reading manifests below {tests_root}")
    loaded = (_load_run(m.parent) for m in tests_root.glob("**/manifest.json"))
    return sorted((r for r in loaded if r is not None), key=lambda r: str(r.path))


def _print_mismatches(run: TestRun) -> None:
    for m in run.mismatches:
        print(f"    in={m.get('inputs')} exp={m.get('expected')} act={m.get('actual')}")


def print_report(
    tests_root: Path, runs: Sequence[TestRun], *, show_mismatches: bool = False
) -> int:
    """Print one line per run, the totals and the verdict.

    Returns:
        0 when every run matched its expectation, 1 otherwise (including
        when there are no runs at all).
    """
    if not runs:
        print(f"[dv_report] no runs found below {tests_root}", file=sys.stderr)
        return 1
    print(f"[dv_report] {len(runs)} run(s) below {tests_root}\n")

    # surprises last, so they are the last thing on screen
    for run in sorted(runs, key=lambda r: (not r.expected, r.status != "PASS")):
        print(f"{run.tag}{run.counts}: {run.replay_cmd}")
        if show_mismatches:
            _print_mismatches(run)

    checks = sum(r.total or 0 for r in runs)
    failed_checks = sum(r.failed or 0 for r in runs)
    print(
        f"\n[dv_report] TOTALS: {len(runs)} runs, {checks} checks, "
        f"{failed_checks} failed checks\n"
    )
    for tag, n in Counter(r.tag for r in runs).items():
        print(f"{tag}: {n}")

    if all(r.expected for r in runs):
        print(f"\n[dv_report] SUMMARY: {utils.green('PASS (no unexpected outcomes)')}")
        return 0
    print(f"\n[dv_report] SUMMARY: {utils.red('FAIL (unexpected outcomes)')}")
    return 1


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    ap = argparse.ArgumentParser(
        description="Report the outcome of every dv run in an output directory",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    ap.add_argument("--outdir", default=DEFAULT_OUT_DIR, help="output directory")
    ap.add_argument(
        "--mismatches",
        action="store_true",
        help="also print the operands, expected and actual values of each mismatch",
    )
    return ap.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> int:
    args = parse_args(argv)
    tests_root = Path(args.outdir, DEFAULT_TESTS_SUBDIR).resolve()
    return print_report(tests_root, collect(tests_root), show_mismatches=args.mismatches)


if __name__ == "__main__":
    raise SystemExit(main())
