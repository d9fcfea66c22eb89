# SPDX-FileCopyrightText: 2025 Hugh Walsh
#
# SPDX-License-Identifier: MIT

# This file: src/selfcheck/tools/dv_regress.py

"""Run a list of dv jobs described in YAML.

The YAML file holds every job's arguments. The command line only says which
file, where the output goes, and optionally which jobs::

    defaults:
      args: ["--sim=icarus", "--design=adder", "--test=test_adder"]
    jobs:
      - name: adder_directed
        args: ["--testcase=AdderDirectedTest"]
      - name: adder_broken_carry
        args: "--testcase=AdderDirectedTest --param=BROKEN_CARRY=1"
        expect: FAIL

``args`` is a list or a shell-style string. Job args follow the defaults on
the dv command line, so they win. A job with ``expect: FAIL`` is a negative
test: dv returns 0 for it only when the bench reports a failure.

Usage:
    dv-regress --file=src/selfcheck/adder/dv/dv_regress.yaml
    dv-regress --file=... --job=adder_directed --job=adder_random
    dv-regress --file=... --dry-run
"""

from __future__ import annotations

import argparse
import shlex
import subprocess
import sys
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, NamedTuple, Sequence

import yaml

from selfcheck import utils

DEFAULT_OUT_DIR = "out_dv"
EXPECTS = ("PASS", "FAIL")


@dataclass(frozen=True)
class Job:
    name: str
    args: list[str] = field(default_factory=list)
    expect: str = "PASS"

    def command(self, default_args: Sequence[str], outdir: str) -> list[str]:
        """The dv invocation for this job."""
        cmd = ["dv", *default_args, *self.args, f"--outdir={outdir}"]
        return cmd if self.expect == "PASS" else [*cmd, f"--expect={self.expect}"]


class Regression(NamedTuple):
    default_args: list[str]
    jobs: list[Job]


class JobResult(NamedTuple):
    job: Job
    cmd: str
    rc: int
    seconds: float


def _words(value: Any) -> list[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return shlex.split(value)
    return [str(v) for v in value]


def _job_from_yaml(idx: int, raw: Any) -> Job:
    if not isinstance(raw, dict):
        raise ValueError(f"jobs[{idx}] must be a mapping")
    expect = str(raw.get("expect", "PASS")).strip().upper()
    if expect not in EXPECTS:
        raise ValueError(f"jobs[{idx}].expect must be PASS or FAIL, got {expect}")
    return Job(str(raw.get("name") or f"job{idx}"), _words(raw.get("args")), expect)


def load_config(path: Path) -> Regression:
    """Read and check a regression file.

    Raises:
        ValueError: The document is not a mapping, ``defaults`` is not a
            mapping, ``jobs`` is missing or empty, a job is malformed, or two
            jobs share a name.
    """
    doc = yaml.safe_load(path.read_text(encoding="utf-8"))
    if not isinstance(doc, dict):
        raise ValueError(f"{path.name} must be a mapping")
    defaults = doc.get("defaults") or {}
    if not isinstance(defaults, dict):
        raise ValueError("'defaults' must be a mapping")
    raw_jobs = doc.get("jobs")
    if not isinstance(raw_jobs, list) or not raw_jobs:
        raise ValueError("'jobs' must be a non-empty list")

    jobs = [_job_from_yaml(i, raw) for i, raw in enumerate(raw_jobs)]
    seen: set[str] = set()
    for job in jobs:
        if job.name in seen:
            raise ValueError(f"duplicate job name '{job.name}'")
        seen.add(job.name)
    return Regression(_words(defaults.get("args")), jobs)


def select_jobs(jobs: Sequence[Job], wanted: Sequence[str]) -> list[Job]:
    """Jobs named in ``wanted``, in file order; every job when it is empty.

    Raises:
        ValueError: A wanted name is not in the file.
    """
    unknown = sorted(set(wanted) - {j.name for j in jobs})
    if unknown:
        raise ValueError(f"unknown job(s): {', '.join(unknown)}")
    return [j for j in jobs if not wanted or j.name in wanted]


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    ap = argparse.ArgumentParser(
        description="Run the dv jobs listed in a regression YAML file",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    ap.add_argument("--file", type=Path, required=True, help="regression YAML")
    ap.add_argument("--outdir", default=DEFAULT_OUT_DIR, help="output directory")
    ap.add_argument(
        "--job",
        dest="jobs",
        action="append",
        default=[],
        help="run only this job (repeatable)",
    )
    ap.add_argument(
        "--dry-run", action="store_true", help="list the dv commands and stop"
    )
    return ap.parse_args(argv)


def run_job(job: Job, default_args: Sequence[str], outdir: str) -> JobResult:
    cmd = job.command(default_args, outdir)
    cmd_str = " ".join(shlex.quote(c) for c in cmd)
    print(f"\n[dv_regress] job {job.name} (expect {job.expect}): {cmd_str}\n")
    t0 = time.time()
    # dv folds --expect into its exit status
    rc = subprocess.run(cmd, check=False).returncode
    return JobResult(job, cmd_str, rc, time.time() - t0)


def print_summary(results: Sequence[JobResult], outdir: str) -> int:
    """One line per job, then the verdict; returns the exit status."""
    print("\n[dv_regress] JOBS REPORT\n")
    width = max(len(r.job.name) for r in results)
    for r in results:
        tag = utils.green("PASS") if r.rc == 0 else utils.red("FAIL")
        print(f"{tag} {r.job.name:<{width}} {r.seconds:7.1f}s  {r.cmd}")
    report = utils.yellow(f"dv-report --outdir={outdir}")
    print(f"\n[dv_regress] per-run details: {report}")
    failed = sum(1 for r in results if r.rc != 0)
    if failed:
        print(f"\n[dv_regress] SUMMARY: {utils.red(f'FAIL ({failed}/{len(results)})')}")
        return 1
    print(f"\n[dv_regress] SUMMARY: {utils.green(f'PASS ({len(results)} jobs)')}")
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    args = parse_args(argv)
    path = args.file.resolve()
    if not path.is_file():
        print(f"[dv_regress] no regression file at {path}", file=sys.stderr)
        return 1
    try:
        default_args, jobs = load_config(path)
        jobs = select_jobs(jobs, args.jobs)
    except ValueError as exc:
        print(f"[dv_regress] {path}: {exc}", file=sys.stderr)
        return 1

    if args.dry_run:
        for job in jobs:
            cmd = job.command(default_args, args.outdir)
            print(f"{job.name}: {' '.join(shlex.quote(c) for c in cmd)}")
        return 0
    return print_summary(
        [run_job(job, default_args, args.outdir) for job in jobs], args.outdir
    )


if __name__ == "__main__":
    raise SystemExit(main())
