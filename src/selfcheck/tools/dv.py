# SPDX-FileCopyrightText: 2025 Hugh Walsh
#
# SPDX-License-Identifier: MIT

# This file: src/selfcheck/tools/dv.py

"""Build a bench top and run its cocotb/pyuvm tests, one run per seed.

The cocotb runner does the compiling and simulating. This tool decides where
the results go and what gets recorded:

    <outdir>/builds/<design>.<fingerprint>/   one per distinct compiled top
    <outdir>/tests/<build>.<testcase>.<seed>/ one per run: test.log,
                                              results.xml, sb_summary.json,
                                              coverage.yaml, manifest.json

Each run goes through ``pytest.main`` on this module's ``test_framework``.
pytest owns the run's lifecycle and exit status, and the run description
(:class:`RunSpec`) stays in memory instead of travelling through the
environment.

Typical usage:
    # Build and run every test in the module
    dv --design=adder --test=test_adder

    # One test class
    dv --design=adder --test=test_adder --testcase=AdderDirectedTest

    # Broken DUT, failure expected
    dv --design=adder --test=test_adder --testcase=AdderDirectedTest \\
        --param=BROKEN_CARRY=1 --expect=FAIL

    # 8-bit operands, ten random seeds, longer sequences
    dv --design=adder --test=test_adder --param=WIDTH=8 --nseeds=10 \\
        --plusarg=+ADDER_SEQ_LEN=200
"""

from __future__ import annotations

import argparse
import hashlib
import json
import logging
import os
import random
import shlex
import sys
import time
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any, Final, Sequence

import pytest
from cocotb_tools.runner import get_runner

# If executed as a script (path mode), __package__ is empty/None and __spec__ is None.
if (__package__ in (None, "")) and (__spec__ is None):
    print("[dv] ERROR: Please run as 'dv'", file=sys.stderr)
    raise SystemExit(2)

from selfcheck import utils  # isort:skip pylint: disable=wrong-import-position

PROJ_DIR: Final[Path] = utils.get_repo_root()
DESIGNS_ROOT: Final[Path] = Path(__file__).resolve().parents[1]
DEFAULT_OUT_DIR = "out_dv"
BUILDS_SUBDIR = "builds"
TESTS_SUBDIR = "tests"
FRAMEWORK_NODE = f"{Path(__file__).resolve()}::test_framework"
PYTEST_OPTS: tuple[str, ...] = ("-vv", "-s", "-ra", "-x")
SB_SUMMARY_FILE = "sb_summary.json"
COV_FILE = "coverage.yaml"
MANIFEST_FILE = "manifest.json"
DEFAULT_SEED = 42


@dataclass(frozen=True)
class RunSpec:  # pylint: disable=too-many-instance-attributes
    """What one dv invocation asks for, independent of the seed."""

    design: str
    test: str = ""
    testcase: str = ""
    toplevel: str = ""
    parameters: dict[str, str] = field(default_factory=dict)
    sim: str = "icarus"
    cmd: str = "both"
    outdir: str = DEFAULT_OUT_DIR
    verbosity: str = "info"
    waves: bool = False
    waves_fmt: str = "fst"
    build_force: bool = False
    build_args: tuple[str, ...] = ()
    plusargs: tuple[str, ...] = ()
    expect: str = "PASS"
    check_en: bool = True
    coverage_en: bool = True
    argv: tuple[str, ...] = ()

    @classmethod
    def from_args(cls, args: argparse.Namespace, argv: Sequence[str]) -> RunSpec:
        return cls(
            design=args.design,
            test=args.test,
            testcase=args.testcase,
            toplevel=args.toplevel,
            parameters=parse_params(args.params),
            sim=args.sim,
            cmd=args.cmd,
            outdir=args.outdir,
            verbosity=args.verbosity,
            waves=args.waves == "1",
            waves_fmt=args.waves_fmt,
            build_force=bool(args.build_force),
            build_args=tuple(args.build_args),
            plusargs=tuple(args.plusargs),
            expect=args.expect,
            check_en=args.check_en == "1",
            coverage_en=args.coverage_en == "1",
            argv=tuple(argv),
        )

    @property
    def hdl_toplevel(self) -> str:
        return self.toplevel or f"{self.design}_tb_top"

    @property
    def test_module(self) -> str:
        return f"selfcheck.{self.design}.dv.{self.test}"

    @property
    def wave_format(self) -> str:
        """Waveform format actually used; the runner only gives Icarus FST."""
        fmt = self.waves_fmt.lower()
        if fmt not in {"fst", "vcd"} or self.sim == "icarus":
            return "fst"
        return fmt


# === CLI ===


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    """Parse the dv command line (several defaults come from the environment)."""
    ap = argparse.ArgumentParser(
        description="Build and run self-checking benches via cocotb, pyuvm, and pytest",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )

    run = ap.add_argument_group("run")
    run.add_argument(
        "--cmd",
        choices=["build", "test", "both"],
        default=os.getenv("CMD", "both"),
        help="run only build, only test, or both",
    )
    run.add_argument(
        "--sim",
        choices=["icarus", "verilator"],
        default=os.getenv("SIM", "icarus"),
    )
    run.add_argument("--outdir", default=DEFAULT_OUT_DIR, help="output directory")
    run.add_argument(
        "--verbosity",
        choices=["critical", "error", "warning", "info", "debug", "notset"],
        default=os.getenv("VERBOSITY", "info"),
        help="log level for the tool and for the bench (COCOTB_LOG_LEVEL)",
    )
    run.add_argument("--waves", choices=["0", "1"], default=os.getenv("WAVES", "0"))
    run.add_argument(
        "--waves_fmt", choices=["fst", "vcd"], default=os.getenv("WAVES_FMT", "fst")
    )

    build = ap.add_argument_group("build")
    build.add_argument("--design", default="", help="design under src/selfcheck/")
    build.add_argument(
        "--toplevel", default="", help="HDL toplevel (default: <design>_tb_top)"
    )
    build.add_argument(
        "--param",
        dest="params",
        action="append",
        default=[],
        metavar="NAME=VALUE",
        help="HDL parameter on the toplevel (repeatable), e.g. --param=WIDTH=8",
    )
    build.add_argument("--build-force", action="store_true", help="always rebuild")
    build.add_argument(
        "--build-arg",
        dest="build_args",
        action="append",
        default=[],
        help="extra simulator build argument, passed verbatim (repeatable)",
    )

    test = ap.add_argument_group("test")
    test.add_argument(
        "--test", default="", help="test module: selfcheck.<design>.dv.<test>"
    )
    test.add_argument(
        "--testcase", default="", help="run only tests matching this name"
    )
    test.add_argument(
        "--plusarg",
        dest="plusargs",
        action="append",
        default=[],
        help="bench plusarg (repeatable), e.g. --plusarg=+ADDER_SEQ_LEN=20",
    )
    test.add_argument(
        "--expect",
        choices=["PASS", "FAIL"],
        default="PASS",
        help="expected outcome; a run that matches it returns 0",
    )
    test.add_argument(
        "--check-en", choices=["0", "1"], default=os.getenv("CHECK_EN", "1")
    )
    test.add_argument(
        "--coverage-en", choices=["0", "1"], default=os.getenv("COVERAGE_EN", "1")
    )

    seeds = ap.add_argument_group("seeds")
    seeds.add_argument(
        "--seeds",
        nargs="+",
        metavar="SEED",
        help="explicit seeds (decimal, 0x..., or 'random'); overrides --nseeds",
    )
    seeds.add_argument("--nseeds", type=int, default=0, help="draw N random seeds")
    seeds.add_argument(
        "--seed-base", type=int, default=1999, help="seeds the seed generator"
    )
    seeds.add_argument(
        "--seed-out", type=Path, default=None, help="write the seed list here"
    )

    return ap.parse_args(argv)


def validate_args(args: argparse.Namespace) -> None:
    """Fail fast on a command line that cannot work.

    Raises:
        SystemExit: Missing --design, missing --test for a test run, or a
            malformed --param.
    """
    if not args.design:
        raise SystemExit("[dv]: error: argument --design required")
    if args.cmd in {"both", "test"} and not args.test:
        raise SystemExit(f"[dv]: error: argument --test required for {args.cmd=}")
    parse_params(args.params)
    if args.sim == "icarus" and args.waves == "1" and args.waves_fmt != "fst":
        print("[dv] Icarus only writes FST through the runner; using fst")


def parse_params(items: Sequence[str]) -> dict[str, str]:
    """['WIDTH=8', 'BROKEN_CARRY=1'] -> {'WIDTH': '8', 'BROKEN_CARRY': '1'}.

    Raises:
        SystemExit: On an item without '=' or with an empty name.
    """
    params: dict[str, str] = {}
    for item in items:
        name, sep, value = item.partition("=")
        if not sep or not name.strip():
            raise SystemExit(f"[dv]: error: --param expects NAME=VALUE, got '{item}'")
        params[name.strip()] = value.strip()
    return params


def strip_seed_args(argv: Sequence[str]) -> list[str]:
    """Drop --seeds/--nseeds (either spelling) so a replay can pin one seed."""
    out: list[str] = []
    i = 0
    while i < len(argv):
        tok = argv[i]
        i += 1
        if tok == "--nseeds":
            i += 1
        elif tok == "--seeds":
            # values run until the next option
            while i < len(argv) and not argv[i].startswith("-"):
                i += 1
        elif not tok.startswith(("--nseeds=", "--seeds=")):
            out.append(tok)
    return out


def replay_command(argv: Sequence[str], seed: int) -> str:
    """Copy-pasteable dv command that repeats one run."""
    cmd = ["dv", *strip_seed_args(argv), "--seeds", str(seed)]
    return " ".join(shlex.quote(a) for a in cmd)


def derive_seeds(args: argparse.Namespace) -> list[int]:
    """Explicit seeds, else --nseeds drawn from --seed-base, else one default."""
    rng = random.Random(args.seed_base & 0xFFFF_FFFF)
    if args.seeds:
        seeds = [utils.normalize_seed(rng, s) for s in args.seeds]
    elif args.nseeds > 0:
        seeds = [utils.normalize_seed(rng, "random") for _ in range(args.nseeds)]
    else:
        seeds = [DEFAULT_SEED]
    print(f"[dv] using seeds: {seeds}")
    return seeds


def _configure_logging(verbosity: str) -> None:
    """Root logging for the tool (the bench gets COCOTB_LOG_LEVEL instead)."""
    lvl = logging.getLevelName((verbosity or "info").strip().upper())
    if not isinstance(lvl, int):
        lvl = logging.INFO
    if os.getenv("COCOTB_REDUCED_LOG_FMT") == "1":
        fmt, datefmt = "%(levelname).1s %(name)s: %(message)s", None
    else:
        fmt, datefmt = "%(asctime)s %(levelname)s %(name)s: %(message)s", "%H:%M:%S"
    if not logging.getLogger().handlers:
        logging.basicConfig(level=lvl, format=fmt, datefmt=datefmt)
    logging.getLogger().setLevel(lvl)


# === Locations ===


def srclist_for(design: str) -> Path:
    """<package>/<design>/rtl/srclist.f, failing clearly if absent."""
    path = DESIGNS_ROOT / design / "rtl" / "srclist.f"
    if not path.is_file():
        raise SystemExit(f"[dv]: error: no srclist for design '{design}' at {path}")
    return path


def build_dir_for(spec: RunSpec) -> Path:
    """<outdir>/builds/<design>.<fingerprint>.

    The fingerprint covers every knob that changes the compiled top, so
    WIDTH=8 and BROKEN_CARRY=1 builds live side by side and are reused.
    """
    knobs = {
        "sim": spec.sim,
        "waves": spec.waves,
        "waves_fmt": spec.wave_format if spec.waves else "",
        "toplevel": spec.hdl_toplevel,
        "parameters": spec.parameters,
        "build_args": list(spec.build_args),
    }
    raw = json.dumps(knobs, sort_keys=True, separators=(",", ":")).encode()
    leaf = f"{spec.design}.{hashlib.sha1(raw).hexdigest()[:10]}"
    return (PROJ_DIR / spec.outdir / BUILDS_SUBDIR / leaf).resolve()


def run_dir_for(spec: RunSpec, seed: int | None) -> Path:
    """<outdir>/tests/<build>.<testcase or test>.<seed> (or .build_only)."""
    what = f"{spec.testcase or spec.test}.{seed}" if seed is not None else "build_only"
    tag = f"{build_dir_for(spec).name}.{what}"
    return Path(spec.outdir, TESTS_SUBDIR, tag).resolve()


# === Runner arguments ===


def runner_build_kwargs(spec: RunSpec) -> dict[str, Any]:
    """Arguments for ``Runner.build``. Writes the absolute srclist as a side effect."""
    build_dir = build_dir_for(spec)
    build_dir.mkdir(parents=True, exist_ok=True)

    build_args: list[str] = []
    if spec.sim == "verilator":
        build_args += ["--timing", "--autoflush"]
        if spec.waves:
            build_args.append("--trace-fst" if spec.wave_format == "fst" else "--trace")
    srclist = srclist_for(spec.design)
    abs_srclist = utils.absolutize_srclist(srclist, srclist.parent, build_dir)
    build_args += ["-f", str(abs_srclist)]
    # user args last so they can override
    build_args += spec.build_args

    return {
        "hdl_toplevel": spec.hdl_toplevel,
        "parameters": dict(spec.parameters),
        "timescale": ("1ns", "1ps"),
        "waves": spec.waves,
        "build_dir": build_dir,
        "build_args": build_args,
        "log_file": str(build_dir / "build.log"),
        "always": spec.build_force,
    }


def runner_test_kwargs(spec: RunSpec, seed: int, run_dir: Path) -> dict[str, Any]:
    """Arguments for ``Runner.test``.

    Bench knobs travel as plusargs; the seed, the log level and the output
    locations travel as environment.
    """
    wave_file = run_dir / f"waves.{spec.wave_format}"
    plusargs = [
        f"+CHECK_EN={int(spec.check_en)}",
        f"+COVERAGE_EN={int(spec.coverage_en)}",
        *spec.plusargs,
    ]
    test_args: list[str] = []
    if spec.waves and spec.sim == "icarus":
        # a plusarg, so that it lands after the .vvp file
        plusargs.append(f"+dumpfile_path={wave_file}")
    elif spec.waves:
        test_args += ["--trace-file", str(wave_file)]

    extra_env = {
        "RANDOM_SEED": str(seed),
        "COCOTB_RANDOM_SEED": str(seed),
        "COCOTB_SEED": str(seed),
        "COCOTB_LOG_LEVEL": spec.verbosity.upper(),
        "COCOTB_PLUSARGS": " ".join(plusargs),
        "SB_SUMMARY_JSON": str(run_dir / SB_SUMMARY_FILE),
        "COV_YAML": str(run_dir / COV_FILE),
    }
    return {
        "hdl_toplevel_lang": "verilog",
        "hdl_toplevel": spec.hdl_toplevel,
        "test_module": spec.test_module,
        "test_filter": spec.testcase or None,
        "build_dir": str(build_dir_for(spec)),
        "test_dir": str(run_dir),
        "waves": spec.waves,
        "plusargs": plusargs,
        "test_args": test_args,
        "extra_env": extra_env,
        "log_file": str(run_dir / "test.log"),
        "results_xml": str(run_dir / "results.xml"),
    }


# === Actions ===


def _write_build_manifest(kwargs: dict[str, Any], spec: RunSpec, status: str) -> None:
    build_dir: Path = kwargs["build_dir"]
    manifest = {
        "status": status,  # started | built | failed
        "updated_at": utils.iso_utc(),
        "sim": spec.sim,
        "design": spec.design,
        "toplevel": kwargs["hdl_toplevel"],
        "parameters": kwargs["parameters"],
        "waves": spec.waves,
        "fingerprint": build_dir.name,
        "build_args": kwargs["build_args"],
    }
    (build_dir / MANIFEST_FILE).write_text(json.dumps(manifest, indent=2))


def run_build(runner: Any, spec: RunSpec) -> Path:
    """Compile the toplevel; the build manifest records how it went."""
    print("\n[dv] running build...\n")
    kwargs = runner_build_kwargs(spec)
    _write_build_manifest(kwargs, spec, "started")
    try:
        runner.build(**kwargs)
    except Exception:
        _write_build_manifest(kwargs, spec, "failed")
        raise
    _write_build_manifest(kwargs, spec, "built")
    return kwargs["build_dir"]


@dataclass
class _ActiveRun:
    """The run test_framework executes; set right before pytest.main."""

    spec: RunSpec | None = None
    seed: int | None = None
    cmd: str = "both"
    run_dir: Path | None = None


_ACTIVE = _ActiveRun()


def test_framework() -> None:
    """pytest entry point: build and/or simulate the active run."""
    spec, run_dir = _ACTIVE.spec, _ACTIVE.run_dir
    if spec is None or run_dir is None:
        raise RuntimeError("[dv] no active run; start runs through 'dv'")

    print(
        f"\n[dv] sim={spec.sim} cmd={_ACTIVE.cmd} design={spec.design} "
        f"toplevel={spec.hdl_toplevel} params={spec.parameters} "
        f"test={spec.test} testcase={spec.testcase or '*'} seed={_ACTIVE.seed}"
    )
    runner = get_runner(spec.sim)

    if _ACTIVE.cmd in {"both", "build"}:
        print(f"[dv] result: build: {run_build(runner, spec)}")
    elif not build_dir_for(spec).exists():
        raise RuntimeError(
            f"[dv] build dir missing: {build_dir_for(spec)}. Run with --cmd build first."
        )

    if _ACTIVE.cmd == "build" or _ACTIVE.seed is None or not spec.test:
        print("[dv] skipping test (cmd=build or no --test)")
        return

    print("\n[dv] running test...\n")
    runner.test(**runner_test_kwargs(spec, _ACTIVE.seed, run_dir))


# === Runs ===


def read_sb_summary(run_dir: Path) -> dict[str, Any] | None:
    """The scoreboard summary a run left behind, if any."""
    try:
        data = json.loads((run_dir / SB_SUMMARY_FILE).read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError):
        return None
    return data if isinstance(data, dict) else None


def _outcome_tag(status: str, expect: str) -> str:
    label = f"{status} ({'EXPECTED' if status == expect else 'UNEXPECTED'})"
    return utils.green(label) if status == expect else utils.red(label)


def run_one(spec: RunSpec, seed: int | None, cmd: str) -> int:
    """Run pytest on the framework node for one seed and write manifest.json.

    Returns:
        0 when the outcome matches ``spec.expect``, else 1.
    """
    run_dir = run_dir_for(spec, seed)
    run_dir.mkdir(parents=True, exist_ok=True)

    _ACTIVE.spec, _ACTIVE.seed, _ACTIVE.cmd, _ACTIVE.run_dir = spec, seed, cmd, run_dir
    # pytest must import this file as the module that holds _ACTIVE
    sys.modules.setdefault("selfcheck.tools.dv", sys.modules[__name__])

    print(f"\n[dv] running {FRAMEWORK_NODE} seed={seed} -> {run_dir}\n")
    t0 = time.time()
    framework_rc = pytest.main([*PYTEST_OPTS, FRAMEWORK_NODE])
    elapsed = time.time() - t0

    status = "PASS" if framework_rc == 0 else "FAIL"
    replay = replay_command(spec.argv, seed if seed is not None else DEFAULT_SEED)
    sb = read_sb_summary(run_dir)
    manifest = {
        "status": status,
        "expect": spec.expect,
        "seed": seed,
        "duration_s": round(elapsed, 3),
        "cmd": "python -m pytest " + " ".join([*PYTEST_OPTS, FRAMEWORK_NODE]),
        "replay_cmd": replay,
        "build_dir": str(build_dir_for(spec)),
        "test_dir": str(run_dir),
        "scoreboard": sb,
        "spec": asdict(spec),
    }
    (run_dir / MANIFEST_FILE).write_text(
        json.dumps(manifest, indent=2), encoding="utf-8"
    )

    print(f"\n[dv] result: test_dir: {run_dir}")
    print(f"[dv] result: duration: {elapsed:.2f}s")
    if sb is not None:
        print(
            f"[dv] result: checks: total={sb.get('total')} "
            f"pass={sb.get('passed')} fail={sb.get('failed')}"
        )
    print(f"[dv] result: status: {status} (rc={framework_rc}), expect: {spec.expect}\n")
    print(f"{_outcome_tag(status, spec.expect)}: {replay}")

    return 0 if status == spec.expect else 1


# === Main ===


def main(argv: Sequence[str] | None = None) -> int:
    """Entry point: one pytest run per seed; non-zero if any outcome surprised."""
    orig_argv = list(sys.argv[1:] if argv is None else argv)
    args = parse_args(orig_argv)
    validate_args(args)
    _configure_logging(str(args.verbosity))
    spec = RunSpec.from_args(args, orig_argv)

    if spec.cmd == "build":
        return run_one(spec, None, "build")

    seeds = derive_seeds(args)
    rc = 0
    for idx, seed in enumerate(seeds):
        # build once, with the first seed
        cmd = "test" if (spec.cmd == "both" and idx > 0) else spec.cmd
        rc |= run_one(spec, seed, cmd)
    if args.seed_out:
        Path(args.seed_out).write_text(
            "".join(f"{s}\n" for s in seeds), encoding="utf-8"
        )
    return rc


if __name__ == "__main__":
    raise SystemExit(main())
