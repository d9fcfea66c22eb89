# SPDX-FileCopyrightText: 2025 Hugh Walsh
#
# SPDX-License-Identifier: MIT

# This file: src/selfcheck/utils.py

"""Helpers shared by the dv command-line tools."""

from __future__ import annotations

import random
import time
from pathlib import Path

RED = "\033[31m"
GREEN = "\033[32m"
YELLOW = "\033[33m"
RESET = "\033[0m"

_RANDOM_SEED_WORDS = frozenset({"rand", "random", "auto"})


def _srclist_lines(listfile: Path, src_root: Path) -> list[str]:
    """Flatten one srclist; nested ``-f`` files are expanded in place."""
    out: list[str] = []
    for line in (raw.strip() for raw in listfile.read_text().splitlines()):
        if not line or line.startswith("//"):
            continue
        if line.startswith("+incdir+"):
            out.append("+incdir+" + str((src_root / line[8:]).resolve()))
        elif line.startswith("-f "):
            nested = (src_root / line[3:].strip()).resolve()
            # a missing nested list is left for the simulator to report
            out.extend(_srclist_lines(nested, src_root) if nested.exists() else [line])
        elif line[0] in "+-":
            out.append(line)
        else:
            out.append(str((src_root / line).resolve()))
    return out


def absolutize_srclist(infile: Path, src_root: Path, out_dir: Path) -> Path:
    """Write ``out_dir/srclist.abs.f`` with every path made absolute.

    Relative paths are taken against ``src_root``. Other options such as
    ``+define+`` pass through untouched.
    """
    out = out_dir / "srclist.abs.f"
    out.write_text("".join(f"{line}\n" for line in _srclist_lines(infile, src_root)))
    return out


def get_repo_root() -> Path:
    """Nearest ancestor holding pyproject.toml, else the parent of src/, else cwd."""
    here = Path(__file__).resolve()
    marked = next((p for p in here.parents if (p / "pyproject.toml").exists()), None)
    if marked is not None:
        return marked
    src = next((p for p in here.parents if p.name == "src"), None)
    return src.parent if src is not None else Path.cwd()


def iso_utc() -> str:
    return time.strftime("%Y-%m-%dT%H:%M:%SZ", time.gmtime())


def normalize_seed(rng: random.Random, s: str) -> int:
    """32-bit seed from decimal, 0x-hex, or one of rand/random/auto.

    Raises:
        SystemExit: For anything else.
    """
    if s.lower() in _RANDOM_SEED_WORDS:
        return rng.getrandbits(32)
    try:
        return int(s, 0) & 0xFFFF_FFFF
    except ValueError as exc:
        raise SystemExit(
            f"[dv] Invalid seed '{s}'. Use decimal, 0x..., or 'random'."
        ) from exc


def _paint(color: str, s: str) -> str:
    return f"{color}{s}{RESET}"


def red(s: str) -> str:
    return _paint(RED, s)


def green(s: str) -> str:
    return _paint(GREEN, s)


def yellow(s: str) -> str:
    return _paint(YELLOW, s)
