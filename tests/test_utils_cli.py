# SPDX-FileCopyrightText: 2025 Hugh Walsh
#
# SPDX-License-Identifier: MIT

# This file: tests/test_utils_cli.py

"""Setting resolution: environment, then plusargs, then default."""

from __future__ import annotations

from selfcheck.dv import utils_cli


class TestIntSetting:
    def test_default(self):
        assert utils_cli.get_int_setting("CLOCK_PERIOD_PS", 1000) == 1000

    def test_env_wins_over_plusarg(self, monkeypatch):
        monkeypatch.setenv("CLOCK_PERIOD_PS", "2000")
        monkeypatch.setenv("COCOTB_PLUSARGS", "+CLOCK_PERIOD_PS=3000")
        assert utils_cli.get_int_setting("CLOCK_PERIOD_PS", 1000) == 2000

    def test_prefixed_env(self, monkeypatch):
        monkeypatch.setenv("SC_ADDER_SEQ_LEN", "0x10")
        assert utils_cli.get_int_setting("ADDER_SEQ_LEN", 50) == 16

    def test_plusarg(self, monkeypatch):
        monkeypatch.setenv("SC_PLUSARGS", "+FOO=1 +ADDER_SEQ_LEN=20")
        assert utils_cli.get_int_setting("ADDER_SEQ_LEN", 50) == 20

    def test_garbage_falls_back(self, monkeypatch):
        monkeypatch.setenv("ADDER_SEQ_LEN", "lots")
        assert utils_cli.get_int_setting("ADDER_SEQ_LEN", 50) == 50


class TestBoolSetting:
    def test_bare_plusarg_is_true(self, monkeypatch):
        monkeypatch.setenv("PLUSARGS", "+COVERAGE_EN")
        assert utils_cli.get_bool_setting("COVERAGE_EN", False) is True

    def test_words(self, monkeypatch):
        monkeypatch.setenv("CHECK_EN", "off")
        assert utils_cli.get_bool_setting("CHECK_EN", True) is False

    def test_unparseable_env_uses_plusarg(self, monkeypatch):
        monkeypatch.setenv("CHECK_EN", "maybe")
        monkeypatch.setenv("COCOTB_PLUSARGS", "+CHECK_EN=0")
        assert utils_cli.get_bool_setting("CHECK_EN", True) is False


class TestStrSetting:
    def test_env_then_plusarg_then_default(self, monkeypatch):
        assert utils_cli.get_str_setting("CLOCK_NAME", "clk") == "clk"
        monkeypatch.setenv("COCOTB_PLUSARGS", "+CLOCK_NAME=aclk")
        assert utils_cli.get_str_setting("CLOCK_NAME", "clk") == "aclk"
        monkeypatch.setenv("CLOCK_NAME", "bclk")
        assert utils_cli.get_str_setting("CLOCK_NAME", "clk") == "bclk"

    def test_iter_plusargs(self, monkeypatch):
        monkeypatch.setenv("COCOTB_PLUSARGS", "+A=1  +B")
        assert list(utils_cli.iter_plusargs()) == ["+A=1", "+B"]
