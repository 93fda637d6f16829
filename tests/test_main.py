"""Tests for the command line entry point."""

from __future__ import annotations

import json

import pytest

from cross_jerk import main as main_module


@pytest.fixture
def tmp_outputs(tmp_path, monkeypatch):
    monkeypatch.setattr(
        main_module,
        "make_output_path",
        lambda prefix, suffix: str(tmp_path / f"{prefix}{suffix}"),
    )
    return tmp_path


def _json_stats(out: str) -> dict:
    line = next(l for l in out.splitlines() if l.startswith("[JSON_STATS] "))
    return json.loads(line[len("[JSON_STATS] "):])


def test_self_check_mode_passes(capsys):
    assert main_module.main(["--mode", "test"]) == 0
    out = capsys.readouterr().out
    assert "[SUCCESS] All tests passed!" in out
    assert "[FAIL]" not in out


def test_silent_sweep_prints_only_stats(capsys):
    assert main_module.main(["--mode", "sweep", "--silent"]) == 0
    out = capsys.readouterr().out
    assert "w_agent =" not in out
    stats = _json_stats(out)
    assert stats["t_c"] == pytest.approx(3.75)
    assert stats["n_success"] == stats["n_weights"] == 4
    assert stats["n_satisfied"] == 4


def test_sweep_writes_log_and_plot(tmp_outputs, capsys):
    code = main_module.main(["--mode", "sweep", "--weights", "0", "1", "--t_hw", "1.5", "--plot"])
    assert code == 0
    out = capsys.readouterr().out
    assert "Constraint satisfied? YES" in out

    log_text = (tmp_outputs / "sweep_log.txt").read_text(encoding="utf-8")
    assert "t_hw = 1.5 s" in log_text
    assert "w_agent = 1.0" in log_text
    assert (tmp_outputs / "sweep_plot.png").exists()


def test_sweep_with_no_solution_fails(tmp_outputs, capsys):
    assert main_module.main(["--mode", "sweep", "--silent", "--weights", "-0.1"]) == 1
    out = capsys.readouterr().out
    assert _json_stats(out)["n_success"] == 0
    assert "[FAILED]" in out


def test_sweep_applies_config_file(tmp_path, capsys):
    path = tmp_path / "scenario.json"
    path.write_text(json.dumps({"d_ego": 20.0, "d_obs": 18.0, "v_obs": 9.0}), encoding="utf-8")
    assert main_module.main(["--mode", "sweep", "--silent", "--config", str(path)]) == 0
    assert _json_stats(capsys.readouterr().out)["t_c"] == pytest.approx(2.25)


def test_unreadable_config_is_reported(tmp_path, capsys):
    missing = tmp_path / "missing.json"
    assert main_module.main(["--mode", "sweep", "--config", str(missing)]) == 1
    assert "[ERROR] Failed to load config" in capsys.readouterr().out


def test_config_with_wrong_type_is_reported(tmp_path, capsys):
    path = tmp_path / "scenario.json"
    path.write_text(json.dumps({"t_hw": "x"}), encoding="utf-8")
    assert main_module.main(["--mode", "sweep", "--silent", "--config", str(path)]) == 1
    assert "[ERROR] Failed to load config" in capsys.readouterr().out


def test_self_check_mode_warns_about_scenario_flags(capsys):
    assert main_module.main(["--mode", "test", "--weights", "2", "--t_hw", "0.5"]) == 0
    out = capsys.readouterr().out
    assert "[WARNING] Ignored in test mode: --weights, --t_hw" in out
