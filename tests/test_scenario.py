"""Tests for the scenario harness, configuration and logger."""

from __future__ import annotations

import io
import json

import pandas as pd
import pytest

from cross_jerk.parameters import ALLOCATOR, CrossScenarioConfig
from cross_jerk.scenario import (
    estimate_time_horizon,
    resolve_time_horizon,
    run_weight_sweep,
    summarize_sweep,
    sweep_to_dataframe,
)
from cross_jerk.utils import Logger
from cross_jerk.vehicle_state import AgentKinematics
from cross_jerk.visualization import plot_weight_sweep


def test_horizon_is_mean_of_naive_arrival_times():
    ego = AgentKinematics(20.0, 8.0)
    obs = AgentKinematics(18.0, 9.0)
    assert estimate_time_horizon(ego, obs) == pytest.approx((2.5 + 2.0) / 2.0)


def test_horizon_floors_speed_of_stopped_agent():
    ego = AgentKinematics(10.0, 0.0)
    obs = AgentKinematics(10.0, 10.0)
    expected = (10.0 / ALLOCATOR.MIN_ARRIVAL_SPEED + 1.0) / 2.0
    assert estimate_time_horizon(ego, obs) == pytest.approx(expected)


def test_default_sweep_solves_every_weight():
    config = CrossScenarioConfig()
    records = run_weight_sweep(config)

    assert [r.w_agent for r in records] == [0.0, 0.25, 0.5, 1.0]
    assert all(r.t_c == pytest.approx(3.75) for r in records)
    assert all(r.success and r.satisfied for r in records)
    assert all(abs(r.slack) < 1e-6 for r in records)
    assert records[0].jerk_ego == 0.0


def test_fixed_horizon_overrides_estimate():
    config = CrossScenarioConfig(t_c=2.0)
    assert resolve_time_horizon(config) == 2.0
    assert all(r.t_c == 2.0 for r in run_weight_sweep(config, weights=[0.5]))


def test_failed_weight_keeps_jerks_empty():
    records = run_weight_sweep(CrossScenarioConfig(), weights=[-0.1, 1.0])
    failed, solved = records
    assert not failed.success
    assert failed.status == "NEGATIVE_WEIGHT"
    assert failed.jerk_ego is None and failed.satisfied is None
    assert solved.success

    summary = summarize_sweep(records)
    assert summary["n_weights"] == 2
    assert summary["n_success"] == 1
    assert summary["failures"] == [{"w_agent": -0.1, "status": "NEGATIVE_WEIGHT"}]
    json.dumps(summary)


def test_summary_keeps_repeated_failing_weights():
    records = run_weight_sweep(CrossScenarioConfig(), weights=[-0.1, -0.1])
    failures = json.loads(json.dumps(summarize_sweep(records)))["failures"]
    assert failures == [
        {"w_agent": -0.1, "status": "NEGATIVE_WEIGHT"},
        {"w_agent": -0.1, "status": "NEGATIVE_WEIGHT"},
    ]


def test_sweep_dataframe_columns():
    df = sweep_to_dataframe(run_weight_sweep(CrossScenarioConfig()))
    assert isinstance(df, pd.DataFrame)
    assert len(df) == 4
    assert list(df.columns[:5]) == ["w_agent", "t_c", "t_hw", "success", "status"]
    assert df["satisfied"].all()


def test_plot_weight_sweep_writes_file(tmp_path):
    df = sweep_to_dataframe(run_weight_sweep(CrossScenarioConfig()))
    out = tmp_path / "sweep.png"
    assert plot_weight_sweep(df, str(out))
    assert out.exists()


def test_plot_weight_sweep_skips_when_nothing_solved(tmp_path, capsys):
    df = sweep_to_dataframe(run_weight_sweep(CrossScenarioConfig(), weights=[-1.0]))
    out = tmp_path / "sweep.png"
    assert not plot_weight_sweep(df, str(out))
    assert not out.exists()
    assert "[WARNING]" in capsys.readouterr().out


def test_config_overrides_report_unknown_keys(tmp_path):
    path = tmp_path / "scenario.json"
    path.write_text(json.dumps({"v_obs": 9.0, "weights": [0.1, 2], "bogus": 1}), encoding="utf-8")

    config = CrossScenarioConfig()
    unknown = config.load_overrides(str(path), verbose=False)

    assert unknown == ["bogus"]
    assert config.v_obs == 9.0
    assert config.weights == [0.1, 2.0]


@pytest.mark.parametrize("key, value", [("t_hw", "x"), ("d_ego", [1.0]), ("v_obs", None), ("t_c", True)])
def test_config_rejects_non_numeric_override(key, value):
    config = CrossScenarioConfig()
    with pytest.raises(ValueError):
        config.apply_overrides({key: value}, verbose=False)


def test_config_coerces_numeric_overrides():
    config = CrossScenarioConfig()
    config.apply_overrides({"t_hw": "1.5", "a_ego": 1, "t_c": None}, verbose=False)
    assert config.t_hw == 1.5
    assert isinstance(config.a_ego, float)
    assert config.t_c is None
    config.apply_overrides({"t_c": 2}, verbose=False)
    assert config.t_c == 2.0


def test_config_ignores_method_names():
    config = CrossScenarioConfig()
    unknown = config.apply_overrides({"to_agents": 1, "load_overrides": 2}, verbose=False)
    assert unknown == ["to_agents", "load_overrides"]
    ego, obs = config.to_agents()
    assert ego.distance_to_conflict_point == 30.0


@pytest.mark.parametrize("weights", [[], ["a"], None])
def test_config_rejects_malformed_weights(weights):
    with pytest.raises(ValueError):
        CrossScenarioConfig(weights=weights)


def test_config_rejects_non_object_overrides():
    with pytest.raises(ValueError):
        CrossScenarioConfig().apply_overrides([1, 2, 3])


def test_logger_tees_terminal_and_file(tmp_path):
    terminal = io.StringIO()
    log_path = tmp_path / "sweep_log.txt"
    logger = Logger(str(log_path), terminal=terminal)
    logger.write("w_agent = 1.0\n")
    logger.close()
    logger.close()
    logger.write("dropped\n")

    text = log_path.read_text(encoding="utf-8")
    assert "Sweep Log - cross_jerk" in text
    assert "w_agent = 1.0" in text
    assert terminal.getvalue() == "w_agent = 1.0\n"
