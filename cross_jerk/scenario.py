# -*- coding: utf-8 -*-
"""
cross_jerk/scenario.py

交差シナリオのデモハーネス（配分器を純粋関数として呼び出す外部呼び出し側）:
- estimate_time_horizon: 素朴な到達時刻 (d / max(v, 0.1)) の平均で t_c を推定
- run_weight_sweep: 重み w_agent ごとに allocate() + 事後検証
- sweep_to_dataframe: 結果表 (pandas)
- print_scenario_header / print_sweep_record: コンソール出力
"""

from dataclasses import dataclass, asdict, fields
from typing import List, Optional, Sequence

import numpy as np
import pandas as pd

from .jerk_allocator import allocate
from .parameters import ALLOCATOR, CrossScenarioConfig, ScenarioParameters
from .vehicle_state import AgentKinematics
from .verification import verify_allocation


@dataclass
class SweepRecord:
    """One row of the weight sweep"""
    w_agent: float
    t_c: float
    t_hw: float
    success: bool
    status: str
    jerk_ego: Optional[float] = None
    jerk_obs: Optional[float] = None
    ego_remaining: Optional[float] = None
    obs_safe_margin: Optional[float] = None
    slack: Optional[float] = None
    satisfied: Optional[bool] = None


def estimate_time_horizon(
    ego: AgentKinematics,
    obs: AgentKinematics,
    min_speed: float = ALLOCATOR.MIN_ARRIVAL_SPEED
) -> float:
    """
    Average of the two constant-velocity arrival times [s]

    Example:
        >>> estimate_time_horizon(AgentKinematics(30.0, 8.0), AgentKinematics(30.0, 8.0))
        3.75
    """
    t_ego0 = ego.naive_arrival_time(min_speed)
    t_obs0 = obs.naive_arrival_time(min_speed)
    return (t_ego0 + t_obs0) / 2.0


def resolve_time_horizon(config: CrossScenarioConfig) -> float:
    """config.t_c があればそれを、なければ推定値を使う"""
    if config.t_c is not None:
        return float(config.t_c)
    ego, obs = config.to_agents()
    return estimate_time_horizon(ego, obs)


def run_weight_sweep(
    config: CrossScenarioConfig,
    weights: Optional[Sequence[float]] = None
) -> List[SweepRecord]:
    """
    Call the allocator once per weight and verify each solution.

    Args:
        config: シナリオ設定
        weights: 重み列 (None の場合 config.weights)

    Returns:
        SweepRecord のリスト（入力順）
    """
    ego, obs = config.to_agents()
    t_c = resolve_time_horizon(config)
    sweep = np.asarray(config.weights if weights is None else weights, dtype=float)

    records: List[SweepRecord] = []
    for w in sweep:
        params = ScenarioParameters(time_horizon=t_c, headway_time=config.t_hw,
                                    obstacle_cost_weight=float(w))
        result = allocate(ego, obs, params)
        record = SweepRecord(w_agent=float(w), t_c=t_c, t_hw=config.t_hw,
                             success=result.success, status=result.status.name)
        if result.success:
            check = verify_allocation(ego, obs, params, result.jerk_ego, result.jerk_obs)
            record.jerk_ego = result.jerk_ego
            record.jerk_obs = result.jerk_obs
            record.ego_remaining = check.ego_remaining
            record.obs_safe_margin = check.obs_safe_margin
            record.slack = check.slack
            record.satisfied = check.satisfied
        records.append(record)
    return records


def sweep_to_dataframe(records: Sequence[SweepRecord]) -> pd.DataFrame:
    """SweepRecord 列を DataFrame に変換（列順は SweepRecord のフィールド順）"""
    columns = [f.name for f in fields(SweepRecord)]
    return pd.DataFrame([asdict(r) for r in records], columns=columns)


def summarize_sweep(records: Sequence[SweepRecord]) -> dict:
    """JSON_STATS 用の集計"""
    solved = [r for r in records if r.success]
    max_abs_slack = max((abs(r.slack) for r in solved), default=0.0)
    return {
        't_c': records[0].t_c if records else None,
        'n_weights': len(records),
        'n_success': len(solved),
        'n_satisfied': sum(1 for r in solved if r.satisfied),
        'max_abs_slack': float(max_abs_slack),
        'failures': [{'w_agent': r.w_agent, 'status': r.status} for r in records if not r.success],
    }


def print_scenario_header(config: CrossScenarioConfig, t_c: float):
    print("=== Cross Scenario Jerk Optimization ===")
    print(f"Ego: d={config.d_ego} m, v={config.v_ego} m/s, a={config.a_ego} m/s^2")
    print(f"Obs: d={config.d_obs} m, v={config.v_obs} m/s, a={config.a_obs} m/s^2")
    print(f"t_c = {t_c} s, t_hw = {config.t_hw} s\n")


def print_sweep_record(record: SweepRecord):
    print(f"w_agent = {record.w_agent}")
    if record.success:
        print(f"  jerk_ego = {record.jerk_ego:.6f} m/s^3")
        print(f"  jerk_obs = {record.jerk_obs:.6f} m/s^3")
        print(f"  Ego remaining to CP: {record.ego_remaining:.6f} m")
        print(f"  Obs safe margin:     {record.obs_safe_margin:.6f} m")
        print(f"  Constraint satisfied? {'YES' if record.satisfied else 'NO'}")
    else:
        print(f"  Failed to solve. ({record.status})")
    print("-------------------")
