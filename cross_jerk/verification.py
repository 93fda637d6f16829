# -*- coding: utf-8 -*-
"""
cross_jerk/verification.py

配分結果の事後検証（診断用、配分器の契約には含まれない）:
    ego_remaining   = d_ego - traveled_ego(t_c)
    obs_safe_margin = d_obs - traveled_obs(t_c) - v_obs(t_c) * t_hw
    satisfied       = ego_remaining <= obs_safe_margin + tolerance

等式解では slack = obs_safe_margin - ego_remaining ≈ 0 になる。
"""

from dataclasses import dataclass

from .parameters import ALLOCATOR, ScenarioParameters
from .vehicle_state import AgentKinematics


@dataclass(frozen=True)
class ConstraintCheck:
    """
    Safety margin re-evaluated with the allocated jerks.

    Attributes:
        traveled_ego: 自車走行距離 [m]
        traveled_obs: 障碍物走行距離 [m]
        v_obs_terminal: 障碍物の t_c での速度 [m/s]
        ego_remaining: 自車の衝突点までの残り距離 [m] (>0: 未到達)
        obs_safe_margin: 障碍物の安全マージン [m] (>0: 安全)
        slack: obs_safe_margin - ego_remaining [m] (負: 制約違反)
        satisfied: ego_remaining <= obs_safe_margin + tolerance
    """
    traveled_ego: float
    traveled_obs: float
    v_obs_terminal: float
    ego_remaining: float
    obs_safe_margin: float
    slack: float
    satisfied: bool


def verify_allocation(
    ego: AgentKinematics,
    obs: AgentKinematics,
    params: ScenarioParameters,
    jerk_ego: float,
    jerk_obs: float,
    tolerance: float = ALLOCATOR.VERIFY_TOLERANCE
) -> ConstraintCheck:
    t = params.time_horizon

    traveled_ego = ego.traveled(t, jerk_ego)
    traveled_obs = obs.traveled(t, jerk_obs)
    v_obs_t = obs.velocity_at(t, jerk_obs)

    ego_remaining = ego.distance_to_conflict_point - traveled_ego
    obs_safe_margin = obs.distance_to_conflict_point - traveled_obs - v_obs_t * params.headway_time

    return ConstraintCheck(
        traveled_ego=traveled_ego,
        traveled_obs=traveled_obs,
        v_obs_terminal=v_obs_t,
        ego_remaining=ego_remaining,
        obs_safe_margin=obs_safe_margin,
        slack=obs_safe_margin - ego_remaining,
        satisfied=ego_remaining <= obs_safe_margin + tolerance
    )
