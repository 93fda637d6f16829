# -*- coding: utf-8 -*-
# --- jerk_allocator.py (ver.1.0 / 2026-10-17): 交差シナリオ jerk 最適配分 ---
"""
================================================================================
Cross Scenario Jerk Allocator (Closed-form Lagrange Solution)
================================================================================

自車と障碍物が同一の衝突点へ接近する交差シナリオで、評価時刻 t_c における
安全マージン制約を等式として満たす、重み付き二乗和最小の jerk ペアを求める。

安全制約 (t = t_c, hw = t_hw):
    d_ego - traveled_ego(t) <= d_obs - traveled_obs(t) - v_obs(t) * hw

最適解では制約が等式で効くと仮定し、jerk 項を左辺に集めると:
    A * j_ego + B * j_obs = C

    K  = t³/6                 (jerk -> 走行距離ゲイン)
    Kv = t²/2                 (jerk -> 障碍物終端速度ゲイン, ヘッドウェイ項に効く)
    A  = -K
    B  = K + Kv * hw
    C  = (d_obs - d_ego)
         - [(v_obs*t + 0.5*a_obs*t²) - (v_ego*t + 0.5*a_ego*t²)]
         - (v_obs + a_obs*t) * hw

目的関数: min j_ego² + w * j_obs²
    - w ≈ 0: 障碍物が補正を全て負担 (j_ego = 0, j_obs = C/B)
    - 一般: ラグランジュ乗数 λ による閉形式解
        denom = A² + B²/w,  λ = 2C/denom
        j_ego = λA/2,  j_obs = λB/(2w)

狭義凸な目的関数と単一の超平面制約なので解は大域最適。
不良設定 (t_c <= EPS, w < 0, 係数の退化) は例外ではなく success=False で返す。
================================================================================
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

from .parameters import ALLOCATOR, ScenarioParameters
from .vehicle_state import AgentKinematics


class AllocationStatus(Enum):
    """Outcome of one allocation"""
    OK = 0                              # Solved
    INVALID_HORIZON = 1                 # t_c <= EPS
    NEGATIVE_WEIGHT = 2                 # w_agent < 0
    DEGENERATE_OBSTACLE_LEVERAGE = 3    # w ≈ 0 and |B| < EPS
    DEGENERATE_CONSTRAINT = 4           # |A² + B²/w| < EPS


@dataclass(frozen=True)
class ConstraintCoefficients:
    """Binding constraint A * j_ego + B * j_obs = C"""
    A: float
    B: float
    C: float


@dataclass(frozen=True)
class AllocationResult:
    """
    Allocation result.

    Attributes:
        success: 解が得られたか
        jerk_ego: 自車 jerk [m/s³] (success=False のとき None)
        jerk_obs: 障碍物 jerk [m/s³] (success=False のとき None)
        status: 失敗理由の分類
        lagrange_multiplier: 一般解の λ (退化重み分岐・失敗時は None)
    """
    success: bool
    jerk_ego: Optional[float] = None
    jerk_obs: Optional[float] = None
    status: AllocationStatus = AllocationStatus.OK
    lagrange_multiplier: Optional[float] = None

    @classmethod
    def failure(cls, status: AllocationStatus) -> 'AllocationResult':
        return cls(success=False, status=status)

    def as_tuple(self) -> Tuple[bool, Optional[float], Optional[float]]:
        """(success, jerk_ego, jerk_obs)"""
        return self.success, self.jerk_ego, self.jerk_obs


def compute_constraint_coefficients(
    ego: AgentKinematics,
    obs: AgentKinematics,
    t: float,
    hw: float
) -> ConstraintCoefficients:
    """
    Collect the jerk-dependent terms of the safety margin at time t.

    Args:
        ego: 自車の状態
        obs: 障碍物の状態
        t: 評価時刻 t_c [s]
        hw: ヘッドウェイ時間 t_hw [s]

    Returns:
        ConstraintCoefficients (A, B, C)
    """
    t2 = t * t
    t3 = t2 * t

    K = t3 / 6.0
    Kv = 0.5 * t2

    # jerk を含まない定数項
    trav_ego_const = ego.velocity * t + 0.5 * ego.acceleration * t2
    trav_obs_const = obs.velocity * t + 0.5 * obs.acceleration * t2
    v_obs_const = obs.velocity + obs.acceleration * t

    A = -K
    B = K + Kv * hw
    C = ((obs.distance_to_conflict_point - ego.distance_to_conflict_point)
         - (trav_obs_const - trav_ego_const)
         - v_obs_const * hw)

    return ConstraintCoefficients(A=A, B=B, C=C)


def allocate(
    ego: AgentKinematics,
    obs: AgentKinematics,
    params: ScenarioParameters,
    eps: float = ALLOCATOR.EPS
) -> AllocationResult:
    """
    Minimum-cost jerk pair that makes the safety margin bind at t_c.

    Args:
        ego: 自車の状態
        obs: 障碍物の状態
        params: t_c, t_hw, w_agent
        eps: 退化判定閾値

    Returns:
        AllocationResult (pure function of the inputs, never raises on bad input)
    """
    t = params.time_horizon
    w = params.obstacle_cost_weight

    if t <= eps:
        return AllocationResult.failure(AllocationStatus.INVALID_HORIZON)
    if w < 0:
        return AllocationResult.failure(AllocationStatus.NEGATIVE_WEIGHT)

    coeffs = compute_constraint_coefficients(ego, obs, t, params.headway_time)
    A, B, C = coeffs.A, coeffs.B, coeffs.C

    if w < eps:
        # 障碍物 jerk は無コスト -> 障碍物が回避を全て負担
        if abs(B) < eps:
            return AllocationResult.failure(AllocationStatus.DEGENERATE_OBSTACLE_LEVERAGE)
        return AllocationResult(success=True, jerk_ego=0.0, jerk_obs=C / B)

    denom = A * A + (B * B) / w
    if abs(denom) < eps:
        return AllocationResult.failure(AllocationStatus.DEGENERATE_CONSTRAINT)

    lam = 2.0 * C / denom
    return AllocationResult(
        success=True,
        jerk_ego=lam * A / 2.0,
        jerk_obs=lam * B / (2.0 * w),
        lagrange_multiplier=lam
    )


def compute_optimal_jerks(
    d_ego: float, v_ego: float, a_ego: float,
    d_obs: float, v_obs: float, a_obs: float,
    t_c: float,
    t_hw: float,
    w_agent: float
) -> Tuple[bool, Optional[float], Optional[float]]:
    """
    Flat nine-scalar form of allocate().

    Returns:
        (success, jerk_ego, jerk_obs); jerks are None when success is False

    Example:
        >>> ok, j_ego, j_obs = compute_optimal_jerks(30, 8, 0, 30, 8, 0, 3.75, 1.0, 0.0)
        >>> ok, j_ego
        (True, 0.0)
    """
    result = allocate(
        AgentKinematics(d_ego, v_ego, a_ego),
        AgentKinematics(d_obs, v_obs, a_obs),
        ScenarioParameters(time_horizon=t_c, headway_time=t_hw, obstacle_cost_weight=w_agent)
    )
    return result.as_tuple()
