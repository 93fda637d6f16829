# -*- coding: utf-8 -*-
"""
================================================================================
Agent Kinematics at the Planning Instant (Cross Scenario)
================================================================================

交差シナリオにおける2エージェント（自車・障碍物）の縦方向状態表現

縦方向状態 (d, v, a):
- d: 衝突点（交差点中心）までの残り距離 [m]
- v: 速度 [m/s]
- a: 加速度 [m/s²]

定ジャーク運動 (jerk j は区間 [0, t] で一定):
- traveled(t) = v*t + 0.5*a*t² + (1/6)*j*t³
- v(t)        = v + a*t + 0.5*j*t²

Version: 1.0
Date: 2026-10-17
================================================================================
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class AgentKinematics:
    """
    Longitudinal state of one agent approaching the conflict point

    衝突点へ接近するエージェントの縦方向状態

    Attributes:
        distance_to_conflict_point: 衝突点までの距離 [m] (通常は非負、検証はしない)
        velocity: 速度 [m/s]
        acceleration: 加速度 [m/s²] (減速中は負)
    """
    distance_to_conflict_point: float  # [m]
    velocity: float                    # [m/s]
    acceleration: float = 0.0          # [m/s²]

    def traveled(self, t: float, jerk: float = 0.0) -> float:
        """Distance covered over [0, t] under constant jerk [m]"""
        return self.velocity * t + 0.5 * self.acceleration * t * t + (1.0 / 6.0) * jerk * t * t * t

    def velocity_at(self, t: float, jerk: float = 0.0) -> float:
        """Speed at time t under constant jerk [m/s]"""
        return self.velocity + self.acceleration * t + 0.5 * jerk * t * t

    def remaining_distance(self, t: float, jerk: float = 0.0) -> float:
        """衝突点までの残り距離 at time t [m] (負: 通過済み)"""
        return self.distance_to_conflict_point - self.traveled(t, jerk)

    def naive_arrival_time(self, min_speed: float) -> float:
        """
        Constant-velocity arrival time estimate [s]

        速度は min_speed で下限クリップ（停止車両でゼロ除算を避ける）
        """
        return self.distance_to_conflict_point / max(self.velocity, min_speed)

    def __repr__(self) -> str:
        return (f"AgentKinematics(d={self.distance_to_conflict_point:.1f}m, "
                f"v={self.velocity:.1f}m/s, a={self.acceleration:.2f}m/s^2)")
