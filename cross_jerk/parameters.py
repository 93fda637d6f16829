# -*- coding: utf-8 -*-
"""
cross_jerk/parameters.py

交差シナリオ jerk 配分のパラメータ定義:
- AllocatorConstants: 数値閾値（不変、全モジュール共通）
- ScenarioParameters: 1回の配分計算の入力 (t_c, t_hw, w_agent)
- CrossScenarioConfig: デモ用シナリオ設定（JSONオーバーライド対応）
"""

import json
from dataclasses import dataclass, field, fields
from typing import Any, Dict, List, Optional, Tuple

from .vehicle_state import AgentKinematics


# ============================================================================
# Numeric Constants (Centralized Definition)
# ============================================================================

@dataclass(frozen=True)
class AllocatorConstants:
    """
    Immutable numeric thresholds shared by the allocator and the harness.
    """

    # === Degeneracy ===
    EPS: float = 1e-9                 # horizon / weight / determinant degeneracy

    # === Verification ===
    VERIFY_TOLERANCE: float = 1e-3    # [m] ego_remaining <= margin + tol

    # === Horizon Estimate ===
    MIN_ARRIVAL_SPEED: float = 0.1    # [m/s] speed floor for naive arrival time


# Global instance for easy access
ALLOCATOR = AllocatorConstants()


@dataclass(frozen=True)
class ScenarioParameters:
    """
    Inputs shared by both agents for one allocation

    Attributes:
        time_horizon: 評価時刻 t_c [s] (> 0 が必要)
        headway_time: ヘッドウェイ時間 t_hw [s]
        obstacle_cost_weight: 障碍物 jerk のコスト重み w_agent (>= 0 が必要)

    Note:
        制約違反はコンストラクタでは検査しない。allocate() が success=False で返す。
    """
    time_horizon: float
    headway_time: float
    obstacle_cost_weight: float


def _default_weights() -> List[float]:
    return [0.0, 0.25, 0.5, 1.0]


@dataclass
class CrossScenarioConfig:
    """
    Demonstration scenario: two agents approaching the same conflict point.

    t_c が None の場合は素朴な到達時刻の平均から推定する
    (scenario.estimate_time_horizon)。
    """

    # --- 自車 ---
    d_ego: float = 30.0
    v_ego: float = 8.0
    a_ego: float = 0.0

    # --- 障碍物 ---
    d_obs: float = 30.0
    v_obs: float = 8.0
    a_obs: float = 0.0

    # --- 評価条件 ---
    t_hw: float = 1.0
    t_c: Optional[float] = None
    weights: List[float] = field(default_factory=_default_weights)

    def __post_init__(self):
        self.weights = self._validate_weights(self.weights)

    @staticmethod
    def _validate_weights(weights: Any) -> List[float]:
        if isinstance(weights, (int, float)):
            weights = [weights]
        try:
            values = [float(w) for w in weights]
        except (TypeError, ValueError) as e:
            raise ValueError(f"weights must be a list of numbers, got {weights!r}") from e
        if not values:
            raise ValueError("weights must not be empty")
        return values

    @staticmethod
    def _validate_number(name: str, value: Any, allow_none: bool = False) -> Optional[float]:
        if value is None and allow_none:
            return None
        if isinstance(value, bool):
            raise ValueError(f"{name} must be a number, got {value!r}")
        try:
            return float(value)
        except (TypeError, ValueError) as e:
            raise ValueError(f"{name} must be a number, got {value!r}") from e

    def _coerce_override(self, name: str, value: Any) -> Any:
        if name == 'weights':
            return self._validate_weights(value)
        return self._validate_number(name, value, allow_none=(name == 't_c'))

    def to_agents(self) -> Tuple[AgentKinematics, AgentKinematics]:
        """(ego, obs) の AgentKinematics を生成"""
        ego = AgentKinematics(self.d_ego, self.v_ego, self.a_ego)
        obs = AgentKinematics(self.d_obs, self.v_obs, self.a_obs)
        return ego, obs

    def apply_overrides(self, overrides: Dict[str, Any], verbose: bool = True) -> List[str]:
        """
        Apply parameter overrides attribute by attribute.

        Args:
            overrides: {parameter_name: value}
            verbose: 変更内容を [CONFIG] 行で出力

        Returns:
            List of keys that did not match any parameter

        Raises:
            ValueError: 値が数値に変換できない場合
        """
        if not isinstance(overrides, dict):
            raise ValueError(f"overrides must be a JSON object, got {type(overrides).__name__}")

        names = {f.name for f in fields(self)}
        unknown: List[str] = []
        for k, v in overrides.items():
            if k not in names:
                unknown.append(k)
                if verbose:
                    print(f"  - [WARNING] Unknown parameter: {k}")
                continue
            v = self._coerce_override(k, v)
            old_val = getattr(self, k)
            setattr(self, k, v)
            if verbose:
                print(f"  - {k}: {old_val} -> {v}")
        return unknown

    def load_overrides(self, config_path: str, verbose: bool = True) -> List[str]:
        """JSONファイルからオーバーライドを読み込んで適用"""
        with open(config_path, 'r', encoding='utf-8') as f:
            overrides = json.load(f)
        if verbose:
            print(f"\n[CONFIG] Applying overrides from {config_path}:")
        return self.apply_overrides(overrides, verbose=verbose)
