"""
Cross Scenario Jerk Allocation - v1.0
=====================================

Closed-form minimum-cost jerk pair for an ego agent and an obstacle agent
approaching the same conflict point.

Modules:
    - vehicle_state: AgentKinematics and constant-jerk kinematics
    - parameters: AllocatorConstants, ScenarioParameters, CrossScenarioConfig
    - jerk_allocator: Lagrange-multiplier jerk allocator
    - verification: Post-hoc safety margin re-evaluation
    - scenario: Demonstration harness (horizon estimate, weight sweep)
    - visualization: Plotting functions
    - utils: Logger and utilities
    - main: Command line entry point

Version: v1.0
Date: 2026-10-17
"""

from .vehicle_state import AgentKinematics
from .parameters import (
    ALLOCATOR,
    AllocatorConstants,
    ScenarioParameters,
    CrossScenarioConfig,
)
from .jerk_allocator import (
    AllocationResult,
    AllocationStatus,
    ConstraintCoefficients,
    allocate,
    compute_constraint_coefficients,
    compute_optimal_jerks,
)
from .verification import ConstraintCheck, verify_allocation
from .scenario import (
    SweepRecord,
    estimate_time_horizon,
    run_weight_sweep,
    sweep_to_dataframe,
)
from .utils import Logger, SCRIPT_NAME, SCRIPT_VERSION

__version__ = "1.0.0"
__all__ = [
    # Kinematics
    "AgentKinematics",
    # Parameters
    "ALLOCATOR",
    "AllocatorConstants",
    "ScenarioParameters",
    "CrossScenarioConfig",
    # Allocator
    "AllocationResult",
    "AllocationStatus",
    "ConstraintCoefficients",
    "allocate",
    "compute_constraint_coefficients",
    "compute_optimal_jerks",
    # Verification
    "ConstraintCheck",
    "verify_allocation",
    # Harness
    "SweepRecord",
    "estimate_time_horizon",
    "run_weight_sweep",
    "sweep_to_dataframe",
    # Utils
    "Logger",
    "SCRIPT_NAME",
    "SCRIPT_VERSION",
]
