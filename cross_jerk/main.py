#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
交差シナリオ jerk 最適配分 - メインエントリポイント
==================================================

バージョン: v1.0
日付: 2026-10-17

実行方法:
    # テストモード（配分器のセルフチェック）
    python -m cross_jerk.main --mode test

    # スイープモード（重みごとの配分 + 事後検証）
    python -m cross_jerk.main --mode sweep
    python -m cross_jerk.main --mode sweep --weights 0 0.25 0.5 1 --t_hw 1.5 --plot

    # パラメータオーバーライド付き
    python -m cross_jerk.main --mode sweep --config scenario.json

    # サイレントモード（JSON_STATSのみ出力）
    python -m cross_jerk.main --mode sweep --silent
"""

import sys
import io
import json
import argparse
from typing import List, Optional

from .jerk_allocator import AllocationStatus, allocate, compute_optimal_jerks
from .parameters import CrossScenarioConfig, ScenarioParameters
from .scenario import (
    print_scenario_header,
    print_sweep_record,
    resolve_time_horizon,
    run_weight_sweep,
    summarize_sweep,
    sweep_to_dataframe,
)
from .utils import Logger, SCRIPT_NAME, make_output_path
from .verification import verify_allocation


def test_allocator() -> bool:
    """配分器のセルフチェック"""
    print("=" * 80)
    print("Cross Scenario Jerk Allocatorのテスト")
    print("=" * 80)

    success = True
    config = CrossScenarioConfig()
    ego, obs = config.to_agents()
    t_c = resolve_time_horizon(config)

    # Test 1: Reference scenario, margin binds for every weight
    print("\n### Test 1: Reference Scenario (margin binds) ###")
    for w in config.weights:
        params = ScenarioParameters(time_horizon=t_c, headway_time=config.t_hw, obstacle_cost_weight=w)
        result = allocate(ego, obs, params)
        if not result.success:
            print(f"[FAIL] w_agent={w}: {result.status.name}")
            success = False
            continue
        check = verify_allocation(ego, obs, params, result.jerk_ego, result.jerk_obs)
        tag = "[PASS]" if abs(check.slack) < 1e-6 else "[FAIL]"
        success = success and tag == "[PASS]"
        print(f"{tag} w_agent={w}: jerk_ego={result.jerk_ego:.4f}, jerk_obs={result.jerk_obs:.4f}, "
              f"slack={check.slack:.2e} m")

    # Test 2: Ill-posed inputs
    print("\n### Test 2: Ill-posed Inputs ###")
    cases = [
        ("t_c = 0", dict(t_c=0.0, w_agent=1.0), AllocationStatus.INVALID_HORIZON),
        ("t_c = -1", dict(t_c=-1.0, w_agent=1.0), AllocationStatus.INVALID_HORIZON),
        ("w_agent = -0.1", dict(t_c=t_c, w_agent=-0.1), AllocationStatus.NEGATIVE_WEIGHT),
    ]
    for label, case, expected in cases:
        result = allocate(ego, obs, ScenarioParameters(time_horizon=case['t_c'], headway_time=config.t_hw,
                                                       obstacle_cost_weight=case['w_agent']))
        ok = (not result.success) and result.status == expected
        success = success and ok
        print(f"{'[PASS]' if ok else '[FAIL]'} {label}: {result.status.name}")

    # Test 3: Flat interface agrees with the typed one
    print("\n### Test 3: Flat Interface ###")
    flat = compute_optimal_jerks(config.d_ego, config.v_ego, config.a_ego,
                                 config.d_obs, config.v_obs, config.a_obs,
                                 t_c, config.t_hw, 1.0)
    typed = allocate(ego, obs, ScenarioParameters(t_c, config.t_hw, 1.0)).as_tuple()
    ok = flat == typed
    success = success and ok
    print(f"{'[PASS]' if ok else '[FAIL]'} compute_optimal_jerks == allocate: {flat}")

    return success


def sweep_mode(config: CrossScenarioConfig, silent: bool = False, plot: bool = False) -> bool:
    """
    スイープモード - 重みごとに配分し結果を表示

    引数:
        config: シナリオ設定
        silent: サイレントモード (ログファイル無効、JSON_STATSのみ出力)
        plot: スイープ結果の図を outputs/ に保存
    """
    original_stdout = sys.stdout
    logger = None

    if silent:
        sys.stdout = io.StringIO()
    else:
        log_file = make_output_path("sweep_log", ".txt")
        logger = Logger(log_file, script_name=SCRIPT_NAME, terminal=original_stdout)
        sys.stdout = logger

    try:
        t_c = resolve_time_horizon(config)
        print_scenario_header(config, t_c)
        records = run_weight_sweep(config)
        solved_any = any(r.success for r in records)
        for record in records:
            print_sweep_record(record)

        if plot:
            from .visualization import plot_weight_sweep
            plot_file = make_output_path("sweep_plot", ".png")
            try:
                if plot_weight_sweep(sweep_to_dataframe(records), plot_file):
                    print(f"Plot saved to: {plot_file}")
            except (OSError, ValueError) as e:
                print(f"[WARNING] Plot generation failed: {e}")

        if silent:
            sys.stdout = original_stdout
        print("\n[JSON_STATS] " + json.dumps(summarize_sweep(records)))
    finally:
        sys.stdout.flush()
        if logger is not None:
            logger.close()
            print(f"\nSweep completed. Log saved to: {logger.log.name}", file=original_stdout)
        sys.stdout = original_stdout

    return solved_any


def main(argv: Optional[List[str]] = None) -> int:
    """メインエントリポイント"""
    parser = argparse.ArgumentParser(
        description="交差シナリオ jerk 最適配分 v1.0",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
実行例:
  # セルフチェック (デフォルト)
  python -m cross_jerk.main --mode test

  # 重みスイープ
  python -m cross_jerk.main --mode sweep --weights 0 0.25 0.5 1
        """
    )

    parser.add_argument(
        '--mode',
        type=str,
        choices=['test', 'sweep'],
        default='test',
        help='実行モード: test (セルフチェック), sweep (重みスイープ)'
    )

    parser.add_argument(
        '--config',
        type=str,
        default=None,
        help='シナリオオーバーライド用JSON設定ファイルのパス'
    )

    parser.add_argument(
        '--weights',
        type=float,
        nargs='+',
        default=None,
        help='障碍物コスト重み w_agent の列 (デフォルト: 0 0.25 0.5 1)'
    )

    parser.add_argument(
        '--t_hw',
        type=float,
        default=None,
        help='ヘッドウェイ時間 [秒] (デフォルト: 1.0)'
    )

    parser.add_argument(
        '--silent',
        action='store_true',
        help='サイレントモード: ログファイル出力を無効化、JSON_STATSのみ標準出力'
    )

    parser.add_argument(
        '--plot',
        action='store_true',
        help='スイープ結果の図を outputs/ に保存'
    )

    args = parser.parse_args(argv)

    if args.mode == 'test':
        ignored = [flag for flag, value in (('--config', args.config), ('--weights', args.weights),
                                            ('--t_hw', args.t_hw)) if value is not None]
        if ignored:
            print(f"[WARNING] Ignored in test mode: {', '.join(ignored)}")
        if test_allocator():
            print("\n" + "=" * 80)
            print("[SUCCESS] All tests passed!")
            print("=" * 80)
            return 0
        print("\n" + "=" * 80)
        print("[FAILED] Some tests failed")
        print("=" * 80)
        return 1

    config = CrossScenarioConfig()
    if args.config:
        try:
            config.load_overrides(args.config, verbose=not args.silent)
        except (OSError, ValueError) as e:
            print(f"[ERROR] Failed to load config: {e}")
            return 1
    if args.weights is not None:
        config.weights = args.weights
    if args.t_hw is not None:
        config.t_hw = args.t_hw

    if not sweep_mode(config, silent=args.silent, plot=args.plot):
        print("\n" + "=" * 80)
        print("[FAILED] No weight produced a solution")
        print("=" * 80)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
