# -*- coding: utf-8 -*-
"""
cross_jerk/visualization.py

重みスイープ結果の可視化:
- plot_weight_sweep: jerk 配分と安全マージンの重み依存性
"""

import pandas as pd
import matplotlib.pyplot as plt


def plot_weight_sweep(df: pd.DataFrame, output_filename: str) -> bool:
    """
    Plot jerk allocation versus obstacle cost weight.

    Args:
        df: sweep_to_dataframe() の出力
        output_filename: 出力画像パス

    Returns:
        True if a figure was written

    Note:
        1x2 subplot:
        - (a) jerk_ego / jerk_obs vs w_agent
        - (b) ego remaining distance vs obstacle safe margin
    """
    solved = df[df['success']]
    if len(solved) == 0:
        print("[WARNING] No successful allocations to plot")
        return False

    solved = solved.sort_values('w_agent')

    fig, axes = plt.subplots(1, 2, figsize=(12, 5))

    ax1 = axes[0]
    ax1.plot(solved['w_agent'], solved['jerk_ego'], 'o-', label='jerk_ego')
    ax1.plot(solved['w_agent'], solved['jerk_obs'], 's-', label='jerk_obs')
    ax1.axhline(y=0.0, color='k', linewidth=0.8)
    ax1.set_xlabel('Obstacle cost weight w_agent', fontsize=12)
    ax1.set_ylabel('Jerk (m/s^3)', fontsize=12)
    ax1.set_title('(a) Jerk Allocation', fontsize=14, fontweight='bold')
    ax1.grid(True, alpha=0.3)
    ax1.legend()

    ax2 = axes[1]
    ax2.plot(solved['w_agent'], solved['ego_remaining'], 'o-', label='Ego remaining to CP')
    ax2.plot(solved['w_agent'], solved['obs_safe_margin'], 's--', label='Obs safe margin')
    ax2.set_xlabel('Obstacle cost weight w_agent', fontsize=12)
    ax2.set_ylabel('Distance (m)', fontsize=12)
    t_c = float(solved['t_c'].iloc[0])
    ax2.set_title(f'(b) Margin at t_c = {t_c:.2f} s', fontsize=14, fontweight='bold')
    ax2.grid(True, alpha=0.3)
    ax2.legend()

    plt.tight_layout()
    fig.savefig(output_filename, dpi=150)
    plt.close(fig)
    return True
