# -*- coding: utf-8 -*-
"""
cross_jerk/utils.py (ver.1.0 / 2026-10-17)

ユーティリティ:
- Logger: ターミナルとログファイルへの二重出力
- SCRIPT_NAME: スクリプト識別子
- make_output_path: outputs/ 以下のタイムスタンプ付きファイルパス
"""

import sys
import os
from datetime import datetime
from typing import Optional

# スクリプト識別
SCRIPT_NAME = "cross_jerk"
SCRIPT_VERSION = SCRIPT_NAME


class Logger:
    """
    Dual output logger for sweep runs.

    ターミナルとログファイルの両方に即時フラッシュで出力。
    sys.stdout に代入して使う。
    """

    def __init__(self, filename: str, script_name: str = SCRIPT_VERSION, terminal=None):
        self.terminal = terminal if terminal is not None else sys.stdout
        # buffering=1 for line buffering
        self.log = open(filename, 'w', encoding='utf-8', buffering=1)
        self.closed = False
        self.log.write(f"Sweep Log - {script_name}\n")
        self.log.write(f"Timestamp: {datetime.now().strftime('%Y-%m-%d %H:%M:%S')}\n")
        self.log.write("=" * 80 + "\n")
        self.flush()

    def write(self, message):
        if self.closed:
            return
        self.terminal.write(message)
        self.log.write(message)

    def flush(self):
        if not self.closed:
            self.terminal.flush()
            self.log.flush()

    def close(self):
        if not self.closed:
            self.flush()
            self.closed = True
            self.log.close()


def make_output_path(prefix: str, suffix: str, output_dir: Optional[str] = None) -> str:
    """
    Timestamped file path under output_dir (default: <repo>/outputs).

    Example:
        >>> make_output_path("sweep_log", ".txt")  # doctest: +SKIP
        '.../outputs/sweep_log_20261017_120000.txt'
    """
    if output_dir is None:
        script_dir = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
        output_dir = os.path.join(script_dir, "outputs")
    os.makedirs(output_dir, exist_ok=True)
    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    return os.path.join(output_dir, f"{prefix}_{timestamp}{suffix}")
