from __future__ import annotations

import argparse
import json
import os
import time
from typing import Any, Dict, List

import matplotlib.pyplot as plt
import numpy as np
import pandas as pd
import streamlit as st


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(add_help=False)
    parser.add_argument(
        "--log-path",
        type=str,
        default="telemetry_logs/rovers.jsonl",
        help="Path to telemetry JSONL log file.",
    )
    return parser.parse_args()


def load_telemetry(path: str, max_rows: int = 5000) -> pd.DataFrame:
    """Read the newest ``max_rows`` records of a JSONL log into a DataFrame."""
    if not os.path.exists(path):
        return pd.DataFrame()
    records: List[Dict[str, Any]] = []
    with open(path, "r", encoding="utf-8") as f:
        for line in f:
            line = line.strip()
            if not line:
                continue
            try:
                rec = json.loads(line)
            except json.JSONDecodeError:
                continue
            if isinstance(rec, dict):
                records.append(rec)
    if not records:
        return pd.DataFrame()
    df = pd.json_normalize(records)
    return df.tail(max_rows).reset_index(drop=True)


def rover_paths(df: pd.DataFrame) -> Dict[int, np.ndarray]:
    """Visited (x, y) cells per rover id, in log order, from pose-bearing events."""
    if df.empty or not {"rover_id", "x", "y"}.issubset(df.columns):
        return {}
    poses = df.dropna(subset=["rover_id", "x", "y"])
    if "ok" in poses.columns:
        poses = poses[poses["ok"].ne(False)]
    paths: Dict[int, np.ndarray] = {}
    for rover_id, group in poses.groupby("rover_id", sort=True):
        paths[int(rover_id)] = group[["x", "y"]].to_numpy(dtype=int)
    return paths


def failure_counts(df: pd.DataFrame) -> pd.Series:
    """Number of failed commands per error kind."""
    if df.empty or "error" not in df.columns or "event" not in df.columns:
        return pd.Series(dtype=int)
    failed = df[(df["event"] == "command") & df["error"].notna()]
    return failed["error"].value_counts()


def main() -> None:
    args = parse_args()

    st.set_page_config(page_title="Rover Grid Telemetry", layout="wide")
    st.title("Rover Grid Telemetry Dashboard")

    status_placeholder = st.empty()
    col1, col2 = st.columns(2)
    map_fig = col1.empty()
    failures_placeholder = col2.empty()
    events_placeholder = st.empty()

    refresh_interval = st.sidebar.slider("Refresh interval (s)", 0.5, 5.0, 1.0, 0.5)

    while True:
        df = load_telemetry(args.log_path)
        if df.empty:
            status_placeholder.info(f"Waiting for telemetry at '{args.log_path}'...")
            time.sleep(refresh_interval)
            continue

        status_placeholder.success(f"Streaming from '{args.log_path}' ({len(df)} records)")

        # Rover paths on the grid
        with map_fig.container():
            fig, ax = plt.subplots()
            for rover_id, path in rover_paths(df).items():
                ax.plot(path[:, 0], path[:, 1], "-o", markersize=3, label=f"Rover {rover_id}")
                ax.scatter([path[-1, 0]], [path[-1, 1]], s=80)
            ax.set_aspect("equal", adjustable="box")
            ax.grid(True, linewidth=0.5)
            ax.set_xlabel("x")
            ax.set_ylabel("y")
            ax.set_title("Rover Paths")
            if ax.get_legend_handles_labels()[0]:
                ax.legend(loc="upper right")
            map_fig.pyplot(fig)
            plt.close(fig)

        failures = failure_counts(df)
        with failures_placeholder.container():
            st.subheader("Failed commands by kind")
            if failures.empty:
                st.write("No failures logged.")
            else:
                st.bar_chart(failures)

        events_placeholder.dataframe(df.tail(50), use_container_width=True)

        time.sleep(refresh_interval)


if __name__ == "__main__":
    main()
