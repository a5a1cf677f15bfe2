#!/usr/bin/env python3
from __future__ import annotations

import argparse
import json
import time
import tracemalloc
from pathlib import Path

from chess_vault.fen import default_start
from chess_vault.perft import perft
from chess_vault.replay import build_ledger, counter_ids
from chess_vault.tournament import GameOutcomeRecord, aggregate_tournament

# Morphy's Opera Game; long enough to exercise SAN resolution and check suffixes.
REPLAY_TOKENS = (
    "e4", "e5", "Nf3", "d6", "d4", "Bg4", "dxe5", "Bxf3", "Qxf3", "dxe5",
    "Bc4", "Nf6", "Qb3", "Qe7", "Nc3", "c6", "Bg5", "b5", "Nxb5", "cxb5",
    "Bxb5+", "Nbd7", "O-O-O", "Rd8", "Rxd7", "Rxd7", "Rd1", "Qe6", "Bxd7+", "Nxd7",
    "Qb8+", "Nxb8", "Rd8#",
)


def run_perft(depth: int, repeat: int) -> dict[str, float | int]:
    position = default_start()
    total_nodes = 0
    start = time.perf_counter()
    tracemalloc.start()
    for _ in range(repeat):
        total_nodes += perft(position, depth)
    _, peak = tracemalloc.get_traced_memory()
    tracemalloc.stop()
    elapsed = time.perf_counter() - start
    return {
        "depth": depth,
        "repeat": repeat,
        "total_nodes": total_nodes,
        "seconds": elapsed,
        "nodes_per_sec": 0.0 if elapsed <= 0 else total_nodes / elapsed,
        "peak_alloc_bytes": peak,
    }


def run_replay(repeat: int) -> dict[str, float | int]:
    start = time.perf_counter()
    tracemalloc.start()
    plies = 0
    for _ in range(repeat):
        plies += len(build_ledger(REPLAY_TOKENS, id_factory=counter_ids()))
    _, peak = tracemalloc.get_traced_memory()
    tracemalloc.stop()
    elapsed = time.perf_counter() - start
    return {
        "repeat": repeat,
        "plies": plies,
        "seconds": elapsed,
        "plies_per_sec": 0.0 if elapsed <= 0 else plies / elapsed,
        "peak_alloc_bytes": peak,
    }


def run_tournament(records: int, repeat: int) -> dict[str, float | int]:
    rows = [
        GameOutcomeRecord("[[Bench Open]]", ("1-0", "0-1", "1/2-1/2")[i % 3], "white", 1500 + i % 700)
        for i in range(records)
    ]
    start = time.perf_counter()
    for _ in range(repeat):
        aggregate_tournament("Bench Open", 1800, rows)
    elapsed = time.perf_counter() - start
    return {
        "records": records,
        "repeat": repeat,
        "seconds": elapsed,
        "records_per_sec": 0.0 if elapsed <= 0 else records * repeat / elapsed,
    }


def check_thresholds(results: dict[str, dict[str, float | int]], thresholds_path: Path) -> int:
    if not thresholds_path.exists():
        return 0
    thresholds = json.loads(thresholds_path.read_text())
    status = 0
    for bench_name, limits in thresholds.items():
        values = results.get(bench_name)
        if values is None:
            continue
        for metric, expected in limits.items():
            if metric.endswith("_min"):
                base_metric = metric[:-4]
                current = float(values.get(base_metric, 0.0))
                if current < float(expected):
                    print(f"THRESHOLD FAIL {bench_name}.{base_metric}: {current} < {expected}")
                    status = 1
            elif metric.endswith("_max"):
                base_metric = metric[:-4]
                current = float(values.get(base_metric, 0.0))
                if current > float(expected):
                    print(f"THRESHOLD FAIL {bench_name}.{base_metric}: {current} > {expected}")
                    status = 1
    return status


def main() -> int:
    parser = argparse.ArgumentParser(description="Benchmark perft, replay and tournament hot paths")
    parser.add_argument("--perft-depth", type=int, default=3)
    parser.add_argument("--perft-repeat", type=int, default=2)
    parser.add_argument("--replay-repeat", type=int, default=20)
    parser.add_argument("--tournament-records", type=int, default=1000)
    parser.add_argument("--tournament-repeat", type=int, default=20)
    parser.add_argument(
        "--thresholds",
        type=Path,
        default=Path(__file__).with_name("benchmark_thresholds.json"),
    )
    parser.add_argument("--check-thresholds", action="store_true")
    args = parser.parse_args()

    results = {
        "perft": run_perft(depth=args.perft_depth, repeat=args.perft_repeat),
        "replay": run_replay(repeat=args.replay_repeat),
        "tournament": run_tournament(records=args.tournament_records, repeat=args.tournament_repeat),
    }
    print(json.dumps(results, indent=2, sort_keys=True))

    if args.check_thresholds:
        return check_thresholds(results, args.thresholds)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
