#!/usr/bin/env python3
"""Dump what the pysysalert collector sees on this machine.

Runs one or more polling cycles and prints every snapshot section, so
you can check which diagnostic sources produce data (``powermetrics``
needs root; without it the CPU-power section is an estimate).

Usage
-----
::

    python scripts/dump_snapshot.py
    sudo python scripts/dump_snapshot.py --json --samples 3

Options::

    --json               Output as machine-readable JSON
    --output FILE        Write output to FILE instead of stdout
    --samples N          Number of polling cycles (default: 1)
    --interval SECONDS   Delay between cycles (default: config refresh rate)
    --skip-processes     Omit the process table
    --verbose            Enable debug logging
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path
from typing import Any

# Allow running from the repo root without installing the package.
_repo = Path(__file__).resolve().parent.parent
_src = _repo / "src"
if _src.is_dir():
    sys.path.insert(0, str(_src))

from pysysalert import AlertEvaluator, SnapshotHistory, SysAlertConfig, TelemetryCollector  # noqa: E402
from pysysalert.models import Snapshot  # noqa: E402

# ── helpers ──────────────────────────────────────────────────


def _section(title: str) -> str:
    line = "=" * 60
    return f"\n{line}\n  {title}\n{line}"


def _format_field(key: str, value: Any, indent: int = 2) -> str:
    prefix = " " * indent
    if isinstance(value, list):
        if not value:
            return f"{prefix}{key}: []"
        lines = [f"{prefix}{key}:"]
        for item in value:
            lines.append(f"{prefix}    - {item!r}")
        return "\n".join(lines)
    if isinstance(value, dict):
        lines = [f"{prefix}{key}:"]
        for sub_key, sub_value in value.items():
            lines.append(_format_field(sub_key, sub_value, indent + 4))
        return "\n".join(lines)
    return f"{prefix}{key}: {value!r}"


def _print_snapshot(snapshot: Snapshot, out: list[str], *, skip_processes: bool) -> dict[str, Any]:
    data = snapshot.model_dump(mode="json")
    if skip_processes:
        data.pop("processes", None)
    out.append(_section(f"SNAPSHOT {data['captured_at']}"))
    for key, value in data.items():
        if key == "captured_at":
            continue
        out.append(_format_field(key, value))
    return data


async def main() -> None:
    parser = argparse.ArgumentParser(
        description="Dump collector snapshots for debugging / development.",
    )
    parser.add_argument("--json", action="store_true", dest="json_mode", help="Output machine-readable JSON")
    parser.add_argument("--output", "-o", help="Write output to FILE instead of stdout")
    parser.add_argument("--samples", type=int, default=1, help="Number of polling cycles")
    parser.add_argument("--interval", type=float, default=None, help="Delay between cycles in seconds")
    parser.add_argument("--skip-processes", action="store_true", help="Omit the process table")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    args = parser.parse_args()

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")
    else:
        logging.basicConfig(level=logging.WARNING)

    config = SysAlertConfig.from_env()
    collector = TelemetryCollector(config)
    history = SnapshotHistory(config.history_size)
    evaluator = AlertEvaluator(config.thresholds, config.notifications)

    snapshots = await collector.collect_series(args.samples, args.interval)
    history.extend(snapshots)

    out: list[str] = []
    result: dict[str, Any] = {"snapshots": [], "alerts": []}
    for snapshot in snapshots:
        result["snapshots"].append(_print_snapshot(snapshot, out, skip_processes=args.skip_processes))
        for alert in evaluator.evaluate(snapshot):
            result["alerts"].append({"level": alert.level, "title": alert.title, "message": alert.message})

    result["cpu_trend"] = history.cpu_trend()
    result["memory_trend"] = history.memory_trend()
    out.append(_section("TRENDS / ALERTS"))
    out.append(_format_field("cpu_trend", result["cpu_trend"]))
    out.append(_format_field("memory_trend", result["memory_trend"]))
    out.append(_format_field("alerts", [alert["message"] for alert in result["alerts"]]))

    # ── Output ──
    if args.json_mode:
        payload = json.dumps(result, indent=2, default=str, ensure_ascii=False)
        if args.output:
            Path(args.output).write_text(payload, encoding="utf-8")
            print(f"JSON written to {args.output}", file=sys.stderr)
        else:
            print(payload)
    elif args.output:
        Path(args.output).write_text("\n".join(out) + "\n", encoding="utf-8")
        print(f"Output written to {args.output}")
    else:
        print("\n".join(out))


if __name__ == "__main__":
    asyncio.run(main())
