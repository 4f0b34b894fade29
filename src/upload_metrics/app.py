"""CLI entrypoint for the upload metrics estimators."""
from __future__ import annotations

import argparse
import json
from typing import Any, Dict, List, Optional

import humanize

from .config import load_config
from .logging_config import configure_logging
from .monitor import MetricsMonitor

_BYTE_FIELDS = ("total", "used", "free")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Upload directory and system health metrics")
    parser.add_argument(
        "--config",
        type=str,
        default=None,
        help="Path to configuration file",
    )
    parser.add_argument(
        "--human",
        action="store_true",
        help="Render byte counts with binary units",
    )

    commands = parser.add_subparsers(dest="command", required=True)
    disk = commands.add_parser("disk", help="Print estimated disk usage of the uploads directory")
    disk.add_argument("--path", type=str, default=None, help="Directory to measure")
    free = commands.add_parser("free", help="Print estimated free space")
    free.add_argument("--path", type=str, default=None, help="Directory to measure")
    commands.add_parser("system", help="Print CPU, memory and disk percentages")
    return parser


def main(argv: Optional[List[str]] = None) -> None:
    args = build_parser().parse_args(argv)

    config = load_config(args.config)
    configure_logging(config)

    monitor = MetricsMonitor(config)

    payload: Dict[str, Any]
    if args.command == "disk":
        payload = monitor.get_disk_usage(args.path).as_dict()
    elif args.command == "free":
        payload = {"free": monitor.get_free_space(args.path)}
    else:
        payload = monitor.get_system_metrics().as_dict()

    if args.human:
        payload = _humanize(payload)

    print(json.dumps(payload, indent=2))


def _humanize(payload: Dict[str, Any]) -> Dict[str, Any]:
    rendered = dict(payload)
    for key in _BYTE_FIELDS:
        if key in rendered:
            rendered[key] = humanize.naturalsize(rendered[key], binary=True)
    return rendered


if __name__ == "__main__":
    main()
