#!/usr/bin/env python3
"""LogSpace entry point: capture categorised logs from this process and dump them on exit."""

import argparse
import logging
import signal
import sys
import threading

from logspace.config import ConfigError, load_config, load_yaml_config
from logspace.dashboard import create_dashboard_app, run_dashboard
from logspace.manager import LogManager
from logspace.severity import Severity
from logspace.source import LoggingEventSource

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [logspace] %(levelname)s %(message)s",
    stream=sys.stderr,
)
logger = logging.getLogger(__name__)


def build_cli_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="LogSpace in-process log capture")
    parser.add_argument(
        "--config", default=None,
        help="Path to YAML config file (categories, minimum_level, max_general_logs, ...)",
    )
    parser.add_argument(
        "--dashboard-port", type=int, default=0,
        help="Serve the status dashboard on this port (default: disabled)",
    )
    parser.add_argument(
        "--demo", action="store_true",
        help="Emit a few sample events, save one report and exit",
    )
    return parser


def run_demo(manager: LogManager):
    manager.write(Severity.INFO, "Gameplay", "Player entered the game")
    manager.write(Severity.WARNING, "Gameplay", "Player health is low")
    manager.write(Severity.ERROR, "System", "Fatal error occurred", stack_trace="demo.py:1 run_demo")
    manager.write(Severity.INFO, "Other", "This category is not collected")
    manager.save_report()


def main(argv=None) -> int:
    args = build_cli_parser().parse_args(argv)

    try:
        config = load_config(load_yaml_config(args.config))
    except ConfigError as e:
        logger.error("Invalid configuration: %s", e)
        return 2

    manager = LogManager()

    if args.demo:
        manager.initialize(LoggingEventSource(), config,
                           categories={"Gameplay", "System"}, general_capacity=50)
        run_demo(manager)
        manager.shutdown()
        return 0

    manager.initialize(LoggingEventSource(), config)

    if args.dashboard_port:
        app = create_dashboard_app(manager)
        threading.Thread(target=run_dashboard, args=(app, args.dashboard_port), daemon=True).start()
        logger.info("Dashboard running on port %d", args.dashboard_port)

    stop = threading.Event()

    def _signal_handler(signum, _frame):
        logger.info("Received signal %d, shutting down...", signum)
        stop.set()

    signal.signal(signal.SIGINT, _signal_handler)
    signal.signal(signal.SIGTERM, _signal_handler)

    logger.info("LogSpace running. Press Ctrl+C to stop.")
    stop.wait()

    manager.save_report()
    manager.shutdown()
    counts = manager.snapshot_counts()
    logger.info("Stopped with %d error and %d general entries retained", *counts)
    return 0


if __name__ == "__main__":
    sys.exit(main())
