#!/usr/bin/env python3
"""
secmetricsctl - Secmetrics operational CLI

A lightweight CLI for day-2 operations:
- KPI report in the terminal (secmetricsctl summary)
- Web dashboard (secmetricsctl serve)
- Health checks (secmetricsctl doctor)
- Version info (secmetricsctl version)
"""

import argparse
import asyncio
import logging
import os
import sys
from pathlib import Path
from typing import List

import httpx

from secmetrics import __version__, get_log_level
from secmetrics.core.breakdown import BreakdownEntry
from secmetrics.core.config import DataConfig, get_config
from secmetrics.dashboard.models import DashboardState
from secmetrics.dashboard.service import DashboardService
from secmetrics.ui.views import format_rate


class Colors:
    """ANSI color codes for terminal output."""

    GREEN = "\033[92m"
    YELLOW = "\033[93m"
    RED = "\033[91m"
    BLUE = "\033[94m"
    RESET = "\033[0m"
    BOLD = "\033[1m"


def colorize(text: str, color: str) -> str:
    """Colorize text if stdout is a TTY."""
    if sys.stdout.isatty():
        return f"{color}{text}{Colors.RESET}"
    return text


def format_metric(name: str, value: str, width: int = 36) -> str:
    """Format a metric line."""
    padding = " " * max(1, width - len(name))
    return f"  {name}:{padding}{colorize(value, Colors.BLUE)}"


def format_breakdown(title: str, breakdown: List[BreakdownEntry]) -> List[str]:
    """Format a breakdown as indented lines."""
    lines = [f"  {title}:"]
    if not breakdown:
        lines.append("    (no data)")
    for entry in breakdown:
        lines.append(
            f"    {entry.name or '(blank)':<28} {entry.value:>6}  {format_rate(entry.percentage):>5}%"
        )
    return lines


def render_summary(state: DashboardState) -> str:
    """Render a dashboard state as a plain-text report."""
    edr = state.edr
    vulns = state.vulnerabilities

    lines = [colorize("EDR - Endpoint Detection & Response", Colors.BOLD)]
    lines += [
        format_metric("Total alerts", str(edr.total_alerts)),
        format_metric("Critical alert rate", f"{format_rate(edr.critical_rate)}%"),
        format_metric("IoC detection rate", f"{format_rate(edr.ioc_detection_rate)}%"),
        format_metric("Suspicious connection rate", f"{format_rate(edr.suspicious_connection_rate)}%"),
        format_metric("Distinct endpoints", str(edr.unique_hostname_count)),
    ]
    lines += format_breakdown("Severity", edr.severity_breakdown)
    lines += format_breakdown("Alert type", edr.alert_type_breakdown)
    lines += format_breakdown("Status", edr.status_breakdown)

    lines.append("")
    lines.append(colorize("Vulnerabilities", Colors.BOLD))
    lines += [
        format_metric("Total vulnerabilities", str(vulns.total_vulnerabilities)),
        format_metric("Remediation rate", f"{format_rate(vulns.remediation_rate)}%"),
        format_metric("Average remediation time", f"{format_rate(vulns.avg_remediation_time_days, 0)} d"),
        format_metric("Critical asset exposure", f"{format_rate(vulns.critical_asset_exposure_rate)}%"),
        format_metric("Patches on time", f"{format_rate(vulns.on_time_patch_rate)}%"),
    ]
    lines += format_breakdown("Severity", vulns.severity_breakdown)
    lines += format_breakdown("Status", vulns.status_breakdown)
    lines += format_breakdown("Detection source", vulns.source_breakdown)

    for error in state.errors:
        lines.append("")
        lines.append(colorize(f"✗ {error.message}", Colors.RED))

    return "\n".join(lines)


def cmd_summary(args) -> int:
    """
    Load both datasets and print their KPIs.

    Returns:
        Exit code (0 on success, 1 if a dataset failed to load)
    """
    defaults = get_config().data
    data_config = DataConfig(
        edr_path=args.edr or defaults.edr_path,
        vulnerabilities_path=args.vulns or defaults.vulnerabilities_path,
    )

    state = DashboardService(data_config).load_sync()

    if args.json:
        print(state.model_dump_json(indent=2))
    else:
        print(render_summary(state))

    return 1 if state.has_errors else 0


def cmd_serve(args) -> int:
    """
    Run the web dashboard.

    Returns:
        Exit code (always 0)
    """
    from secmetrics.ui.http_server import main as run_server

    run_server(host=args.host, port=args.port)
    return 0


async def check_dashboard(url: str, timeout: float = 5.0) -> tuple[str, str]:
    """
    Check if a running dashboard is reachable and healthy.

    Returns:
        (status, message) where status is "OK", "WARN", or "ERROR"
    """
    try:
        async with httpx.AsyncClient(timeout=timeout) as client:
            response = await client.get(f"{url}/health")
            if response.status_code == 200:
                return "OK", "Dashboard is healthy"
            else:
                return "WARN", f"Dashboard returned status {response.status_code}"
    except httpx.ConnectError:
        return "WARN", "Dashboard not running (connection refused)"
    except httpx.TimeoutException:
        return "ERROR", "Dashboard connection timeout"
    except httpx.HTTPError as e:
        return "ERROR", f"Request failed: {e}"
    except Exception as e:
        return "ERROR", f"Unexpected error: {e}"


def check_data_file(path: str) -> tuple[str, str]:
    """Check that a dataset file exists and is not empty."""
    file_path = Path(path)
    if not file_path.is_file():
        return "ERROR", "file not found"
    if file_path.stat().st_size == 0:
        return "ERROR", "file is empty"
    return "OK", f"{file_path.stat().st_size} bytes"


def format_check_result(name: str, status: str, message: str, width: int = 40) -> str:
    """Format a check result line."""
    padding = " " * max(1, width - len(name))

    if status == "OK":
        status_str = colorize("[OK]", Colors.GREEN)
    elif status == "WARN":
        status_str = colorize("[WARN]", Colors.YELLOW)
    else:  # ERROR
        status_str = colorize("[ERROR]", Colors.RED)

    return f"{name}:{padding}{status_str} {message}"


async def cmd_doctor(args) -> int:
    """
    Check the datasets and the running dashboard.

    Returns:
        Exit code (0 on success, non-zero on critical failure)
    """
    print(colorize("\nSecmetrics Doctor", Colors.BOLD))
    print(colorize("=" * 60, Colors.BOLD))
    print()

    config = get_config()
    url = args.url or os.getenv("SECMETRICS_URL", f"http://localhost:{config.server.port}")

    all_ok = True

    for name, path in (
        ("EDR data", config.data.edr_path),
        ("Vulnerability data", config.data.vulnerabilities_path),
    ):
        status, message = check_data_file(path)
        print(format_check_result(f"{name} ({path})", status, message))
        if status == "ERROR":
            all_ok = False

    status, message = await check_dashboard(url, timeout=args.timeout)
    print(format_check_result(f"Dashboard ({url})", status, message))
    if status == "ERROR":
        all_ok = False

    print()

    if all_ok:
        print(colorize("✓ All critical checks passed", Colors.GREEN))
        return 0
    else:
        print(colorize("✗ One or more critical checks failed", Colors.RED))
        return 1


def cmd_version(args) -> int:
    """
    Print version information.

    Returns:
        Exit code (always 0)
    """
    print(f"secmetricsctl version {__version__}")
    print("Secmetrics - Security KPI Dashboard")
    return 0


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser for secmetricsctl."""
    parser = argparse.ArgumentParser(
        description="Secmetrics operational CLI",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  secmetricsctl summary                  # Print KPIs for the configured datasets
  secmetricsctl summary --json           # Same, as JSON
  secmetricsctl serve --port 8080        # Run the web dashboard
  secmetricsctl doctor                   # Check datasets and dashboard
  secmetricsctl version                  # Show version information

Environment variables:
  SECMETRICS_DATA_EDR_PATH               # EDR alerts CSV
  SECMETRICS_DATA_VULNERABILITIES_PATH   # Vulnerability records CSV
  LOG_LEVEL                              # Logging level (default: INFO)
        """
    )

    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    # summary command
    summary_parser = subparsers.add_parser(
        "summary",
        help="Load the datasets and print their KPIs"
    )
    summary_parser.add_argument("--edr", help="EDR alerts CSV (overrides configuration)")
    summary_parser.add_argument("--vulns", help="Vulnerability records CSV (overrides configuration)")
    summary_parser.add_argument("--json", action="store_true", help="Print the dashboard state as JSON")

    # serve command
    serve_parser = subparsers.add_parser(
        "serve",
        help="Run the web dashboard"
    )
    serve_parser.add_argument("--host", default=None, help="Host to bind to")
    serve_parser.add_argument("--port", type=int, default=None, help="Port to listen on")

    # doctor command
    doctor_parser = subparsers.add_parser(
        "doctor",
        help="Check datasets and the running dashboard"
    )
    doctor_parser.add_argument("--url", default=None, help="Dashboard URL")
    doctor_parser.add_argument(
        "--timeout",
        type=float,
        default=5.0,
        help="Timeout for HTTP requests in seconds (default: 5.0)"
    )

    # version command
    subparsers.add_parser(
        "version",
        help="Show version information"
    )

    return parser


def main(argv=None):
    """Main entry point for secmetricsctl CLI."""
    parser = create_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=get_log_level(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    if not args.command:
        parser.print_help()
        return 0

    # Dispatch to command handlers
    if args.command == "summary":
        return cmd_summary(args)
    elif args.command == "serve":
        return cmd_serve(args)
    elif args.command == "doctor":
        return asyncio.run(cmd_doctor(args))
    elif args.command == "version":
        return cmd_version(args)
    else:
        print(f"Unknown command: {args.command}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
