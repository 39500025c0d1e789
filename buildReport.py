#!/usr/bin/env python3
#****************************************************************************************************************************************************
#* BSD 3-Clause License
#*
#* Copyright (c) 2025, Mana Battery
#* All rights reserved.
#*
#* Redistribution and use in source and binary forms, with or without modification, are permitted provided that the following conditions are met:
#*
#* 1. Redistributions of source code must retain the above copyright notice, this list of conditions and the following disclaimer.
#* 2. Redistributions in binary form must reproduce the above copyright notice, this list of conditions and the following disclaimer in the
#*    documentation and/or other materials provided with the distribution.
#* 3. Neither the name of the copyright holder nor the names of its contributors may be used to endorse or promote products derived from this
#*    software without specific prior written permission.
#*
#* THIS SOFTWARE IS PROVIDED BY THE COPYRIGHT HOLDERS AND CONTRIBUTORS "AS IS" AND ANY EXPRESS OR IMPLIED WARRANTIES, INCLUDING, BUT NOT LIMITED TO,
#* THE IMPLIED WARRANTIES OF MERCHANTABILITY AND FITNESS FOR A PARTICULAR PURPOSE ARE DISCLAIMED. IN NO EVENT SHALL THE COPYRIGHT HOLDER OR
#* CONTRIBUTORS BE LIABLE FOR ANY DIRECT, INDIRECT, INCIDENTAL, SPECIAL, EXEMPLARY, OR CONSEQUENTIAL DAMAGES (INCLUDING, BUT NOT LIMITED TO,
#* PROCUREMENT OF SUBSTITUTE GOODS OR SERVICES; LOSS OF USE, DATA, OR PROFITS; OR BUSINESS INTERRUPTION) HOWEVER CAUSED AND ON ANY THEORY OF
#* LIABILITY, WHETHER IN CONTRACT, STRICT LIABILITY, OR TORT (INCLUDING NEGLIGENCE OR OTHERWISE) ARISING IN ANY WAY OUT OF THE USE OF THIS SOFTWARE,
#* EVEN IF ADVISED OF THE POSSIBILITY OF SUCH DAMAGE.
#****************************************************************************************************************************************************

"""Analyze a recorded build and produce a build performance report.

Replays a recorded build event log (units processed and artifacts emitted by a
module bundler) through the build-report collector. Reports slow units, large
files, slow third-party dependencies and circular dependencies between emitted
artifacts, and writes JSON/HTML reports.

Requirements:
    - Python 3.8+
    - networkx, numpy, colorama, packaging, requests

Usage:
    buildReport.py <event_log.json> [--slow-threshold MS] [--compare-with build-report.json]

Exit Codes:
    0: Success
    1: Invalid arguments, configuration or event log
    2: Unexpected error
    3: Build time exceeded --max-build-time (only with --fail-on-timeout)
"""

import os
import sys
import json
import signal
import logging
import argparse
import contextlib
from typing import Any, List, Optional

__version__ = "1.0.0"
__author__ = "Mana Battery"

from buildreport.color_utils import Colors, print_error, print_warning, should_use_color
from buildreport.collector import BuildReportCollector, build_time_exceeded
from buildreport.comparison import compare_reports
from buildreport.constants import (
    EXIT_SUCCESS, EXIT_RUNTIME_ERROR, EXIT_BUILD_TIME_EXCEEDED,
    EXIT_KEYBOARD_INTERRUPT, BuildReportError
)
from buildreport.event_log import load_event_log, replay_event_log
from buildreport.export_utils import export_dependency_graph
from buildreport.options import ReportOptions, load_options
from buildreport.package_verification import check_all_packages, verify_requirements
from buildreport.report_display import print_comparison
from buildreport.report_serialization import load_report, report_to_dict

__all__ = ['EXIT_SUCCESS', 'cli', 'main', 'parse_arguments', 'resolve_options']

logger = logging.getLogger(__name__)


def signal_handler(signum: int, frame: Any) -> None:
    """Handle interrupt signals gracefully."""
    print_warning("\nInterrupted by user. Exiting...", prefix=False)
    sys.exit(EXIT_KEYBOARD_INTERRUPT)


def parse_arguments(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description='Analyze a recorded build and produce a build performance report.',
        epilog=f'Version {__version__}\n\nExamples:\n'
               f'  %(prog)s build-events.json\n'
               f'  %(prog)s build-events.json --slow-threshold 100 --output-dir reports\n'
               f'  %(prog)s build-events.json --compare-with baseline/build-report.json\n'
               f'  %(prog)s build-events.json --export-graph deps.graphml\n',
        formatter_class=argparse.RawDescriptionHelpFormatter
    )

    parser.add_argument('event_log', nargs='?', help='Recorded build event log (JSON)')
    parser.add_argument('--config', metavar='FILE', help='JSON file with report options')
    parser.add_argument('--slow-threshold', type=float, metavar='MS', help='Slow module threshold in ms (default: 200)')
    parser.add_argument('--max-build-time', type=float, metavar='MS', help='Warn (and alert the webhook) when the build takes longer')
    parser.add_argument('--output-dir', metavar='DIR', help='Directory for report files (default: dist)')
    parser.add_argument('--no-html', action='store_true', help='Do not write build-report.html')
    parser.add_argument('--no-json', action='store_true', help='Do not write build-report.json and dependencies.json')
    parser.add_argument('--no-progress', action='store_true', help='Do not log progress estimates')
    parser.add_argument('--webhook-url', metavar='URL', help='Webhook receiving build-time alerts')
    parser.add_argument('--compare-with', metavar='FILE', help='Baseline build-report.json to compare against')
    parser.add_argument('--export-graph', metavar='FILE', help='Export the artifact graph (.graphml, .gexf, .json)')
    parser.add_argument('--format', choices=['text', 'json'], default='text', help='Output format (default: text)')
    parser.add_argument('--fail-on-timeout', action='store_true', help=f'Exit with {EXIT_BUILD_TIME_EXCEEDED} when --max-build-time is exceeded')
    parser.add_argument('--check-deps', action='store_true', help='Verify installed package versions and exit')
    parser.add_argument('--no-color', action='store_true', help='Disable colored output')
    parser.add_argument('--verbose', '-v', action='store_true', help='Enable verbose output to stderr')
    parser.add_argument('--version', action='version', version=f'%(prog)s {__version__}')

    args = parser.parse_args(argv)
    if not args.check_deps and not args.event_log:
        parser.error('the following arguments are required: event_log')
    return args


def resolve_options(args: argparse.Namespace) -> ReportOptions:
    """Combine the configuration file with command-line overrides.

    Raises:
        ConfigError: If the configuration file or an override is invalid
    """
    options = load_options(args.config) if args.config else ReportOptions()
    return options.replace(
        slow_threshold_ms=args.slow_threshold,
        max_build_time_ms=args.max_build_time,
        output_dir=args.output_dir,
        webhook_url=args.webhook_url,
        generate_html=False if args.no_html else None,
        generate_json=False if args.no_json else None,
        enable_progress=False if args.no_progress else None,
    )


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the script.

    Returns:
        Exit code (0 for success, non-zero for failure)
    """
    signal.signal(signal.SIGINT, signal_handler)
    signal.signal(signal.SIGTERM, signal_handler)

    args = parse_arguments(argv)

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO, format="%(levelname)s: %(message)s", stream=sys.stderr)

    if not should_use_color(no_color=args.no_color):
        Colors.disable()

    if args.check_deps:
        return EXIT_SUCCESS if check_all_packages() else EXIT_RUNTIME_ERROR

    verify_requirements("build report analysis")

    options = resolve_options(args)
    log = load_event_log(args.event_log)
    baseline = load_report(args.compare_with) if args.compare_with else None

    if args.verbose:
        print(f"Build Report v{__version__}", file=sys.stderr)
        print(f"Replaying: {args.event_log} ({len(log.units)} units, {len(log.bundle)} artifacts)", file=sys.stderr)

    collector = BuildReportCollector(options)

    if args.format == 'json':
        # Keep stdout clean for the JSON document
        with contextlib.redirect_stdout(sys.stderr):
            report = replay_event_log(log, collector, show_summary=False)
        document = report_to_dict(report)
        if baseline is not None:
            comparison = compare_reports(baseline, report)
            document["comparison"] = {
                "durationChange": comparison.duration_change,
                "newSlowModules": [unit.id for unit in comparison.new_slow_modules],
                "removedSlowModules": [unit.id for unit in comparison.removed_slow_modules],
                "performanceTrend": comparison.performance_trend.value,
            }
        print(json.dumps(document, indent=2, ensure_ascii=False))
    else:
        report = replay_event_log(log, collector)
        if baseline is not None:
            print_comparison(compare_reports(baseline, report))
        print(f"\n{Colors.GREEN}✅ Build analysis complete. Reports are in {os.path.abspath(options.output_dir)}{Colors.RESET}")

    if args.export_graph:
        with contextlib.redirect_stdout(sys.stderr if args.format == 'json' else sys.stdout):
            if export_dependency_graph(args.export_graph, report.dependency_graph, report.circular_dependencies) is None:
                return EXIT_RUNTIME_ERROR

    if args.fail_on_timeout and build_time_exceeded(report, options.max_build_time_ms):
        return EXIT_BUILD_TIME_EXCEEDED

    return EXIT_SUCCESS


def cli() -> int:
    """Console entry point mapping errors to exit codes."""
    try:
        return main()
    except KeyboardInterrupt:
        print_warning("Interrupted.", prefix=False)
        return EXIT_KEYBOARD_INTERRUPT
    except BuildReportError as e:
        print_error(str(e))
        return e.exit_code
    except Exception as e:
        print(f"Fatal error: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR


if __name__ == "__main__":
    sys.exit(cli())
