#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# ****************************************************************************************************************************************************
# * BSD 3-Clause License
# *
# * Copyright (c) 2025, Mana Battery
# * All rights reserved.
# *
# * Redistribution and use in source and binary forms, with or without modification, are permitted provided that the following conditions are met:
# *
# * 1. Redistributions of source code must retain the above copyright notice, this list of conditions and the following disclaimer.
# * 2. Redistributions in binary form must reproduce the above copyright notice, this list of conditions and the following disclaimer in the
# *    documentation and/or other materials provided with the distribution.
# * 3. Neither the name of the copyright holder nor the names of its contributors may be used to endorse or promote products derived from this
# *    software without specific prior written permission.
# *
# * THIS SOFTWARE IS PROVIDED BY THE COPYRIGHT HOLDERS AND CONTRIBUTORS "AS IS" AND ANY EXPRESS OR IMPLIED WARRANTIES, INCLUDING, BUT NOT LIMITED TO,
# * THE IMPLIED WARRANTIES OF MERCHANTABILITY AND FITNESS FOR A PARTICULAR PURPOSE ARE DISCLAIMED. IN NO EVENT SHALL THE COPYRIGHT HOLDER OR
# * CONTRIBUTORS BE LIABLE FOR ANY DIRECT, INDIRECT, INCIDENTAL, SPECIAL, EXEMPLARY, OR CONSEQUENTIAL DAMAGES (INCLUDING, BUT NOT LIMITED TO,
# * PROCUREMENT OF SUBSTITUTE GOODS OR SERVICES; LOSS OF USE, DATA, OR PROFITS; OR BUSINESS INTERRUPTION) HOWEVER CAUSED AND ON ANY THEORY OF
# * LIABILITY, WHETHER IN CONTRACT, STRICT LIABILITY, OR TORT (INCLUDING NEGLIGENCE OR OTHERWISE) ARISING IN ANY WAY OUT OF THE USE OF THIS SOFTWARE,
# * EVEN IF ADVISED OF THE POSSIBILITY OF SUCH DAMAGE.
# ****************************************************************************************************************************************************
"""Shared constants for the build-report tools.

This module provides centralized constants used across the collector, the analysis
helpers and the report emitters so thresholds and file names stay consistent.
"""

# =============================================================================
# Exit Codes
# =============================================================================

EXIT_SUCCESS = 0
EXIT_INVALID_ARGS = 1
EXIT_RUNTIME_ERROR = 2
EXIT_BUILD_TIME_EXCEEDED = 3
EXIT_KEYBOARD_INTERRUPT = 130

# =============================================================================
# Classification Thresholds
# =============================================================================

DEFAULT_SLOW_THRESHOLD_MS = 200.0  # Units slower than this are reported as slow modules
DEFAULT_PROGRESS_SKIP_FIRST_N = 10  # No progress estimate before this many processed units

# Optimization advisor thresholds (not configurable)
THIRD_PARTY_SLOW_MS = 100.0  # Third-party units slower than this are flagged
LARGE_FILE_BYTES = 100000  # Units larger than this (100KB) are flagged for code splitting
VERY_SLOW_MS = 1000.0  # Units slower than this need urgent attention
MAX_TIP_EXAMPLES = 3  # Worst offenders named per optimization tip

THIRD_PARTY_MARKER = "node_modules"  # Path segment marking third-party dependencies

# =============================================================================
# Display Limits
# =============================================================================

MAX_SLOW_MODULES_DISPLAY = 5  # Slowest modules listed in the console summary
MAX_CYCLES_DISPLAY = 20  # Maximum cycles to display

# Performance trend band for report comparison (percent of baseline duration)
STABLE_TREND_BAND_PCT = 5.0

# =============================================================================
# Report Output
# =============================================================================

DEFAULT_OUTPUT_DIR = "dist"
JSON_REPORT_FILENAME = "build-report.json"
HTML_REPORT_FILENAME = "build-report.html"
DEPENDENCY_REPORT_FILENAME = "dependencies.json"
REPORT_VERSION = "1.0.0"

SUPPORTED_GRAPH_FORMATS = [".graphml", ".gexf", ".json"]

# Webhook delivery timeout (seconds)
WEBHOOK_TIMEOUT = 30

# =============================================================================
# Exception Classes
# =============================================================================


class BuildReportError(Exception):
    """Base exception for all build-report errors.

    All build-report exceptions carry an exit_code attribute that indicates
    what exit code the program should use when this error is caught at the
    main entry point.
    """

    def __init__(self, message: str, exit_code: int = EXIT_RUNTIME_ERROR):
        super().__init__(message)
        self.exit_code = exit_code


# Validation errors (EXIT_INVALID_ARGS)
class ValidationError(BuildReportError):
    """Raised when input validation fails (arguments, files, options)."""

    def __init__(self, message: str):
        super().__init__(message, EXIT_INVALID_ARGS)


class ConfigError(ValidationError):
    """Raised when report options are invalid."""


class EventLogError(ValidationError):
    """Raised when a recorded build event log is malformed."""


class ReportFormatError(ValidationError):
    """Raised when a serialized build report cannot be loaded."""


class ReportStateError(BuildReportError):
    """Raised when the collector is used outside its build lifecycle.

    Examples are recording a unit after the report was finalized, or finalizing
    the same build twice.
    """
