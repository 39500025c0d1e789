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
"""Webhook alerts for builds exceeding the configured build-time threshold."""

import logging
from datetime import datetime
from typing import Any, Dict, Optional

import requests

from buildreport.constants import WEBHOOK_TIMEOUT
from buildreport.options import ReportOptions
from buildreport.report_types import BuildReport

logger = logging.getLogger(__name__)


def build_alert_payload(report: BuildReport, max_build_time_ms: Optional[float]) -> Dict[str, Any]:
    """Build the JSON body of a build-time alert.

    Args:
        report: Finalized build report
        max_build_time_ms: Threshold that was exceeded

    Returns:
        Payload with msg, buildTime, threshold, slowModules and timestamp
    """
    return {
        "msg": f"Build time alert: {report.total_duration:.0f}ms > {max_build_time_ms}ms",
        "buildTime": report.total_duration,
        "threshold": max_build_time_ms,
        "slowModules": len(report.slow_modules),
        "timestamp": datetime.now().isoformat(),
    }


def send_webhook_alert(report: BuildReport, options: ReportOptions, session: Optional[requests.Session] = None) -> bool:
    """POST a build-time alert to the configured webhook.

    Delivery failures are logged, never raised, so an unreachable endpoint
    cannot fail the build.

    Args:
        report: Finalized build report
        options: Report options carrying webhook_url and webhook_headers
        session: Optional requests session (default: module level requests.post)

    Returns:
        True if the webhook accepted the alert, False otherwise
    """
    if not options.webhook_url:
        logger.debug("No webhook configured, skipping alert")
        return False

    payload = build_alert_payload(report, options.max_build_time_ms)
    headers = {"Content-Type": "application/json", **options.webhook_headers}
    post = session.post if session is not None else requests.post

    try:
        response = post(options.webhook_url, json=payload, headers=headers, timeout=WEBHOOK_TIMEOUT)
    except requests.RequestException as e:
        logger.error("Webhook alert failed: %s", e)
        return False

    if not 200 <= response.status_code < 300:
        logger.error("Webhook alert rejected: HTTP %s %s", response.status_code, response.text[:200])
        return False

    logger.info("Webhook alert sent to %s", options.webhook_url)
    return True
