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
"""Pytest configuration and shared fixtures for build-report tests.

Fixtures:
- temp_dir: isolated output directory
- fake_clock: controllable millisecond clock for the collector
- sample_units / third_party_units: UnitRecord lists
- sample_bundle / cyclic_bundle: emitted artifact mappings
- event_log_file: recorded build on disk for CLI and replay tests
"""

import sys
import json
import shutil
import tempfile
from pathlib import Path
from typing import Any, Dict, Generator, List

import pytest

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from buildreport.color_utils import Colors
from buildreport.report_types import UnitRecord


class FakeClock:
    """Millisecond clock that only moves when told to."""

    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, ms: float) -> float:
        self.now += ms
        return self.now


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for tests.

    Scope: function (default)
    Use for: Report files that need isolation
    """
    tmpdir = tempfile.mkdtemp(prefix="buildreport_test_")
    yield Path(tmpdir)
    shutil.rmtree(tmpdir, ignore_errors=True)


@pytest.fixture
def restore_colors() -> Generator[None, None, None]:
    """Restore the Colors palette after a test that disables it."""
    saved = {name: value for name, value in vars(Colors).items() if not name.startswith("_") and isinstance(value, str)}
    yield
    for name, value in saved.items():
        setattr(Colors, name, value)


@pytest.fixture
def fake_clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def sample_units() -> List[UnitRecord]:
    """Three project units, one of them slow (300ms)."""
    return [
        UnitRecord(id="a.js", duration=50, size=1000, start_time=0, end_time=50),
        UnitRecord(id="b.js", duration=300, size=2000, start_time=50, end_time=350),
        UnitRecord(id="c.js", duration=90, size=3000, start_time=350, end_time=440),
    ]


@pytest.fixture
def third_party_units() -> List[UnitRecord]:
    """Two slow third-party units (150ms and 120ms) and one fast one."""
    return [
        UnitRecord(id="/app/node_modules/lodash/lodash.js", duration=120, size=5000),
        UnitRecord(id="/app/node_modules/moment/moment.js", duration=150, size=8000),
        UnitRecord(id="/app/node_modules/tiny/index.js", duration=20, size=100),
    ]


@pytest.fixture
def sample_bundle() -> Dict[str, Any]:
    """Acyclic bundle: main -> vendor, main -> utils -> vendor."""
    return {
        "main.js": {"fileName": "main.js", "imports": ["vendor.js", "utils.js"], "dependencies": ["vendor.js", "utils.js"], "code": "x" * 500},
        "utils.js": {"fileName": "utils.js", "imports": ["vendor.js"], "dependencies": ["vendor.js"], "code": "y" * 200},
        "vendor.js": {"fileName": "vendor.js", "code": "z" * 1000},
    }


@pytest.fixture
def cyclic_bundle() -> Dict[str, Any]:
    """Bundle with the cycle a -> b -> c -> a and a self-looping d."""
    return {
        "a.js": {"fileName": "a.js", "dependencies": ["b.js"]},
        "b.js": {"fileName": "b.js", "dependencies": ["c.js"]},
        "c.js": {"fileName": "c.js", "dependencies": ["a.js"]},
        "d.js": {"fileName": "d.js", "dependencies": ["d.js"]},
    }


@pytest.fixture
def event_log_data(sample_bundle: Dict[str, Any]) -> Dict[str, Any]:
    """Recorded build with one slow module, 2s total build time."""
    return {
        "startTime": 0,
        "endTime": 2000,
        "modules": [
            {"id": "src/main.js", "size": 1200, "startTime": 10, "endTime": 40},
            {"id": "src/heavy.js", "size": 150000, "startTime": 40, "endTime": 640},
            {"id": "src/util.js", "code": "export const x = 1;", "duration": 15},
        ],
        "bundle": sample_bundle,
    }


@pytest.fixture
def event_log_file(temp_dir: Path, event_log_data: Dict[str, Any]) -> Path:
    path = temp_dir / "events.json"
    path.write_text(json.dumps(event_log_data), encoding="utf-8")
    return path
