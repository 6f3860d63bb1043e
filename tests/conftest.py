"""Test setup for specdeck."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))


RELEASE_R1 = """---
id: R1
title: First Release
timeframe: Q1 2025
objectives:
  - Ship authentication
successMetrics:
  - 99% uptime
features:
  - AUTH-01
---

# Release R1

Planning notes for the first release.

## Features

| ID | Title | Description | Repos | Stories |
|----|-------|-------------|-------|---------|
| AUTH-01 | Login | User login | api, web | 3 |
| bad-id | Broken | Invalid identifier |  | 1 |
| AUTH-02 | Logout |  |  | many |
| AUTH-03 | **Sessions** | Session handling | api | 2 |

## Risks

| ID | Title |
|----|-------|
| RISK-01 | Not a feature |
"""

RELEASE_R2 = """---
title: Second Release
---

# Release R2

## Features

| ID | Feature |
|----|---------|
| BILL-01 | Invoices |
"""


@pytest.fixture
def release_r1() -> str:
    """Markdown of a release with a mixed valid/invalid feature table."""
    return RELEASE_R1


@pytest.fixture
def specdeck_dir(tmp_path: Path) -> Path:
    """A specdeck directory with two valid releases and one broken one."""
    releases = tmp_path / "releases"
    releases.mkdir()
    (releases / "R1.md").write_text(RELEASE_R1, encoding="utf-8")
    (releases / "R2.md").write_text(RELEASE_R2, encoding="utf-8")
    (releases / "broken.md").write_text("# No front matter here\n", encoding="utf-8")
    (releases / "README.txt").write_text("not a release", encoding="utf-8")
    return tmp_path
