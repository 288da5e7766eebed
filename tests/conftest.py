"""
Test configuration - puts the repo root on sys.path and resets the
module-level settings (timezone, debug output) between tests.
"""

import sys
from pathlib import Path

import pytest

REPO_ROOT = Path(__file__).parent.parent
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from gridlayout.debug import set_debug
from gridlayout.timezone_utils import set_timezone


@pytest.fixture(autouse=True)
def reset_module_settings():
    set_timezone("UTC")
    set_debug(False)
    yield
    set_timezone("UTC")
    set_debug(False)
