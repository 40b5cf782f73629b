from __future__ import annotations

import sys
from pathlib import Path


def pytest_configure() -> None:
    # Keep `import gateway_bridge` and `import tests.fakes` working without an install.
    repo_root = Path(__file__).resolve().parents[1]
    repo_root_str = str(repo_root)
    if repo_root_str not in sys.path:
        sys.path.insert(0, repo_root_str)
