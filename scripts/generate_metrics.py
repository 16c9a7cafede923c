#!/usr/bin/env python3
"""Generate a sample construction portfolio and print or save its metrics.

Usage::

    python scripts/generate_metrics.py --projects 5 --units 8 --seed 42
    python scripts/generate_metrics.py --format json --output local/
"""

import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from obra_metrics.cli import main  # noqa: E402

if __name__ == "__main__":
    raise SystemExit(main())
