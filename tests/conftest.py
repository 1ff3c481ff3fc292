from __future__ import annotations

"""
Pytest configuration helpers.

Puts the repository root on ``sys.path`` so ``torrent_ranker`` and ``main``
import without an install.
"""

import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]

if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))
