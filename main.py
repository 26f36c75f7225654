#!/usr/bin/env python3
"""
envbench - CLI Entry Point

Usage:
    python main.py
    python main.py --multiplier=0.5
    python main.py --mysql_user=root --mysql_password=secret --mysql_database=envbench
"""

import sys
from pathlib import Path

# Allow running from a checkout without installing
sys.path.insert(0, str(Path(__file__).parent))

# envbench.config still parses on interpreters below the floor; the benchmarks do not
from envbench.config import Config

if sys.version_info < Config.MIN_PYTHON_VERSION:
    print(Config.min_python_message())
    sys.exit(1)

from envbench.cli import main


if __name__ == "__main__":
    main()
