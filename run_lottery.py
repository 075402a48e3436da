#!/usr/bin/env python3
"""
Reviewer Lottery Action Runner

Runs the reviewer lottery from a source checkout (e.g. inside a GitHub
Actions job) without installing the package.
"""

import sys
from pathlib import Path

# Add src directory to Python path
src_path = Path(__file__).parent / "src"
sys.path.insert(0, str(src_path))

from reviewer_lottery.cli import main

if __name__ == '__main__':
    sys.exit(main())
