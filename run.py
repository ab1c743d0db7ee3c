#!/usr/bin/env python3
"""
fpdfwriter - YAML document to PDF renderer
Convenient entry point script in project root.
"""

import sys
import os

# Add project root to Python path for the src and generators packages
project_root = os.path.dirname(os.path.abspath(__file__))
sys.path.insert(0, project_root)

from src.cli import main

if __name__ == '__main__':
    try:
        main()
    except KeyboardInterrupt:
        print("\nInterrupted by user")
        sys.exit(1)
