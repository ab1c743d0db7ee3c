#!/usr/bin/env python3
"""
fpdfwriter - YAML document to PDF renderer
Main entry point for the application.
"""

import os
import sys

# Add project root to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from src.cli import main

if __name__ == '__main__':
    main()
