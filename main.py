#!/usr/bin/env python3
"""
Linch Link Validator
Reads file paths from stdin and checks every http(s) link they contain

    find docs -name '*.md' | python main.py --limit 20
"""

import sys
from linch.cli import main

if __name__ == "__main__":
    sys.exit(main())
