#!/usr/bin/env python3
"""Render the content blocks of a lesson markdown file.

Usage:
    python run.py LESSON.md [-c config.yaml] [--format html|json] [--debug] [--trace] [--verbose]
"""
import sys

from lessonblocks.main import main

if __name__ == "__main__":
    sys.exit(main())
