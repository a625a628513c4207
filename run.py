"""Application entry point.

Runs the WhatsOnTV command-line interface without installing the package.

Usage:
    Console:  python run.py --country GB --time-sort
    Slack:    python run.py --slack
    Daily:    python run.py --slack --schedule
"""
import sys

from whatsontv.cli import main

if __name__ == "__main__":
    sys.exit(main())
