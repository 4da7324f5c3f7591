#!/usr/bin/env python3
"""Convenience runner for the GPX tools.

Usage:
    python run.py reduce-points track.gpx -o out.gpx -n 500
"""
from gpx_tools.main import main

if __name__ == "__main__":
    raise SystemExit(main())
