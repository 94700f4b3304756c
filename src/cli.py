#!/usr/bin/env python3
"""Main CLI entry point for the live scoring system."""

from cricket_scoring.cli.main import app

if __name__ == '__main__':
    app()
