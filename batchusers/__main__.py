#!/usr/bin/env python3
"""
Main entry point for the batch-users package when run as a module.
"""

from .cli import app

if __name__ == "__main__":
    app()
