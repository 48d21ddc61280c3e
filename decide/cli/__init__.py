# CLI package for the DECIDE Engine
"""
Command-line interface for evaluating input records locally.

Commands:
    decide run      - Evaluate input files
    decide explain  - Show the condition breakdown
    decide summary  - Tabulate output records
"""
