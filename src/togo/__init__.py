"""
togo: a small personal task tracker for the terminal.

Packages:
- tasks: task model, storage adapters (JSON file / SQLite), service, formatting
- cli: composition root, command registry, entry point
- core: ports (storage Protocol) and application state
"""

__version__ = "0.3.0"
