"""Command-line dispatcher: bootstrap, command registry and entry point."""
