"""Storage ports and application state."""
