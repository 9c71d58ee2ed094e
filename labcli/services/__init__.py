"""Service-layer workflows used by the CLI."""
