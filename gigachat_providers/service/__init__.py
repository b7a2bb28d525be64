"""Service entrypoints (CLI) built on the provider package."""
