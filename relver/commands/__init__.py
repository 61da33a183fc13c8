"""CLI subcommands for relver."""
