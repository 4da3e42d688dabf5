"""CLI — Command-line entry points for SCIT."""
