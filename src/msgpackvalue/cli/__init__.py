"""Command-line interface for msgpackvalue."""
