"""Command line interface for git-scrub."""
