"""git-scrub - step through a repository's history one checkout at a time."""

__version__ = "0.1.0"
