"""Build-task helpers: sequential command runners, artifact stats and file hashing."""

__version__ = "0.1.0"
