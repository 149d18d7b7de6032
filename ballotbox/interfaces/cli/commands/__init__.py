"""ballotbox CLI commands."""
