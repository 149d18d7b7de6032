"""ballotbox command line interface."""
