"""KG Dashboard CLI - command-line rendering of search progress."""
