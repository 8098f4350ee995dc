"""Safe Harbor command-line interface."""
