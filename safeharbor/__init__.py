"""Safe Harbor estimated tax calculator for self-employed filers."""

__version__ = "0.1.0"
