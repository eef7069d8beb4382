"""stackgen -- starter-file generator for common web stacks with GitHub publishing."""

__version__ = "0.1.0"
