"""regcheck command line interface."""
