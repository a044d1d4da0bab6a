"""ValidForge command-line interface."""
