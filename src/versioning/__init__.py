"""Component version ranking and pointer resolution."""
