"""Filesystem-facing steps of the build: descriptors, links, xrefs, entry page."""
