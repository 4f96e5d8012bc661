"""Three-phase build driver: configure, classify, publish."""
