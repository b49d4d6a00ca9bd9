"""Core building blocks for recall-commons."""
