"""Feature modules for recall-commons."""
