"""Terminal rendering for the formula hub."""
