"""Terminal rendering of cards and reports."""
