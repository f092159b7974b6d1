"""Path template compilation and matching."""
