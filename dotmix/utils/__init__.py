"""Path, merge and collection helpers."""
