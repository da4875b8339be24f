"""Assembly of parsed features into per-axis feature graphs."""
