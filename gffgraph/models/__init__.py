"""Data models for parsed GFF3 features and the feature graph."""
