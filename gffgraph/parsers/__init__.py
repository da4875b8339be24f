"""Line-level GFF3 parsing: escapes, column 9 attributes and records."""
