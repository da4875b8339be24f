"""
gffgraph - GFF3 feature graph builder.

Parses GFF3 annotation files and assembles the part-of hierarchy of the
features found on each landmark sequence.
"""

__version__ = "0.1.0"
