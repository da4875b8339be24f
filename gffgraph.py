#!/usr/bin/env python3
"""
gffgraph - GFF3 feature graph builder

Main entry point for the gffgraph tool.
"""

import sys
from gffgraph.cli import main

if __name__ == "__main__":
    sys.exit(main())
