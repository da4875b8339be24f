#!/usr/bin/env python3
"""
gffgraph - GFF3 feature graph builder

Command-line interface: list the axes of a GFF3 file, or print the feature
hierarchy assembled on one of them.
"""

import argparse
import sys
import logging

from gffgraph.assembly.assembler import GFF3Assembler
from gffgraph.errors import GFFParserError
from gffgraph.ontology.sofa import SofaTypes
from gffgraph.utils.logging import setup_logging


def build_parser():
    """Create the argument parser with its subcommands."""
    parser = argparse.ArgumentParser(description='Build feature graphs from GFF3 files.')
    subparsers = parser.add_subparsers(dest='command', help='Command to run')
    subparsers.required = True

    axes_parser = subparsers.add_parser('axes', help='List the axis (landmark) features')
    axes_parser.add_argument('gff_file', help='Input GFF3 file')

    tree_parser = subparsers.add_parser('tree', help='Print the feature hierarchy of one axis')
    tree_parser.add_argument('gff_file', help='Input GFF3 file')
    tree_parser.add_argument('axis_id', help='Landmark ID of the axis to assemble')

    # Assembly options
    assembly_group = tree_parser.add_argument_group('Assembly Options')
    assembly_group.add_argument('--multi-parent', action='store_true',
                                help='Accept features that name more than one Parent')
    assembly_group.add_argument('--check-types', action='store_true',
                                help='Warn about feature types that are not SOFA terms')

    for sub in (axes_parser, tree_parser):
        # Output options
        output_group = sub.add_argument_group('Output Options')
        output_group.add_argument('--output', '-o', help='Output file (default: stdout)')

        # Debug and logging options
        debug_group = sub.add_argument_group('Debug Options')
        debug_group.add_argument('--debug', action='store_true', help='Enable debug output')
        debug_group.add_argument('--verbose', action='store_true', help='Enable verbose output without full debug')
        debug_group.add_argument('--log-file', help='Write log to this file')

    return parser


def write_axes(assembler, out):
    """Write one line per axis: landmark, type and extent."""
    axes = assembler.discover_axes()
    for axis in axes:
        out.write(f"{axis.landmark_id}\t{axis.type}\t{axis.start}\t{axis.end}\n")
    return axes


def write_tree(assembler, axis_id, out, sofa=None):
    """Write the indented forest of an axis, followed by the warnings collected on the way."""
    roots, warnings = assembler.build_tree(axis_id)
    graph = assembler.graph
    # Parents that were named but never defined head their own subtrees.
    orphans = [node for node in graph.placeholders() if not node.parent_ids]
    for root in roots + orphans:
        for depth, node in graph.walk(root.id):
            feature = node.feature
            if feature is None:
                out.write(f"{'  ' * depth}{node.id}\t(no record)\n")
                continue
            name = f"\t{feature.name}" if feature.name else ""
            out.write(f"{'  ' * depth}{node.id}\t{feature.type}\t{feature.start}..{feature.end}"
                      f"\t{feature.strand.value or '?'}{name}\n")
            if sofa is not None and not sofa.is_known_term(feature.type):
                logging.warning(f"Feature {node.id} has type {feature.type!r}, which is not a SOFA term")

    for placeholder in graph.placeholders():
        logging.warning(f"Parent {placeholder.id} is referenced but never defined")

    if warnings:
        out.write(f"# {len(warnings)} warning(s)\n")
        for warning in warnings:
            out.write(f"# {warning}\n")
    return roots, warnings


def main(argv=None):
    """Main function of the gffgraph command."""
    parser = build_parser()
    args = parser.parse_args(argv)

    setup_logging(debug=args.debug, log_file=args.log_file, verbose=args.verbose)

    out = open(args.output, 'w') if args.output else sys.stdout
    try:
        if args.command == 'axes':
            assembler = GFF3Assembler(args.gff_file)
            axes = write_axes(assembler, out)
            if not axes:
                logging.warning(f"No axes found in {args.gff_file}")
        else:
            assembler = GFF3Assembler(args.gff_file, multi_parent_acceptable=args.multi_parent)
            sofa = SofaTypes() if args.check_types else None
            write_tree(assembler, args.axis_id, out, sofa)
        return 0

    except GFFParserError as e:
        logging.error(f"Error reading GFF3: {e.message}")
        if args.debug:
            import traceback
            logging.error(traceback.format_exc())
        return 1
    finally:
        if out is not sys.stdout:
            out.close()


if __name__ == "__main__":
    sys.exit(main())
