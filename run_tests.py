#!/usr/bin/env python3
"""
Test runner for gffgraph.

Discovers the unittest modules under tests/ and runs them, or a single module
given with --test-file.
"""

import os
import sys
import unittest
import argparse
import logging

PROJECT_DIR = os.path.dirname(os.path.abspath(__file__))


def discover_tests(test_dir=None, pattern='test_*.py'):
    """Build a suite from every matching module in test_dir (default: tests/)."""
    test_dir = test_dir or os.path.join(PROJECT_DIR, 'tests')
    logging.info(f"Discovering tests in {test_dir} with pattern {pattern}")
    return unittest.TestLoader().discover(test_dir, pattern=pattern, top_level_dir=PROJECT_DIR)


def load_test_file(test_path):
    """Build a suite from a single test module given by path."""
    logging.info(f"Loading test file: {test_path}")
    relative = os.path.relpath(os.path.abspath(test_path), PROJECT_DIR)
    module_name = os.path.splitext(relative)[0].replace(os.sep, '.')
    return unittest.TestLoader().loadTestsFromName(module_name)


def main():
    """Main function to run tests."""
    parser = argparse.ArgumentParser(description='Run tests for gffgraph')
    parser.add_argument('--test-dir', help='Directory containing tests')
    parser.add_argument('--pattern', default='test_*.py', help='Pattern to match test files')
    parser.add_argument('--test-file', help='Run a specific test file')
    parser.add_argument('--verbosity', type=int, default=2, help='Verbosity level (1-3)')
    parser.add_argument('--debug', action='store_true', help='Enable debug output')
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.debug else logging.INFO,
        format='%(asctime)s - %(levelname)s - %(message)s'
    )

    if PROJECT_DIR not in sys.path:
        sys.path.insert(0, PROJECT_DIR)

    if args.test_file:
        suite = load_test_file(args.test_file)
    else:
        suite = discover_tests(args.test_dir, args.pattern)

    result = unittest.TextTestRunner(verbosity=args.verbosity).run(suite)
    if result.wasSuccessful():
        logging.info("All tests passed!")
        return 0
    logging.error("Some tests failed.")
    return 1


if __name__ == '__main__':
    sys.exit(main())
