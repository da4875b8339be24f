#!/usr/bin/env python3
"""
Tests for the CLI functionality.
"""

import os
import tempfile
import unittest
from unittest.mock import patch
from io import StringIO
from gffgraph.cli import main


class CLITests(unittest.TestCase):
    """Test cases for CLI functionality."""

    def setUp(self):
        """Set up test environment."""
        self.temp_dir = tempfile.TemporaryDirectory()
        self.output_dir = self.temp_dir.name

        self.gff_file = os.path.join(self.output_dir, "test.gff3")
        with open(self.gff_file, 'w') as f:
            f.write("##gff-version 3\n")
            f.write("##sequence-region 1 1 1000\n")
            f.write("1\ttest\tchromosome\t1\t1000\t.\t.\t.\tID=1\n")
            f.write("1\ttest\tgene\t1\t500\t.\t+\t.\tID=gene1;Name=test_gene\n")
            f.write("1\ttest\tmRNA\t1\t500\t.\t+\t.\tID=mRNA1;Parent=gene1\n")
            f.write("1\ttest\twidget\t1\t100\t.\t+\t.\tID=exon1;Parent=mRNA1\n")
            f.write("1\ttest\texon\t1\t100\t.\t+\t.\tID=exon2;Parent=mRNA1,mRNA2\n")

    def tearDown(self):
        """Clean up after tests."""
        self.temp_dir.cleanup()

    @patch('sys.stdout', new_callable=StringIO)
    def test_axes(self, mock_stdout):
        """Test listing the axes."""
        result = main(['axes', self.gff_file])
        self.assertEqual(result, 0)
        self.assertEqual(mock_stdout.getvalue(), "1\tchromosome\t1\t1000\n")

    @patch('sys.stdout', new_callable=StringIO)
    def test_tree(self, mock_stdout):
        """Test printing the tree of an axis."""
        result = main(['tree', self.gff_file, '1', '--check-types'])
        self.assertEqual(result, 0)

        output = mock_stdout.getvalue()
        self.assertIn("gene1\tgene\t1..500\t+\ttest_gene\n", output)
        self.assertIn("  mRNA1\tmRNA\t1..500\t+\n", output)
        self.assertIn("    exon1\twidget\t1..100\t+\n", output)
        self.assertNotIn("exon2\texon", output)
        self.assertIn("# 1 warning(s)", output)

    def test_tree_to_file_with_multi_parent(self):
        """Test writing the tree to a file with multiple parents allowed."""
        outfile = os.path.join(self.output_dir, "tree.txt")
        result = main(['tree', self.gff_file, '1', '--multi-parent', '--output', outfile])
        self.assertEqual(result, 0)

        with open(outfile) as f:
            output = f.read()
        self.assertIn("    exon2\texon\t1..100\t+\n", output)
        self.assertIn("mRNA2\t(no record)\n", output)
        self.assertNotIn("warning", output)

    def test_format_error_exit_code(self):
        """Test that a broken file gives exit code 1."""
        with open(self.gff_file, 'a') as f:
            f.write("1\ttest\tgene\t5\n")
        self.assertEqual(main(['axes', self.gff_file]), 1)

    def test_missing_file_exit_code(self):
        self.assertEqual(main(['axes', os.path.join(self.output_dir, 'missing.gff3')]), 1)


if __name__ == '__main__':
    unittest.main()
