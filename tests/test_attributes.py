#!/usr/bin/env python3
"""
Tests for the column 9 attribute decoder.
"""

import unittest
from gffgraph.parsers.attributes import dbxref_values, first_value, parse_attributes


class AttributeDecoderTests(unittest.TestCase):
    """Test cases for parse_attributes."""

    def test_basic_settings(self):
        """Test splitting of settings, and that Note is decoded but not split."""
        attributes = parse_attributes("ID=gene1;Name=ABC1;Note=a%2Cb,c")
        self.assertEqual(attributes, {
            'ID': ['gene1'],
            'Name': ['ABC1'],
            'Note': ['a,b,c'],
        })

    def test_target_keeps_escapes(self):
        """Test that Target values are left percent-encoded."""
        attributes = parse_attributes("Target=seq1%20a 100 200 +")
        self.assertEqual(attributes['Target'], ['seq1%20a 100 200 +'])

    def test_multiple_values(self):
        """Test comma-separated lists keep their order and are decoded."""
        attributes = parse_attributes("Parent=mRNA1,mRNA2;Alias=x%3By,z")
        self.assertEqual(attributes['Parent'], ['mRNA1', 'mRNA2'])
        self.assertEqual(attributes['Alias'], ['x;y', 'z'])

    def test_empty_column(self):
        """Test that blank or whitespace-only column 9 gives no attributes."""
        self.assertEqual(parse_attributes(""), {})
        self.assertEqual(parse_attributes("   "), {})

    def test_setting_without_value(self):
        """Test that a tag without '=' is kept with no values."""
        attributes = parse_attributes("ID=a;flagged;Name=b")
        self.assertEqual(attributes['flagged'], [])
        self.assertEqual(attributes['Name'], ['b'])

    def test_value_with_equals_sign(self):
        """Test that only the first '=' separates tag and value."""
        attributes = parse_attributes("Note=x=y")
        self.assertEqual(attributes['Note'], ['x=y'])

    def test_repeated_tag_replaces(self):
        """Test that a repeated tag replaces the earlier values."""
        attributes = parse_attributes("Dbxref=A:1;Dbxref=B:2,C:3")
        self.assertEqual(attributes['Dbxref'], ['B:2', 'C:3'])

    def test_encoded_tag(self):
        """Test that tags are percent-decoded too."""
        attributes = parse_attributes("my%20tag=v")
        self.assertIn('my tag', attributes)

    def test_trailing_semicolon(self):
        """Test that a trailing semicolon does not add an empty tag."""
        attributes = parse_attributes("ID=gene1;")
        self.assertEqual(attributes, {'ID': ['gene1']})


class AttributeHelperTests(unittest.TestCase):
    """Test cases for the attribute extraction helpers."""

    def test_first_value(self):
        attributes = {'ID': ['a', 'b'], 'Empty': []}
        self.assertEqual(first_value(attributes, 'ID'), 'a')
        self.assertIsNone(first_value(attributes, 'Empty'))
        self.assertIsNone(first_value(attributes, 'Missing'))

    def test_dbxref_fallbacks(self):
        """Test the Dbxref, dbxref, db_xref lookup order."""
        self.assertEqual(dbxref_values({'Dbxref': ['A:1'], 'db_xref': ['B:2']}), ['A:1'])
        self.assertEqual(dbxref_values({'dbxref': ['NCBI:NC_001133']}), ['NCBI:NC_001133'])
        self.assertEqual(dbxref_values({'db_xref': ['GeneID:1']}), ['GeneID:1'])
        self.assertEqual(dbxref_values({}), [])


if __name__ == '__main__':
    unittest.main()
