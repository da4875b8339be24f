"""
Decoder for the GFF3 column 9 attribute list.

Column 9 holds ``tag=value`` settings separated by semicolons. Values are
comma-separated lists, with two exceptions: ``Note`` is free text and is never
split, and ``Target`` values keep their percent escapes because the alignment
target grammar ("target_id start end [strand]") relies on the escaped spaces.
"""

from typing import Callable, Dict, List, Optional

from gffgraph.parsers.escaping import percent_decode

ID_ATTRIB = "ID"
NAME_ATTRIB = "Name"
ALIAS_ATTRIB = "Alias"
PARENT_ATTRIB = "Parent"
TARGET_ATTRIB = "Target"
GAP_ATTRIB = "Gap"
DERIVES_FROM_ATTRIB = "Derives_from"
NOTE_ATTRIB = "Note"
DBXREF_ATTRIB = "Dbxref"
ONTOLOGY_ATTRIB = "Ontology_term"

# Lookup order for cross references: the standard tag, the lower-case spelling
# found in SGD files, then the NCBI spelling.
DBXREF_SYNONYMS = (DBXREF_ATTRIB, DBXREF_ATTRIB.lower(), "db_xref")


def parse_attributes(column: str, unescape: Callable[[str], str] = percent_decode) -> Dict[str, List[str]]:
    """
    Split a column 9 string into a mapping of tag to ordered values.

    Args:
        column: Raw column 9 text
        unescape: Percent decoder applied to tags and values

    Returns:
        Dictionary mapping each tag to its list of values. A later setting of the
        same tag replaces an earlier one.
    """
    attributes: Dict[str, List[str]] = {}
    trimmed = column.strip()
    if not trimmed:
        return attributes

    for setting in trimmed.split(';'):
        if not setting.strip():
            continue

        raw_tag, has_value, value = setting.partition('=')
        tag = unescape(raw_tag.strip())

        if not has_value:
            # Malformed setting; the tag is remembered without values.
            attributes[tag] = []
        elif tag == NOTE_ATTRIB:
            attributes[tag] = [unescape(value)]
        elif tag == TARGET_ATTRIB:
            attributes[tag] = value.split(',')
        else:
            attributes[tag] = [unescape(item) for item in value.split(',')]

    return attributes


def first_value(attributes: Dict[str, List[str]], tag: str) -> Optional[str]:
    """Return the first value stored for tag, or None if absent or empty."""
    values = attributes.get(tag)
    if values:
        return values[0]
    return None


def dbxref_values(attributes: Dict[str, List[str]]) -> List[str]:
    """Return the cross references, falling back through the known tag spellings."""
    for tag in DBXREF_SYNONYMS:
        if tag in attributes:
            return list(attributes[tag])
    return []
