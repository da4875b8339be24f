"""
Parser for GFF3 (General Feature Format version 3) files.

Column layout, one feature per line, tab separated:

    1 seqid   landmark that establishes the coordinate system (escaped)
    2 source  free text qualifier, usually the program or database (escaped)
    3 type    SOFA term or accession
    4 start   1-based, inclusive
    5 end     1-based, inclusive
    6 score   floating point, "." when absent
    7 strand  "+", "-", "." (unstranded) or "?" (unknown)
    8 phase   0, 1 or 2 for CDS features, "." otherwise
    9 attributes  tag=value pairs separated by ";" (optional column)

Lines starting with "#" are directives or comments, lines starting with ">"
open embedded FASTA, and single-column lines are taken to be sequence data.
All three are skipped.
"""

import io
import os
import re
import time
import logging
from typing import Iterator, List, Optional, Tuple, Union

from gffgraph.errors import GFF3FormatError, GFF3SourceError
from gffgraph.models.genomic import Feature, Strand
from gffgraph.parsers.escaping import percent_decode_checked
from gffgraph.parsers.attributes import (
    ALIAS_ATTRIB,
    DERIVES_FROM_ATTRIB,
    GAP_ATTRIB,
    ID_ATTRIB,
    NAME_ATTRIB,
    NOTE_ATTRIB,
    ONTOLOGY_ATTRIB,
    PARENT_ATTRIB,
    TARGET_ATTRIB,
    dbxref_values,
    first_value,
    parse_attributes,
)

UNKNOWN_TYPE = "Unknown"
MAX_PHASE = 3

# Optional sign and digits only; no padding or underscores.
_INTEGER = re.compile(r"[+-]?[0-9]+\Z")

Source = Union[str, os.PathLike, io.TextIOBase]


class _LineContext:
    """Where a line came from, and the list its data-quality warnings go to."""

    def __init__(self, source_name: str, line_num: int, warnings: Optional[List[str]]):
        self.source_name = source_name
        self.line_num = line_num
        self.warnings = warnings

    def warn(self, message: str) -> None:
        message = f"{self.source_name} line {self.line_num}: {message}"
        logging.warning(message)
        if self.warnings is not None:
            self.warnings.append(message)

    def unescape(self, value: str) -> str:
        decoded, complete = percent_decode_checked(value)
        if not complete:
            self.warn(f"value {value!r} has a percent escape past the end of the string; truncated to {decoded!r}")
        return decoded


def parse_gff3_line(line: str, line_num: int = 1, source_name: str = "<string>",
                    warnings: Optional[List[str]] = None) -> Optional[Feature]:
    """
    Parse one line of GFF3.

    Args:
        line: The raw line, with or without its line terminator
        line_num: 1-based line number, used in messages
        source_name: Name of the file or stream, used in messages
        warnings: If given, data-quality warnings are appended to it

    Returns:
        The parsed Feature, or None if the line is a directive, a comment or
        sequence data

    Raises:
        GFF3FormatError: If the line has between 2 and 7 columns
    """
    line = line.rstrip('\r\n')
    if line.startswith('#') or line.startswith('>'):
        return None

    fields = line.split('\t')
    if len(fields) <= 1:
        return None
    if len(fields) < 8:
        raise GFF3FormatError(
            f"{source_name}: line {line_num} has only {len(fields)} fields. 8 or 9 expected.",
            source=source_name,
            line_num=line_num,
        )

    return _convert(fields, _LineContext(source_name, line_num, warnings))


def _convert(fields: List[str], context: _LineContext) -> Feature:
    """Build a Feature from the columns of a line known to have at least 8 of them."""
    feature_type = fields[2]
    if not feature_type:
        context.warn(f"missing feature type; using {UNKNOWN_TYPE!r}")
        feature_type = UNKNOWN_TYPE

    feature = Feature(
        landmark_id=context.unescape(fields[0]),
        source=context.unescape(fields[1]),
        type=feature_type,
        strand=Strand.from_symbol(fields[6]),
        phase=_interpret_phase(fields[7]),
        line_num=context.line_num,
    )

    if _INTEGER.match(fields[3]) and _INTEGER.match(fields[4]):
        feature.start = int(fields[3])
        feature.end = int(fields[4])
    else:
        context.warn(f"start or end not an integer (start={fields[3]!r}, end={fields[4]!r}); forcing both to 0")
        feature.start = 0
        feature.end = 0

    feature.score = _interpret_score(fields[5], context)

    if len(fields) >= 9:
        _apply_attributes(feature, parse_attributes(fields[8], unescape=context.unescape))

    return feature


def _apply_attributes(feature: Feature, attributes) -> None:
    """Fill the well-known attribute fields of a feature from its column 9 mapping."""
    feature.attributes = attributes

    feature.id = first_value(attributes, ID_ATTRIB)
    feature.name = first_value(attributes, NAME_ATTRIB)
    feature.alias = first_value(attributes, ALIAS_ATTRIB)
    feature.target_of_alignment = first_value(attributes, TARGET_ATTRIB)
    feature.gap = first_value(attributes, GAP_ATTRIB)
    feature.derives_from = first_value(attributes, DERIVES_FROM_ATTRIB)
    feature.note = first_value(attributes, NOTE_ATTRIB)
    feature.ontology_term = first_value(attributes, ONTOLOGY_ATTRIB)

    # Known multiple cardinality
    feature.parents = [parent for parent in attributes.get(PARENT_ATTRIB, []) if parent]
    feature.dbxref = dbxref_values(attributes)


def _interpret_score(score: str, context: _LineContext) -> float:
    score = score.strip()
    if not score or score == '.':
        return 0.0
    try:
        return float(score)
    except ValueError:
        context.warn(f"score {score!r} is not a number; using 0.0")
        return 0.0


def _interpret_phase(phase: str) -> Optional[int]:
    """Phase as an int in 0..3, or None for ".", blanks and anything out of range."""
    try:
        value = int(phase)
    except (TypeError, ValueError):
        return None
    if 0 <= value <= MAX_PHASE:
        return value
    return None


class GFF3Reader:
    """
    Reads a GFF3 source one feature at a time.

    The source is either a path, opened lazily on the first read and closed by
    close(), or an already open text stream, which is never closed here. rewind()
    prepares the reader for another full pass.
    """

    def __init__(self, source: Source, encoding: str = "utf-8"):
        self.encoding = encoding
        self.line_num = 0
        self.warnings: List[str] = []
        self._handle = None
        self._stream_used = False
        if isinstance(source, (str, os.PathLike)):
            self._path = os.fspath(source)
            self._stream = None
            self.source_name = self._path
        else:
            self._path = None
            self._stream = source
            self.source_name = str(getattr(source, 'name', '<stream>'))

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_value, traceback):
        self.close()
        return False

    def __iter__(self) -> Iterator[Feature]:
        while True:
            feature = self.next_feature()
            if feature is None:
                return
            yield feature

    def next_feature(self) -> Optional[Feature]:
        """
        Return the feature on the next data line, or None at end of input.

        Raises:
            GFF3FormatError: On a line with between 2 and 7 columns
            GFF3SourceError: If the source cannot be opened or read
        """
        handle = self._prepare()
        while True:
            try:
                line = handle.readline()
            except (OSError, UnicodeDecodeError) as e:
                raise GFF3SourceError(f"Failed to read {self.source_name} after line {self.line_num}: {e}",
                                      source=self.source_name, line_num=self.line_num) from e
            if not line:
                return None
            self.line_num += 1
            feature = parse_gff3_line(line, self.line_num, self.source_name, self.warnings)
            if feature is not None:
                return feature

    def rewind(self) -> None:
        """Start over from the first line. Warnings and line count are reset."""
        if self._path is not None:
            self.close()
        elif self._stream_used:
            try:
                self._stream.seek(0)
            except (AttributeError, OSError, io.UnsupportedOperation) as e:
                raise GFF3SourceError(f"Cannot rewind {self.source_name} for another pass: {e}",
                                      source=self.source_name) from e
            self._handle = None
            self._stream_used = False
        self.line_num = 0
        self.warnings = []

    def close(self) -> None:
        """Release the file handle if this reader opened it."""
        if self._path is not None and self._handle is not None:
            self._handle.close()
        self._handle = None

    def _prepare(self):
        """Open the source on first use."""
        if self._handle is None:
            if self._path is not None:
                try:
                    self._handle = open(self._path, 'r', encoding=self.encoding)
                except OSError as e:
                    raise GFF3SourceError(f"Cannot open {self._path}: {e}", source=self._path) from e
            else:
                self._handle = self._stream
                self._stream_used = True
        return self._handle


def parse_gff3(gff_file: Source) -> Tuple[List[Feature], List[str]]:
    """
    Parse a whole GFF3 source into a list of features.

    Returns:
        Tuple of (features, warnings)
    """
    start_time = time.time()
    with GFF3Reader(gff_file) as reader:
        logging.info(f"Parsing GFF3 file: {reader.source_name}")
        features = list(reader)
        warnings = list(reader.warnings)

    elapsed = time.time() - start_time
    logging.info(f"Finished parsing GFF3 in {elapsed:.2f}s: {len(features)} features")
    return features, warnings
