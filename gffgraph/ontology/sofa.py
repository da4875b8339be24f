"""
Lookup between SOFA accessions (e.g. SO:0000704) and their category names
(e.g. gene).

GFF3 column 3 may hold either form, so terms are accepted as accession or name.
"""

import logging
from importlib import resources
from typing import Dict, Iterable, Optional

MAPPING_FILE_NAME = "SOFA.txt"


class SofaTypes:
    """Two-way mapping between SOFA accessions and category names."""

    def __init__(self, lines: Optional[Iterable[str]] = None):
        self.accession_to_category: Dict[str, str] = {}
        self.category_to_accession: Dict[str, str] = {}
        if lines is None:
            lines = resources.files(__package__).joinpath(MAPPING_FILE_NAME).read_text(encoding="utf-8").splitlines()
        self._load(lines)

    def _load(self, lines: Iterable[str]) -> None:
        for line_num, line in enumerate(lines, 1):
            line = line.strip()
            if not line or line.startswith('#'):
                continue
            accession, _, category = line.partition(' ')
            if not category:
                logging.warning(f"SOFA mapping line {line_num} has no category: {line!r}")
                continue
            self.accession_to_category[accession] = category.strip()
            self.category_to_accession[category.strip()] = accession
        logging.debug(f"Loaded {len(self.accession_to_category)} SOFA terms")

    def is_known_term(self, term: Optional[str]) -> bool:
        """True if term is a known accession or category name."""
        return term in self.accession_to_category or term in self.category_to_accession

    def category_for_term(self, term: Optional[str]) -> Optional[str]:
        """Category name for an accession; a known name maps to itself."""
        if term in self.category_to_accession:
            return term
        return self.accession_to_category.get(term)

    def term_for_category(self, category: Optional[str]) -> Optional[str]:
        """Accession for a category name."""
        return self.category_to_accession.get(category)
