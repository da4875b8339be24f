"""Sequence Ontology (SOFA) term lookup."""
