# Path: spec_builder/process/resolution/catalogue_search.py
"""
Catalogue Search

Free search over the full catalogue, offered to the operator next to the
ranked candidates when resolving an item by hand.
"""

from spec_builder.config_loader import DEFAULT_SEARCH_LIMIT, DEFAULT_BROWSE_LIMIT
from spec_builder.process.matcher.models.catalogue_entry import CatalogueEntry


def search_catalogue(
    catalogue: list[CatalogueEntry],
    term: str,
    limit: int = DEFAULT_SEARCH_LIMIT,
    browse_limit: int = DEFAULT_BROWSE_LIMIT,
) -> list[CatalogueEntry]:
    """
    Case-insensitive substring search over analysis, component and test code.

    Args:
        catalogue: Full catalogue snapshot
        term: Search text; blank returns the first browse_limit entries
        limit: Maximum hits for a non-blank term
        browse_limit: Entries shown when the term is blank

    Returns:
        Matching entries in catalogue order
    """
    needle = (term or '').strip().lower()
    if not needle:
        return catalogue[:browse_limit]

    hits = [
        entry for entry in catalogue
        if needle in entry.analysis_name.lower()
        or needle in entry.component_name.lower()
        or needle in entry.test_code.lower()
    ]
    return hits[:limit]


__all__ = ['search_catalogue']
