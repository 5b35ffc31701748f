# Path: spec_builder/process/matcher/scoring/similarity.py
"""
Similarity Scorer

Edit-distance similarity between two normalized keys.
Used by the match ranker for names that are neither exact nor substring
matches of a catalogue entry.
"""


def distance(a: str, b: str) -> int:
    """
    Levenshtein edit distance between two strings.

    Classic dynamic programming over a (len(a)+1) x (len(b)+1) table,
    unit cost for insert, delete and substitute.

    Args:
        a: First string
        b: Second string

    Returns:
        Minimum number of single-character edits turning a into b
    """
    rows = len(a) + 1
    cols = len(b) + 1
    table = [[0] * cols for _ in range(rows)]

    for i in range(rows):
        table[i][0] = i
    for j in range(cols):
        table[0][j] = j

    for i in range(1, rows):
        for j in range(1, cols):
            if a[i - 1] == b[j - 1]:
                table[i][j] = table[i - 1][j - 1]
            else:
                table[i][j] = 1 + min(
                    table[i - 1][j - 1],  # substitution
                    table[i][j - 1],      # insertion
                    table[i - 1][j],      # deletion
                )

    return table[rows - 1][cols - 1]


def similarity(a: str, b: str) -> float:
    """
    Similarity in [0, 1] derived from edit distance.

    1 - distance / max(len(a), len(b)); 1.0 when both strings are empty.

    Args:
        a: First string (callers pass the query key first)
        b: Second string

    Returns:
        Similarity ratio
    """
    longest = max(len(a), len(b))
    if longest == 0:
        return 1.0
    return 1.0 - distance(a, b) / longest


class LevenshteinScorer:
    """
    Injectable wrapper around distance() and similarity().

    Example:
        scorer = LevenshteinScorer()
        scorer.similarity("APEARANCEDESCRPTION", "APPEARANCEDESCRIPTION")
    """

    def distance(self, a: str, b: str) -> int:
        return distance(a, b)

    def similarity(self, a: str, b: str) -> float:
        return similarity(a, b)


__all__ = [
    'distance',
    'similarity',
    'LevenshteinScorer',
]
