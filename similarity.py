"""
Approximate string comparison used for fuzzy hackathon name matching.
"""

from config import WINKLER_PREFIX_CAP, WINKLER_SCALING


def jaro_winkler(s1: str, s2: str) -> float:
    """
    Jaro-Winkler similarity between two strings.

    Symmetric, 1.0 for identical strings and 0.0 when either side is empty
    (and the other is not). Comparison is case sensitive; callers lower-case
    names before comparing them.

    Args:
        s1: First string
        s2: Second string

    Returns:
        Similarity in [0, 1]
    """
    if s1 == s2:
        return 1.0

    len1, len2 = len(s1), len(s2)
    if len1 == 0 or len2 == 0:
        return 0.0

    match_window = max(max(len1, len2) // 2 - 1, 0)
    s1_matches = [False] * len1
    s2_matches = [False] * len2

    matches = 0
    for i in range(len1):
        start = max(0, i - match_window)
        end = min(i + match_window + 1, len2)
        for j in range(start, end):
            if s2_matches[j] or s1[i] != s2[j]:
                continue
            s1_matches[i] = s2_matches[j] = True
            matches += 1
            break

    if matches == 0:
        return 0.0

    # Walk matched characters of both strings in order
    transpositions = 0
    k = 0
    for i in range(len1):
        if not s1_matches[i]:
            continue
        while not s2_matches[k]:
            k += 1
        if s1[i] != s2[k]:
            transpositions += 1
        k += 1

    jaro = (matches / len1 + matches / len2 + (matches - transpositions / 2) / matches) / 3

    prefix = 0
    for a, b in zip(s1[:WINKLER_PREFIX_CAP], s2[:WINKLER_PREFIX_CAP]):
        if a != b:
            break
        prefix += 1

    return jaro + prefix * WINKLER_SCALING * (1 - jaro)
