import logging

logger = logging.getLogger(__name__)

MIN_TERM_LENGTH = 3

# "+", "#" and a leading "." are kept so c++ and .net survive
WRAPPING_CHARS = "\"'()[]{}<>"
TRAILING_CHARS = ",;:!?."

STOP_WORDS = frozenset({
    # articles / conjunctions
    "the", "and", "but", "nor", "yet", "for", "either", "neither",
    # prepositions
    "about", "above", "across", "after", "against", "along", "among", "around",
    "at", "before", "behind", "below", "beneath", "beside", "between", "beyond",
    "by", "down", "during", "except", "from", "inside", "into", "near", "off",
    "onto", "out", "outside", "over", "per", "since", "than", "through",
    "throughout", "till", "toward", "towards", "under", "until", "upon",
    "via", "with", "within", "without",
    # pronouns / determiners
    "all", "any", "each", "every", "few", "her", "him", "his", "its", "many",
    "more", "most", "much", "our", "ours", "she", "some", "such", "that",
    "their", "them", "these", "they", "this", "those", "what", "which", "who",
    "whom", "whose", "you", "your",
    # auxiliaries and generic verbs
    "are", "been", "being", "can", "could", "did", "does", "doing", "done",
    "get", "got", "had", "has", "have", "having", "may", "might", "must",
    "shall", "should", "was", "were", "will", "would", "find", "show", "give",
    "want", "wants", "need", "needs", "needed", "looking", "seeking", "search",
    "searching", "require", "required", "requires", "hire", "hiring",
    # request filler
    "candidate", "candidates", "someone", "somebody", "person", "people",
    "please", "also", "just", "only", "very", "well", "good", "who's",
    "how", "when", "where", "why", "not", "too",
})


def _clean_token(raw: str) -> str:
    token = raw.lower().strip(WRAPPING_CHARS).rstrip(TRAILING_CHARS)
    return token.strip(WRAPPING_CHARS)


def extract_keywords(text: str) -> list[str]:
    """
    Reduce a sentence to the terms worth searching for.

    "Looking for a fleet manager with GPS tracking" ->
    ["fleet", "manager", "gps", "tracking"]
    """
    if not text:
        return []

    terms: list[str] = []
    seen: set[str] = set()
    for raw in text.split():
        token = _clean_token(raw)
        if len(token) < MIN_TERM_LENGTH or token in STOP_WORDS:
            continue
        if token in seen:
            continue
        seen.add(token)
        terms.append(token)

    logger.debug("Extracted %d keywords from '%s'", len(terms), text[:80])
    return terms


def keywords_or_query(text: str) -> list[str]:
    """Extracted keywords, or the raw text as a single term when nothing survives."""
    terms = extract_keywords(text)
    if terms:
        return terms
    stripped = (text or "").strip()
    return [stripped] if stripped else []
