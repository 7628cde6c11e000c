"""
Search trigger: decide whether a model reply admits it lacks the information.

Plain case-insensitive substring matching. False positives (a phrase used in
passing) and false negatives (a refusal worded differently) are accepted.
"""

SEARCH_TRIGGER_PHRASES: tuple[str, ...] = (
    "search:",
    "i don't have access",
    "i do not have access",
    "i'm unable to browse",
    "i can't browse",
    "i cannot browse",
    "unable to access",
    "there is no information",
    "no information available",
    "no knowledge of",
    "unable to provide",
    "can't find",
    "don't know",
    "cannot retrieve",
    "sorry, i don't have",
    "no data available",
)


def should_augment(reply: str | None) -> bool:
    """True when the lower-cased reply contains any trigger phrase."""
    if not reply or not isinstance(reply, str):
        return False
    lower = reply.lower()
    return any(phrase in lower for phrase in SEARCH_TRIGGER_PHRASES)
