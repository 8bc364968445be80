import re

from costkb.domain.resource.model.aggregate import Resource
from costkb.domain.search.model.value import Highlights, TextWeights

MAX_HIGHLIGHTS = 3
MAX_HIGHLIGHT_LENGTH = 150

_SENTENCE_BREAK = re.compile(r"[.!?]+")


def query_terms(query: str) -> list[str]:
    """Lowercased whitespace-separated terms; empty for a blank query."""
    return query.lower().split()


def _occurrences(text: str, term: str) -> int:
    return text.lower().count(term)


def relevance(resource: Resource, terms: list[str], weights: TextWeights) -> float:
    """Weighted term occurrences across title, description, tags and themes."""
    fields = (
        (resource.title, weights.title),
        (resource.description, weights.description),
        (" ".join(resource.tags), weights.tags),
        (" ".join(resource.themes), weights.themes),
    )
    return float(
        sum(weight * _occurrences(text, term) for text, weight in fields for term in terms)
    )


def matching_sentences(text: str | None, terms: list[str]) -> list[str]:
    if not text:
        return []
    matches: list[str] = []
    for sentence in _SENTENCE_BREAK.split(text):
        lower = sentence.lower()
        trimmed = sentence.strip()
        if trimmed and any(term in lower for term in terms):
            matches.append(trimmed[:MAX_HIGHLIGHT_LENGTH])
            if len(matches) == MAX_HIGHLIGHTS:
                break
    return matches


def extract_highlights(resource: Resource, terms: list[str]) -> Highlights:
    return Highlights(
        title=matching_sentences(resource.title, terms),
        description=matching_sentences(resource.description, terms),
    )
