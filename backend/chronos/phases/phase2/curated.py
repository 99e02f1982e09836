"""
Curated fallback sources, used when no live backend returns anything.

Deterministic: the same query always yields the same list, so a non-empty
query never ends up with zero sources.
"""

from chronos.phases.phase2.schemas import Source

SLANG_TERMS = (
    "lol", "omg", "brb", "asl", "thirst trap", "fire", "lit", "fam", "fr", "ngl",
    "smh", "tbh", "idk", "nvm", "pwned", "noob", "git gud", "bump",
)

INTERNET_SLANG_URL = "https://en.wikipedia.org/wiki/Internet_slang"
KNOW_YOUR_MEME_URL = "https://knowyourmeme.com/memes/cultures/slang"
URBAN_DICTIONARY_URL = "https://www.urbandictionary.com/"
DICTIONARY_ACRONYMS_URL = "https://www.dictionary.com/e/acronyms/"


def find_slang_terms(query: str) -> list[str]:
    """Vocabulary terms contained in the query, in vocabulary order."""
    lower_query = (query or "").lower()
    return [term for term in SLANG_TERMS if term in lower_query]


def generate_curated_sources(query: str, search_type: str = "main") -> list[Source]:
    found_terms = find_slang_terms(query)
    sources: list[Source] = []

    for term in found_terms:
        sources.append(
            Source(
                title=f"{term.upper()} - Internet Slang",
                url=INTERNET_SLANG_URL,
                snippet=f'Comprehensive information about "{term}" and other internet slang terms, their origins, and usage.',
                credibility=5,
                relevance_reason="Authoritative encyclopedia entry on internet slang",
            )
        )

    if found_terms:
        sources.append(
            Source(
                title="Internet Slang and Memes - Know Your Meme",
                url=KNOW_YOUR_MEME_URL,
                snippet="Database of internet culture, memes, and slang terms with detailed histories and usage examples.",
                credibility=5,
                relevance_reason="Complete cultural context and slang history",
            )
        )

    sources.append(
        Source(
            title="Urban Dictionary - Internet Slang Definitions",
            url=URBAN_DICTIONARY_URL,
            snippet="User-generated dictionary for slang words and phrases, including modern internet language.",
            credibility=3,
            relevance_reason="User-generated slang definitions and examples",
        )
    )
    sources.append(
        Source(
            title="Internet Abbreviations - Dictionary.com",
            url=DICTIONARY_ACRONYMS_URL,
            snippet="Official dictionary resource for internet abbreviations, acronyms, and modern language.",
            credibility=5,
            relevance_reason="Authoritative dictionary definitions",
        )
    )
    return sources
