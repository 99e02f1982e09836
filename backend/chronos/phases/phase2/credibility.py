"""
Domain credibility tiers for discovered sources.

Matching is case-insensitive and works on the URL host: a domain matches when
the host equals it or is a subdomain of it ("www.urbandictionary.com" is not
"dictionary.com"). Entries starting with "." (".edu", ".gov") are host
suffixes. Tiers are checked in order; the first that matches decides the score.
"""

from urllib.parse import urlparse

# 5: encyclopedia, dictionaries, slang-culture reference
TIER_1_DOMAINS = ("wikipedia.org", "dictionary.com", "knowyourmeme.com", "merriam-webster.com")
# 4: archives, encyclopedia alternates, academic/government
TIER_2_DOMAINS = ("archive.org", "britannica.com", ".edu", ".gov")
# 3: large general-interest publishing/community platforms
TIER_3_DOMAINS = ("reddit.com", "medium.com", "forbes.com", "theverge.com")

DEFAULT_CREDIBILITY = 2

# (domains, reason); first match wins
_RELEVANCE_REASONS = (
    (("wikipedia.org",), "Comprehensive encyclopedia entry with historical context"),
    (("dictionary.com", "merriam-webster.com"), "Authoritative dictionary definition"),
    (("knowyourmeme.com",), "Complete cultural context and meme history"),
    (("urbandictionary.com",), "User-generated slang definitions"),
    (("archive.org",), "Historical archive of internet content"),
    ((".edu",), "Academic source"),
)


def _host(url: str) -> str:
    """Lower-cased host without port or credentials; "" when the URL has none."""
    try:
        return (urlparse((url or "").strip().lower()).hostname or "").rstrip(".")
    except ValueError:
        return ""


def _host_matches(host: str, domain: str) -> bool:
    if not host:
        return False
    if domain.startswith("."):
        return host.endswith(domain)
    return host == domain or host.endswith("." + domain)


def _matches_any(host: str, domains) -> bool:
    return any(_host_matches(host, d) for d in domains)


def calculate_credibility(url: str) -> int:
    host = _host(url)
    if _matches_any(host, TIER_1_DOMAINS):
        return 5
    if _matches_any(host, TIER_2_DOMAINS):
        return 4
    if _matches_any(host, TIER_3_DOMAINS):
        return 3
    return DEFAULT_CREDIBILITY


def relevance_reason(url: str, search_type: str = "main") -> str:
    host = _host(url)
    for domains, reason in _RELEVANCE_REASONS:
        if _matches_any(host, domains):
            return reason
    if search_type == "slang":
        return "Provides slang term definition"
    return "Relevant contextual information"


def score_source(url: str, title: str, snippet: str, search_type: str = "main") -> tuple[int, str]:
    """
    Score one discovered source.

    Returns (credibility 2-5, human-readable relevance reason). Only the URL
    host decides either value; title and snippet are accepted so callers can
    pass the full result triple.
    """
    return calculate_credibility(url), relevance_reason(url, search_type)
