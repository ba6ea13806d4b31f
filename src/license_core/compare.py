"""
license_core/compare.py

Normalizing comparison of license texts.

Two license texts are equivalent when they differ only in formatting:
whitespace, case, markup, punctuation, typographic quotes and dashes,
template markers and a few common spelling variants.
"""

from __future__ import annotations

import re
import unicodedata

_OPTIONAL_MARKER_RE = re.compile(r"<<\s*(?:beginOptional|endOptional)[^>]*>>", re.IGNORECASE)
_VAR_MARKER_RE = re.compile(r"<<\s*var\s*;(?P<body>.*?)>>", re.IGNORECASE | re.DOTALL)
_VAR_ORIGINAL_RE = re.compile(r"original\s*=\s*(?P<original>.*?)(?:;\s*\w+\s*=|$)", re.DOTALL)
_TAG_RE = re.compile(r"<[^<>]+>")
_PUNCT_RE = re.compile(r"[^\w\s]+")
_WS_RE = re.compile(r"\s+")

_CHAR_REPLACEMENTS = {
    "\u2018": "'",
    "\u2019": "'",
    "\u201a": "'",
    "\u201b": "'",
    "\u201c": '"',
    "\u201d": '"',
    "\u201e": '"',
    "\u2010": "-",
    "\u2011": "-",
    "\u2012": "-",
    "\u2013": "-",
    "\u2014": "-",
    "\u2015": "-",
    "\u2022": " ",
    "\u00a9": "(c)",
}

# Spelling variants treated as the same word.
_EQUIVALENT_WORDS = {
    "licence": "license",
    "licences": "licenses",
    "licenced": "licensed",
    "licencing": "licensing",
    "acknowledgement": "acknowledgment",
    "per cent": "percent",
    "sublicence": "sublicense",
    "noncommercial": "non commercial",
}
_VARIANT_RE = re.compile(r"\b(?:" + "|".join(map(re.escape, _EQUIVALENT_WORDS)) + r")\b")


def _replace_var(match: re.Match[str]) -> str:
    original = _VAR_ORIGINAL_RE.search(match.group("body"))
    return original.group("original") if original else " "


def normalize_license_text(text: str | None) -> str:
    """Reduce license text to a canonical token string."""
    if not text:
        return ""
    out = _OPTIONAL_MARKER_RE.sub(" ", text)
    out = _VAR_MARKER_RE.sub(_replace_var, out)
    out = _TAG_RE.sub(" ", out)
    out = unicodedata.normalize("NFKC", out)
    out = "".join(_CHAR_REPLACEMENTS.get(ch, ch) for ch in out)
    out = out.lower()
    out = _PUNCT_RE.sub(" ", out)
    out = _WS_RE.sub(" ", out).strip()
    if not out:
        return ""
    return _VARIANT_RE.sub(lambda m: _EQUIVALENT_WORDS[m.group(0)], out)


def is_license_text_equivalent(lhs: str | None, rhs: str | None) -> bool:
    """Return True when both texts normalize to the same token sequence."""
    return normalize_license_text(lhs) == normalize_license_text(rhs)
