"""Extract cross-reference annotations such as ``variant of 個|个[ge4]``.

Dictionary glosses phrase cross-references many ways. The whole-gloss
parser first replaces up to two Han links with the placeholders ``SUB`` and
``ESC``, rewrites known phrasings into one canonical shape with
``XREF_REWRITES``, and then matches a single structural grammar.
"""

from __future__ import annotations

from dataclasses import replace
import logging
import re

from sinolex.gloss.common import (
    HAN_LINK_RE,
    RewriteRule,
    gloss_pinyin,
    join_residual,
)
from sinolex.models import CrossReference, XrefTarget

logger = logging.getLogger(__name__)

SUB = "\x1a"
ESC = "\x1b"
MAX_TARGETS = 2

INNER_PARENTHETICAL_RE = re.compile(r"\(([^()]*)\)")


def _rule(name: str, pattern: str, replacement: str) -> RewriteRule:
    return RewriteRule(
        name=name,
        pattern=re.compile(pattern, re.IGNORECASE | re.DOTALL),
        replacement=replacement,
    )


XREF_REWRITES = (
    _rule(
        "abbr-for-described",
        rf"^\s*abbr\.\s+for\s+([^{SUB}{ESC},\s](?:[^{SUB}{ESC},]*[^{SUB}{ESC},\s])?),?"
        rf"\s*{SUB}\s*((?:,\s*[^{SUB}{ESC}]*)?)\s*$",
        f"abbr. for {SUB}, " + r"\1\2",
    ),
    _rule("tw-abbr", r"^\s*\(Tw\)\s+abbr\.\s+for\s+(.*)$", r"Taiwan abbr. for \1"),
    _rule("tw-variant", r"^\s*\(Tw\)\s+variant\s+of\s+(.*)$", r"Taiwan variant of \1"),
    _rule("taiwanese-term", r"^\s*Taiwanese\s+term\s+for\s+(.*)$", r"Taiwan variant of \1"),
    _rule("old-form", r"^\s*old\s+form\s+of\s+modern\s+(.*)$", r"old variant of \1"),
    _rule(
        "dialectal-equivalent",
        r"^\s*dialectal\s+equivalent\s+of\s+(.*)$",
        r"dialect variant of \1",
    ),
    _rule("equivalent-of", r"^\s*equivalent\s+of\s+(.*)$", r"equivalent to \1"),
    _rule("abbr-of", r"^\s*abbr\.\s+of\s+(.*)$", r"abbr. for \1"),
    _rule(
        "equivalent-colon",
        rf"^\s*equivalent\s+to\s+{SUB}\s*:(.*)$",
        f"equivalent to {SUB}, " + r"\1",
    ),
    _rule(
        "used-in-taiwan",
        rf"^\s*used\s+for\s+{SUB}\s*\(in\s+Taiwan\)\s*$",
        f"Taiwan variant of {SUB}",
    ),
    _rule(
        "written-see-also",
        rf"^\s*also\s+written\s+{SUB}\s*,?\s*see\s+also\s+{ESC}\s*$",
        f"also written {SUB} and {ESC}",
    ),
    _rule("see-pair", rf"^\s*see\s+{SUB}\s*,?\s*{ESC}\s*$", f"see {SUB} and {ESC}"),
    _rule(
        "variant-pair-old",
        rf"^\s*variant\s+of\s+{SUB}\s+and\s+{ESC}\s*\(old\)\s*$",
        f"variant of {SUB} and {ESC}",
    ),
    _rule(
        "equivalent-either",
        rf"^\s*equivalent\s+to\s+either\s+{SUB}\s+or\s+{ESC}\s*$",
        f"equivalent to {SUB} and {ESC}",
    ),
    _rule(
        "trailing-abbr",
        rf"^\s*([^,]*),\s+abbr\.\s+(?:of|for)\s+{SUB}\s*$",
        f"abbr. for {SUB}, " + r"\1",
    ),
    _rule(
        "xinjiang-singapore",
        rf"^\s*abbr\.\s+for\s+Xinjiang\s+{SUB}\s+or\s+Singapore\s+{ESC}\s*$",
        f"abbr. for {SUB} and {ESC}, Xinjiang or Singapore (resp.)",
    ),
    _rule(
        "slang-lottery",
        rf"^\s*\(slang\)\s+alternative\s+term\s+for\s+{SUB},\s+lottery\s*$",
        f"slang variant of {SUB}, lottery",
    ),
)

XREF_GRAMMAR_RE = re.compile(
    r"\s*(erhua|old|archaic|dialect|euphemistic|Taiwan|colloquial|slang)?"
    r"\s*(variant|contraction|used|abbr\.|see|equivalent|same|also|contrasted)"
    r"\s*(of|in|for|to|also|as|written|with)?"
    rf"\s*{SUB}\s*(and\s*{ESC})?,?(.*)",
    re.IGNORECASE | re.DOTALL,
)


def _parse_target(link: str) -> XrefTarget | None:
    match = HAN_LINK_RE.fullmatch(link)
    if not match:
        return None
    trad, simp, bracket, raw_pinyin = match.groups()
    pinyin = None
    if bracket is not None:
        pinyin = gloss_pinyin(raw_pinyin)
        if pinyin is None:
            return None
    return XrefTarget(trad=trad, simp=simp or trad, pinyin=pinyin)


def _whole_gloss_xref(gloss: str) -> CrossReference | None:
    text = gloss.strip()
    if SUB in text or ESC in text:
        return None

    links = list(HAN_LINK_RE.finditer(text))
    if not links or len(links) > MAX_TARGETS:
        return None
    for link, placeholder in reversed(list(zip(links, (SUB, ESC)))):
        text = text[: link.start()] + placeholder + text[link.end() :]

    for rule in XREF_REWRITES:
        rewritten = rule.apply(text)
        if rewritten != text:
            logger.debug("Cross-reference rewrite '%s' applied to '%s'", rule.name, gloss)
        text = rewritten

    match = XREF_GRAMMAR_RE.fullmatch(text)
    if not match:
        return None
    descriptor, relation, connective, second, suffix = match.groups()
    if (2 if second else 1) != len(links):
        return None
    if SUB in suffix or ESC in suffix:
        return None

    targets: list[XrefTarget] = []
    for link in links:
        target = _parse_target(link.group(0))
        if target is None:
            return None
        targets.append(target)

    if descriptor:
        descriptor = "Taiwan" if descriptor.lower() == "taiwan" else descriptor.lower()
    relation = f"{relation.lower()} {(connective or '').lower()}".strip()
    return CrossReference(
        descriptor=descriptor or None,
        relation=relation,
        targets=tuple(targets),
        suffix=suffix.strip() or None,
        residual="",
    )


def extract_xref(gloss: str) -> CrossReference | None:
    """Find a cross-reference annotation in a gloss.

    Parentheticals without nested parentheses are tried first, in order;
    the first one holding a cross-reference wins and is removed from the
    residual. Otherwise the whole gloss must be a cross-reference.

    Args:
        gloss: One gloss, e.g. ``see also 東西|东西[dong1 xi5]``.

    Returns:
        The cross-reference with its residual prose, or ``None``.
    """

    for match in INNER_PARENTHETICAL_RE.finditer(gloss):
        inner = extract_xref(match.group(1))
        if inner is not None:
            residual = join_residual(gloss[: match.start()], gloss[match.end() :])
            return replace(inner, residual=residual)
    return _whole_gloss_xref(gloss)
