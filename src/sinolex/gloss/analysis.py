"""Split dictionary definitions into glosses and annotate each gloss."""

from __future__ import annotations

import re

from sinolex.errors import RecordFormatError
from sinolex.gloss.citations import scan_citations
from sinolex.gloss.measures import extract_measures
from sinolex.gloss.pronunciation import extract_pronunciation
from sinolex.gloss.xref import extract_xref
from sinolex.models import GlossAnalysis

DEFINITION_EDGE_RE = re.compile(r"^[\s/]+|[\s/]+$")
SENSE_EDGE_RE = re.compile(r"^[\s;]+|[\s;]+$")
GLOSS_SEPARATOR_RE = re.compile(r"\s*;[\s;]*")


def split_definition(definition: str) -> list[list[str]]:
    """Split a slash-delimited definition into senses of ``;`` glosses.

    Args:
        definition: Text between the outer slashes of a dictionary line,
            e.g. ``to eat; to consume/to live on``.

    Returns:
        One list of trimmed, non-empty glosses per non-empty sense.

    Raises:
        RecordFormatError: If nothing remains after trimming.
    """

    trimmed = DEFINITION_EDGE_RE.sub("", definition)
    if not trimmed:
        raise RecordFormatError("Empty definition.")

    senses: list[list[str]] = []
    for component in trimmed.split("/"):
        component = SENSE_EDGE_RE.sub("", component)
        if not component:
            continue
        component = GLOSS_SEPARATOR_RE.sub(";", component)
        senses.append([gloss.strip() for gloss in component.split(";")])
    return senses


def analyze_gloss(gloss: str) -> GlossAnalysis:
    """Run the annotation scanners over one gloss.

    Measure words, alternate pronunciations and cross-references are tried in
    that order and the first match wins. Citations are scanned on the prose
    that remains.
    """

    measures = extract_measures(gloss)
    if measures is not None:
        return GlossAnalysis(
            gloss=gloss,
            residual=measures.residual,
            citations=scan_citations(measures.residual),
            measures=measures,
        )

    pronunciation = extract_pronunciation(gloss)
    if pronunciation is not None:
        return GlossAnalysis(
            gloss=gloss,
            residual=pronunciation.residual,
            citations=scan_citations(pronunciation.residual),
            pronunciation=pronunciation,
        )

    xref = extract_xref(gloss)
    if xref is not None:
        return GlossAnalysis(
            gloss=gloss,
            residual=xref.residual,
            citations=scan_citations(xref.residual),
            xref=xref,
        )

    return GlossAnalysis(gloss=gloss, residual=gloss, citations=scan_citations(gloss))
