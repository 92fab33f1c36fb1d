# src/health/parser.py — v1
"""Turn the model's health assessment text into a HealthAnalysis.

The health prompt asks for four ``### HEADING`` sections. Replies that
follow it are parsed by heading; a reply with some headings but not all
four is unparsed. Replies without any heading fall back to the
legacy layout: four blank-line separated paragraphs in the order
prediction, risks, recommendations, severity. Anything else is returned
as an UnparsedHealthAnalysis rather than guessed at.
"""

from __future__ import annotations

import logging
import re

from petassist.health.models import (
    HealthAnalysis,
    Severity,
    StructuredHealthAnalysis,
    UnparsedHealthAnalysis,
)

logger = logging.getLogger(__name__)

_SECTION_ORDER = ("prediction", "risks", "recommendations", "severity")
_HEADINGS = {
    "PREDICTION": "prediction",
    "RISK FACTORS": "risks",
    "RECOMMENDATIONS": "recommendations",
    "SEVERITY": "severity",
}
_HEADING_RE = re.compile(
    r"^[ \t]*#{1,6}[ \t]*(PREDICTION|RISK FACTORS|RECOMMENDATIONS|SEVERITY)[ \t]*:?[ \t]*$",
    re.IGNORECASE | re.MULTILINE,
)
_PARAGRAPH_SPLIT_RE = re.compile(r"\n[ \t]*\n")
_ITEM_RE = re.compile(r"^\s*(?:[-*•]|\d+[.)])\s+")


def parse_health_analysis(text: str) -> HealthAnalysis:
    """Parse a model reply. Never raises."""
    sections = _split_by_headings(text)
    source = "delimited"
    if sections is not None and len(sections) < len(_SECTION_ORDER):
        logger.warning("Health analysis has %d of 4 headed sections", len(sections))
        return UnparsedHealthAnalysis(
            text=text,
            reason=f"expected 4 sections, found {len(sections)}",
        )
    if sections is None:
        sections = _split_by_paragraphs(text)
        source = "paragraphs"
    if sections is None:
        count = len(_paragraphs(text))
        logger.warning("Health analysis not parseable: %d paragraph(s)", count)
        return UnparsedHealthAnalysis(
            text=text,
            reason=f"expected 4 sections, found {count}",
        )

    return StructuredHealthAnalysis(
        prediction=sections["prediction"].strip(),
        risks=extract_items(sections["risks"]),
        recommendations=extract_items(sections["recommendations"]),
        severity=infer_severity(sections["severity"]),
        source=source,  # type: ignore[arg-type]
    )


def infer_severity(text: str) -> Severity:
    """'high' wins over 'moderate'; anything else is Low."""
    lowered = text.lower()
    if "high" in lowered:
        return "High"
    if "moderate" in lowered:
        return "Moderate"
    return "Low"


def extract_items(section: str) -> list[str]:
    """Bulleted or numbered lines as items; plain lines if there are none."""
    lines = [line for line in section.splitlines() if line.strip()]
    items = [_ITEM_RE.sub("", line).strip() for line in lines if _ITEM_RE.match(line)]
    if items:
        return items
    return [line.strip() for line in lines]


def _split_by_headings(text: str) -> dict[str, str] | None:
    """Sections keyed by name; None when the reply has no headings at all."""
    matches = list(_HEADING_RE.finditer(text))
    if not matches:
        return None
    found: dict[str, str] = {}
    for i, match in enumerate(matches):
        end = matches[i + 1].start() if i + 1 < len(matches) else len(text)
        name = _HEADINGS[match.group(1).upper()]
        found.setdefault(name, text[match.end():end].strip())
    return found


def _split_by_paragraphs(text: str) -> dict[str, str] | None:
    paragraphs = _paragraphs(text)
    if len(paragraphs) < len(_SECTION_ORDER):
        return None
    if len(paragraphs) > len(_SECTION_ORDER):
        logger.warning(
            "Health analysis has %d paragraphs; ignoring all after the fourth",
            len(paragraphs),
        )
    return dict(zip(_SECTION_ORDER, paragraphs))


def _paragraphs(text: str) -> list[str]:
    return [p.strip() for p in _PARAGRAPH_SPLIT_RE.split(text.strip()) if p.strip()]
