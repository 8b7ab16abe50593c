"""Plain-text plagiarism analysis reports."""

from collections.abc import Sequence
from datetime import datetime
from enum import Enum

from originality.scoring.models import MatchedSource

LOW_THRESHOLD = 10.0
HIGH_THRESHOLD = 25.0
TIMESTAMP_FORMAT = "%d.%m.%Y %H:%M:%S"

_RULE = "=" * 65
_SECTION = "-" * 65


class Severity(str, Enum):
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"


RECOMMENDATIONS: dict[Severity, str] = {
    Severity.LOW: "The document appears to be original. No action required.",
    Severity.MEDIUM: "Some similarities detected. Manual review recommended.",
    Severity.HIGH: "HIGH PLAGIARISM DETECTED! This document requires immediate review.",
}


def classify_severity(score: float) -> Severity:
    if score >= HIGH_THRESHOLD:
        return Severity.HIGH
    if score >= LOW_THRESHOLD:
        return Severity.MEDIUM
    return Severity.LOW


def _banner(title: str) -> list[str]:
    return [_RULE, title.center(65).rstrip(), _RULE]


def _section(title: str) -> list[str]:
    return ["", _SECTION, title, _SECTION]


class ReportRenderer:
    """Renders score results into the stored report text.

    Output depends only on the arguments; the caller supplies the timestamp.
    """

    def render(
        self,
        provider: str,
        score: float,
        word_count: int,
        sources: Sequence[MatchedSource],
        is_fallback: bool,
        timestamp: datetime,
        notes: Sequence[str] = (),
    ) -> str:
        severity = classify_severity(score)
        lines = _banner("PLAGIARISM ANALYSIS REPORT")
        lines += [
            "",
            f"Provider: {provider}{' (DEMO MODE)' if is_fallback else ''}",
            f"Generated: {timestamp.strftime(TIMESTAMP_FORMAT)}",
            f"Word Count: {word_count} words",
            f"Overall Similarity Score: {score:.2f}%",
            "",
            f"Severity Level: {severity.value}",
        ]

        lines += _section("SUMMARY")
        lines += [
            f"The document was analyzed using {provider}.",
            "The system compared the submitted text against documents in "
            f"{'our demo' if is_fallback else 'the'} database.",
            "",
            "Similarity Score Breakdown:",
            "- 0-10%:   Acceptable (likely original work)",
            "- 10-25%:  Warning (requires review)",
            "- 25-100%: High risk (likely plagiarized)",
            "",
            f"Current Score: {score:.2f}% - {severity.value} Risk",
        ]

        lines += _section("MATCHING SOURCES")
        lines += self._source_lines(sources)

        if notes:
            lines += _section("NOTES")
            lines += [f"- {note}" for note in notes]

        lines += _section("RECOMMENDATION")
        lines.append(RECOMMENDATIONS[severity])
        lines.append("")
        if severity is Severity.LOW:
            lines += [
                "This submission has passed the plagiarism check.",
                "No further action required.",
            ]
        else:
            lines += [
                "ACTION REQUIRED:",
                "- Review highlighted sections manually",
                "- Check citations and references",
                "- Verify student's original work",
                "- Consider discussion with student",
            ]

        lines += _section("DISCLAIMER")
        lines += [
            "This is an automated analysis. Human review is recommended",
            "for final determination. The score is calculated based on",
            "text similarity and may include properly cited sources.",
        ]
        if is_fallback:
            lines += [
                "",
                "DEMO MODE ACTIVE",
                "This report was generated using a local heuristic checker.",
                "To enable real plagiarism detection, configure a provider",
                "and its API key in the environment.",
            ]

        lines.append("")
        lines += _banner("END OF REPORT")
        return "\n".join(lines)

    def render_pending(self, provider: str, scan_id: str, timestamp: datetime) -> str:
        """Placeholder report for a scan whose result arrives asynchronously."""
        lines = _banner("PLAGIARISM SCAN SUBMITTED")
        lines += [
            "",
            f"Provider: {provider}",
            f"Scan ID: {scan_id}",
            "Status: PENDING",
            f"Submitted: {timestamp.strftime(TIMESTAMP_FORMAT)}",
            "",
            "The plagiarism scan has been submitted and is being processed.",
            "Results will be delivered by webhook notification.",
            "",
            "No similarity score is available yet. The final detailed report",
            "will be generated once the scan is complete.",
            "",
            _RULE,
        ]
        return "\n".join(lines)

    @staticmethod
    def _source_lines(sources: Sequence[MatchedSource]) -> list[str]:
        if not sources:
            return [
                "No significant matches found in the database.",
                "The content appears to be original.",
            ]
        lines: list[str] = []
        for index, source in enumerate(sources, start=1):
            lines += [
                f"{index}. {source.title or 'Unknown Source'}",
                f"   URL: {source.url}",
                f"   Similarity: {source.similarity_percent:.2f}%",
            ]
        return lines
