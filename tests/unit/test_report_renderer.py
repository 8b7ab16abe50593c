from datetime import datetime

import pytest

from originality.report.renderer import ReportRenderer, Severity, classify_severity
from originality.scoring.models import MatchedSource


@pytest.fixture()
def renderer() -> ReportRenderer:
    return ReportRenderer()


def _render(renderer: ReportRenderer, timestamp: datetime, **overrides: object) -> str:
    options: dict[str, object] = {
        "provider": "RapidAPI",
        "score": 5.0,
        "word_count": 50,
        "sources": [],
        "is_fallback": False,
        "timestamp": timestamp,
    }
    options.update(overrides)
    return renderer.render(**options)  # type: ignore[arg-type]


class TestClassifySeverity:
    @pytest.mark.parametrize(
        ("score", "expected"),
        [
            (0.0, Severity.LOW),
            (9.99, Severity.LOW),
            (10.0, Severity.MEDIUM),
            (24.99, Severity.MEDIUM),
            (25.0, Severity.HIGH),
            (100.0, Severity.HIGH),
        ],
    )
    def test_buckets(self, score: float, expected: Severity) -> None:
        assert classify_severity(score) is expected


class TestReportRenderer:
    def test_header_fields(self, renderer: ReportRenderer, fixed_timestamp: datetime) -> None:
        report = _render(renderer, fixed_timestamp, score=12.346)

        assert "Provider: RapidAPI\n" in report
        assert "Generated: 14.03.2025 09:26:53" in report
        assert "Word Count: 50 words" in report
        assert "Overall Similarity Score: 12.35%" in report
        assert "Severity Level: Medium" in report

    def test_fallback_marks_demo_mode(
        self, renderer: ReportRenderer, fixed_timestamp: datetime
    ) -> None:
        report = _render(renderer, fixed_timestamp, provider="Mock Checker", is_fallback=True)

        assert "Provider: Mock Checker (DEMO MODE)" in report
        assert "DEMO MODE ACTIVE" in report

    def test_real_provider_has_no_demo_block(
        self, renderer: ReportRenderer, fixed_timestamp: datetime
    ) -> None:
        assert "DEMO MODE" not in _render(renderer, fixed_timestamp)

    def test_no_sources_message(self, renderer: ReportRenderer, fixed_timestamp: datetime) -> None:
        report = _render(renderer, fixed_timestamp)
        assert "No significant matches found in the database." in report

    def test_sources_listed_in_order(
        self, renderer: ReportRenderer, fixed_timestamp: datetime
    ) -> None:
        sources = [
            MatchedSource(url="https://a.example", similarity_percent=12.5, title="First"),
            MatchedSource(url="https://b.example", similarity_percent=3),
        ]
        report = _render(renderer, fixed_timestamp, score=30.0, sources=sources)

        assert "1. First\n   URL: https://a.example\n   Similarity: 12.50%" in report
        assert "2. Unknown Source\n   URL: https://b.example\n   Similarity: 3.00%" in report
        assert "No significant matches" not in report

    def test_recommendation_per_severity(
        self, renderer: ReportRenderer, fixed_timestamp: datetime
    ) -> None:
        low = _render(renderer, fixed_timestamp, score=2.0)
        high = _render(renderer, fixed_timestamp, score=80.0)

        assert "No action required." in low
        assert "ACTION REQUIRED:" not in low
        assert "HIGH PLAGIARISM DETECTED!" in high
        assert "ACTION REQUIRED:" in high

    def test_notes_section_only_when_given(
        self, renderer: ReportRenderer, fixed_timestamp: datetime
    ) -> None:
        assert "NOTES" not in _render(renderer, fixed_timestamp)
        report = _render(renderer, fixed_timestamp, notes=["Text could not be extracted."])
        assert "NOTES" in report
        assert "- Text could not be extracted." in report

    def test_disclaimer_and_footer(
        self, renderer: ReportRenderer, fixed_timestamp: datetime
    ) -> None:
        report = _render(renderer, fixed_timestamp)
        assert "This is an automated analysis. Human review is recommended" in report
        assert report.rstrip().endswith("=" * 65)
        assert "END OF REPORT" in report

    def test_output_is_deterministic(
        self, renderer: ReportRenderer, fixed_timestamp: datetime
    ) -> None:
        assert _render(renderer, fixed_timestamp) == _render(renderer, fixed_timestamp)

    def test_pending_report(self, renderer: ReportRenderer, fixed_timestamp: datetime) -> None:
        report = renderer.render_pending("Copyleaks", "scan-abc", fixed_timestamp)

        assert "PLAGIARISM SCAN SUBMITTED" in report
        assert "Scan ID: scan-abc" in report
        assert "Status: PENDING" in report
        assert "Submitted: 14.03.2025 09:26:53" in report
        assert "Similarity Score" not in report
