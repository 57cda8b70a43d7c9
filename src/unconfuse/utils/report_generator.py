"""
Report Generation Module
Creates human-readable Markdown reports from decode results
"""

from datetime import datetime
from typing import List

from ..core.analyzer import ResolvedString

# Longer values are shortened in tables
PREVIEW_LENGTH = 80


def printable(text: str) -> str:
    """Escape control and non-printable characters as \\xHH / \\uHHHH"""
    return ''.join(c if c.isprintable() else _escape(c) for c in text)


def _escape(char: str) -> str:
    code = ord(char)
    return f'\\x{code:02x}' if code < 256 else f'\\u{code:04x}'


class ReportGenerator:
    """
    Generates Markdown reports from DecodeReport results

    Sections:
    - Header with input metadata
    - Summary counts
    - Recovered plaintexts
    - Unresolved literals
    - Malformed literals
    """

    def generate_markdown(self, report, title: str = "Decode") -> str:
        """
        Generate Markdown report

        Args:
            report: DecodeReport object
            title: Report title

        Returns:
            Markdown formatted report as string
        """
        sections = [self._generate_header(title, report), self._generate_summary(report)]

        if report.supported:
            resolved = [r for r in report.results if r.resolved]
            unresolved = [r for r in report.results if not r.resolved]
            sections.append(self._generate_resolved_section(resolved))
            if unresolved:
                sections.append(self._generate_unresolved_section(unresolved))
            if report.malformed:
                sections.append(self._generate_malformed_section(report.malformed))

        sections.append(self._generate_footer())
        return '\n\n'.join(sections)

    def _generate_header(self, title: str, report) -> str:
        """Generate report header"""
        return f"""# Unconfuse Report: {title}

**Generated**: {datetime.now().strftime('%Y-%m-%d %H:%M:%S')}
**Input**: `{report.source}`
**Status**: {report.status}
**Variant Level**: {report.level}
"""

    def _generate_summary(self, report) -> str:
        """Generate summary section"""
        if not report.supported:
            return ("## Summary\n\n"
                    "No obfuscator fingerprint was found. The input does not look like the "
                    "output of the supported obfuscator, so no literal was decoded.")

        resolved = sum(1 for r in report.results if r.resolved)
        default_codec = "base91" if report.level == 1 else "five_bit"
        return f"""## Summary

| Metric | Count |
|--------|-------|
| Candidate literals | {report.candidates_found} |
| Skipped (malformed) | {report.skipped} |
| Reported | {len(report.results)} |
| Resolved | {resolved} |

Default codec for undelimited literals: `{default_codec}`"""

    def _generate_resolved_section(self, results: List[ResolvedString]) -> str:
        """Generate table of ciphertext/plaintext pairs"""
        lines = ["## Recovered Strings", ""]
        if not results:
            lines.append("_No literal decoded to plausible text._")
            return '\n'.join(lines)

        lines.append("| # | Codec | Ciphertext | Plaintext | Score |")
        lines.append("|---|-------|------------|-----------|-------|")
        for i, result in enumerate(results, 1):
            lines.append(
                f"| {i} | {result.codec} | `{self._cell(result.ciphertext)}` "
                f"| `{self._cell(result.plaintext)}` | {result.confidence:.2f} |"
            )
        return '\n'.join(lines)

    def _generate_unresolved_section(self, results: List[ResolvedString]) -> str:
        """Generate list of literals kept as-is"""
        lines = ["## Unresolved Literals", ""]
        for result in results:
            lines.append(f"- `{self._cell(result.plaintext)}` ({result.codec}, score {result.decoded_score:.2f})")
        return '\n'.join(lines)

    def _generate_malformed_section(self, candidates) -> str:
        """Generate list of literals their codec rejected"""
        lines = ["## Malformed Literals", ""]
        for candidate in candidates:
            lines.append(f"- `{self._cell(candidate.text)}` ({candidate.method})")
        return '\n'.join(lines)

    def _generate_footer(self) -> str:
        return "---\n\n*Generated by Unconfuse. Decoding is heuristic; verify results before relying on them.*"

    @staticmethod
    def _cell(text: str) -> str:
        """Make a value safe for a Markdown table cell"""
        value = printable(text).replace('|', '\\|').replace('`', "'")
        if len(value) > PREVIEW_LENGTH:
            value = value[:PREVIEW_LENGTH] + '...'
        return value
