"""HTML report generator using Jinja2."""

from datetime import datetime
from pathlib import Path

from jinja2 import Environment, FileSystemLoader
import plotly.graph_objects as go

from coedit.models import AnalysisResult


class ReportGenerator:
    """Generate HTML reports from charts and analysis results.

    Uses Jinja2 templates to create self-contained HTML reports
    with embedded Plotly charts.
    """

    def __init__(
        self,
        figures: list[go.Figure],
        result: AnalysisResult,
        title: str = "Collaboration Report",
        source: str | None = None,
    ):
        """Initialize the report generator.

        Args:
            figures: List of Plotly Figure objects to include
            result: AnalysisResult for the summary and tables
            title: Report title
            source: Optional repository path or URL for display
        """
        self.figures = figures
        self.result = result
        self.title = title
        self.source = source

        template_dir = Path(__file__).parent / "templates"
        self.env = Environment(
            loader=FileSystemLoader(template_dir),
            autoescape=True,
        )

    def generate_html(self) -> str:
        """Generate HTML report with embedded charts.

        Returns:
            Complete HTML document as string
        """
        template = self.env.get_template("report.html")

        chart_htmls = [
            fig.to_html(full_html=False, include_plotlyjs=False)  # Template loads from CDN
            for fig in self.figures
        ]

        return template.render(
            title=self.title,
            source=self.source,
            summary=self._build_summary(),
            similarities=self.result.similarities,
            contributors=self.result.top_contributors,
            charts=chart_htmls,
            generated_at=datetime.now().strftime("%Y-%m-%d %H:%M:%S"),
        )

    def write_html(self, output_path: str | Path) -> Path:
        """Write HTML report to file.

        Args:
            output_path: Path to write the HTML file

        Returns:
            The path written
        """
        path = Path(output_path)
        path.write_text(self.generate_html())
        return path

    def to_json(self) -> dict:
        """Export report data as JSON-serializable dict.

        Returns:
            Dictionary with summary, results and chart specifications
        """
        data = {
            "title": self.title,
            "summary": self._build_summary(),
            "charts": [],
        }
        data.update(self.result.to_dict())

        for fig in self.figures:
            data["charts"].append(
                {
                    "title": fig.layout.title.text if fig.layout.title.text else None,
                    "spec": fig.to_json(),
                }
            )

        return data

    def _build_summary(self) -> dict[str, str]:
        """Build summary dictionary for template."""
        return {
            "Commits": f"{self.result.total_commits:,}",
            "Developers": f"{len(self.result.developers):,}",
            "Files": f"{self.result.total_files:,}",
            "Renames": f"{len(self.result.renames):,}",
            "Similar Pairs": f"{len(self.result.similarities):,}",
            "Threshold": f"{self.result.threshold:.0%}",
        }
