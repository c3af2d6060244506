"""Plotly chart generators."""

import plotly.graph_objects as go

from coedit.models import AnalysisResult


class ChartGenerator:
    """Generate Plotly charts from an analysis result.

    All chart methods return Plotly Figure objects that can be
    rendered to HTML, PNG, or displayed interactively.
    """

    # Color palette for charts
    COLORS = {
        "primary": "#2563eb",
        "success": "#16a34a",
        "danger": "#dc2626",
    }

    def __init__(self, result: AnalysisResult):
        """Initialize the chart generator.

        Args:
            result: AnalysisResult from CollaborationAnalyzer
        """
        self.result = result

    def similarity_heatmap(self) -> go.Figure:
        """Generate a developer x developer similarity heatmap.

        Only developers appearing in at least one reported pair are
        shown. The matrix is symmetric; the diagonal is left empty.

        Returns:
            Plotly Figure with similarity percentages
        """
        if not self.result.similarities:
            return self._empty_figure("No similar developers found")

        developers = []
        for pair in self.result.similarities:
            for name in (pair.developer_a, pair.developer_b):
                if name not in developers:
                    developers.append(name)

        index = {name: i for i, name in enumerate(developers)}
        matrix = [[None] * len(developers) for _ in developers]
        for pair in self.result.similarities:
            a = index[pair.developer_a]
            b = index[pair.developer_b]
            matrix[a][b] = pair.percent
            matrix[b][a] = pair.percent

        fig = go.Figure(
            data=[
                go.Heatmap(
                    z=matrix,
                    x=developers,
                    y=developers,
                    zmin=0,
                    zmax=100,
                    colorscale="Blues",
                    colorbar=dict(title="Similarity %"),
                    hovertemplate="%{x} / %{y}<br>%{z}%<extra></extra>",
                )
            ]
        )

        fig.update_layout(
            title="Developer Similarity",
            template="plotly_white",
            xaxis=dict(tickangle=-45),
        )

        return fig

    def contributor_chart(self) -> go.Figure:
        """Generate stacked bars of insertions and deletions.

        Returns:
            Plotly Figure for the top contributors
        """
        if not self.result.top_contributors:
            return self._empty_figure("No contributor data available")

        names = [c.developer for c in self.result.top_contributors]

        fig = go.Figure(
            data=[
                go.Bar(
                    name="Insertions",
                    x=names,
                    y=[c.insertions for c in self.result.top_contributors],
                    marker_color=self.COLORS["success"],
                    hovertemplate="%{x}<br>+%{y} lines<extra></extra>",
                ),
                go.Bar(
                    name="Deletions",
                    x=names,
                    y=[c.deletions for c in self.result.top_contributors],
                    marker_color=self.COLORS["danger"],
                    hovertemplate="%{x}<br>-%{y} lines<extra></extra>",
                ),
            ]
        )

        fig.update_layout(
            title="Top Contributors",
            xaxis_title="Developer",
            yaxis_title="Lines",
            barmode="group",
            template="plotly_white",
            xaxis=dict(tickangle=-45),
        )

        return fig

    def all_charts(self) -> list[go.Figure]:
        """Generate all available charts.

        Returns:
            List of Plotly Figures
        """
        return [self.contributor_chart(), self.similarity_heatmap()]

    def _empty_figure(self, message: str) -> go.Figure:
        """Create an empty figure with a message.

        Args:
            message: Message to display

        Returns:
            Empty Plotly Figure with centered message
        """
        fig = go.Figure()
        fig.add_annotation(
            text=message,
            xref="paper",
            yref="paper",
            x=0.5,
            y=0.5,
            showarrow=False,
            font=dict(size=16, color="#6b7280"),
        )
        fig.update_layout(
            template="plotly_white",
            xaxis=dict(showgrid=False, showticklabels=False, zeroline=False),
            yaxis=dict(showgrid=False, showticklabels=False, zeroline=False),
        )
        return fig
