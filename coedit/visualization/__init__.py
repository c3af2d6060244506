"""Visualization module."""

from coedit.visualization.charts import ChartGenerator
from coedit.visualization.report import ReportGenerator

__all__ = ["ChartGenerator", "ReportGenerator"]
