"""
Interactive 3D scatter plot of the word layout.
Uses Plotly for rotation, zoom and hover.
"""

from typing import Optional

import pandas as pd
import plotly.graph_objects as go

import config


class ScatterPlotBuilder:
    """
    Builds Plotly 3D scatter plots for the word embedding layout.

    Features:
    - Seed and user-added words in distinct colors
    - Highlight the active word and its nearest neighbors
    - Word labels drawn next to every point
    """

    # Keyed by source or role
    COLORS = {
        "seed": "#6366f1",        # Indigo
        "added": "#f59e0b",       # Amber
        "active": "#10b981",      # Emerald
        "neighbor": "#f97316",    # Orange
        "default": "#94a3b8",     # Slate
    }

    # Larger, more opaque markers for highlighted roles
    MARKERS = {
        "seed": dict(size=5, opacity=0.7),
        "added": dict(size=7, opacity=0.9),
        "neighbor": dict(size=9, opacity=0.95),
        "active": dict(size=12, opacity=1.0),
    }

    def __init__(
        self,
        height: int = config.PLOT_HEIGHT,
        width: int = config.PLOT_WIDTH,
        show_labels: bool = True
    ):
        """
        Configure figure size and labelling.

        Args:
            height: Plot height in pixels
            width: Plot width in pixels
            show_labels: Whether to draw word labels next to points
        """
        self.height = height
        self.width = width
        self.show_labels = show_labels

    def build(self, df: pd.DataFrame) -> go.Figure:
        """
        Build the 3D scatter plot.

        Args:
            df: Frame from WordSpace.to_frame() (word, source, x, y, z, role, distance)

        Returns:
            Plotly figure; rows without coordinates are skipped
        """
        df = df.dropna(subset=["x", "y", "z"])

        fig = go.Figure()

        base_df = df[df["role"] == "word"]
        for source in base_df["source"].unique():
            source_df = base_df[base_df["source"] == source]
            fig.add_trace(self._trace(
                source_df,
                name=f"{source.title()} words",
                color=self.get_color_for_source(source),
                marker_settings=self.MARKERS.get(source, self.MARKERS["seed"]),
            ))

        neighbor_df = df[df["role"] == "neighbor"].sort_values("distance")
        if not neighbor_df.empty:
            fig.add_trace(self._trace(
                neighbor_df,
                name="Nearest neighbors",
                color=self.COLORS["neighbor"],
                marker_settings=self.MARKERS["neighbor"],
                outline=1,
            ))

        active_df = df[df["role"] == "active"]
        if not active_df.empty:
            fig.add_trace(self._trace(
                active_df,
                name="Selected",
                color=self.COLORS["active"],
                marker_settings=self.MARKERS["active"],
                outline=2,
            ))

        self._apply_layout(fig)
        return fig

    def _trace(
        self,
        df: pd.DataFrame,
        name: str,
        color: str,
        marker_settings: dict,
        outline: Optional[int] = None
    ) -> go.Scatter3d:
        marker = dict(
            color=color,
            size=marker_settings.get("size", 5),
            opacity=marker_settings.get("opacity", 0.7),
        )
        if outline:
            marker["line"] = dict(color="white", width=outline)

        return go.Scatter3d(
            x=df["x"],
            y=df["y"],
            z=df["z"],
            mode="markers+text" if self.show_labels else "markers",
            marker=marker,
            text=df["word"].tolist(),
            textposition="top center",
            textfont=dict(color="#e2e8f0", size=11),
            hovertext=self._build_hover_text(df),
            hovertemplate="%{hovertext}<extra></extra>",
            name=name,
            customdata=df["index"].values,
        )

    def _apply_layout(self, fig: go.Figure) -> None:
        axis = dict(visible=True, showticklabels=False, title="", zeroline=False,
                    gridcolor="rgba(148, 163, 184, 0.15)")
        fig.update_layout(
            template="plotly_dark",
            height=self.height,
            width=self.width,
            paper_bgcolor="rgba(0,0,0,0)",
            scene=dict(
                bgcolor="#0d1117",
                xaxis=axis,
                yaxis=axis,
                zaxis=axis,
                aspectmode="cube",
            ),
            legend=dict(orientation="h", y=1.02, x=0, font=dict(size=10)),
            margin=dict(l=0, r=0, t=24, b=0),
            uirevision="word-space",
        )

    def _build_hover_text(self, df: pd.DataFrame) -> list[str]:
        """'<b>word</b> #index', tagged when user-added, with distance for neighbors."""
        labels = []
        for word, index, source, distance in zip(df["word"], df["index"], df["source"], df["distance"]):
            label = f"<b>{word}</b> #{index}"
            if source == config.SOURCE_ADDED:
                label += " <i>(added)</i>"
            if pd.notna(distance):
                label += f"<br>cosine distance {distance:.3f}"
            labels.append(label)
        return labels

    def get_color_for_source(self, source: str) -> str:
        """Get the color associated with a source type."""
        return self.COLORS.get(source, self.COLORS["default"])
