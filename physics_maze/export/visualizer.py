"""Visualization and export for the physics maze game."""

import numpy as np
import matplotlib
matplotlib.use('Agg')  # Use non-interactive backend
import matplotlib.pyplot as plt
from matplotlib.patches import Circle, Polygon
from pathlib import Path
from typing import List, TYPE_CHECKING
from PIL import Image
import io

if TYPE_CHECKING:
    from ..model.state import FrameState, BodySnapshot


def body_corners(body: "BodySnapshot") -> np.ndarray:
    """Four world-space corners of a (possibly rotated) rectangle."""
    hw, hh = body.width / 2, body.height / 2
    local = np.array([[-hw, -hh], [hw, -hh], [hw, hh], [-hw, hh]])
    c, s = np.cos(body.angle), np.sin(body.angle)
    rotation = np.array([[c, -s], [s, c]])
    return local @ rotation.T + np.array([body.x, body.y])


class Visualizer:
    """
    Generates visual outputs using matplotlib.

    Supports:
    - Single PNG snapshots
    - Animated GIF compilation
    """

    # Color scheme
    COLORS = {
        'floor': '#ECF0F1',      # Light gray
        'won': '#DE2F32',        # Red background after the win
        'horizontal': '#E74C3C', # Red
        'vertical': '#27AE60',   # Green
        'boundary': '#2C3E50',   # Dark blue-gray
        'goal': '#3498DB',       # Blue
        'ball': '#F39C12',       # Orange
    }

    def __init__(self, width: float, height: float):
        self.width = width
        self.height = height
        self.frames: List[Image.Image] = []

    def _create_figure(self, state: "FrameState") -> plt.Figure:
        """Create matplotlib figure for state visualization."""
        aspect = self.width / self.height
        fig_height = 6
        fig_width = max(6, fig_height * aspect)
        fig, ax = plt.subplots(figsize=(fig_width, fig_height))

        background = self.COLORS['won' if state.outcome == 'won' else 'floor']
        ax.set_facecolor(background)

        for body in state.bodies:
            ax.add_patch(Polygon(
                body_corners(body), closed=True,
                facecolor=self.COLORS.get(body.kind, '#95A5A6'),
                edgecolor='none'
            ))

        ax.add_patch(Circle(
            (state.ball.x, state.ball.y), state.ball.width / 2,
            facecolor=self.COLORS['ball'], edgecolor='black', linewidth=0.5
        ))

        title = f'Step {state.step}'
        if state.outcome == 'won':
            title += ' | You won!'
        ax.set_title(title)

        # Screen coordinates: y grows downward
        margin = 0.02 * max(self.width, self.height)
        ax.set_xlim(-margin, self.width + margin)
        ax.set_ylim(self.height + margin, -margin)
        ax.set_aspect('equal')
        ax.set_xticks([])
        ax.set_yticks([])

        plt.tight_layout()
        return fig

    def buffer_frame(self, state: "FrameState") -> None:
        """Store frame for GIF generation."""
        fig = self._create_figure(state)

        # Convert to PIL Image
        buf = io.BytesIO()
        fig.savefig(buf, format='png', dpi=80)
        buf.seek(0)
        img = Image.open(buf).copy()
        self.frames.append(img)
        buf.close()
        plt.close(fig)

    def save_snapshot(self, state: "FrameState", output_path: Path) -> None:
        """Save single PNG image of current state."""
        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        fig = self._create_figure(state)
        fig.savefig(output_path, dpi=150, bbox_inches='tight')
        plt.close(fig)

    def generate_gif(self, output_path: Path, fps: int = 10) -> None:
        """Compile buffered frames into animated GIF."""
        if not self.frames:
            return

        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        duration = int(1000 / fps)

        self.frames[0].save(
            output_path,
            save_all=True,
            append_images=self.frames[1:],
            duration=duration,
            loop=0
        )
