"""Perfect-maze generator and pymunk obstacle course with a collapsing win state."""

__version__ = "0.1.0"
