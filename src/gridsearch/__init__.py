"""Grid-based shortest-path search with a steppable, animatable engine."""

__version__ = "0.1.0"
