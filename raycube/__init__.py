"""First-person raycasting maze game played on .cub scene files."""

__version__ = "0.1.0"