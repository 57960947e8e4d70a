"""routegen -- go_router navigation, resource constants and feature scaffolds for Flutter projects."""

__version__ = "0.1.0"
