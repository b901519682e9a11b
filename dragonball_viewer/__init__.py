"""Dragon Ball character catalog viewer."""

from .config import ViewerSettings, load_settings

__all__ = ["ViewerSettings", "load_settings"]
