from clawd_models.tui.renderers import ConfigConsoleUI

__all__ = ["ConfigConsoleUI"]
