"""tmux-sessionizer - pick or create tmux sessions with a fuzzy finder

Philosophy:
- Configuration declares where projects live; tmux says what is running
- Both are merged into one ranked list of candidates
- Minimal tmux operations to reach the chosen session

The CLI reads ~/.config/tmux/sessionizer.toml, lists live tmux sessions,
lets the user pick one in fzf and then attaches or switches to it.
"""

__version__ = "0.1.0"
__all__ = ["__version__"]
