"""tmuxpick: tmux session picker with agent pane attribution."""

__version__ = "0.3.0"
