"""Pure snapshot parsing and pane attribution, plus the tmux subprocess shell."""
