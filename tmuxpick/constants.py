"""Constants used across tmuxpick.

Internal values that are not user-configurable.
"""

# Process ancestry
INIT_PID = "1"
MAX_PARENT_DEPTH = 5  # parent hops from an agent pid to its pane shell

# Rendering
SEPARATOR_WIDTH = 40  # minimum visible width of preview separators
AGENT_GLYPH = "\U000f06a9"  # nf-md-robot

# Preview layout
PREVIEW_MAX_LINES = 40
PREVIEW_MIN_LINES = 20
PREVIEW_MIN_LINES_PER_PANE = 5
PREVIEW_HEADER_OVERHEAD = 3  # header line, separator, spare row

# tmux -F formats; parsers in tmuxpick.core.parsers depend on the field order
PANE_FORMAT = "#{session_name}:#{window_index}:#{pane_index}:#{pane_pid}"
SCOPED_PANE_FORMAT = "#{window_index}:#{pane_index}:#{pane_pid}"
SCOPED_WINDOW_FORMAT = "#{window_index}:#{window_name}:#{window_panes}"
SESSION_ACTIVITY_FORMAT = "#{session_activity}:#{session_name}"

# Subprocess timeouts (seconds)
SUBPROCESS_TIMEOUT_DEFAULT = 5.0
SUBPROCESS_TIMEOUT_QUICK = 2.0
