# rxpipe/logging/tags.py
"""
Subsystem tags prefixed to log messages.

Changing a tag here updates it project-wide.
"""

PIPE = "[PIPE]"
SPLITTER = "[SPLITTER]"
EXTRACTOR = "[EXTRACTOR]"
RENDERER = "[RENDERER]"
REPLACER = "[REPLACER]"
RUNNER = "[RUNNER]"
IO = "[IO]"
CONFIG = "[CONFIG]"
CLI = "[CLI]"
