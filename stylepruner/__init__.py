"""stylepruner: strips unused CSS from inline style blocks of a generated site.

Runs as a post-write hook of a static-site generator and delegates the actual
CSS usage analysis to the external `uncss` tool.
"""

__version__ = "0.1.0"
