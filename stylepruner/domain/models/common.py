"""Defines common Value Objects used across the domain.

These objects represent simple values like file paths, file contents and
captured tool output, ensuring consistency and type safety.
"""

from typing import NewType

# === Core Value Objects ===

# Using NewType for semantic clarity, although they are strings at runtime.
FilePath = NewType("FilePath", str)          # Path to a file on disk
FileContent = NewType("FileContent", str)    # Full text content of a file
GlobPattern = NewType("GlobPattern", str)    # Glob relative to a root directory

# === Analysis Context ===
StyleRegion = NewType("StyleRegion", str)    # Text captured between <style> delimiters
ToolOutput = NewType("ToolOutput", str)      # Combined stdout/stderr of the external tool
ReducedCss = NewType("ReducedCss", str)      # Trimmed tool output, ready for substitution

# === Wire format keys (contract with uncss, must match exactly) ===
UNCSSRC_HTMLROOT = "htmlroot"
UNCSSRC_RAW = "raw"
