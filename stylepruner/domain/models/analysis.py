"""Domain models for a single uncss analysis and a site rewrite pass."""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Optional, Tuple

from .common import (
    FileContent,
    FilePath,
    StyleRegion,
    ToolOutput,
    UNCSSRC_HTMLROOT,
    UNCSSRC_RAW,
)

# Spec-level key names, as exposed by AnalysisConfig.as_mapping()
ROOT_PATH_KEY = "root-path"
RAW_CONTENT_KEY = "raw-content"


@dataclass(frozen=True)
class AnalysisConfig:
    """Describes one analysis request handed to the external tool.

    Immutable once constructed. Lives only for the duration of one analysis
    call and is serialized to a transient uncssrc file.

    Attributes:
        root_path: Absolute path used as resolution base for analyzed files.
        raw_content: Literal CSS passed inline instead of read from disk.
        extra: Additional uncss options merged into the serialized form.
    """
    root_path: str
    raw_content: Optional[StyleRegion] = None
    extra: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        # Freeze the extra options together with the dataclass itself
        object.__setattr__(self, "extra", MappingProxyType(dict(self.extra)))

    def as_mapping(self) -> Dict[str, Any]:
        """Returns the configuration keyed by its domain names."""
        mapping: Dict[str, Any] = {ROOT_PATH_KEY: self.root_path}
        if self.raw_content is not None:
            mapping[RAW_CONTENT_KEY] = self.raw_content
        return mapping

    def to_uncssrc(self) -> Dict[str, Any]:
        """Returns the configuration keyed the way uncss expects it."""
        uncssrc: Dict[str, Any] = {k: v for k, v in self.extra.items() if v is not None}
        uncssrc[UNCSSRC_HTMLROOT] = self.root_path
        if self.raw_content is not None:
            uncssrc[UNCSSRC_RAW] = self.raw_content
        return uncssrc


@dataclass(frozen=True)
class AnalysisResult:
    """Raw outcome of one external tool invocation.

    The output is stdout interleaved with stderr, returned verbatim. Whether a
    non-zero exit status counts as failure is the caller's decision.
    """
    exit_status: int
    output: ToolOutput

    @property
    def succeeded(self) -> bool:
        return self.exit_status == 0


@dataclass
class RewriteTarget:
    """A file being rewritten: its path, original content and matched spans.

    Each span is the (start, end) of the captured region, delimiters excluded.
    """
    path: FilePath
    content: FileContent
    spans: List[Tuple[int, int]] = field(default_factory=list)

    def regions(self) -> List[StyleRegion]:
        return [StyleRegion(self.content[start:end]) for start, end in self.spans]

    def substitute(self, replacements: List[str]) -> FileContent:
        """Builds the new content, replacing each span with its own replacement."""
        if len(replacements) != len(self.spans):
            raise ValueError(
                f"Expected {len(self.spans)} replacements for {self.path}, got {len(replacements)}"
            )
        pieces: List[str] = []
        cursor = 0
        for (start, end), replacement in zip(self.spans, replacements):
            pieces.append(self.content[cursor:start])
            pieces.append(replacement)
            cursor = end
        pieces.append(self.content[cursor:])
        return FileContent("".join(pieces))


@dataclass
class RewriteFailure:
    """A file that could not be processed, with the error that stopped it."""
    path: FilePath
    error: BaseException

    def describe(self) -> str:
        return f"{self.path}: {type(self.error).__name__}: {self.error}"


@dataclass
class RewriteReport:
    """Aggregated outcome of a rewrite pass over an output directory."""
    rewritten: List[FilePath] = field(default_factory=list)
    skipped: List[FilePath] = field(default_factory=list)
    failures: List[RewriteFailure] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failures

    @property
    def total(self) -> int:
        return len(self.rewritten) + len(self.skipped) + len(self.failures)
