"""Adapters around the external uncss tool."""

from stylepruner.infrastructure.analysis.config_serializer import serialized_config
from stylepruner.infrastructure.analysis.uncss_analyzer import UncssAnalyzer

__all__ = ["serialized_config", "UncssAnalyzer"]
