"""Serializes an analysis configuration to a transient uncssrc file.

The file exists only while the `serialized_config` context is open. It is
read by the external tool and by nothing else.
"""

import json
import logging
import os
import tempfile
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Iterator, Mapping, Union

from stylepruner.domain.exceptions import SerializationError
from stylepruner.domain.models.analysis import AnalysisConfig

logger = logging.getLogger(__name__)

TEMPFILE_PREFIX = "uncssrc"
TEMPFILE_SUFFIX = ".json"


def _to_wire(config: Union[AnalysisConfig, Mapping[str, Any]]) -> Mapping[str, Any]:
    if isinstance(config, AnalysisConfig):
        return config.to_uncssrc()
    return config


@contextmanager
def serialized_config(config: Union[AnalysisConfig, Mapping[str, Any]]) -> Iterator[Path]:
    """Writes `config` as JSON to a uniquely named temp file and yields its path.

    The content is flushed before the path is yielded. The file is removed when
    the context exits, whether normally or through an exception; a failed
    removal is logged, not raised.

    Args:
        config: An AnalysisConfig, or a plain mapping already keyed for uncss.

    Raises:
        SerializationError: If the configuration holds non-JSON values.
    """
    try:
        payload = json.dumps(_to_wire(config))
    except (TypeError, ValueError) as e:
        raise SerializationError(f"Analysis configuration is not JSON-serializable: {e}") from e

    fd, raw_path = tempfile.mkstemp(prefix=TEMPFILE_PREFIX, suffix=TEMPFILE_SUFFIX)
    path = Path(raw_path)
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(payload)
            f.flush()
        logger.debug(f"Wrote uncssrc ({len(payload)} bytes) to {path}")
        yield path
    finally:
        try:
            path.unlink()
            logger.debug(f"Removed uncssrc {path}")
        except FileNotFoundError:
            logger.debug(f"uncssrc {path} was already gone")
        except OSError as e:
            logger.warning(f"Failed to remove temporary uncssrc {path}: {e}")
