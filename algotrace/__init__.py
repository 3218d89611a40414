"""algotrace — deterministic, replayable algorithm traces with per-language line mapping."""

from .api import (  # noqa: F401
    generate_trace,
    trace_to_dicts,
    dump_trace,
    resolve_lines,
    build_frames,
)
from .errors import InvalidInputError  # noqa: F401
from .line_mapping import LineMappingRegistry, build_default_registry  # noqa: F401
from .playback import PlaybackController, PlaybackFrame  # noqa: F401
