"""Report configuration.

One frozen ``ReportConfig`` travels through walk, collation and rendering.
"""

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class ReportConfig:
    """Walk, collation, and rendering options. Immutable after creation.

    All fields have sensible defaults. Override what you need::

        config = ReportConfig(delimiter="/", show_handlers=True)
    """

    # Collation
    delimiter: str = "|"  # Joins simplified path tokens into a bucket sort key

    # Naming
    app_name: str = "<app>"
    unnamed_router: str = "<unnamed>"

    # Rendering
    show_handlers: bool = False  # Include middleware/method handler names in text output
    show_empty_buckets: bool = True  # Buckets whose items carry no doc at all
    indent: str = "\t"
