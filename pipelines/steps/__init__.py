# Namespace for pipeline steps
from .locate_sources import LocateSources, EmptyExportError  # noqa: F401
from .parse_sources import ParseSources  # noqa: F401
from .aggregate_stats import AggregateStats  # noqa: F401
from .snapshot import PersistSnapshot, LoadSnapshot  # noqa: F401
