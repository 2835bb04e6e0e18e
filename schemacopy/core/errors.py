"""Error taxonomy for schemacopy.

Every failure in the pipeline is fatal for the whole run, so these errors are
raised as soon as they are detected and bubble up to the CLI untouched.
"""


class SchemaCopyError(Exception):
    """Base class for all pipeline failures."""

    label = 'Error'


class ResolutionError(SchemaCopyError):
    """The resolved dependency closure is unavailable or malformed."""

    label = 'Resolution Error'


class ScanError(SchemaCopyError):
    """A scan root could not be opened or enumerated."""

    label = 'Scan Error'


class ConsistencyError(SchemaCopyError):
    """Scan and resolve phases disagree, or a resource cannot be attributed."""

    label = 'Consistency Error'


class AttributionError(ConsistencyError):
    """Zero or several artifacts own the same archive."""

    label = 'Attribution Error'


class CopyError(SchemaCopyError):
    """Writing a schema file to its destination failed."""

    label = 'Copy Error'
