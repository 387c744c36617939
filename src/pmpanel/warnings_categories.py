"""
Warning category hierarchy for the pmpanel package.

Provides structured warning categories for panel declaration and
validation, enabling selective filtering via Python's standard
``warnings.filterwarnings()`` mechanism. All warning classes inherit
from :class:`PMPanelWarning`, which itself inherits from
:class:`UserWarning`, preserving compatibility with existing filter rules.

Examples
--------
Silence the duplicate-observation note while keeping others visible:

>>> import warnings
>>> from pmpanel import UniquenessWarning
>>> warnings.filterwarnings('ignore', category=UniquenessWarning)

Suppress all pmpanel warnings at once:

>>> warnings.filterwarnings('ignore', category=PMPanelWarning)
"""


class PMPanelWarning(UserWarning):
    """
    Base warning class for all pmpanel package warnings.

    Because ``PMPanelWarning`` inherits from ``UserWarning``, existing calls
    to ``warnings.filterwarnings('ignore', category=UserWarning)`` will
    continue to suppress pmpanel warnings.
    """
    pass


class DataWarning(PMPanelWarning):
    """
    Warning raised for data quality issues.

    Triggered by duplicate observations or other data anomalies that may
    affect later panel operations but do not prevent them from proceeding.
    """
    pass


class UniquenessWarning(DataWarning):
    """
    Warning raised when the panel identifiers do not identify rows uniquely.

    Triggered when two or more rows share the same values of the entity
    identifier ``i`` and the time variable ``t``. Shown at most once per
    diagnostic session unless the uniqueness check is forced.
    """
    pass


class UntestedInputWarning(PMPanelWarning):
    """
    Warning raised when the data is a recognized but untested table kind.

    Triggered for subclasses of :class:`pandas.DataFrame` (for example
    ``geopandas.GeoDataFrame``). They are accepted, but pmpanel has only been
    tested against plain DataFrames.
    """
    pass
