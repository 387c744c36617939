"""
Panel Metadata Module

Containers pairing a pandas DataFrame with its declared panel structure.

A panel structure is the triple ``(i, t, d)``:

- ``i``: column names identifying the cross-sectional unit. An empty tuple
  means the data is a single time series.
- ``t``: the single column giving each observation's time period, or None.
- ``d``: the gap in ``t`` between one period and the next. ``d=0`` ignores
  gap length and orders periods by observation order within each unit,
  which also allows non-numeric (merely ordered) time variables.

Metadata is held on a :class:`PanelData` handle rather than on the
DataFrame itself. Operating on ``PanelData.frame`` with pandas returns a
plain DataFrame, so derived tables never carry stale panel information;
re-declare them with :func:`pmpanel.pdeclare` if needed.
"""

from dataclasses import dataclass
from typing import Optional, Tuple, Union

import pandas as pd

from .exceptions import InvalidParameterTypeError

# Rendered in place of absent fields in panel summaries
NULL_MARKER = 'NA'


@dataclass(frozen=True)
class PanelMetadata:
    """
    Declared panel structure of a table.

    Attributes
    ----------
    i : tuple of str
        Entity identifier columns. Empty when absent.
    t : str or None
        Time variable column.
    d : int, float or None
        Gap between consecutive periods; 0 for ordinal time.
    """

    i: Tuple[str, ...] = ()
    t: Optional[str] = None
    d: Optional[Union[int, float]] = None

    def __post_init__(self):
        # a bare string is one column name, not a sequence of characters
        i = self.i
        if i is None:
            i = ()
        elif isinstance(i, str):
            i = (i,)
        elif isinstance(i, (list, tuple, pd.Index)):
            i = tuple(i)
        if not isinstance(i, tuple) or not all(isinstance(name, str) for name in i):
            raise InvalidParameterTypeError(
                f"PanelMetadata.i must be a string or a sequence of strings. "
                f"Got: {self.i!r}"
            )
        if self.t is not None and not isinstance(self.t, str):
            raise InvalidParameterTypeError(
                f"PanelMetadata.t must be a string or None. Got: {self.t!r}"
            )
        object.__setattr__(self, 'i', i)

    @property
    def is_empty(self) -> bool:
        """True if none of i, t and d is present."""
        return not self.i and self.t is None and self.d is None

    def summary(self) -> str:
        """
        Render the triple on one line, e.g. ``.i = id; .t = year; .d = 1.``.

        Multiple identifier columns are joined with ``', '`` and absent
        fields are shown as ``NA``.
        """
        i = ', '.join(self.i) if self.i else NULL_MARKER
        t = self.t if self.t is not None else NULL_MARKER
        d = self.d if self.d is not None else NULL_MARKER
        return f".i = {i}; .t = {t}; .d = {d}."

    def as_kwargs(self) -> dict:
        """Return the triple as ``i``/``t``/``d`` keyword arguments."""
        return {'i': list(self.i) or None, 't': self.t, 'd': self.d}


@dataclass
class PanelData:
    """
    Handle pairing a DataFrame with its panel metadata.

    Returned by :func:`pmpanel.pdeclare`. The frame is shared, not copied,
    so the handle is cheap to create; the panel-aware functions never
    modify it.

    Attributes
    ----------
    frame : pd.DataFrame
        The underlying table.
    panel : PanelMetadata or None
        Attached panel structure, or None for an undeclared table.

    Examples
    --------
    >>> panel = pdeclare(df, i='unitid', t='year')  # doctest: +SKIP
    >>> panel.panel.i
    ('unitid',)
    >>> panel.frame.shape  # doctest: +SKIP
    (48445, 12)
    """

    frame: pd.DataFrame
    panel: Optional[PanelMetadata] = None

    @property
    def columns(self) -> pd.Index:
        return self.frame.columns

    def __len__(self) -> int:
        return len(self.frame)

    def __repr__(self) -> str:
        summary = self.panel.summary() if self.panel is not None else 'undeclared'
        return (
            f"PanelData({self.frame.shape[0]} rows x {self.frame.shape[1]} "
            f"columns; {summary})"
        )
