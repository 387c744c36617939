"""
Declaration Module

Declares a DataFrame as panel data by attaching an ``(i, t, d)`` triple,
and reports whether a table carries such a declaration.
"""

import logging
from typing import List, Optional, Union

import pandas as pd

from .diagnostics import DiagnosticSession
from .panel import PanelData, PanelMetadata
from .validation import check_panel_inputs, unpack_table, validate_flag

logger = logging.getLogger('pmpanel')

# Gap between periods when d is not given
DEFAULT_STEP = 1


def pdeclare(
    data: Union[pd.DataFrame, PanelData],
    i: Optional[Union[str, List[str]]] = None,
    t: Optional[str] = None,
    d: Optional[Union[int, float]] = DEFAULT_STEP,
    force_uniqueness_check: bool = False,
    session: Optional[DiagnosticSession] = None,
) -> PanelData:
    """
    Declare a DataFrame as panel data.

    Attaches three pieces of panel information to the table:

    - ``i``, the column(s) that identify the individual-level unit
    - ``t``, the column indicating the time period
    - ``d``, the gap in ``t`` between one period and the next

    ``pdeclare`` does not require ``i`` and ``t`` to uniquely identify the
    observations, but it emits a :class:`UniquenessWarning` (at most once
    per session) if they do not.

    Parameters
    ----------
    data : pd.DataFrame or PanelData
        Table to declare. Declaring a ``PanelData`` replaces its metadata.
    i : str or list of str, optional
        Columns identifying the individual cases. If omitted, the data is
        treated as a single time series.
    t : str, optional
        Time variable. Either numeric, where a fixed distance ``d`` takes you
        from one observation to the next, or, with ``d=0``, any ordered type.
    d : int or float, default 1
        Gap in ``t`` between one period and the next. If ``t`` is a day but
        data is collected weekly, set ``d=7``. Set ``d=0`` to ignore gap
        length and treat the most recent prior observation as one period
        ago. None is replaced by 1.
    force_uniqueness_check : bool, default False
        Check whether ``i`` and ``t`` uniquely identify observations even if
        the note was already shown this session.
    session : DiagnosticSession, optional
        Session tracking the once-per-session note.

    Returns
    -------
    PanelData
        Handle over the same DataFrame with the metadata attached.

    Raises
    ------
    InvalidParameterTypeError
        If a parameter has the wrong kind of value.
    MultipleTimeVariablesError
        If more than one time variable is named.
    MissingRequiredColumnError
        If ``i`` or ``t`` names a column not in the data.
    NonNumericTimeVariableError
        If ``d`` is nonzero and ``t`` is not numeric.

    Examples
    --------
    ``d=0`` declares an ordinal time variable, so string dates are fine:

    >>> sp = pdeclare(sprail, i=['origin', 'destination'],
    ...               t='insert_date', d=0)  # doctest: +SKIP
    >>> is_pdeclare(sp)  # doctest: +SKIP
    .i = origin, destination; .t = insert_date; .d = 0.
    True

    An integer year works with the default ``d=1``:

    >>> scorecard = pdeclare(scorecard, i='unitid', t='year')  # doctest: +SKIP
    """
    return _declare(data, i, t, d, force_uniqueness_check, session, stacklevel=3)


def _declare(data, i, t, d, force_uniqueness_check, session, stacklevel):
    """Validate and attach the triple, warning at ``stacklevel`` from here."""
    meta = check_panel_inputs(
        data,
        i=i,
        t=t,
        d=d,
        force_uniqueness_check=force_uniqueness_check,
        session=session,
        stacklevel=stacklevel + 1,
    )
    if meta.d is None:
        meta = PanelMetadata(i=meta.i, t=meta.t, d=DEFAULT_STEP)

    frame, _ = unpack_table(data, warn_untested=False)
    logger.debug("Declared panel: %s", meta.summary())
    return PanelData(frame=frame, panel=meta)


def is_pdeclare(data: Union[pd.DataFrame, PanelData], silent: bool = False) -> bool:
    """
    Check whether a table has been declared as panel data.

    Parameters
    ----------
    data : pd.DataFrame or PanelData
        Table to inspect.
    silent : bool, default False
        Set to True to suppress printing the panel identifiers.

    Returns
    -------
    bool
        True if any of ``i``, ``t`` or ``d`` is attached.

    Raises
    ------
    InvalidParameterTypeError
        If data is not a supported table or silent is not a boolean.

    Examples
    --------
    >>> scorecard = pdeclare(scorecard, i='unitid', t='year')  # doctest: +SKIP
    >>> is_pdeclare(scorecard)  # doctest: +SKIP
    .i = unitid; .t = year; .d = 1.
    True
    """
    _, panel = unpack_table(data, warn_untested=False)
    validate_flag(silent, 'silent')

    if panel is None or panel.is_empty:
        return False

    if not silent:
        print(panel.summary())
    return True


def get_panel(data: Union[pd.DataFrame, PanelData]) -> Optional[PanelMetadata]:
    """Return the panel metadata attached to *data*, or None."""
    _, panel = unpack_table(data, warn_untested=False)
    if panel is None or panel.is_empty:
        return None
    return panel
