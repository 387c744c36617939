"""
Validation Module

Implements input validation for panel declarations: table kind checks,
normalization of the ``i``/``t``/``d`` parameters, column existence and
time-variable type checks, and the once-per-session uniqueness note.
"""

import numbers
import warnings
from typing import Any, Optional, Tuple, Union

import numpy as np
import pandas as pd

from .diagnostics import DiagnosticSession, resolve_session
from .exceptions import (
    InvalidParameterTypeError,
    MissingRequiredColumnError,
    MultipleTimeVariablesError,
    NonNumericTimeVariableError,
)
from .panel import PanelData, PanelMetadata
from .warnings_categories import UniquenessWarning, UntestedInputWarning

UNIQUENESS_MESSAGE = (
    "Note that the selected i and t do not uniquely identify observations "
    "in the data ({n_dup} rows share an identifier/time combination).\n"
    "This message will be displayed only once per session unless "
    "force_uniqueness_check=True."
)


def check_panel_inputs(
    data: Any,
    i: Any = None,
    t: Any = None,
    d: Any = None,
    force_uniqueness_check: Any = False,
    session: Optional[DiagnosticSession] = None,
    stacklevel: int = 2,
) -> PanelMetadata:
    """
    Validate a candidate panel structure against a table.

    Checks are run in a fixed order and the first failure is raised:

    1. ``data`` is a DataFrame or ``PanelData`` handle
    2. ``i`` is absent, a string, or a sequence of strings
    3. ``t`` is absent or a single string
    4. ``d`` is absent or numeric
    5. every column named in ``i`` exists
    6. the column named in ``t`` exists
    7. ``force_uniqueness_check`` is a boolean
    8. with ``d != 0``, the ``t`` column is numeric

    After validation, if the session is still eligible for the uniqueness
    note or the check is forced, rows duplicated over ``i`` and ``t`` are
    counted and a :class:`UniquenessWarning` is emitted when any exist.

    Parameters
    ----------
    data : pd.DataFrame or PanelData
        Table the structure is declared on.
    i : str or sequence of str, optional
        Entity identifier column(s). None (or a scalar NaN) means absent.
    t : str, optional
        Time variable column. A one-element list is accepted.
    d : int or float, optional
        Gap between periods. Not defaulted here.
    force_uniqueness_check : bool, default False
        Run the uniqueness check even if the session already showed the note.
    session : DiagnosticSession, optional
        Session tracking note eligibility. Defaults to the process session.
    stacklevel : int, default 2
        Stack level for emitted warnings, counted as if this function
        called :func:`warnings.warn` itself. Wrappers pass a higher value
        so warnings point at their own caller.

    Returns
    -------
    PanelMetadata
        The normalized triple.

    Raises
    ------
    InvalidParameterTypeError
        If a parameter has the wrong kind of value.
    MultipleTimeVariablesError
        If more than one time variable is named.
    MissingRequiredColumnError
        If a named column is not in the data.
    NonNumericTimeVariableError
        If ``d`` is nonzero and the time variable is not numeric.

    Notes
    -----
    Only an ambient trigger clears the session's eligibility. A forced
    check always reports duplicates but leaves eligibility as it was, so
    a later unforced declaration can still show the note once.

    Examples
    --------
    >>> meta = check_panel_inputs(df, i=['origin', 'destination'],
    ...                           t='insert_date', d=0)  # doctest: +SKIP
    >>> meta.i
    ('origin', 'destination')
    """
    session = resolve_session(session)
    frame, _ = unpack_table(data, stacklevel=stacklevel)

    i_norm = _normalize_identifier(i)
    t_norm = _normalize_time_variable(t)
    d_norm = _normalize_step(d)

    _validate_identifier_columns(frame, i_norm)
    _validate_time_column(frame, t_norm)
    validate_flag(force_uniqueness_check, 'force_uniqueness_check')
    _validate_time_numeric(frame, t_norm, d_norm)

    _check_uniqueness(
        frame, i_norm, t_norm, bool(force_uniqueness_check), session, stacklevel
    )

    return PanelMetadata(i=i_norm, t=t_norm, d=d_norm)


def unpack_table(
    data: Any, warn_untested: bool = True, stacklevel: int = 2
) -> Tuple[pd.DataFrame, Optional[PanelMetadata]]:
    """
    Split a supported table into its DataFrame and attached metadata.

    Parameters
    ----------
    data : pd.DataFrame or PanelData
        Table to unpack.
    warn_untested : bool, default True
        Emit :class:`UntestedInputWarning` for DataFrame subclasses.
    stacklevel : int, default 2
        Stack level of that warning, counted from the caller.

    Returns
    -------
    frame : pd.DataFrame
    panel : PanelMetadata or None
        None for a plain DataFrame.

    Raises
    ------
    InvalidParameterTypeError
        If data is neither a DataFrame nor a PanelData handle, or the
        handle carries something other than PanelMetadata.
    """
    if isinstance(data, PanelData):
        frame, panel = data.frame, data.panel
        if panel is not None and not isinstance(panel, PanelMetadata):
            raise InvalidParameterTypeError(
                f"PanelData.panel must be PanelMetadata or None. "
                f"Got: {type(panel).__name__}"
            )
    elif isinstance(data, pd.DataFrame):
        frame, panel = data, None
    else:
        raise InvalidParameterTypeError(
            f"Requires data to be a pandas DataFrame or PanelData. "
            f"Got: {type(data).__name__}"
        )

    if not isinstance(frame, pd.DataFrame):
        raise InvalidParameterTypeError(
            f"PanelData.frame must be a pandas DataFrame. "
            f"Got: {type(frame).__name__}"
        )

    if warn_untested and type(frame) is not pd.DataFrame:
        warnings.warn(
            f"pmpanel functions have not been tested with "
            f"{type(frame).__name__} objects.",
            UntestedInputWarning,
            stacklevel=stacklevel + 1
        )

    return frame, panel


def is_missing(value: Any) -> bool:
    """True for None and scalar missing values (NaN, pd.NA, NaT)."""
    if value is None:
        return True
    if isinstance(value, str) or not pd.api.types.is_scalar(value):
        return False
    return bool(pd.isna(value))


def _normalize_identifier(i: Any) -> Tuple[str, ...]:
    """
    Normalize ``i`` to a tuple of unique column names.

    Accepts None, a string, or any list-like of strings. Repeated names are
    dropped, keeping the first occurrence.
    """
    if is_missing(i):
        return ()
    if isinstance(i, str):
        return (i,)
    if pd.api.types.is_list_like(i) and not isinstance(i, (dict, pd.DataFrame)):
        names = list(i)
        if all(isinstance(name, str) for name in names):
            return tuple(dict.fromkeys(names))
    raise InvalidParameterTypeError(
        f"i must be a string or a sequence of strings. Got: {_describe(i)}"
    )


def _normalize_time_variable(t: Any) -> Optional[str]:
    """Normalize ``t`` to a single column name or None."""
    if is_missing(t):
        return None
    if isinstance(t, str):
        return t
    if pd.api.types.is_list_like(t) and not isinstance(t, (dict, pd.DataFrame)):
        names = list(t)
        if not all(isinstance(name, str) for name in names):
            raise InvalidParameterTypeError(
                f"t must be a string. Got: {_describe(t)}"
            )
        if len(names) > 1:
            raise MultipleTimeVariablesError(
                f"Only one time variable allowed. Got: {names}"
            )
        return names[0] if names else None
    raise InvalidParameterTypeError(
        f"t must be a string. Got: {_describe(t)}"
    )


def _normalize_step(d: Any) -> Optional[Union[int, float]]:
    """Normalize ``d`` to a real number or None. Booleans are rejected."""
    if is_missing(d):
        return None
    if isinstance(d, (bool, np.bool_)) or not isinstance(d, numbers.Real):
        raise InvalidParameterTypeError(
            f"d must be numeric. Got: {_describe(d)}"
        )
    return d.item() if isinstance(d, np.generic) else d


def validate_panel_columns(frame: pd.DataFrame, panel: PanelMetadata) -> None:
    """
    Check that the columns named by an existing triple are still in *frame*.

    Used on metadata adopted from a handle, which may have been built by
    hand or paired with a different frame since it was declared. Runs no
    uniqueness check.

    Raises
    ------
    MissingRequiredColumnError
        If an ``i`` column or the ``t`` column is missing.
    """
    _validate_identifier_columns(frame, panel.i)
    _validate_time_column(frame, panel.t)


def _validate_identifier_columns(frame: pd.DataFrame, i: Tuple[str, ...]) -> None:
    missing = [name for name in i if name not in frame.columns]
    if missing:
        raise MissingRequiredColumnError(
            f"Elements of i must be columns present in the data. "
            f"Missing: {missing}"
        )


def _validate_time_column(frame: pd.DataFrame, t: Optional[str]) -> None:
    if t is not None and t not in frame.columns:
        raise MissingRequiredColumnError(
            f"t must be a column present in the data. Missing: '{t}'"
        )


def validate_flag(value: Any, name: str, allow_none: bool = False) -> None:
    """Raise unless *value* is a boolean (or None, if allowed)."""
    if value is None and allow_none:
        return
    if not isinstance(value, (bool, np.bool_)):
        raise InvalidParameterTypeError(
            f"{name} must be True or False. Got: {_describe(value)}"
        )


def _validate_time_numeric(
    frame: pd.DataFrame, t: Optional[str], d: Optional[Union[int, float]]
) -> None:
    """
    Require a numeric time variable unless ``d`` is 0 or absent.

    Boolean columns do not count as numeric.
    """
    if t is None or d is None or d == 0:
        return
    column = frame[t]
    if not pd.api.types.is_numeric_dtype(column) or pd.api.types.is_bool_dtype(column):
        raise NonNumericTimeVariableError(
            f"Unless d = 0, indicating an ordinal time variable, t must be "
            f"numeric. Column '{t}' has dtype {column.dtype}."
        )


def _check_uniqueness(
    frame: pd.DataFrame,
    i: Tuple[str, ...],
    t: Optional[str],
    forced: bool,
    session: DiagnosticSession,
    stacklevel: int = 2,
) -> int:
    """
    Count rows sharing an (i, t) combination and emit the note if any.

    Returns the number of duplicated rows (all members of each duplicated
    combination), or 0 when the check was skipped.
    ``stacklevel`` is the value :func:`check_panel_inputs` received.
    """
    group_cols = list(i) + ([t] if t is not None else [])
    if not group_cols or not session.should_check_uniqueness(forced):
        return 0

    dup_mask = frame.duplicated(subset=group_cols, keep=False)
    n_dup = int(dup_mask.sum())
    if n_dup > 0:
        session.emit(
            UniquenessWarning,
            UNIQUENESS_MESSAGE.format(n_dup=n_dup),
            forced=forced,
            context={'n_duplicates': n_dup, 'columns': group_cols},
            stacklevel=stacklevel + 1,
        )
    return n_dup


def _describe(value: Any) -> str:
    return type(value).__name__
