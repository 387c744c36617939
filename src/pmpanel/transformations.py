"""
Transformation Module

Implements the standard within and between transformations for panel data.

For a value vector ``x`` and entity identifier ``i``:

- within:  ``x - f(x within i)``, each value minus its group aggregate
- between: ``f(x within i) - f(x)``, the group aggregate minus the grand
  aggregate, constant within each group

with ``f`` the mean ignoring missing values unless another aggregator is
given.
"""

from typing import Any, Callable, List, Optional, Tuple, Union

import numpy as np
import pandas as pd

from .diagnostics import DiagnosticSession
from .exceptions import (
    InvalidParameterError,
    InvalidParameterTypeError,
    PanelNotDeclaredError,
)
from .panel import PanelData
from .reconciliation import declare_in_fcn_check
from .validation import unpack_table

# Reduction names accepted for func, passed through to pandas
RECOGNIZED_FUNCS = frozenset({
    'mean', 'median', 'sum', 'prod', 'min', 'max', 'std', 'var', 'first', 'last',
})

# Name of the value column in the working frame
VALUE_COLUMN = '.var'

Aggregator = Union[str, Callable[[pd.Series], Any]]


def within(
    values: Any,
    data: Union[pd.DataFrame, PanelData],
    func: Aggregator = 'mean',
    i: Optional[Union[str, List[str]]] = None,
    t: Optional[str] = None,
    d: Optional[Union[int, float]] = None,
    force_uniqueness_check: bool = False,
    session: Optional[DiagnosticSession] = None,
) -> pd.Series:
    """
    Within transformation: each value minus the aggregate of its unit.

    Parameters
    ----------
    values : list, tuple, np.ndarray or pd.Series
        One-dimensional vector to transform, one entry per row of ``data``.
        Matched to rows by position.
    data : pd.DataFrame or PanelData
        Table holding the panel identifiers, either named in ``i`` or
        declared earlier with ``pdeclare()``.
    func : str or callable, default 'mean'
        Aggregator applied to each unit's values. A callable receives a
        ``pd.Series`` and returns a scalar; a string names a pandas
        reduction (see ``RECOGNIZED_FUNCS``). The default mean skips
        missing values.
    i : str or list of str, optional
        Unit identifier column(s). Setting any of ``i``, ``t`` or ``d``
        overrides all three values declared on ``data``.
    t : str, optional
        Time variable. Validated but not used by the transformation.
    d : int or float, optional
        Gap between periods. Validated but not used by the transformation.
    force_uniqueness_check : bool, default False
        Always check whether ``i`` and ``t`` uniquely identify rows.
    session : DiagnosticSession, optional
        Session tracking the once-per-session uniqueness note.

    Returns
    -------
    pd.Series
        Transformed values in the original row order, indexed like
        ``data``.

    Raises
    ------
    PanelNotDeclaredError
        If no ``i`` is given or declared.
    InvalidParameterTypeError
        If values is not a one-dimensional sequence or func is neither
        callable nor a recognized name.
    InvalidParameterError
        If values does not have one entry per row.

    Examples
    --------
    Within- and between-route variation in ticket prices:

    >>> sprail['within_route'] = within(sprail['price'], sprail,
    ...                                 i=['origin', 'destination'])  # doctest: +SKIP
    >>> sprail['between_route'] = between(sprail['price'], sprail,
    ...                                   i=['origin', 'destination'])  # doctest: +SKIP
    """
    work, group_cols, value_col, index, name = _prepare_working_frame(
        'within', values, data, func, i, t, d, force_uniqueness_check, session
    )
    group_agg = _group_aggregate(work, group_cols, value_col, func)

    result = work[value_col] - group_agg
    return pd.Series(result.to_numpy(), index=index, name=name)


def between(
    values: Any,
    data: Union[pd.DataFrame, PanelData],
    func: Aggregator = 'mean',
    i: Optional[Union[str, List[str]]] = None,
    t: Optional[str] = None,
    d: Optional[Union[int, float]] = None,
    force_uniqueness_check: bool = False,
    session: Optional[DiagnosticSession] = None,
) -> pd.Series:
    """
    Between transformation: unit aggregate minus the grand aggregate.

    The grand aggregate is computed once over all of ``values``; the result
    is constant within each unit. Parameters, return value and errors are
    as in :func:`within`.
    """
    work, group_cols, value_col, index, name = _prepare_working_frame(
        'between', values, data, func, i, t, d, force_uniqueness_check, session
    )
    grand = _grand_aggregate(work[value_col], func)
    group_agg = _group_aggregate(work, group_cols, value_col, func)

    result = group_agg - grand
    return pd.Series(result.to_numpy(), index=index, name=name)


def _prepare_working_frame(
    caller: str,
    values: Any,
    data: Union[pd.DataFrame, PanelData],
    func: Aggregator,
    i: Any,
    t: Any,
    d: Any,
    force_uniqueness_check: bool,
    session: Optional[DiagnosticSession],
) -> Tuple[pd.DataFrame, List[str], str, pd.Index, Any]:
    """
    Validate inputs and build the frame of ``i`` columns plus values.

    Returns the working frame (positional index), the grouping column
    names, the value column name, the index of ``data`` and the name for
    the output Series.
    """
    series = _coerce_values(values)
    _validate_func(func)

    panel = declare_in_fcn_check(
        data,
        i=i,
        t=t,
        d=d,
        force_uniqueness_check=force_uniqueness_check,
        set_panel=False,
        session=session,
        stacklevel=4,
    )
    if not panel.i:
        raise PanelNotDeclaredError(
            f"{caller}() requires that i be declared either in the function "
            f"or by pdeclare()."
        )

    frame, _ = unpack_table(data, warn_untested=False)
    if len(series) != len(frame):
        raise InvalidParameterError(
            f"values has {len(series)} entries but data has {len(frame)} rows."
        )

    group_cols = list(panel.i)
    work = frame.loc[:, group_cols].reset_index(drop=True)
    value_col = VALUE_COLUMN
    while value_col in group_cols:
        value_col += '_'
    work[value_col] = series.reset_index(drop=True)

    name = values.name if isinstance(values, pd.Series) else None
    return work, group_cols, value_col, frame.index, name


def _coerce_values(values: Any) -> pd.Series:
    """Convert a one-dimensional sequence to a Series, rejecting other kinds."""
    if isinstance(values, pd.Series):
        return values
    if isinstance(values, np.ndarray):
        if values.ndim != 1:
            raise InvalidParameterTypeError(
                f"values must be one-dimensional. Got an array with "
                f"{values.ndim} dimensions."
            )
        return pd.Series(values)
    if isinstance(values, (list, tuple, pd.Index, pd.api.extensions.ExtensionArray)):
        return pd.Series(values)
    raise InvalidParameterTypeError(
        f"values must be a list, tuple, numpy array or pandas Series. "
        f"Got: {type(values).__name__}"
    )


def _validate_func(func: Aggregator) -> None:
    if callable(func):
        return
    if isinstance(func, str) and func in RECOGNIZED_FUNCS:
        return
    raise InvalidParameterTypeError(
        f"func must be a function or one of {sorted(RECOGNIZED_FUNCS)}. "
        f"Got: {func!r}"
    )


def _group_aggregate(
    work: pd.DataFrame, group_cols: List[str], value_col: str, func: Aggregator
) -> pd.Series:
    """
    Broadcast each group's aggregate back to its rows.

    Rows with missing identifiers form their own group.
    """
    grouped = work.groupby(group_cols, sort=False, dropna=False, observed=True)
    return grouped[value_col].transform(func)


def _grand_aggregate(series: pd.Series, func: Aggregator) -> Any:
    """
    Aggregate the whole vector the way the group aggregate treats a group.

    ``first`` and ``last`` take the first and last non-missing value, as
    ``groupby().first()`` does.
    """
    if callable(func):
        return func(series)
    if func in ('first', 'last'):
        present = series.dropna()
        if present.empty:
            return np.nan
        return present.iloc[0] if func == 'first' else present.iloc[-1]
    return series.agg(func)
