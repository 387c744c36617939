"""
Reconciliation Module

Merges per-call panel parameters with the metadata attached to a table.

Every panel-aware function accepts optional ``i``, ``t`` and ``d``
arguments. Setting any one of them overrides all three attached values;
setting none falls back to what ``pdeclare()`` stored on the table.
Functions should call :func:`declare_in_fcn_check` before touching panel
identifiers and let its :class:`PanelNotDeclaredError` propagate.
"""

import logging
from dataclasses import dataclass
from typing import Any, List, Optional, Union

import pandas as pd

from .declaration import _declare
from .diagnostics import DiagnosticSession
from .exceptions import PanelNotDeclaredError
from .panel import PanelData, PanelMetadata
from .validation import (
    check_panel_inputs,
    is_missing,
    unpack_table,
    validate_flag,
    validate_panel_columns,
)

logger = logging.getLogger('pmpanel')


@dataclass(frozen=True)
class ReconciledPanel:
    """
    Result of reconciling call-site panel parameters with attached metadata.

    Attributes
    ----------
    effective : PanelMetadata
        The triple the calling function should use.
    original : PanelMetadata
        The triple attached to the table before the call (all fields absent
        for an undeclared table).
    set_panel : bool or None
        Whether the caller asked for the effective triple to be attached to
        its output.
    """

    effective: PanelMetadata
    original: PanelMetadata
    set_panel: Optional[bool] = None

    @property
    def i(self):
        return self.effective.i

    @property
    def t(self):
        return self.effective.t

    @property
    def d(self):
        return self.effective.d

    @property
    def was_declared(self) -> bool:
        """True if the table carried panel metadata before the call."""
        return not self.original.is_empty

    def declare(
        self,
        data: Union[pd.DataFrame, PanelData],
        session: Optional[DiagnosticSession] = None,
    ) -> PanelData:
        """
        Attach the effective triple to *data* with :func:`pdeclare`.

        Used by functions that return a new table and want it to carry the
        panel structure they were called with. A missing ``d`` becomes 1.
        """
        kwargs = self.effective.as_kwargs()
        return _declare(
            data, kwargs['i'], kwargs['t'], kwargs['d'],
            force_uniqueness_check=False, session=session, stacklevel=3,
        )


def declare_in_fcn_check(
    data: Union[pd.DataFrame, PanelData],
    i: Optional[Union[str, List[str]]] = None,
    t: Optional[str] = None,
    d: Optional[Union[int, float]] = None,
    force_uniqueness_check: Optional[bool] = False,
    set_panel: Optional[bool] = None,
    require_identifier: bool = True,
    session: Optional[DiagnosticSession] = None,
    stacklevel: int = 2,
) -> ReconciledPanel:
    """
    Resolve the panel structure a function should use.

    Algorithm
    ---------
    1. Validate that ``force_uniqueness_check`` and ``set_panel`` are
       booleans (or None).
    2. Read the triple attached to ``data``; this is the original triple.
       When it is adopted, its ``i`` and ``t`` columns must exist in the
       frame.
    3. If none of ``i``, ``t``, ``d`` is given and the uniqueness check is
       forced, re-run :func:`check_panel_inputs` on the original triple
       purely as a diagnostic pass.
    4. If none of ``i``, ``t``, ``d`` is given, the original triple is the
       effective one. Otherwise the given triple is validated and used as
       is, with unset members absent.
    5. If the effective triple has neither ``i`` nor ``t`` and an
       identifier is required, raise :class:`PanelNotDeclaredError`.

    Nothing is attached to ``data``; use :meth:`ReconciledPanel.declare`.

    Parameters
    ----------
    data : pd.DataFrame or PanelData
        Table the calling function operates on.
    i, t, d : optional
        Call-site panel parameters, as in :func:`pdeclare`.
    force_uniqueness_check : bool or None, default False
        Force the uniqueness check. None is treated as False.
    set_panel : bool or None, optional
        Recorded on the result for callers that attach the effective
        triple to their output.
    require_identifier : bool, default True
        Raise if no ``i`` or ``t`` can be resolved.
    session : DiagnosticSession, optional
        Session tracking the once-per-session note.
    stacklevel : int, default 2
        Stack level for emitted warnings, as in :func:`check_panel_inputs`.

    Returns
    -------
    ReconciledPanel

    Raises
    ------
    PanelNotDeclaredError
        If an identifier is required but none is available.
    InvalidParameterTypeError, MultipleTimeVariablesError,
    MissingRequiredColumnError, NonNumericTimeVariableError
        If the call-site parameters fail validation.
    MissingRequiredColumnError
        If the attached triple names columns no longer in the data.
    """
    validate_flag(force_uniqueness_check, 'force_uniqueness_check', allow_none=True)
    validate_flag(set_panel, 'set_panel', allow_none=True)
    forced = bool(force_uniqueness_check)

    frame, attached = unpack_table(data, warn_untested=False)
    original = attached if attached is not None else PanelMetadata()

    no_override = _is_unset(i) and _is_unset(t) and is_missing(d)

    if no_override:
        # attached columns must still exist in the frame
        validate_panel_columns(frame, original)
        if forced:
            check_panel_inputs(
                data,
                **original.as_kwargs(),
                force_uniqueness_check=True,
                session=session,
                stacklevel=stacklevel + 1,
            )
        effective = original
        logger.debug("Using attached panel structure: %s", effective.summary())
    else:
        effective = check_panel_inputs(
            data,
            i=i,
            t=t,
            d=d,
            force_uniqueness_check=forced,
            session=session,
            stacklevel=stacklevel + 1,
        )
        logger.debug("Using call-site panel structure: %s", effective.summary())

    if not effective.i and effective.t is None and require_identifier:
        raise PanelNotDeclaredError(
            "Attempt to use panel indicators i and/or t, but no i or t are "
            "declared in command or stored in data."
        )

    return ReconciledPanel(effective=effective, original=original, set_panel=set_panel)


def _is_unset(value: Any) -> bool:
    """True for None, a missing scalar, or an empty list."""
    if is_missing(value):
        return True
    if pd.api.types.is_list_like(value) and not isinstance(value, str):
        return len(list(value)) == 0
    return False
