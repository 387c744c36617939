"""
pmpanel: Panel Declaration and Transformations for pandas
=========================================================

Declare a pandas DataFrame as panel data (an entity identifier, a time
variable and a time step), validate that structure, and compute the
standard within and between transformations relative to it.

Key Features
------------
- Panel declaration: ``pdeclare()`` attaches ``(i, t, d)`` to a table and
  ``is_pdeclare()`` reports it. Ordinal (non-numeric) time variables are
  allowed with ``d=0``.
- Validation: typed exceptions for every malformed declaration, and a
  once-per-session note when ``i`` and ``t`` do not uniquely identify rows.
- Reconciliation: panel-aware functions accept ad hoc ``i``/``t``/``d`` that
  override the declared structure, falling back to it when none is given.
- Transformations: ``within()`` (value minus unit aggregate) and
  ``between()`` (unit aggregate minus grand aggregate).

Main Components
---------------
pdeclare, is_pdeclare, get_panel : function
    Declare and inspect panel structure.
PanelData, PanelMetadata : class
    Handle pairing a DataFrame with its declared structure.
within, between : function
    Panel transformations.
declare_in_fcn_check : function
    Reconciler for functions built on top of pmpanel.
DiagnosticSession : class
    Holds the once-per-session note state; pass one via ``session=``.
Exception hierarchy : module
    Typed exceptions inheriting from ``PMPanelError``.

Quick Start
-----------
>>> import pandas as pd
>>> from pmpanel import pdeclare, within, between
>>>
>>> df = pd.DataFrame({'id': [1, 1, 2, 2], 't': [1, 2, 1, 2],
...                    'x': [10, 20, 30, 50]})
>>> panel = pdeclare(df, i='id', t='t')
>>> within(df['x'], panel).tolist()
[-5.0, 5.0, -10.0, 10.0]
>>> between(df['x'], panel).tolist()
[-12.5, -12.5, 12.5, 12.5]
"""

from .declaration import DEFAULT_STEP, get_panel, is_pdeclare, pdeclare
from .diagnostics import DiagnosticSession, get_default_session
from .panel import PanelData, PanelMetadata
from .reconciliation import ReconciledPanel, declare_in_fcn_check
from .transformations import between, within
from .validation import check_panel_inputs

# Export exception classes
from .exceptions import (
    InvalidParameterError,
    InvalidParameterTypeError,
    MissingRequiredColumnError,
    MultipleTimeVariablesError,
    NonNumericTimeVariableError,
    PanelNotDeclaredError,
    PMPanelError,
)

# Export warning classes
from .warnings_categories import (
    DataWarning,
    PMPanelWarning,
    UniquenessWarning,
    UntestedInputWarning,
)

__all__ = [
    # Declaration
    'pdeclare',
    'is_pdeclare',
    'get_panel',
    'check_panel_inputs',
    'declare_in_fcn_check',
    'DEFAULT_STEP',
    # Containers
    'PanelData',
    'PanelMetadata',
    'ReconciledPanel',
    'DiagnosticSession',
    'get_default_session',
    # Transformations
    'within',
    'between',
    # Exception classes
    'PMPanelError',
    'InvalidParameterError',
    'InvalidParameterTypeError',
    'MultipleTimeVariablesError',
    'NonNumericTimeVariableError',
    'MissingRequiredColumnError',
    'PanelNotDeclaredError',
    # Warning classes
    'PMPanelWarning',
    'DataWarning',
    'UniquenessWarning',
    'UntestedInputWarning',
]
