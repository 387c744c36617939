"""
Exception Classes Module

Defines exception hierarchy for the pmpanel package.
"""


class PMPanelError(Exception):
    """
    Base exception class for all pmpanel package errors.

    All custom exceptions in the pmpanel package inherit from this class,
    allowing users to catch any pmpanel-specific error with:

        try:
            panel = pdeclare(data, i='id', t='year')
        except PMPanelError as e:
            # Handle any pmpanel error
            print(f"pmpanel error: {e}")
    """
    pass


class InvalidParameterError(PMPanelError):
    """
    Exception raised when input parameter validation fails.

    This is a general exception for invalid parameter values that do not
    fall into more specific categories, such as a value vector whose length
    differs from the number of rows in the data.

    See Also
    --------
    InvalidParameterTypeError : For parameters of the wrong kind.
    MultipleTimeVariablesError : For more than one time variable.
    NonNumericTimeVariableError : For a numeric step on a non-numeric time.
    """
    pass


class InvalidParameterTypeError(InvalidParameterError, TypeError):
    """
    Exception raised when a parameter has the wrong kind of value.

    Trigger conditions include:

    - data is not a pandas DataFrame or a ``PanelData`` handle
    - i is not a string or a sequence of strings
    - t is not a string
    - d is not numeric
    - force_uniqueness_check, set_panel or silent is not a boolean
    - values is not a one-dimensional sequence
    - func is neither callable nor a recognized reduction name

    Also inherits from :class:`TypeError`, so code catching ``TypeError``
    keeps working.

    Examples
    --------
    >>> pdeclare(data, i=3)  # doctest: +SKIP
    InvalidParameterTypeError: i must be a string or a sequence of strings. Got: int
    """
    pass


class MultipleTimeVariablesError(InvalidParameterError):
    """
    Exception raised when more than one time variable is supplied.

    A panel has exactly one time variable. Quarterly or monthly data
    spread over several columns must be combined into a single numeric
    (or ordered, with ``d=0``) column first.

    Examples
    --------
    >>> pdeclare(data, i='id', t=['year', 'quarter'])  # doctest: +SKIP
    MultipleTimeVariablesError: Only one time variable allowed. Got: ['year', 'quarter']
    """
    pass


class NonNumericTimeVariableError(InvalidParameterError):
    """
    Exception raised when a numeric step is declared on a non-numeric time.

    A nonzero ``d`` states that consecutive periods are ``d`` units apart,
    which only makes sense for a numeric time variable. Boolean columns are
    not considered numeric. Declare ``d=0`` to use any ordered time variable
    (strings, dates, categoricals) by observation order.

    See Also
    --------
    pmpanel.validation.check_panel_inputs : Function that performs this check.
    """
    pass


class MissingRequiredColumnError(PMPanelError):
    """
    Exception raised when a referenced column is absent from the data.

    Raised when any name in ``i``, or the name in ``t``, is not a column of
    the DataFrame being declared or transformed.

    Examples
    --------
    >>> pdeclare(data, i='unit')  # doctest: +SKIP
    MissingRequiredColumnError: Elements of i must be columns present in the data. Missing: ['unit']

    See Also
    --------
    pmpanel.validation.check_panel_inputs : Function that performs this check.
    """
    pass


class PanelNotDeclaredError(PMPanelError):
    """
    Exception raised when panel identifiers are needed but unavailable.

    Trigger condition: an operation requires an entity identifier (or a
    time variable) and none was passed in the call nor attached to the data
    with ``pdeclare()``. Functions built on the reconciler surface this
    error unchanged.

    See Also
    --------
    pmpanel.reconciliation.declare_in_fcn_check : Function that raises it.
    """
    pass
