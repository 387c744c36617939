"""
Diagnostic session for once-per-session panel notes.

Panel declaration emits advisory notes (currently the uniqueness note
raised when ``i`` and ``t`` do not identify rows uniquely). Those notes are
shown once per session: after the first one fires, later declarations stay
quiet unless the caller forces the check.

A :class:`DiagnosticSession` holds that eligibility flag together with a
record of every note it emitted. The package keeps one default session for
the life of the process; tests and multi-threaded callers pass their own
session to any public function through the ``session`` keyword.

The ``get_diagnostics()`` method always returns the full record set, so
callers can inspect notes after the fact instead of parsing warning text.
"""

import logging
import threading
import time
import warnings
from dataclasses import dataclass, field
from typing import Any, List, Optional

from .exceptions import InvalidParameterTypeError

logger = logging.getLogger('pmpanel')


@dataclass
class DiagnosticRecord:
    """Single diagnostic note emitted by a session."""

    category: type
    message: str
    forced: bool = False
    context: dict = field(default_factory=dict)
    timestamp: float = field(default_factory=time.time)


class DiagnosticSession:
    """
    Mutable diagnostic policy shared by panel validation calls.

    Parameters
    ----------
    uniqueness_check_eligible : bool, default True
        Whether the ambient (unforced) uniqueness check should still run.
        Cleared the first time an ambient check finds duplicates.

    Notes
    -----
    The flag is read and cleared under a lock, so concurrent declarations
    sharing a session emit the ambient note at most once.
    """

    def __init__(self, uniqueness_check_eligible: bool = True) -> None:
        if not isinstance(uniqueness_check_eligible, bool):
            raise InvalidParameterTypeError(
                f"uniqueness_check_eligible must be True or False. "
                f"Got: {type(uniqueness_check_eligible).__name__}"
            )
        self._eligible: bool = uniqueness_check_eligible
        self._records: List[DiagnosticRecord] = []
        self._lock = threading.Lock()

    @property
    def uniqueness_check_eligible(self) -> bool:
        return self._eligible

    def should_check_uniqueness(self, forced: bool) -> bool:
        """Return whether a uniqueness check should run for this call."""
        return forced or self._eligible

    def emit(
        self,
        category: type,
        message: str,
        forced: bool = False,
        context: Optional[dict] = None,
        stacklevel: int = 2,
    ) -> bool:
        """
        Record and emit a once-per-session note, honouring eligibility.

        An ambient note (``forced=False``) is emitted only while the session
        is eligible, and clears eligibility when it fires. A forced note is
        always emitted and leaves eligibility untouched.

        Parameters
        ----------
        category : type
            Warning class (subclass of :class:`PMPanelWarning`).
        message : str
            Human-readable note text.
        forced : bool, default False
            Whether the caller explicitly forced the check.
        context : dict or None
            Auxiliary context (e.g. ``{'n_duplicates': 3}``).
        stacklevel : int, default 2
            Passed to :func:`warnings.warn`, counted from the caller.

        Returns
        -------
        bool
            True if the note was emitted.
        """
        with self._lock:
            if not forced:
                if not self._eligible:
                    return False
                self._eligible = False
            self._records.append(
                DiagnosticRecord(
                    category=category,
                    message=message,
                    forced=forced,
                    context=context if context is not None else {},
                )
            )

        logger.info(message)
        warnings.warn(message, category, stacklevel=stacklevel + 1)
        return True

    def reset(self) -> None:
        """Restore eligibility and drop all recorded notes."""
        with self._lock:
            self._eligible = True
            self._records = []

    def get_diagnostics(self) -> List[dict]:
        """
        Return structured data for every note emitted by this session.

        Returns
        -------
        list of dict
            Each dict contains:

            - ``category`` : str, warning class name.
            - ``message`` : str, note text.
            - ``forced`` : bool, whether the check was forced.
            - ``context`` : dict, auxiliary values recorded with the note.
        """
        with self._lock:
            records = list(self._records)
        return [
            {
                'category': rec.category.__name__,
                'message': rec.message,
                'forced': rec.forced,
                'context': dict(rec.context),
            }
            for rec in records
        ]

    def __repr__(self) -> str:
        return (
            f"DiagnosticSession(uniqueness_check_eligible={self._eligible}, "
            f"n_records={len(self._records)})"
        )


_default_session = DiagnosticSession()


def get_default_session() -> DiagnosticSession:
    """Return the process-wide session used when none is passed."""
    return _default_session


def resolve_session(session: Any) -> DiagnosticSession:
    """Return *session*, or the default session if it is None."""
    if session is None:
        return _default_session
    if not isinstance(session, DiagnosticSession):
        raise InvalidParameterTypeError(
            f"session must be a DiagnosticSession or None. "
            f"Got: {type(session).__name__}"
        )
    return session
