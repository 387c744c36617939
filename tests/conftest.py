"""
Pytest configuration file providing shared fixtures and helper functions.
"""
import numpy as np
import pandas as pd
import pytest

from pmpanel import DiagnosticSession, get_default_session


@pytest.fixture(autouse=True)
def reset_default_session():
    """Give every test a default session that has not shown any note yet."""
    get_default_session().reset()
    yield
    get_default_session().reset()


@pytest.fixture
def session():
    """Fresh, isolated diagnostic session."""
    return DiagnosticSession()


@pytest.fixture
def small_panel():
    """Two units observed in two periods; (id, t) is unique."""
    return pd.DataFrame({
        'id': [1, 1, 2, 2],
        't': [1, 2, 1, 2],
        'x': [10, 20, 30, 50],
    })


@pytest.fixture
def duplicated_panel():
    """Unit 1 is observed twice in period 1."""
    return pd.DataFrame({
        'id': [1, 1, 2, 2],
        't': [1, 1, 1, 2],
        'x': [1.0, 2.0, 3.0, 4.0],
    })


@pytest.fixture
def route_panel():
    """Routes identified by two columns, with string dates as time."""
    return pd.DataFrame({
        'origin': ['MADRID', 'MADRID', 'MADRID', 'SEVILLA', 'SEVILLA', 'SEVILLA'],
        'destination': ['SEVILLA', 'SEVILLA', 'BARCELONA', 'MADRID', 'MADRID', 'MADRID'],
        'insert_date': ['2019-04-11', '2019-04-12', '2019-04-11',
                        '2019-04-11', '2019-04-12', '2019-04-13'],
        'price': [50.0, 60.0, 80.0, 40.0, 45.0, 65.0],
    })


@pytest.fixture
def random_panel():
    """Unbalanced panel of 5 units with normally distributed values."""
    rng = np.random.default_rng(42)
    n = 60
    return pd.DataFrame({
        'id': rng.integers(0, 5, n),
        'year': np.arange(n) + 2000,
        'x': rng.normal(10.0, 3.0, n),
    })
