"""
Tests for the within and between transformations.
"""

import numpy as np
import pandas as pd
import pytest

from pmpanel import PanelData, PanelMetadata, between, pdeclare, within
from pmpanel.transformations import RECOGNIZED_FUNCS
from pmpanel.exceptions import (
    InvalidParameterError,
    InvalidParameterTypeError,
    MissingRequiredColumnError,
    PanelNotDeclaredError,
)


class TestWorkedExample:
    """id=[1,1,2,2], x=[10,20,30,50]; unit means 15 and 40, grand mean 27.5."""

    def test_within(self, small_panel, session):
        result = within(small_panel['x'], small_panel, i='id', session=session)
        assert result.tolist() == [-5.0, 5.0, -10.0, 10.0]

    def test_between(self, small_panel, session):
        result = between(small_panel['x'], small_panel, i='id', session=session)
        assert result.tolist() == [-12.5, -12.5, 12.5, 12.5]

    def test_declared_identifier(self, small_panel, session):
        panel = pdeclare(small_panel, i='id', t='t', session=session)
        assert within(small_panel['x'], panel, session=session).tolist() == [
            -5.0, 5.0, -10.0, 10.0,
        ]
        assert between(small_panel['x'], panel, session=session).tolist() == [
            -12.5, -12.5, 12.5, 12.5,
        ]

    def test_call_site_identifier_overrides_declared(self, small_panel, session):
        panel = pdeclare(small_panel, i='t', session=session)
        # grouping by t gives means 20 and 35
        assert within(small_panel['x'], panel, session=session).tolist() == [
            -10.0, -15.0, 10.0, 15.0,
        ]
        assert within(small_panel['x'], panel, i='id', session=session).tolist() == [
            -5.0, 5.0, -10.0, 10.0,
        ]


class TestProperties:

    def test_within_plus_group_mean_recovers_values(self, random_panel, session):
        result = within(random_panel['x'], random_panel, i='id', session=session)
        group_mean = random_panel.groupby('id')['x'].transform('mean')
        np.testing.assert_allclose(result + group_mean, random_panel['x'])

    def test_within_sums_to_zero_per_group(self, random_panel, session):
        result = within(random_panel['x'], random_panel, i='id', session=session)
        sums = result.groupby(random_panel['id']).sum()
        np.testing.assert_allclose(sums, 0.0, atol=1e-10)

    def test_between_constant_within_group(self, random_panel, session):
        result = between(random_panel['x'], random_panel, i='id', session=session)
        assert (result.groupby(random_panel['id']).nunique() == 1).all()

    def test_between_is_group_mean_minus_grand_mean(self, random_panel, session):
        result = between(random_panel['x'], random_panel, i='id', session=session)
        expected = (
            random_panel.groupby('id')['x'].transform('mean') - random_panel['x'].mean()
        )
        np.testing.assert_allclose(result, expected)

    def test_within_plus_between_is_deviation_from_grand_mean(self, random_panel, session):
        w = within(random_panel['x'], random_panel, i='id', session=session)
        b = between(random_panel['x'], random_panel, i='id', session=session)
        np.testing.assert_allclose(w + b, random_panel['x'] - random_panel['x'].mean())


class TestMissingValues:
    """The default mean ignores missing values."""

    def setup_method(self):
        self.data = pd.DataFrame({
            'id': [1, 1, 1, 2],
            'x': [1.0, np.nan, 3.0, 5.0],
        })

    def test_within(self, session):
        result = within(self.data['x'], self.data, i='id', session=session)
        np.testing.assert_array_equal(result.to_numpy(), [-1.0, np.nan, 1.0, 0.0])

    def test_between(self, session):
        result = between(self.data['x'], self.data, i='id', session=session)
        # unit means 2 and 5, grand mean 3
        assert result.tolist() == [-1.0, -1.0, -1.0, 2.0]

    def test_missing_identifier_forms_own_group(self, session):
        data = pd.DataFrame({'id': [1.0, np.nan, np.nan, 1.0], 'x': [1, 2, 4, 3]})
        result = within(data['x'], data, i='id', session=session)
        assert result.tolist() == [-1.0, -1.0, 1.0, 1.0]


class TestMultipleIdentifiers:

    def test_route_groups(self, route_panel, session):
        panel = pdeclare(route_panel, i=['origin', 'destination'], t='insert_date',
                         d=0, session=session)
        result = within(route_panel['price'], panel, session=session)
        # MADRID-SEVILLA mean 55, MADRID-BARCELONA 80, SEVILLA-MADRID 50
        assert result.tolist() == [-5.0, 5.0, 0.0, -10.0, -5.0, 15.0]

    def test_route_between(self, route_panel, session):
        result = between(route_panel['price'], route_panel,
                         i=['origin', 'destination'], session=session)
        grand = route_panel['price'].mean()
        np.testing.assert_allclose(
            result, [55 - grand, 55 - grand, 80 - grand, 50 - grand, 50 - grand, 50 - grand]
        )


class TestAggregators:

    def test_callable(self, small_panel, session):
        result = within(small_panel['x'], small_panel, func=lambda s: s.max(),
                        i='id', session=session)
        assert result.tolist() == [-10, 0, -20, 0]

    def test_callable_between_uses_grand_aggregate(self, small_panel, session):
        result = between(small_panel['x'], small_panel, func=lambda s: s.max(),
                         i='id', session=session)
        # unit maxima 20 and 50, grand maximum 50
        assert result.tolist() == [-30, -30, 0, 0]

    def test_named_median(self, session):
        data = pd.DataFrame({'id': [1, 1, 1, 2, 2], 'x': [1.0, 2.0, 9.0, 4.0, 6.0]})
        assert within(data['x'], data, func='median', i='id',
                      session=session).tolist() == [-1.0, 0.0, 7.0, -1.0, 1.0]
        assert between(data['x'], data, func='median', i='id',
                       session=session).tolist() == [-2.0, -2.0, -2.0, 1.0, 1.0]

    @pytest.mark.parametrize('name', sorted(RECOGNIZED_FUNCS))
    def test_every_recognized_name_within(self, random_panel, session, name):
        x = random_panel['x']
        result = within(x, random_panel, func=name, i='id', session=session)
        expected = x - random_panel.groupby('id')['x'].transform(name)
        np.testing.assert_allclose(result, expected)

    @pytest.mark.parametrize('name', sorted(RECOGNIZED_FUNCS))
    def test_every_recognized_name_between(self, random_panel, session, name):
        x = random_panel['x']
        result = between(x, random_panel, func=name, i='id', session=session)
        if name == 'first':
            grand = x.iloc[0]
        elif name == 'last':
            grand = x.iloc[-1]
        else:
            grand = x.agg(name)
        expected = random_panel.groupby('id')['x'].transform(name) - grand
        np.testing.assert_allclose(result, expected)

    def test_first_and_last_skip_missing(self, session):
        data = pd.DataFrame({'id': [1, 1, 2, 2], 'x': [np.nan, 2.0, 3.0, np.nan]})
        np.testing.assert_array_equal(
            within(data['x'], data, func='first', i='id', session=session).to_numpy(),
            [np.nan, 0.0, 0.0, np.nan],
        )
        # unit values 2 and 3; first non-missing overall is 2, last is 3
        assert between(data['x'], data, func='first', i='id',
                       session=session).tolist() == [0.0, 0.0, 1.0, 1.0]
        assert between(data['x'], data, func='last', i='id',
                       session=session).tolist() == [-1.0, -1.0, 0.0, 0.0]

    @pytest.mark.parametrize('func', ['average', 5, None, ['mean']])
    def test_invalid_func(self, small_panel, session, func):
        with pytest.raises(InvalidParameterTypeError, match="func must be"):
            within(small_panel['x'], small_panel, func=func, i='id', session=session)


class TestValues:

    @pytest.mark.parametrize('values', [
        [10, 20, 30, 50],
        (10, 20, 30, 50),
        np.array([10, 20, 30, 50]),
        pd.array([10, 20, 30, 50], dtype='float64'),
    ])
    def test_sequence_kinds(self, small_panel, session, values):
        result = within(values, small_panel, i='id', session=session)
        assert result.tolist() == [-5.0, 5.0, -10.0, 10.0]
        assert result.name is None

    @pytest.mark.parametrize('values', ['x', 10, None, {'a': 1}])
    def test_non_sequence_rejected(self, small_panel, session, values):
        with pytest.raises(InvalidParameterTypeError, match="values must be"):
            within(values, small_panel, i='id', session=session)

    def test_dataframe_rejected(self, small_panel, session):
        with pytest.raises(InvalidParameterTypeError):
            between(small_panel[['x']], small_panel, i='id', session=session)

    def test_two_dimensional_array_rejected(self, small_panel, session):
        with pytest.raises(InvalidParameterTypeError, match="one-dimensional"):
            within(np.ones((4, 2)), small_panel, i='id', session=session)

    def test_length_mismatch(self, small_panel, session):
        with pytest.raises(InvalidParameterError, match="3 entries") as excinfo:
            within([1, 2, 3], small_panel, i='id', session=session)
        assert not isinstance(excinfo.value, TypeError)

    def test_matched_by_position(self, small_panel, session):
        values = pd.Series([10, 20, 30, 50], index=[3, 2, 1, 0])
        assert within(values, small_panel, i='id', session=session).tolist() == [
            -5.0, 5.0, -10.0, 10.0,
        ]


class TestOutput:

    def test_index_and_name_preserved(self, small_panel, session):
        data = small_panel.set_index(pd.Index([10, 11, 12, 13]))
        result = within(data['x'], data, i='id', session=session)
        assert list(result.index) == [10, 11, 12, 13]
        assert result.name == 'x'

    def test_assignable_as_column(self, small_panel, session):
        data = small_panel.copy()
        data['x_within'] = within(data['x'], data, i='id', session=session)
        data['x_between'] = between(data['x'], data, i='id', session=session)
        assert data['x_within'].tolist() == [-5.0, 5.0, -10.0, 10.0]
        assert data['x_between'].tolist() == [-12.5, -12.5, 12.5, 12.5]

    def test_data_not_mutated(self, small_panel, session):
        before = small_panel.copy()
        within(small_panel['x'], small_panel, i='id', session=session)
        between(small_panel['x'], small_panel, i='id', session=session)
        pd.testing.assert_frame_equal(small_panel, before)

    def test_identifier_named_like_working_column(self, session):
        data = pd.DataFrame({'.var': ['a', 'a', 'b'], 'x': [1.0, 3.0, 5.0]})
        assert within(data['x'], data, i='.var', session=session).tolist() == [
            -1.0, 1.0, 0.0,
        ]


class TestPanelResolution:

    def test_no_identifier_anywhere(self, small_panel, session):
        with pytest.raises(PanelNotDeclaredError):
            within(small_panel['x'], small_panel, session=session)

    def test_declared_time_only(self, small_panel, session):
        panel = pdeclare(small_panel, t='t', session=session)
        with pytest.raises(PanelNotDeclaredError, match=r"within\(\) requires that i"):
            within(small_panel['x'], panel, session=session)
        with pytest.raises(PanelNotDeclaredError, match=r"between\(\) requires that i"):
            between(small_panel['x'], panel, session=session)

    def test_time_and_step_do_not_change_result(self, small_panel, session):
        plain = within(small_panel['x'], small_panel, i='id', session=session)
        timed = within(small_panel['x'], small_panel, i='id', t='t', d=1,
                       session=session)
        pd.testing.assert_series_equal(plain, timed)

    def test_time_still_validated(self, small_panel, session):
        with pytest.raises(MissingRequiredColumnError):
            within(small_panel['x'], small_panel, i='id', t='year', session=session)

    def test_handle_without_metadata(self, small_panel, session):
        with pytest.raises(PanelNotDeclaredError):
            between(small_panel['x'], PanelData(small_panel), session=session)

    def test_handle_with_explicit_metadata(self, small_panel, session):
        panel = PanelData(small_panel, PanelMetadata(i=('id',)))
        assert between(small_panel['x'], panel, session=session).tolist() == [
            -12.5, -12.5, 12.5, 12.5,
        ]

    def test_non_table(self, small_panel, session):
        with pytest.raises(InvalidParameterTypeError):
            within(small_panel['x'], small_panel.to_numpy(), i='id', session=session)

    def test_bare_string_identifier_on_handle(self, small_panel, session):
        panel = PanelData(small_panel, PanelMetadata(i='id'))
        assert within(small_panel['x'], panel, session=session).tolist() == [
            -5.0, 5.0, -10.0, 10.0,
        ]

    def test_handle_with_replaced_frame(self, small_panel, session):
        panel = pdeclare(small_panel, i='id', t='t', session=session)
        panel.frame = small_panel.drop(columns='id')
        with pytest.raises(MissingRequiredColumnError, match="id"):
            within(small_panel['x'], panel, session=session)
