"""
Tests for compare_models() and ComparisonTable.
"""

import numpy as np
import pandas as pd
import pytest

from lmstep import (
    compare_models, ComparisonTable, DataSource, fit, select_forward, train_test_split,
)
from lmstep.comparison import ResidualSummary
from lmstep.core.exceptions import UnknownFieldError, ValidationError


@pytest.fixture
def split_models(mtcars):
    split = train_test_split(mtcars, seed=100)
    train = split.train(mtcars)
    test = split.test(mtcars)
    models = {
        'full': fit(train, 'mpg'),
        'wt': fit(train, 'mpg', ['wt']),
        'wt_cyl': fit(train, 'mpg', ['wt', 'cyl']),
    }
    return models, test


@pytest.fixture
def table(split_models):
    models, test = split_models
    return compare_models(models, test)


class TestLongTable:

    def test_one_row_per_record_and_model(self, table, split_models):
        _, test = split_models
        assert isinstance(table, ComparisonTable)
        assert len(table) == 3 * test.n_observations
        assert table.models == ('full', 'wt', 'wt_cyl')
        assert table.records == test.row_names
        assert table.response == 'mpg'

    def test_record_major_order(self, table):
        first = table.rows[:3]
        assert [r.model for r in first] == ['full', 'wt', 'wt_cyl']
        assert len({r.record for r in first}) == 1

    def test_residual_is_actual_minus_predicted(self, table):
        for row in table.rows:
            assert row.residual == pytest.approx(row.actual - row.predicted)

    def test_predictions_match_predict(self, table, split_models):
        models, test = split_models
        expected = models['wt'].predict(test).fit
        got = [r.predicted for r in table.for_model('wt')]
        np.testing.assert_allclose(got, expected)

    def test_actual_values(self, table, split_models):
        _, test = split_models
        np.testing.assert_array_equal([r.actual for r in table.for_model('full')], test['mpg'])

    def test_unknown_model(self, table):
        with pytest.raises(UnknownFieldError, match="no model 'lasso'"):
            table.for_model('lasso')

    def test_record_order_sorted_by_actual(self, table):
        order = table.record_order()
        actual = {r.record: r.actual for r in table.rows}
        values = [actual[name] for name in order]
        assert values == sorted(values)
        assert set(order) == set(table.records)


class TestResidualSummary:

    def test_one_summary_per_model(self, table):
        summaries = table.residual_summary()
        assert list(summaries) == ['full', 'wt', 'wt_cyl']
        assert all(isinstance(s, ResidualSummary) for s in summaries.values())

    def test_statistics(self, table):
        residuals = table.residuals('wt')
        s = table.residual_summary()['wt']
        assert s.n == residuals.size
        assert s.mean == pytest.approx(residuals.mean())
        assert s.rmse == pytest.approx(np.sqrt(np.mean(residuals ** 2)))
        assert s.mae == pytest.approx(np.mean(np.abs(residuals)))
        assert s.median == pytest.approx(np.median(residuals))
        assert s.minimum <= s.q1 <= s.median <= s.q3 <= s.maximum
        assert s.minimum <= s.lower_whisker <= s.upper_whisker <= s.maximum
        assert s.iqr == pytest.approx(s.q3 - s.q1)

    def test_outliers_beyond_whiskers(self, line_model):
        model, data = line_model
        table = compare_models({'m': model}, data)
        s = table.residual_summary()['m']
        assert s.outliers == (pytest.approx(s.maximum),)
        assert s.upper_whisker < s.maximum

    @pytest.fixture
    def line_model(self):
        x = np.arange(10, dtype=float)
        y_train = 2.0 * x + np.array([0.1, -0.1] * 5)
        model = fit({'y': y_train, 'x': x}, 'y', ['x'])
        y_test = 2.0 * x + np.array([0.1, -0.1] * 4 + [0.1, 50.0])
        return model, {'y': y_test, 'x': x}


class TestPandasViews:

    def test_to_dataframe(self, table):
        df = table.to_dataframe()
        assert list(df.columns) == ['record', 'model', 'actual', 'predicted', 'residual']
        assert len(df) == len(table)
        assert list(df['model'].cat.categories) == ['full', 'wt', 'wt_cyl']

    def test_to_wide(self, table):
        wide = table.to_wide()
        assert list(wide.columns) == [
            'mpg', 'full_predict', 'full_resid', 'wt_predict', 'wt_resid',
            'wt_cyl_predict', 'wt_cyl_resid',
        ]
        assert list(wide.index) == list(table.records)
        np.testing.assert_allclose(wide['wt_resid'], table.residuals('wt'))
        np.testing.assert_allclose(wide['mpg'] - wide['wt_predict'], wide['wt_resid'])


class TestCompareErrors:

    def test_no_models(self, mtcars):
        with pytest.raises(ValidationError, match="at least one model"):
            compare_models({}, mtcars)

    def test_mixed_responses_need_explicit_response(self, mtcars):
        models = {'a': fit(mtcars, 'mpg', ['wt']), 'b': fit(mtcars, 'hp', ['wt'])}
        with pytest.raises(ValidationError, match="different responses"):
            compare_models(models, mtcars)
        table = compare_models(models, mtcars, response='mpg')
        assert table.response == 'mpg'

    def test_missing_predictor_in_data(self, mtcars):
        models = {'a': fit(mtcars, 'mpg', ['wt'])}
        with pytest.raises(UnknownFieldError):
            compare_models(models, {'mpg': [21.0], 'hp': [110.0]})

    def test_missing_response_in_data(self, mtcars):
        models = {'a': fit(mtcars, 'mpg', ['wt'])}
        with pytest.raises(UnknownFieldError):
            compare_models(models, {'wt': [2.5]})


def test_dataframe_input(mtcars):
    models = {'wt': fit(mtcars, 'mpg', ['wt'])}
    df = pd.DataFrame({'mpg': [21.0, 30.0], 'wt': [2.6, 1.8]}, index=['car_a', 'car_b'])
    table = compare_models(models, df)
    assert table.records == ('car_a', 'car_b')


class TestRecordIdentity:

    def test_unlabelled_records_are_source_positions(self):
        ds = DataSource.from_arrays(x=np.arange(10.0), y=np.arange(10.0) ** 2)
        split = train_test_split(ds, seed=0)
        model = fit(split.train(ds), 'y', ['x'])
        table = compare_models({'m': model}, split.test(ds))
        assert table.records == tuple(str(i) for i in split.test_indices)
        assert len(set(table.records)) == split.n_test

    def test_duplicate_labels_rejected(self, mtcars):
        models = {'wt': fit(mtcars, 'mpg', ['wt'])}
        df = pd.DataFrame({'mpg': [21.0, 30.0], 'wt': [2.6, 1.8]}, index=['car', 'car'])
        with pytest.raises(ValidationError, match=r"duplicated: \['car'\]"):
            compare_models(models, df)


class TestSelectedVersusBaselines:
    """Full, forward-selected, wt-only and cyl-only models on the seed-100 split."""

    @pytest.fixture
    def comparison(self, mtcars):
        split = train_test_split(mtcars, seed=100)
        train = split.train(mtcars)
        test = split.test(mtcars)
        models = {
            'full': fit(train, 'mpg'),
            'forward': select_forward(train, 'mpg').model,
            'wt': fit(train, 'mpg', ['wt']),
            'cyl': fit(train, 'mpg', ['cyl']),
        }
        return compare_models(models, test), test

    def test_layout(self, comparison):
        table, test = comparison
        assert test.n_observations == 7
        assert len(table) == 4 * 7
        assert table.models == ('full', 'forward', 'wt', 'cyl')
        assert [r.model for r in table.rows[:4]] == ['full', 'forward', 'wt', 'cyl']
        assert table.records == test.row_names

    def test_wide_columns(self, comparison):
        table, _ = comparison
        assert list(table.to_wide().columns) == [
            'mpg',
            'full_predict', 'full_resid',
            'forward_predict', 'forward_resid',
            'wt_predict', 'wt_resid',
            'cyl_predict', 'cyl_resid',
        ]

    def test_residuals(self, comparison):
        table, _ = comparison
        for row in table.rows:
            assert row.residual == pytest.approx(row.actual - row.predicted)
        summaries = table.residual_summary()
        assert list(summaries) == ['full', 'forward', 'wt', 'cyl']
        assert all(s.n == 7 for s in summaries.values())
