import numpy as np
import pytest

from kmeans_lab import ElbowAnalyzer, ElbowResult, NonConvergenceWarning, run_elbow_analysis
from kmeans_lab.models.state import Status


@pytest.mark.parametrize("strategy", ['random', 'kmeans++', 'grid'])
def test_single_k_gives_total_sum_of_squares(three_blobs, strategy):
    results = run_elbow_analysis(three_blobs, max_k=1, strategy=strategy, random_state=0)

    coords = np.array([[p.x, p.y] for p in three_blobs])
    expected = np.sum((coords - coords.mean(axis=0)) ** 2)

    assert len(results) == 1
    assert results[0].k == 1
    assert results[0].wcss == pytest.approx(expected)


def test_wcss_does_not_increase_with_k(three_blobs):
    results = run_elbow_analysis(three_blobs, max_k=4, strategy='kmeans++', random_state=42)

    assert [r.k for r in results] == [1, 2, 3, 4]
    wcss = [r.wcss for r in results]
    for larger_k, smaller_k in zip(wcss[1:], wcss[:-1]):
        assert larger_k <= smaller_k
    # three blobs: K=3 recovers the groups exactly, each group contributes 4 * 2
    assert wcss[2] == pytest.approx(24.0)


def test_seeded_analysis_is_reproducible(three_blobs):
    first = run_elbow_analysis(three_blobs, max_k=3, strategy='random', random_state=9)
    second = run_elbow_analysis(three_blobs, max_k=3, strategy='random', random_state=9)
    assert first == second


def test_results_dataframe(three_blobs):
    analyzer = ElbowAnalyzer('kmeans++', random_state=1)
    analyzer.analyze(three_blobs, max_k=3)
    df = analyzer.get_results_dataframe()

    assert list(df.columns) == ['k', 'wcss', 'wcss_drop', 'status']
    assert df['k'].tolist() == [1, 2, 3]
    assert np.isnan(df['wcss_drop'].iloc[0])
    assert df['wcss_drop'].iloc[1] == pytest.approx(df['wcss'].iloc[0] - df['wcss'].iloc[1])
    assert set(df['status']) == {Status.CONVERGED.value}


def test_empty_results_dataframe():
    df = ElbowAnalyzer().get_results_dataframe()
    assert df.empty
    assert 'wcss' in df.columns


def test_progress_callback(three_blobs):
    calls = []
    ElbowAnalyzer(random_state=0).analyze(three_blobs, max_k=3, progress_callback=lambda i, n: calls.append((i, n)))
    assert calls == [(1, 3), (2, 3), (3, 3)]


def test_analyze_replaces_previous_results(three_blobs):
    analyzer = ElbowAnalyzer(random_state=0)
    analyzer.analyze(three_blobs, max_k=3)
    results = analyzer.analyze(three_blobs, max_k=2)
    assert len(results) == 2
    assert len(analyzer.statuses) == 2


def test_invalid_max_k(three_blobs):
    with pytest.raises(ValueError):
        run_elbow_analysis(three_blobs, max_k=0)


def test_max_k_beyond_point_count_keeps_feasible_trials(unit_square):
    calls = []
    analyzer = ElbowAnalyzer('grid')
    with pytest.warns(UserWarning, match="Failed for k=5"):
        results = analyzer.analyze(unit_square, max_k=5, progress_callback=lambda i, n: calls.append(i))

    assert [r.k for r in results] == [1, 2, 3, 4]
    assert results[-1].wcss == pytest.approx(0.0)
    assert calls == [1, 2, 3, 4, 5]
    assert analyzer.get_results_dataframe()['k'].tolist() == [1, 2, 3, 4]


def test_capped_trials_warn(unit_square):
    analyzer = ElbowAnalyzer('grid', max_iterations=1)
    with pytest.warns(NonConvergenceWarning):
        analyzer.analyze(unit_square, max_k=2)
    assert analyzer.statuses[-1] is Status.MAX_ITERATIONS_REACHED


def test_elbow_result_to_dict():
    assert ElbowResult(k=2, wcss=1.5).to_dict() == {'k': 2, 'wcss': 1.5}
