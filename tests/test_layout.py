"""Tests for layout selection and exclusion predicates."""

import numpy as np
import pytest

from voronoi_maze.core.alea_prng import AleaPRNG
from voronoi_maze.core.exceptions import LayoutExhausted
from voronoi_maze.core.geometry import Point
from voronoi_maze.core.layout import (
    CombinedExclusion,
    combine_exclusions,
    compute_label_points,
    endpoint_exclusion,
    label_clearance_exclusion,
    min_edge_length_exclusion,
    random_points,
    sampled_edge_exclusion,
    select_first_layout,
    select_layout,
    shortest_edge_length,
)
from voronoi_maze.core.voronoi_graph import generate_subdivision

BISECTOR_LENGTH = np.hypot(0.4, 1.0)


class TestRandomPoints:
    """Test site sampling."""

    def test_count_and_bounds(self):
        points = random_points(12, AleaPRNG("points"))
        assert points.shape == (12, 2)
        assert np.all(points > 0)
        assert np.all(points < 1)

    def test_min_separation(self):
        points = random_points(20, AleaPRNG("points"), min_separation=0.1)
        for i in range(len(points)):
            for j in range(i + 1, len(points)):
                assert np.hypot(*(points[i] - points[j])) >= 0.1

    def test_reproducible(self):
        np.testing.assert_array_equal(random_points(5, AleaPRNG("same")),
                                      random_points(5, AleaPRNG("same")))


class TestExclusions:
    """Test the exclusion predicate factories on two sites."""

    def test_shortest_edge(self, two_site_subdivision):
        assert shortest_edge_length(two_site_subdivision) == pytest.approx(BISECTOR_LENGTH)

    def test_shortest_edge_without_edges(self):
        assert shortest_edge_length(generate_subdivision([[0.4, 0.3]])) == 0.0

    def test_min_edge_length(self, two_site_subdivision):
        assert min_edge_length_exclusion(2.0)(two_site_subdivision)
        assert not min_edge_length_exclusion(0.5)(two_site_subdivision)

    def test_endpoint(self, two_site_subdivision):
        assert endpoint_exclusion(Point(0.7, 0.0), 0.01)(two_site_subdivision)
        assert not endpoint_exclusion(Point(0.0, 0.0), 0.05)(two_site_subdivision)

    def test_sampled_edge(self, two_site_subdivision):
        # the edge passes through the square's centre
        assert sampled_edge_exclusion(Point(0.5, 0.5), 0.01)(two_site_subdivision)
        assert not sampled_edge_exclusion(Point(0.975, 0.975), 0.225)(two_site_subdivision)

    def test_label_clearance(self, two_site_subdivision):
        labels = compute_label_points(two_site_subdivision)
        assert label_clearance_exclusion(1.0)(two_site_subdivision, labels)
        assert not label_clearance_exclusion(0.001)(two_site_subdivision, labels)
        # label points are computed on demand when not supplied
        assert label_clearance_exclusion(1.0)(two_site_subdivision)

    def test_combine(self, two_site_subdivision):
        never = min_edge_length_exclusion(0.0)
        always = min_edge_length_exclusion(2.0)
        assert combine_exclusions(never, always)(two_site_subdivision)
        assert not combine_exclusions(never, never)(two_site_subdivision)

    def test_label_points_inside_polygons(self, random_subdivision):
        labels = compute_label_points(random_subdivision, 0.005)
        for label, polygon in zip(labels, random_subdivision.polygons):
            assert polygon.distance_from_point(label) > 0


class TestSelectLayout:
    """Test best-of-N layout selection."""

    def test_runs_all_trials(self):
        layout = select_layout(6, AleaPRNG("best_of"), trial_count=10)
        assert layout.trials == 10
        assert layout.points.shape == (6, 2)
        assert len(layout.label_points) == 6
        assert layout.score == pytest.approx(shortest_edge_length(layout.subdivision))

    def test_best_score_wins(self):
        best = select_layout(6, AleaPRNG("compare"), trial_count=20)
        # a single trial drawn from the same sequence is the first candidate
        first = select_layout(6, AleaPRNG("compare"), trial_count=1)
        assert best.score >= first.score

    def test_exclusion_is_respected(self):
        exclusion = sampled_edge_exclusion(Point(0.975, 0.975), 0.225)
        layout = select_layout(6, AleaPRNG("excluded"), exclusion=exclusion, trial_count=5)
        assert layout.trials >= 5
        assert not exclusion(layout.subdivision, layout.label_points)

    def test_deterministic(self):
        a = select_layout(5, AleaPRNG("repeat"), trial_count=5)
        b = select_layout(5, AleaPRNG("repeat"), trial_count=5)
        np.testing.assert_array_equal(a.points, b.points)


class TestSelectFirstLayout:
    """Test first-fit layout selection."""

    def test_accepted_layout_passes_every_check(self):
        edge_check = min_edge_length_exclusion(0.05)
        corner_check = endpoint_exclusion(Point(0.0, 0.0), 0.05)
        label_check = label_clearance_exclusion(0.025)
        exclusion = combine_exclusions(edge_check, corner_check, label_check)

        layout = select_first_layout(6, AleaPRNG("first_fit"), exclusion)

        assert layout.trials >= 1
        assert not edge_check(layout.subdivision, layout.label_points)
        assert not corner_check(layout.subdivision, layout.label_points)
        assert not label_check(layout.subdivision, layout.label_points)
        assert shortest_edge_length(layout.subdivision) >= 0.05

    def test_without_exclusion_first_candidate_wins(self):
        layout = select_first_layout(4, AleaPRNG("first"), None)
        assert layout.trials == 1

    def test_trial_cap(self):
        """An exclusion that always rejects stops at max_trials instead of looping."""
        with pytest.raises(LayoutExhausted) as excinfo:
            select_first_layout(6, AleaPRNG("capped"), min_edge_length_exclusion(2.0), max_trials=5)
        assert excinfo.value.trials == 5
        assert excinfo.value.last_reason == "edge_too_short"


class TestTrialCap:
    """Test max_trials on best-of selection."""

    def test_best_of_gives_up(self):
        with pytest.raises(LayoutExhausted) as excinfo:
            select_layout(6, AleaPRNG("capped"), exclusion=min_edge_length_exclusion(2.0),
                          trial_count=3, max_trials=8)
        assert excinfo.value.trials == 8

    def test_cap_does_not_cut_accepted_search(self):
        layout = select_layout(5, AleaPRNG("capped"), trial_count=10, max_trials=2)
        assert layout.trials == 10


class TestCombinedExclusion:
    """Test rejection reasons of combined exclusions."""

    def test_reason_names_first_rejecting_predicate(self, two_site_subdivision):
        combined = combine_exclusions(min_edge_length_exclusion(0.0),
                                      endpoint_exclusion(Point(0.7, 0.0), 0.01),
                                      min_edge_length_exclusion(2.0))
        assert isinstance(combined, CombinedExclusion)
        assert combined.reason(two_site_subdivision) == "endpoint_near_anchor"

    def test_nested(self, two_site_subdivision):
        inner = combine_exclusions(min_edge_length_exclusion(2.0))
        outer = combine_exclusions(min_edge_length_exclusion(0.0), inner)
        assert outer.reason(two_site_subdivision) == "edge_too_short"
        assert outer(two_site_subdivision)

    def test_passing_layout_has_no_reason(self, two_site_subdivision):
        combined = combine_exclusions(min_edge_length_exclusion(0.0))
        assert combined.reason(two_site_subdivision) is None
        assert not combined(two_site_subdivision)
