"""Unit tests for the reference force solver."""

import math

import pytest

from techgraph.config import LayoutEngine, LayoutSettings
from techgraph.layout.solver import (
    NetworkxForceSolver,
    SimpleForceSolver,
    SolverLink,
    SolverNode,
    make_solver,
)


def distance(a, b):
    return math.hypot(a.x - b.x, a.y - b.y)


class TestSolverNode:
    def test_pin_and_unpin(self):
        node = SolverNode(id="A")
        assert not node.pinned
        node.pin(10, 20)
        assert node.pinned
        node.unpin()
        assert node.fx is None and node.fy is None


class TestSimpleForceSolver:
    def test_centering_strengths_follow_aspect_ratio(self):
        solver = SimpleForceSolver(aspect_ratio=2.0)
        modifier = 2.0 * 0.8
        assert solver.x_strength == pytest.approx(0.075 / modifier)
        assert solver.y_strength == pytest.approx(0.075 * modifier)

    def test_repulsion_pushes_nodes_apart(self):
        a = SolverNode(id="A", x=0, y=0)
        b = SolverNode(id="B", x=10, y=0)
        solver = SimpleForceSolver(LayoutSettings(centering_base_strength=0), center=(5, 0))
        solver.set_nodes([a, b])

        solver.tick()

        assert distance(a, b) > 10

    def test_link_pulls_distant_nodes_together(self):
        a = SolverNode(id="A", x=0, y=0)
        b = SolverNode(id="B", x=2000, y=0)
        settings = LayoutSettings(charge_strength=0, centering_base_strength=0, link_strength=1.0)
        solver = SimpleForceSolver(settings)
        solver.set_nodes([a, b])
        solver.set_links([SolverLink("A", "B")])

        for _ in range(10):
            solver.tick()

        assert distance(a, b) < 2000

    def test_links_to_unknown_nodes_are_dropped(self):
        solver = SimpleForceSolver()
        solver.set_nodes([SolverNode(id="A")])
        solver.set_links([SolverLink("A", "Ghost"), SolverLink("A", "A")])
        assert solver._links == []

    def test_pinned_node_stays_put(self):
        a = SolverNode(id="A", x=0, y=0)
        b = SolverNode(id="B", x=5, y=5)
        a.pin(100, 100)
        solver = SimpleForceSolver()
        solver.set_nodes([a, b])

        for _ in range(5):
            solver.tick()

        assert (a.x, a.y) == (100, 100)
        assert (a.vx, a.vy) == (0.0, 0.0)

    def test_alpha_cools_toward_target(self):
        solver = SimpleForceSolver()
        solver.set_nodes([SolverNode(id="A")])
        for _ in range(1000):
            solver.tick()
        assert solver.alpha == pytest.approx(0.05, abs=1e-3)

    def test_collision_separates_overlapping_nodes(self):
        a = SolverNode(id="A", x=0, y=0, radius=50)
        b = SolverNode(id="B", x=10, y=0, radius=50)
        settings = LayoutSettings(charge_strength=0, centering_base_strength=0)
        solver = SimpleForceSolver(settings)
        solver.set_nodes([a, b])

        for _ in range(20):
            solver.tick()

        assert distance(a, b) > 10


class TestNetworkxForceSolver:
    def test_link_pulls_distant_nodes_together(self):
        a = SolverNode(id="A", x=0, y=0)
        b = SolverNode(id="B", x=2000, y=0)
        solver = NetworkxForceSolver(center=(1000, 0))
        solver.set_nodes([a, b])
        solver.set_links([SolverLink("A", "B")])

        for _ in range(10):
            solver.tick()

        assert distance(a, b) < 2000

    def test_close_nodes_repel(self):
        a = SolverNode(id="A", x=0, y=0)
        b = SolverNode(id="B", x=10, y=0)
        solver = NetworkxForceSolver(LayoutSettings(centering_base_strength=0), center=(5, 0))
        solver.set_nodes([a, b])

        solver.tick()

        assert distance(a, b) > 10

    def test_step_is_capped_by_alpha(self):
        a = SolverNode(id="A", x=0, y=0)
        b = SolverNode(id="B", x=5000, y=0)
        settings = LayoutSettings(centering_base_strength=0, velocity_decay=0.0)
        solver = NetworkxForceSolver(settings)
        solver.set_nodes([a, b])
        solver.set_links([SolverLink("A", "B")])

        solver.tick()

        assert abs(a.x) <= settings.link_distance + 1e-6

    def test_pinned_node_stays_put(self):
        a = SolverNode(id="A", x=0, y=0)
        b = SolverNode(id="B", x=5, y=5)
        a.pin(100, 100)
        solver = NetworkxForceSolver()
        solver.set_nodes([a, b])
        solver.set_links([SolverLink("A", "B")])

        for _ in range(5):
            solver.tick()

        assert (a.x, a.y) == (100, 100)

    def test_single_node_stays_at_center(self):
        node = SolverNode(id="A", x=500, y=500)
        solver = NetworkxForceSolver(center=(500, 500))
        solver.set_nodes([node])

        solver.tick()

        assert (node.x, node.y) == pytest.approx((500, 500))


class TestMakeSolver:
    def test_default_engine_is_networkx(self):
        assert isinstance(make_solver(), NetworkxForceSolver)

    def test_simple_engine(self):
        solver = make_solver(LayoutSettings(engine=LayoutEngine.SIMPLE), center=(10, 20), aspect_ratio=2.0)
        assert isinstance(solver, SimpleForceSolver)
        assert solver.center == (10, 20)
