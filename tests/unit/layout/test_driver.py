"""Unit tests for the frame-driven layout driver."""

from unittest.mock import MagicMock

import pytest

from techgraph.core.session import GraphSession
from techgraph.core.types import DatasetRecord, Position
from techgraph.layout.driver import FrameLoop, LayoutDriver, LayoutState


@pytest.fixture
def session():
    records = [
        DatasetRecord(Name="Acme", Type="company", Designtechs=["Figma", "Sketch"]),
        DatasetRecord(Name="Figma", Type="design"),
        DatasetRecord(Name="Sketch", Type="design"),
    ]
    return GraphSession(records)


def measure_all(session):
    for node in session.nodes:
        session.measure(node.id, 80, 30)


class TestFrameLoop:
    def test_callbacks_requested_during_a_frame_run_next_frame(self):
        loop = FrameLoop()
        calls = []

        def step():
            calls.append(loop.frame)
            if len(calls) < 3:
                loop.request_frame(step)

        loop.request_frame(step)
        assert loop.run(10) == 3
        assert calls == [1, 2, 3]
        assert loop.pending == 0

    def test_run_frame_without_work(self):
        assert FrameLoop().run_frame() is False


class TestReadinessGate:
    def test_unmeasured_nodes_block_toggle(self, session):
        scheduler = MagicMock()
        driver = LayoutDriver(session, scheduler)

        assert not driver.initialized
        assert driver.toggle() == LayoutState.IDLE
        scheduler.request_frame.assert_not_called()
        assert driver.tick() is False

    def test_empty_store_is_not_initialized(self):
        driver = LayoutDriver(GraphSession([]), MagicMock())
        assert not driver.initialized


class TestRunLoop:
    def test_toggle_schedules_first_frame(self, session):
        measure_all(session)
        scheduler = MagicMock()
        driver = LayoutDriver(session, scheduler)

        assert driver.toggle() == LayoutState.RUNNING
        scheduler.request_frame.assert_called_once()

    def test_ticks_write_positions_back(self, session):
        measure_all(session)
        loop = FrameLoop()
        driver = LayoutDriver(session, loop)
        before = {n.id: (n.position.x, n.position.y) for n in session.nodes}

        driver.toggle()
        loop.run(5)

        assert driver.ticks == 5
        after = {n.id: (n.position.x, n.position.y) for n in session.nodes}
        assert after != before

    def test_stop_prevents_rescheduling(self, session):
        measure_all(session)
        loop = FrameLoop()
        driver = LayoutDriver(session, loop)

        driver.toggle()
        loop.run(2)
        assert driver.toggle() == LayoutState.IDLE

        # the already-requested frame runs but does not tick or reschedule
        loop.run(5)
        assert driver.ticks == 2
        assert loop.pending == 0

    def test_quick_restart_keeps_one_frame_loop(self, session):
        measure_all(session)
        loop = FrameLoop()
        driver = LayoutDriver(session, loop)

        driver.toggle()
        loop.run(1)
        driver.toggle()
        driver.toggle()
        assert loop.pending == 1

        loop.run(5)
        assert driver.ticks == 6
        assert loop.pending == 1

    def test_repeated_toggles_schedule_once(self, session):
        measure_all(session)
        scheduler = MagicMock()
        driver = LayoutDriver(session, scheduler)

        for _ in range(5):
            driver.toggle()

        scheduler.request_frame.assert_called_once()

    def test_measure_while_running_updates_collision_radius(self, session):
        measure_all(session)
        loop = FrameLoop()
        driver = LayoutDriver(session, loop)
        driver.toggle()
        loop.run(1)
        assert driver._sim_nodes["Figma"].radius == 40

        session.measure("Figma", 200, 30)
        loop.run(1)

        assert driver._sim_nodes["Figma"].radius == 100

    def test_restart_resyncs_from_store(self, session):
        measure_all(session)
        loop = FrameLoop()
        driver = LayoutDriver(session, loop)
        driver.toggle()
        loop.run(1)
        driver.toggle()
        loop.run(1)

        session.move_node("Figma", Position(x=-500, y=-500))
        driver.toggle()
        assert driver._sim_nodes["Figma"].x == -500

    def test_new_nodes_join_the_simulation(self, session):
        measure_all(session)
        loop = FrameLoop()
        driver = LayoutDriver(session, loop)
        driver.toggle()
        loop.run(1)

        node = session.add_node()
        session.measure(node.id, 40, 20)
        loop.run(1)

        assert node.id in driver._sim_nodes


class TestDragging:
    def test_dragged_node_follows_pointer(self, session):
        measure_all(session)
        loop = FrameLoop()
        driver = LayoutDriver(session, loop)
        driver.toggle()

        target = Position(x=42, y=24)
        driver.drag_start("Figma", target)
        loop.run(3)

        assert driver.dragging == "Figma"
        assert session.get_node("Figma").position == target
        assert driver._sim_nodes["Figma"].pinned

    def test_drag_end_releases_pin(self, session):
        measure_all(session)
        loop = FrameLoop()
        driver = LayoutDriver(session, loop)
        driver.toggle()

        driver.drag_start("Figma", Position(x=42, y=24))
        loop.run(1)
        driver.drag_end("Figma")
        loop.run(1)

        assert driver.dragging is None
        assert not driver._sim_nodes["Figma"].pinned

    def test_drag_end_for_other_node_is_ignored(self, session):
        measure_all(session)
        driver = LayoutDriver(session, FrameLoop())

        driver.drag_start("Figma", Position(x=1, y=1))
        driver.drag_end("Sketch")

        assert driver.dragging == "Figma"

    def test_drag_while_idle_moves_node(self, session):
        driver = LayoutDriver(session, MagicMock())
        driver.drag("Acme", Position(x=7, y=8))
        assert session.get_node("Acme").position == Position(x=7, y=8)
