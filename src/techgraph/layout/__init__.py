"""Continuous force layout: solver boundary and the frame-driven driver."""

from .driver import FrameLoop, LayoutDriver, LayoutState
from .solver import (
    ForceSolver,
    NetworkxForceSolver,
    SimpleForceSolver,
    SolverLink,
    SolverNode,
    make_solver,
)

__all__ = [
    "FrameLoop",
    "LayoutDriver",
    "LayoutState",
    "ForceSolver",
    "NetworkxForceSolver",
    "SimpleForceSolver",
    "SolverLink",
    "SolverNode",
    "make_solver",
]
