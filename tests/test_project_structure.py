"""Basic project scaffolding tests."""

import importlib


def test_package_importable() -> None:
    """Verify the top-level package is importable."""
    import battleship_solver  # noqa: F401  (import used to ensure availability)

    assert battleship_solver.__version__


def test_submodules_exist() -> None:
    modules = [
        "battleship_solver.cli",
        "battleship_solver.config",
        "battleship_solver.engine.overlap",
        "battleship_solver.engine.solver",
        "battleship_solver.io.moves",
        "battleship_solver.telemetry",
    ]

    for module in modules:
        assert importlib.import_module(module) is not None
