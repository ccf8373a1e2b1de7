from __future__ import annotations

import pytest

from cubesolver.tables import SolverTables, initialize_tables


@pytest.fixture(scope="session")
def tables() -> SolverTables:
    return initialize_tables()
