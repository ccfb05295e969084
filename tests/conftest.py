import matplotlib

matplotlib.use("Agg")

import pytest

from epicycles.curves import Parametric


@pytest.fixture
def circle():
    return Parametric.named("circle")
