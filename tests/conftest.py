import pytest

from holder.models import config as holder_config
from holder.utils import geo


@pytest.fixture
def full():
    return holder_config.FULL


@pytest.fixture
def compact():
    return holder_config.COMPACT


@pytest.fixture
def cube():
    """10 mm cube resting on the bed."""
    return geo.move(geo.box((10, 10, 10)), z=5)
