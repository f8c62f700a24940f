import numpy
import pytest

from propindex import IndexConfig, PropertyIndex


@pytest.fixture(params=["leaf", "internal"])
def root_kind(request):
    return request.param


@pytest.fixture
def index(root_kind):
    return PropertyIndex(IndexConfig(root=root_kind))


@pytest.fixture
def listings():
    return [
        ("A", 100., 50., 2, (0, 0, 0, 0)),
        ("B", 250., 80., 3, (3, 4, 3, 4)),
        ("C", 90., 40., 1, (50, 50, 50, 50)),
        ("D", 400., 120., 4, (10, 10, 12, 14)),
        ("E", 150., 60., 2, (-20, 5, -15, 8)),
        ("F", 80., 30., 0, (140, 130, 150, 130)),
    ]


@pytest.fixture
def filled_index(index, listings):
    for listing in listings:
        index.insert(*listing)
    return index


@pytest.fixture
def random_listings():
    rng = numpy.random.RandomState(0)
    res = []
    for i in range(200):
        x, y = rng.uniform(-50, 150, size=2)
        w, h = rng.exponential(2., size=2) * rng.randint(0, 2)
        res.append((
            "L{}".format(i),
            float(rng.randint(50, 500)),
            float(rng.randint(20, 200)),
            int(rng.randint(0, 6)),
            (x, y, x + w, y + h),
        ))
    return res
