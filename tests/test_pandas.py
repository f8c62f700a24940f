import pandas
import pytest

from propindex import IndexConfig, InvalidAttribute, PropertyIndex, Rect
import propindex.pandas as ppd


@pytest.fixture
def frame():
    return pandas.DataFrame({
        'location': ["A", "B", "C"],
        'price': [100., 250., 90.],
        'area': [50., 80., 40.],
        'bedrooms': [2, 3, 1],
        'x_min': [0., 3., 50.],
        'y_min': [0., 4., 50.],
        'x_max': [0., 3., 52.],
        'y_max': [0., 4., 51.],
    })


def test_from_frame(frame):
    index = ppd.from_frame(frame)
    assert len(index) == 3
    assert [p.location for p in index.range_query((0, 0, 10, 10))] == \
        ["A", "B"]
    assert list(index)[2].box == Rect(50, 50, 52, 51)


def test_from_frame_points():
    frame = pandas.DataFrame({
        'location': ["P"], 'price': [1.], 'area': [2.], 'bedrooms': [0],
        'x': [7.], 'y': [8.],
    })
    index = ppd.from_frame(frame, config=IndexConfig(root="internal"))
    assert list(index)[0].box == Rect(7, 8, 7, 8)


def test_from_frame_into_existing_index(frame):
    index = PropertyIndex()
    index.insert("Z", 1, 1, 1, (0, 0, 0, 0))
    assert ppd.from_frame(frame, index=index) is index
    assert len(index) == 4


def test_from_frame_missing_columns(frame):
    with pytest.raises(ValueError):
        ppd.from_frame(frame.drop('price', axis=1))
    with pytest.raises(ValueError):
        ppd.from_frame(frame.drop('x_max', axis=1))


def test_from_frame_is_all_or_nothing(frame):
    frame.loc[2, 'area'] = -1.
    index = PropertyIndex()
    with pytest.raises(InvalidAttribute):
        ppd.from_frame(frame, index=index)
    assert index.is_empty


def test_to_frame(frame):
    index = ppd.from_frame(frame)
    res = ppd.to_frame(index.near_location_query(0, 0, 10))
    assert list(res.columns) == ppd.COLUMNS
    assert list(res['location']) == ["A", "B"]
    pandas.testing.assert_frame_equal(
        res, frame.iloc[:2].reset_index(drop=True), check_dtype=False)


def test_to_frame_empty():
    res = ppd.to_frame([])
    assert res.empty
    assert list(res.columns) == ppd.COLUMNS


def test_read_csv(tmp_path, frame):
    path = tmp_path / "listings.csv"
    frame.to_csv(path, index=False)
    index = ppd.read_csv(path)
    assert [p.location for p in index] == ["A", "B", "C"]
