import io

import pytest

from propindex import PropertyIndex, Rect
from propindex import cli
from propindex.core.records import make_property


def run_menu(text, index=None):
    index = PropertyIndex() if index is None else index
    out = io.StringIO()
    code = cli.Menu(index, stdin=io.StringIO(text), stdout=out).run()
    return code, out.getvalue(), index


def test_format_property():
    prop = make_property("12 Elm St", 250000, 80.5, 3, (1, 2, 1.5, 2))
    assert cli.format_property(prop) == (
        "Location: 12 Elm St, Price: $250000, Area: 80.5 sq. ft., "
        "Bedrooms: 3, Bounding Box: (1, 2, 1.5, 2)"
    )


def test_insert_then_range_query():
    code, out, index = run_menu(
        "1\nA\n100\n50\n2\n0 0 0 0\n"
        "2\n-1 -1 1 1\n"
        "4\n"
    )
    assert code == 0
    assert len(index) == 1
    assert "Property inserted." in out
    assert ("Location: A, Price: $100, Area: 50 sq. ft., Bedrooms: 2, "
            "Bounding Box: (0, 0, 0, 0)\n") in out
    assert out.endswith("Exiting...\n")


def test_insert_reprompts_on_bad_input():
    code, out, index = run_menu(
        "1\nA\n-5\nabc\n100\n50\n1.5\n2\n1 0 0 0\n0 0 1\n0 0 1 1\n4\n"
    )
    assert out.count(
        "Invalid input. Please enter a positive number for price: ") == 2
    assert out.count(
        "Invalid input. Please enter a non-negative integer for "
        "bedrooms: ") == 1
    assert out.count("Invalid input. Ensure x_min <= x_max") == 2
    assert list(index)[0].box == Rect(0, 0, 1, 1)
    assert list(index)[0].price == 100


def test_range_query_empty_result():
    code, out, _ = run_menu("2\n5 5 1 1\n0 0 1 1\n4\n")
    assert "Invalid input. Ensure x_min <= x_max" in out
    assert "No properties found within the specified range.\n" in out


def test_near_location_query():
    index = PropertyIndex()
    index.insert("B", 100, 50, 2, (3, 4, 3, 4))
    index.insert("pricey", 900, 50, 2, (1, 1, 1, 1))
    code, out, _ = run_menu("3\n0 0\n5\n500\n0\n0\n4\n", index=index)
    assert "Location: B," in out
    assert "Enter search distance (km): " in out
    assert "pricey" not in out


def test_near_location_reprompts():
    code, out, _ = run_menu("3\nnowhere\nnan 0\n0 0\n-1\n5\n0\n0\n0\n4\n")
    assert out.count("Invalid input. Enter your location (x y): ") == 2
    assert out.count(
        "Invalid input. Please enter a non-negative number for "
        "distance: ") == 1
    assert "No properties found within the specified criteria.\n" in out


def test_invalid_choice():
    code, out, _ = run_menu("9\nfoo\n4\n")
    assert out.count("Invalid choice. Please try again.") == 2


@pytest.mark.parametrize("text", ["", "1\nA\n100\n"])
def test_end_of_input_exits(text):
    code, out, index = run_menu(text)
    assert code == 0
    assert out.endswith("Exiting...\n")
    assert index.is_empty


def test_make_config_overrides_environment():
    parser = cli.build_parser()
    args = parser.parse_args(["--universe", "0", "0", "10", "10",
                              "--no-prefilter"])
    config = cli.make_config(args, environ={"PROPINDEX_ROOT": "internal"})
    assert config.universe == Rect(0, 0, 10, 10)
    assert config.root == "internal"
    assert not config.use_prefilter
    assert not config.truncate_distance


def test_main_loads_csv(tmp_path):
    path = tmp_path / "listings.csv"
    path.write_text(
        "location,price,area,bedrooms,x,y\n"
        "A,100,50,2,0,0\n"
        "B,200,70,3,40,40\n"
    )
    out = io.StringIO()
    code = cli.main(["--load", str(path), "--root", "internal"],
                    stdin=io.StringIO("2\n-1 -1 1 1\n4\n"), stdout=out)
    assert code == 0
    assert "Location: A," in out.getvalue()
    assert "Location: B," not in out.getvalue()


def test_main_bad_csv(tmp_path):
    code = cli.main(["--load", str(tmp_path / "missing.csv")],
                    stdin=io.StringIO("4\n"), stdout=io.StringIO())
    assert code == 1
