from io import StringIO

import pytest
from dafsa import versionstring
from dafsa.errors import InvalidInputError
from dafsa.session import DAFSA, clean_input

WORDS = ["cat", "cats", "car", "cars"]


def test_insertion_recall():
    d = DAFSA()
    for word in WORDS:
        d.insert(word)
        assert d.search(word)
    d.minimize()
    for word in WORDS:
        assert d.search(word)
        assert word in d


def test_minimize_preserves_language():
    d = DAFSA(WORDS)
    for word in ("ca", "ct", ""):
        assert not d.search(word)
    d.minimize()
    for word in WORDS:
        assert d.search(word)
    for word in ("ca", "ct", ""):
        assert not d.search(word)
    assert d.sorted_language() == sorted(WORDS)


def test_minimize_takes_snapshot():
    d = DAFSA(["x", "y"])
    before = d.automaton.copy()
    assert not d.has_snapshot
    assert d.minimize() is None
    assert d.has_snapshot
    assert len(d) == 2
    minimized = d.automaton.copy()
    d.minimize()
    assert d.automaton == minimized
    assert d.restore() is None
    assert d.automaton == before
    assert not d.has_snapshot
    d.restore()
    assert d.automaton == before


def test_snapshot_taken_again_after_restore():
    d = DAFSA(["x", "y"])
    d.minimize()
    d.restore()
    d.insert("z")
    after_insert = d.automaton.copy()
    d.minimize()
    d.restore()
    assert d.automaton == after_insert


def test_walk_view():
    d = DAFSA(["ab", "cb"])
    assert list(d.walk()) == [
        (0, False, [("a", 1), ("c", 3)]),
        (1, False, [("b", 2)]),
        (2, True, []),
        (3, False, [("b", 4)]),
        (4, True, []),
    ]
    d.minimize()
    assert list(d.walk()) == [
        (0, False, [("a", 1), ("c", 1)]),
        (1, False, [("b", 2)]),
        (2, True, []),
    ]
    assert d.accepting_states() == {2}
    assert len(d) == 3


def test_sorted_language():
    d = DAFSA(["pear", "apple", "fig", "apple"])
    assert d.sorted_language() == ["apple", "fig", "pear"]
    assert list(d) == ["apple", "fig", "pear"]


def test_contains_strips_like_search():
    d = DAFSA(["cat"])
    assert "cat" in d
    assert " cat\n" in d
    assert "ca" not in d
    d.minimize()
    assert "  cat" in d


def test_empty_string():
    d = DAFSA(["a"])
    assert not d.search("")
    d.insert("")
    assert d.search("")
    assert d.automaton.root_state.accepting


def test_clean_input():
    assert clean_input("  cat \n") == "cat"
    for text in ("", "   ", "\t\n"):
        with pytest.raises(InvalidInputError):
            clean_input(text)
    with pytest.raises(ValueError):
        clean_input(" ")


def test_add_string():
    d = DAFSA()
    assert d.add_string(" cat ")
    assert not d.add_string("cat")
    assert d.sorted_language() == ["cat"]
    with pytest.raises(InvalidInputError):
        d.add_string("  ")
    assert d.sorted_language() == ["cat"]


def test_search_string():
    d = DAFSA(["cat"])
    assert d.search_string("cat ")
    assert not d.search_string("dog")
    with pytest.raises(InvalidInputError):
        d.search_string("")


def test_add_after_minimize():
    d = DAFSA(["ab", "cb"])
    d.minimize()
    assert d.add_string("a")
    assert d.search("a")
    assert not d.search("c")
    assert d.search("cb")
    d.restore()
    assert d.sorted_language() == ["ab", "cb"]


def test_dump():
    d = DAFSA(["ab"])
    out = StringIO()
    d.dump(out)
    assert out.getvalue() == "@ 0\n  a -> 1\n1\n  b -> 2||\n2||\n"


def test_versionstring():
    assert versionstring() == "1.0.0"
    assert versionstring(build=False) == "1.0"


def test_source_license_headers():
    import pathlib

    import dafsa

    root = pathlib.Path(dafsa.__file__).parent
    header = "# Copyright 2024 The dafsa-minimizer Authors. All rights reserved."
    for path in sorted(root.rglob("*.py")):
        assert path.read_text().splitlines()[0] == header
