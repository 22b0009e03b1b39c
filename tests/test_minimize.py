from io import StringIO

from dafsa.automata import minimize as mz
from dafsa.automata.builder import insert, strings_automaton
from dafsa.automata.oracle import accept, generate_all
from dafsa.automata.states import Automaton, State
from loguru import logger

WORDS = ["cat", "cats", "car", "cars"]


def test_postorder_children_first():
    a = strings_automaton(WORDS)
    # c=1 a=2 t=3 s=4 r=5 s=6
    assert mz.postorder(a) == [6, 5, 4, 3, 2, 1, 0]


def test_postorder_visits_shared_once():
    a = strings_automaton(["ab", "cb"])
    mz.minimize(a)
    assert mz.postorder(a) == [2, 1, 0]


def test_signature():
    s = State(9, True, {"b": 4, "a": 3})
    assert mz.signature(s, {}) == (True, (("a", 3), ("b", 4)))
    assert mz.signature(s, {4: 2}) == (True, (("a", 3), ("b", 2)))
    assert mz.signature(State(1), {}) == (False, ())


def test_find_equivalents():
    a = strings_automaton(WORDS)
    assert mz.find_equivalents(a) == {4: 6, 3: 5}


def test_first_registered_is_representative():
    a = strings_automaton(["ab", "cb"])
    # b-from-a is reached first, then a; c and its b collapse onto them
    assert mz.find_equivalents(a) == {4: 2, 3: 1}


def _check_words(automaton):
    for word in WORDS:
        assert accept(automaton, word)
    for word in ("ca", "ct", "", "c", "catss", "s"):
        assert not accept(automaton, word)
    assert list(generate_all(automaton)) == sorted(WORDS)
    assert automaton.language == set(WORDS)


def test_minimize_preserves_language():
    a = strings_automaton(WORDS)
    _check_words(a)
    assert mz.minimize(a) == 2
    _check_words(a)


def test_minimize_rewrites_transitions():
    a = strings_automaton(WORDS)
    assert mz.minimize(a) == 2
    assert a.state(2).transitions == {"t": 5, "r": 5}
    assert a.state(5).transitions == {"s": 6}
    assert set(a.states) == {0, 1, 2, 5, 6}
    assert len(a) == 5
    assert a.shared


def test_state_count_decreases():
    a = strings_automaton(["ab", "cb"])
    assert len(a) - 1 == 4
    assert mz.minimize(a) == 2
    assert len(a) - 1 == 2
    assert a.root_state.transitions == {"a": 1, "c": 1}
    assert a.state(1).transitions == {"b": 2}
    assert a.accepting_states() == {2}


def test_no_sharing_no_merges():
    a = strings_automaton(["ab", "cd"])
    before = a.copy()
    assert mz.minimize(a) == 0
    assert a == before
    assert not a.shared


def test_minimize_is_idempotent():
    a = strings_automaton(WORDS + ["bat", "bats", "dog"])
    assert mz.minimize(a) > 0
    once = a.copy()
    assert mz.minimize(a) == 0
    assert a == once
    assert a.structure() == once.structure()


def test_root_never_merged():
    a = Automaton()
    insert(a, "")
    insert(a, "a")
    insert(a, "aa")
    mz.minimize(a)
    assert a.root == 0
    assert 0 in a.states
    assert a.root_state.accepting
    assert accept(a, "")
    assert accept(a, "aa")
    assert not accept(a, "aaa")


def test_empty_automaton():
    a = Automaton()
    assert mz.minimize(a) == 0
    assert len(a) == 1


def test_suffixes_shared_across_prefixes():
    words = ["tap", "taps", "top", "tops", "stop", "stops"]
    a = strings_automaton(words)
    before = len(a)
    mz.minimize(a)
    assert len(a) < before
    # "p" then optional "s" is shared by every word
    assert list(generate_all(a)) == sorted(words)
    # root, s, t, t after s, a/o, p, s
    assert len(a) == 7


def test_long_string_does_not_recurse():
    word = "x" * 5000
    a = strings_automaton([word, "y" + word])
    assert mz.minimize(a) == 5000
    assert accept(a, word)
    assert accept(a, "y" + word)
    assert not accept(a, "y")


def test_generate_all_long_string():
    word = "x" * 5000
    a = strings_automaton([word, "y" + word])
    assert list(generate_all(a)) == [word, "y" + word]
    mz.minimize(a)
    assert list(generate_all(a)) == [word, "y" + word]


def test_dump_after_minimize():
    a = strings_automaton(["ab", "cb"])
    mz.minimize(a)
    out = StringIO()
    a.dump(out)
    assert out.getvalue() == "@ 0\n  a -> 1\n  c -> 1\n1\n  b -> 2||\n2||\n"


def test_minimize_logs_summary():
    messages = []
    handler = logger.add(messages.append, level="DEBUG", format="{message}")
    logger.enable("dafsa")
    try:
        mz.minimize(strings_automaton(WORDS))
    finally:
        logger.disable("dafsa")
        logger.remove(handler)
    assert any("from 7 to 5 states (2 merged)" in m for m in messages)


def test_silent_by_default():
    messages = []
    handler = logger.add(messages.append, level="TRACE", format="{message}")
    try:
        mz.minimize(strings_automaton(WORDS))
    finally:
        logger.remove(handler)
    assert messages == []
