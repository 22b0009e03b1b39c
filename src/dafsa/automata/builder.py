# Copyright 2024 The dafsa-minimizer Authors. All rights reserved.
#
# Redistribution and use in source and binary forms, with or without
# modification, are permitted provided that the following conditions are met:
#
#    1. Redistributions of source code must retain the above copyright notice,
#       this list of conditions and the following disclaimer.
#
#    2. Redistributions in binary form must reproduce the above copyright
#       notice, this list of conditions and the following disclaimer in the
#       documentation and/or other materials provided with the distribution.
#
# THIS SOFTWARE IS PROVIDED BY THE DAFSA-MINIMIZER AUTHORS ``AS IS'' AND ANY
# EXPRESS OR IMPLIED WARRANTIES, INCLUDING, BUT NOT LIMITED TO, THE IMPLIED
# WARRANTIES OF MERCHANTABILITY AND FITNESS FOR A PARTICULAR PURPOSE ARE
# DISCLAIMED. IN NO EVENT SHALL THE DAFSA-MINIMIZER AUTHORS OR CONTRIBUTORS BE
# LIABLE FOR ANY DIRECT, INDIRECT, INCIDENTAL, SPECIAL, EXEMPLARY, OR
# CONSEQUENTIAL DAMAGES (INCLUDING, BUT NOT LIMITED TO, PROCUREMENT OF
# SUBSTITUTE GOODS OR SERVICES; LOSS OF USE, DATA, OR PROFITS; OR BUSINESS
# INTERRUPTION) HOWEVER CAUSED AND ON ANY THEORY OF LIABILITY, WHETHER IN
# CONTRACT, STRICT LIABILITY, OR TORT (INCLUDING NEGLIGENCE OR OTHERWISE)
# ARISING IN ANY WAY OUT OF THE USE OF THIS SOFTWARE, EVEN IF ADVISED OF THE
# POSSIBILITY OF SUCH DAMAGE.
#
# The views and conclusions contained in the software and documentation are
# those of the authors and should not be interpreted as representing official
# policies, either expressed or implied, of the dafsa-minimizer authors.


from loguru import logger

from dafsa.automata.oracle import accept
from dafsa.automata.states import Automaton


def insert(automaton, string):
    """
    Adds a string to the automaton.

    Walks from the root one character at a time, creating a new state for
    each character that has no transition yet, then marks the state reached
    after the last character as accepting. Inserting a string that is
    already present only walks the automaton.

    The string is used exactly as given; no trimming or other normalization
    is done here. Inserting the empty string makes the root accepting.

    Args:
        automaton (Automaton): The automaton to add the string to.
        string (str): The string to add.

    Returns:
        bool: True if the string was not in the language before.

    """
    if automaton.shared:
        return _insert_unsharing(automaton, string)

    state = automaton.root_state
    for label in string:
        dest = automaton.target(state, label)
        if dest is None:
            dest = automaton.new_state()
            state.transitions[label] = dest.id
            logger.trace("Created state {} for char {!r}", dest.id, label)
        state = dest
    return _mark_accepting(automaton, state, string)


def _insert_unsharing(automaton, string):
    # Once states are shared, marking a state accepting or adding a
    # transition to it would also change the language of every other parent
    # pointing at it. Each shared state on the path is replaced by a private
    # copy before the walk moves into it.
    if accept(automaton, string):
        return False

    parents = automaton.parent_counts()
    state = automaton.root_state
    for label in string:
        dest = automaton.target(state, label)
        if dest is None:
            dest = automaton.new_state()
            parents[dest.id] = 1
            logger.trace("Created state {} for char {!r}", dest.id, label)
        elif parents[dest.id] > 1:
            clone = automaton.new_state()
            clone.accepting = dest.accepting
            clone.transitions.update(dest.transitions)
            parents[dest.id] -= 1
            parents[clone.id] = 1
            for child in clone.transitions.values():
                parents[child] += 1
            logger.trace("Copied shared state {} to {}", dest.id, clone.id)
            dest = clone
        state.transitions[label] = dest.id
        state = dest
    return _mark_accepting(automaton, state, string)


def _mark_accepting(automaton, state, string):
    if state.accepting:
        return False
    state.accepting = True
    automaton.language.add(string)
    logger.debug("Marked state {} as accepting for {!r}", state.id, string)
    return True


def insert_all(automaton, strings):
    """
    Inserts each string from an iterable in order and returns how many of
    them were new.
    """
    return sum(1 for string in strings if insert(automaton, string))


def strings_automaton(strings):
    """
    Builds a new (unminimized) automaton containing the given strings.

    Unlike a sorted-input construction, the strings may come in any order and
    may contain duplicates.

    Example:
        >>> a = strings_automaton(["cat", "car"])
        >>> sorted(a.language)
        ['car', 'cat']
    """
    automaton = Automaton()
    insert_all(automaton, strings)
    return automaton
