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


"""
Membership queries against an automaton.

:func:`accept` is the canonical definition of membership: walk the
automaton from the root. :func:`in_language` answers the same question from
the automaton's cached ``language`` set and must always agree with it.
"""


def accept(automaton, string):
    """
    Returns True if walking the automaton on ``string`` consumes every
    character and ends on an accepting state.

    The walk stops as soon as a character has no transition. The empty
    string is accepted only if the root itself is accepting.
    """
    state = automaton.root_state
    for label in string:
        state = automaton.target(state, label)
        if state is None:
            return False
    return state.accepting


def search(automaton, string):
    """
    Strips surrounding whitespace from ``string`` and returns whether the
    result is accepted by the automaton.
    """
    return accept(automaton, string.strip())


def in_language(automaton, string):
    """
    Like :func:`search`, but looks the stripped string up in the
    automaton's ``language`` set instead of walking the states.
    """
    return string.strip() in automaton.language


def generate_all(automaton, stateid=None, sofar=""):
    """
    Yields every string accepted from the given state (the root by default),
    in sorted order, by walking the automaton depth-first.

    Args:
        automaton (Automaton): The automaton to walk.
        stateid (int, optional): The id of the state to start from.
        sofar (str, optional): The characters consumed to reach the state.

    Yields:
        str: Each accepted string.

    """
    stack = [(automaton.root if stateid is None else stateid, sofar)]
    while stack:
        stateid, sofar = stack.pop()
        state = automaton.state(stateid)
        if state.accepting:
            yield sofar
        # Reversed so the smallest character comes off the stack first
        for label in reversed(state.labels()):
            stack.append((state.transitions[label], sofar + label))
