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
Minimization of an automaton built by :mod:`dafsa.automata.builder`.

States are compared by signature: the accepting flag together with the
sorted outgoing transitions, where each destination is replaced by the id of
the state it has already been found equivalent to. Two states with the same
signature accept exactly the same continuations, so one can stand in for the
other.

Signatures are computed bottom-up, so a state's children always have their
final canonical ids before the state itself is looked at. The first state
registered under a signature becomes the representative; every later state
with that signature is redirected to it. The equivalence map is computed in
full before any transition is rewritten.
"""

from loguru import logger


def postorder(automaton):
    """
    Returns the ids of every state reachable from the root, children before
    parents. Each state appears once. Outgoing transitions are followed in
    sorted character order, which fixes the order in which representatives
    are registered.
    """
    states = automaton.states
    order = []
    visited = set()
    stack = [(automaton.root, False)]
    while stack:
        stateid, expanded = stack.pop()
        if expanded:
            order.append(stateid)
            continue
        if stateid in visited:
            continue
        visited.add(stateid)
        stack.append((stateid, True))
        state = states[stateid]
        # Reversed so the smallest character comes off the stack first
        for label in reversed(state.labels()):
            dest = state.transitions[label]
            if dest not in visited:
                stack.append((dest, False))
    return order


def signature(state, equivalents):
    """
    Returns the ``(accepting, ((char, canonical_id), ...))`` signature of a
    state. ``equivalents`` maps the ids of merged states to their
    representative ids.
    """
    arcs = tuple(
        (label, equivalents.get(dest, dest))
        for label, dest in sorted(state.transitions.items())
    )
    return state.accepting, arcs


def find_equivalents(automaton):
    """
    Returns a dict mapping the id of every redundant state to the id of its
    representative. Representatives never appear as keys, and the root is
    never mapped.
    """
    states = automaton.states
    registry = {}
    equivalents = {}
    for stateid in postorder(automaton):
        if stateid == automaton.root:
            continue
        sig = signature(states[stateid], equivalents)
        rep = registry.get(sig)
        if rep is None:
            registry[sig] = stateid
        else:
            equivalents[stateid] = rep
            logger.trace("State {} is equivalent to state {}", stateid, rep)
    return equivalents


def minimize(automaton):
    """
    Rewrites the automaton in place into the smallest automaton that accepts
    the same language.

    This method performs the following steps:

    1. Finds the representative of every state, bottom-up.
    2. Redirects every transition that points at a redundant state to its
       representative.
    3. Removes the states that are no longer reachable from the arena.

    The ``language`` set is not touched. Minimizing an automaton that is
    already minimal changes nothing.

    Args:
        automaton (Automaton): The automaton to minimize.

    Returns:
        int: The number of states merged away.

    """
    before = len(automaton.states)
    equivalents = find_equivalents(automaton)

    if equivalents:
        for state in automaton.states.values():
            trans = state.transitions
            for label, dest in trans.items():
                if dest in equivalents:
                    trans[label] = equivalents[dest]

        reachable = automaton.reachable_from()
        for stateid in list(automaton.states):
            if stateid not in reachable:
                del automaton.states[stateid]
        automaton.shared = True

    logger.debug(
        "Minimized automaton from {} to {} states ({} merged)",
        before,
        len(automaton.states),
        len(equivalents),
    )
    return len(equivalents)
