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


import sys

from dafsa.errors import UnknownStateError


class State:
    """
    A node in a deterministic acyclic automaton.

    Attributes:
        id (int): Identity of the state, unique within its automaton and never
            reused.
        accepting (bool): Whether consuming a string that ends on this state
            means the string is in the language.
        transitions (dict): Maps a single character to the id of the
            destination state. A dict allows at most one destination per
            character, so the automaton is deterministic by construction.

    """

    __slots__ = ("id", "accepting", "transitions")

    def __init__(self, id, accepting=False, transitions=None):
        self.id = id
        self.accepting = accepting
        self.transitions = dict(transitions) if transitions else {}

    def __repr__(self):
        final = "||" if self.accepting else ""
        return f"<State {self.id}{final} {self.transitions!r}>"

    def __eq__(self, other):
        return (
            isinstance(other, State)
            and self.id == other.id
            and self.accepting == other.accepting
            and self.transitions == other.transitions
        )

    def labels(self):
        """Returns the outgoing characters of this state in sorted order."""
        return sorted(self.transitions)

    def copy(self, newid=None):
        """
        Returns an independent copy of this state, optionally under a
        different id. The copy points at the same destination ids.
        """
        return State(
            self.id if newid is None else newid, self.accepting, self.transitions
        )


class Automaton:
    """
    A deterministic acyclic finite-state automaton over single characters.

    States live in an arena (``states``) keyed by their integer id, and
    transitions refer to destination states by id. Several transitions may
    point at the same id once the automaton has been minimized; this sharing
    survives any copy of the arena because no state object is referenced
    directly.

    Every state in the arena is reachable from the root.

    Attributes:
        root (int): Id of the root state. Always ``0``.
        states (dict): The state arena, mapping ids to :class:`State` objects.
        id_counter (int): The last id handed out. The first state created by
            insertion gets id ``1``.
        language (set): The strings inserted so far. Always equal to the set
            of strings accepted by traversing the automaton.
        shared (bool): True once minimization has made at least one state the
            target of more than one transition.

    """

    def __init__(self):
        self.root = 0
        self.states = {self.root: State(self.root)}
        self.id_counter = 0
        self.language = set()
        self.shared = False

    def __repr__(self):
        return f"<{type(self).__name__} states={len(self)} words={len(self.language)}>"

    def __len__(self):
        """
        Returns the number of states reachable from the root, including the
        root itself.
        """
        return len(self.reachable_from(self.root))

    def __eq__(self, other):
        """
        Structural comparison: two automata are equal when they have the same
        root, id counter and language, and the states reachable from the root
        have the same ids, accepting flags and transitions.
        """
        if not isinstance(other, Automaton):
            return NotImplemented
        return (
            self.root == other.root
            and self.id_counter == other.id_counter
            and self.language == other.language
            and self.structure() == other.structure()
        )

    def new_state(self):
        """
        Allocates a fresh, non-accepting state with no transitions, adds it to
        the arena and returns it.
        """
        self.id_counter += 1
        state = State(self.id_counter)
        self.states[state.id] = state
        return state

    def state(self, stateid):
        """
        Returns the state with the given id.

        Raises:
            UnknownStateError: if no such state is in the arena.
        """
        try:
            return self.states[stateid]
        except KeyError:
            raise UnknownStateError(stateid) from None

    @property
    def root_state(self):
        return self.states[self.root]

    def target(self, state, label):
        """
        Returns the state reached from ``state`` on the character ``label``,
        or None if there is no such transition.
        """
        dest = state.transitions.get(label)
        if dest is None:
            return None
        return self.state(dest)

    def reachable_from(self, src=None, inclusive=True):
        """
        Returns the set of ids of the states that can be reached from the
        given source state id (the root by default).

        Args:
            src (int, optional): The id of the state to start from.
            inclusive (bool, optional): Whether the source itself is included
                in the result. Defaults to True.

        Returns:
            set: The ids of the reachable states.

        """
        src = self.root if src is None else src
        states = self.states

        reached = set()
        if inclusive:
            reached.add(src)

        stack = [src]
        seen = set()
        while stack:
            current = stack.pop()
            seen.add(current)
            for dest in states[current].transitions.values():
                reached.add(dest)
                if dest not in seen:
                    stack.append(dest)
        return reached

    def parent_counts(self):
        """
        Returns a dict mapping each reachable state id to the number of
        transitions that point at it. The root maps to ``0``.
        """
        counts = dict.fromkeys(self.reachable_from(), 0)
        for stateid in counts:
            for dest in self.states[stateid].transitions.values():
                counts[dest] += 1
        return counts

    def accepting_states(self):
        """Returns the set of ids of the reachable accepting states."""
        states = self.states
        return {s for s in self.reachable_from() if states[s].accepting}

    def walk(self):
        """
        Yields a read-only view of the automaton for rendering: one
        ``(state_id, accepting, [(char, target_id), ...])`` tuple per
        reachable state, in depth-first order from the root. Each state is
        reported once even when several transitions share it, and its
        transitions are listed in sorted character order.
        """
        states = self.states
        seen = set()
        stack = [self.root]
        while stack:
            stateid = stack.pop()
            if stateid in seen:
                continue
            seen.add(stateid)
            state = states[stateid]
            arcs = [(label, state.transitions[label]) for label in state.labels()]
            yield stateid, state.accepting, arcs
            # Push in reverse so the smallest character is walked first
            for _, dest in reversed(arcs):
                if dest not in seen:
                    stack.append(dest)

    def structure(self):
        """
        Returns a dict mapping each reachable state id to an
        ``(accepting, transitions)`` pair, suitable for comparing the shape of
        two automata.
        """
        return {
            stateid: (accepting, tuple(arcs))
            for stateid, accepting, arcs in self.walk()
        }

    def dump(self, stream=sys.stdout):
        """
        Prints a textual listing of the automaton to the given stream.

        The root is marked with ``@`` and accepting states with ``||``::

            @ 0
              a -> 1
            1
              b -> 2||
            2||

        """
        for stateid, accepting, arcs in self.walk():
            beg = "@ " if stateid == self.root else ""
            end = "||" if accepting else ""
            print(f"{beg}{stateid}{end}", file=stream)
            for label, dest in arcs:
                final = "||" if self.states[dest].accepting else ""
                print(f"  {label} -> {dest}{final}", file=stream)

    def copy(self):
        """
        Returns an independent copy of this automaton. The copy has the same
        ids and the same sharing between transitions as the original.
        """
        other = type(self).__new__(type(self))
        other.root = self.root
        other.states = {stateid: s.copy() for stateid, s in self.states.items()}
        other.id_counter = self.id_counter
        other.language = set(self.language)
        other.shared = self.shared
        return other
