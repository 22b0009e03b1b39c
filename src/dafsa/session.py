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
The :class:`DAFSA` session object: one automaton together with its snapshot
slot, plus the input cleaning applied to text coming from a user.
"""

import sys

from loguru import logger

from dafsa.automata import builder, minimize, oracle
from dafsa.automata.snapshot import SnapshotManager
from dafsa.automata.states import Automaton
from dafsa.errors import InvalidInputError


def clean_input(text):
    """
    Strips surrounding whitespace from user-supplied text.

    Raises:
        InvalidInputError: if nothing is left after stripping.
    """
    cleaned = text.strip()
    if not cleaned:
        raise InvalidInputError(text)
    return cleaned


class DAFSA:
    """
    A deterministic acyclic finite-state automaton that strings can be added
    to one at a time and that can be minimized on demand.

    Each session owns its automaton and a single snapshot slot. The first
    call to :meth:`minimize` saves the unminimized automaton, and
    :meth:`restore` brings it back.

    >>> d = DAFSA(["cat", "cats", "car", "cars"])
    >>> d.minimize()
    >>> d.search("cars")
    True
    >>> d.restore()
    >>> d.has_snapshot
    False

    Args:
        strings (iterable, optional): Strings to insert straight away.

    """

    def __init__(self, strings=()):
        self.automaton = Automaton()
        self.snapshots = SnapshotManager()
        builder.insert_all(self.automaton, strings)

    def __repr__(self):
        return f"<{type(self).__name__} {self.sorted_language()!r}>"

    def __contains__(self, string):
        return self.search(string)

    def __len__(self):
        return len(self.automaton)

    def __iter__(self):
        return iter(self.sorted_language())

    @property
    def has_snapshot(self):
        return self.snapshots.held

    # Core operations

    def insert(self, string):
        """
        Adds ``string`` exactly as given. Adding a string that is already
        present does nothing.
        """
        builder.insert(self.automaton, string)

    def search(self, string):
        """
        Returns True if ``string``, with surrounding whitespace stripped, is
        in the language.
        """
        return oracle.search(self.automaton, string)

    def minimize(self):
        """
        Saves a snapshot if none is held, then minimizes the automaton in
        place.
        """
        self.capture_if_absent()
        minimize.minimize(self.automaton)

    def capture_if_absent(self):
        return self.snapshots.capture_if_absent(self.automaton)

    def restore(self):
        """
        Puts back the automaton saved before the first minimization and
        empties the snapshot slot. Does nothing if no snapshot is held.
        """
        self.snapshots.restore(self.automaton)

    # Read-only views

    def walk(self):
        return self.automaton.walk()

    def sorted_language(self):
        return sorted(self.automaton.language)

    def accepting_states(self):
        return self.automaton.accepting_states()

    def dump(self, stream=sys.stdout):
        self.automaton.dump(stream)

    # Caller-facing operations on raw user text

    def add_string(self, text):
        """
        Cleans ``text`` and adds it.

        Returns:
            bool: False if the string was already in the language.

        Raises:
            InvalidInputError: if ``text`` is empty or only whitespace.
        """
        string = clean_input(text)
        if self.search(string):
            logger.debug("{!r} is already in the language", string)
            return False
        self.insert(string)
        return True

    def search_string(self, text):
        """
        Cleans ``text`` and returns whether it is in the language.

        Raises:
            InvalidInputError: if ``text`` is empty or only whitespace.
        """
        return self.search(clean_input(text))
