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
A single saved copy of an automaton, taken before it is minimized so the
unminimized form can be brought back.
"""

from cached_property import cached_property
from loguru import logger


class Snapshot:
    """
    An independent copy of an automaton's state arena, root, id counter and
    language.

    The copy is made through the id-addressed arena, so states shared by
    several transitions remain shared in the copy rather than being
    duplicated. A snapshot is never modified after it is taken.
    """

    def __init__(self, saved):
        self._saved = saved

    @classmethod
    def take(cls, automaton):
        """Returns a new snapshot of the given automaton."""
        return cls(automaton.copy())

    def __repr__(self):
        return (
            f"<{type(self).__name__} states={self.state_count} "
            f"words={len(self.language)}>"
        )

    @property
    def id_counter(self):
        return self._saved.id_counter

    @property
    def language(self):
        return frozenset(self._saved.language)

    @cached_property
    def state_count(self):
        return len(self._saved)

    @cached_property
    def accepting_ids(self):
        return frozenset(self._saved.accepting_states())

    def automaton(self):
        """Returns a fresh copy of the saved automaton."""
        return self._saved.copy()

    def restore_into(self, automaton):
        """
        Overwrites the root, states, id counter and language of
        ``automaton`` with a fresh copy of the saved ones.
        """
        saved = self._saved.copy()
        automaton.root = saved.root
        automaton.states = saved.states
        automaton.id_counter = saved.id_counter
        automaton.language = saved.language
        automaton.shared = saved.shared


class SnapshotManager:
    """
    Holds at most one :class:`Snapshot`.

    The first capture wins: while a snapshot is held, further captures do
    nothing. Restoring puts the saved automaton back and empties the slot.
    """

    def __init__(self):
        self.snapshot = None

    @property
    def held(self):
        return self.snapshot is not None

    def capture_if_absent(self, automaton):
        """
        Takes a snapshot of ``automaton`` unless one is already held.

        Returns:
            bool: True if a snapshot was taken.
        """
        if self.snapshot is not None:
            return False
        self.snapshot = Snapshot.take(automaton)
        logger.debug("Captured {!r}", self.snapshot)
        return True

    def restore(self, automaton):
        """
        Restores ``automaton`` from the held snapshot and clears the slot.
        Does nothing if no snapshot is held.

        Returns:
            bool: True if the automaton was restored.
        """
        snapshot = self.snapshot
        if snapshot is None:
            return False
        snapshot.restore_into(automaton)
        self.snapshot = None
        logger.debug("Restored {!r}", snapshot)
        return True
