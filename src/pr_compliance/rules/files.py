"""
File Watch Rule

Flags modified files that appear on the configured watch-list.
"""

from typing import FrozenSet, Iterable, List


class FileWatchRule:
    """
    Intersection of modified files with the watch-list.

    Paths are compared as exact strings; no globbing or normalization.
    """

    def evaluate(self, modified_files: Iterable[str], watch_list: Iterable[str]) -> FrozenSet[str]:
        """Return the set of modified files that are being watched."""
        return frozenset(self.flagged_in_order(modified_files, watch_list))

    def flagged_in_order(self, modified_files: Iterable[str], watch_list: Iterable[str]) -> List[str]:
        """
        Same matches as evaluate(), in the order the files were listed.

        Args:
            modified_files: Changed file paths in API order
            watch_list: Configured watched paths

        Returns:
            Flagged paths without duplicates
        """
        watched = set(watch_list)
        if not watched:
            return []

        flagged = []
        seen = set()
        for filename in modified_files:
            if filename in watched and filename not in seen:
                seen.add(filename)
                flagged.append(filename)
        return flagged
