"""Merge file histories across renames."""

from collections import Counter, defaultdict, deque

from coedit.git.parser import RenamePathParser
from coedit.models import FileHistoryTable, RenameEdge


class RenameResolver:
    """Refile every history entry under the final name of its file.

    Resolution happens in two steps:

    1. ``extract`` moves the entries of every rename-annotated key
       (``src/{a.py => b.py}``) onto the rename target and records the
       rename edge.
    2. ``apply`` relocates whole histories along the edges until a full
       pass moves nothing. An edge fires only when both its source and
       its target hold entries; the source is emptied onto the target.

    Every relocation turns one non-empty history into an empty one, so
    the number of non-empty histories strictly decreases and the loop
    terminates even when renames form a cycle.
    """

    def __init__(self, parser: RenamePathParser | None = None):
        self._parser = parser or RenamePathParser()

    def resolve(self, table: FileHistoryTable) -> tuple[FileHistoryTable, list[RenameEdge]]:
        """Resolve renames in a history table.

        Args:
            table: History keyed by reported path; left untouched

        Returns:
            Tuple of (new table keyed by canonical path, edges in
            discovery order)
        """
        resolved = {path: list(entries) for path, entries in table.items()}
        edges = self.extract(resolved)
        self.apply(resolved, edges)
        return resolved, edges

    def extract(self, table: FileHistoryTable) -> list[RenameEdge]:
        """Move entries off rename-annotated keys, in place.

        Args:
            table: History table owned by the caller

        Returns:
            Rename edges in the order their keys were found
        """
        edges = []
        for key in list(table):
            parsed = self._parser.parse(key)
            if not parsed.is_rename:
                continue

            entries = table.pop(key)
            table.setdefault(parsed.target, []).extend(entries)
            edges.append(parsed.edge)

        return edges

    def apply(self, table: FileHistoryTable, edges: list[RenameEdge]) -> int:
        """Relocate histories along rename edges until nothing moves, in place.

        Empty histories are removed afterwards.

        Args:
            table: History table owned by the caller
            edges: Rename edges in discovery order

        Returns:
            Number of relocations performed
        """
        ordered = self._order(edges)
        relocations = 0

        while True:
            modified = False

            for edge in ordered:
                if edge.source == edge.target:
                    continue

                source = table.get(edge.source)
                target = table.get(edge.target)
                if not source or not target:
                    continue

                target.extend(source)
                source.clear()
                relocations += 1
                modified = True

            if not modified:
                break

        for path in [path for path, entries in table.items() if not entries]:
            del table[path]

        return relocations

    def _order(self, edges: list[RenameEdge]) -> list[RenameEdge]:
        """Order edges so a rename into a path runs before renames out of it.

        Starts from reverse discovery order (git lists newest commits
        first, so the oldest renames are found last) and sorts the
        rename graph topologically. Edges on or behind a cycle keep
        reverse discovery order and are appended at the end.
        """
        pending = list(reversed(edges))

        outgoing: dict[str, list[RenameEdge]] = defaultdict(list)
        incoming: Counter = Counter()
        for edge in pending:
            outgoing[edge.source].append(edge)
            incoming[edge.target] += 1

        sources = dict.fromkeys(edge.source for edge in pending)
        ready = deque(node for node in sources if incoming[node] == 0)

        ordered = []
        while ready:
            node = ready.popleft()
            for edge in outgoing.pop(node, []):
                ordered.append(edge)
                incoming[edge.target] -= 1
                if incoming[edge.target] == 0 and edge.target in outgoing:
                    ready.append(edge.target)

        ordered.extend(edge for edge in pending if edge.source in outgoing)
        return ordered
