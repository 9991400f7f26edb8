"""
In-memory folder hierarchy.

Folders are stored flat with a nullable ``parent_id``. ``FolderTree`` groups
them by parent so pages can render the hierarchy, and answers ancestry
questions before a move is persisted.

A folder whose parent is missing from the list (deleted, or never existed)
is treated as a root so it stays reachable.
"""

from collections import defaultdict
from dataclasses import dataclass
from typing import Any, Dict, Iterable, Iterator, List, Optional, Set


@dataclass(frozen=True)
class TreeNode:
    folder: Any
    depth: int
    has_children: bool
    expanded: bool

    @property
    def id(self) -> str:
        return self.folder.id


class FolderTree:
    def __init__(self, folders: Iterable[Any], expanded: Iterable[str] = ()):
        self._folders: List[Any] = list(folders)
        self._by_id: Dict[str, Any] = {f.id: f for f in self._folders}
        self._children: Dict[Optional[str], List[Any]] = defaultdict(list)
        for folder in self._folders:
            parent = folder.parent_id if folder.parent_id in self._by_id else None
            self._children[parent].append(folder)
        self.expanded: Set[str] = {fid for fid in expanded if fid in self._by_id}

    def __contains__(self, folder_id: str) -> bool:
        return folder_id in self._by_id

    def get(self, folder_id: str):
        return self._by_id.get(folder_id)

    def roots(self) -> List[Any]:
        return list(self._children[None])

    def children(self, folder_id: Optional[str]) -> List[Any]:
        return list(self._children.get(folder_id, ()))

    # -- expand / collapse ------------------------------------------------

    def is_expanded(self, folder_id: str) -> bool:
        return folder_id in self.expanded

    def toggle(self, folder_id: str) -> bool:
        """Flip a node; returns the new state."""
        if folder_id not in self._by_id:
            return False
        if folder_id in self.expanded:
            self.expanded.discard(folder_id)
            return False
        self.expanded.add(folder_id)
        return True

    def toggled(self, folder_id: str) -> List[str]:
        """Expanded ids as they would be after toggling `folder_id`, for links."""
        state = set(self.expanded)
        state.symmetric_difference_update({folder_id})
        return sorted(state)

    # -- traversal --------------------------------------------------------

    def walk(self, only_expanded: bool = False) -> Iterator[TreeNode]:
        """Pre-order, root first. Each folder is yielded at most once."""
        seen: Set[str] = set()

        def descend(parent_id: Optional[str], depth: int) -> Iterator[TreeNode]:
            for folder in self._children.get(parent_id, ()):
                if folder.id in seen:
                    continue
                seen.add(folder.id)
                kids = self._children.get(folder.id, ())
                expanded = folder.id in self.expanded
                yield TreeNode(folder, depth, bool(kids), expanded)
                if not only_expanded or expanded:
                    yield from descend(folder.id, depth + 1)

        return descend(None, 0)

    def visible(self) -> List[TreeNode]:
        return list(self.walk(only_expanded=True))

    # -- ancestry ---------------------------------------------------------

    def ancestors(self, folder_id: str) -> List[Any]:
        """Parent chain from the direct parent up to the root."""
        chain = []
        seen = {folder_id}
        folder = self._by_id.get(folder_id)
        while folder is not None and folder.parent_id in self._by_id:
            if folder.parent_id in seen:
                break
            seen.add(folder.parent_id)
            folder = self._by_id[folder.parent_id]
            chain.append(folder)
        return chain

    def path(self, folder_id: str) -> List[Any]:
        """Breadcrumb from the root down to `folder_id`."""
        folder = self._by_id.get(folder_id)
        if folder is None:
            return []
        return list(reversed(self.ancestors(folder_id))) + [folder]

    def is_descendant(self, folder_id: str, of: str) -> bool:
        return any(a.id == of for a in self.ancestors(folder_id))

    def can_move(self, folder_id: str, new_parent_id: Optional[str]) -> bool:
        if new_parent_id is None:
            return True
        if new_parent_id == folder_id:
            return False
        return not self.is_descendant(new_parent_id, of=folder_id)
