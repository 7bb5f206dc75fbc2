"""Selects the publishable subset of the workspace snapshot."""

from typing import Dict, List, Mapping

from ..schemas import ManifestEntry, SelectedFile, WorkspaceEntry, WorkspaceFile

DEFAULT_WORKSPACE_ROOT = "/home/project"


def extract_relative_path(path: str, workspace_root: str = DEFAULT_WORKSPACE_ROOT) -> str:
    """Strip the workspace root prefix and any leading slash."""
    root = workspace_root.rstrip("/")
    if root and (path == root or path.startswith(root + "/")):
        path = path[len(root) :]
    return path.lstrip("/")


def utf8_size(content: str) -> int:
    """Byte length of the UTF-8 encoding, not the character count."""
    return len(content.encode("utf-8"))


class ContentSelector:
    """Filters the snapshot down to text files and computes their manifest."""

    def __init__(self, workspace_root: str = DEFAULT_WORKSPACE_ROOT):
        self.workspace_root = workspace_root

    def select(self, workspace: Mapping[str, WorkspaceEntry]) -> List[SelectedFile]:
        """
        Text files in snapshot order, one per relative path.

        Keys that reduce to the same relative path (e.g. `/home/project/a.txt`
        and `a.txt`) collapse into one file: the last entry wins and keeps
        the position of the first.
        """
        selected: Dict[str, SelectedFile] = {}
        for path, entry in workspace.items():
            # Binary assets are not supported by the contents transport
            if entry.type != "file" or entry.is_binary:
                continue

            relative_path = extract_relative_path(path, self.workspace_root)
            if not relative_path:
                continue

            content = entry.content or ""
            selected[relative_path] = SelectedFile(
                file=WorkspaceFile(path=path, content=content, is_binary=False),
                entry=ManifestEntry(
                    relative_path=relative_path, size_bytes=utf8_size(content)
                ),
            )
        return list(selected.values())
