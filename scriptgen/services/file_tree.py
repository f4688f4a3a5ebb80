# scriptgen/services/file_tree.py
from __future__ import annotations

import logging
from typing import Dict, Iterable, List, Optional, Union

from scriptgen.models.scaffold import FileNode, FileTreeNode, FolderNode, GeneratedFile

logger = logging.getLogger(__name__)

# name -> node, where a folder's value is its own level dict
_Level = Dict[str, Union[FileNode, "_Folder"]]

class _Folder:
    __slots__ = ("name", "children")

    def __init__(self, name: str):
        self.name = name
        self.children: _Level = {}

def split_path(path: str) -> List[str]:
    return [p for p in path.replace("\\", "/").split("/") if p and p != "."]

def _sort_key(node: Union[FileNode, _Folder]):
    return (0 if isinstance(node, _Folder) else 1, node.name.casefold(), node.name)

def _to_nodes(level: _Level) -> List[FileTreeNode]:
    out: List[FileTreeNode] = []
    for node in sorted(level.values(), key=_sort_key):
        if isinstance(node, _Folder):
            out.append(FolderNode(name=node.name, children=_to_nodes(node.children)))
        else:
            out.append(node)
    return out

def build_file_tree(files: Iterable[GeneratedFile]) -> List[FileTreeNode]:
    """Turn flat file paths into nested folder/file nodes.

    Each level lists folders first, then files, both by case-insensitive
    name. A duplicate path keeps the last file. A folder replaces a file
    of the same name at the same level.
    """
    root: _Level = {}

    for f in files:
        parts = split_path(f.name)
        if not parts:
            logger.warning("Skipping file with empty path: %r", f.name)
            continue

        level = root
        for part in parts[:-1]:
            node = level.get(part)
            if not isinstance(node, _Folder):
                if node is not None:
                    logger.warning("Folder %r replaces file %r in tree", part, node.path)
                node = _Folder(part)
                level[part] = node
            level = node.children

        leaf = parts[-1]
        if isinstance(level.get(leaf), _Folder):
            logger.warning("File %r shadowed by folder of the same name", f.name)
            continue
        level[leaf] = FileNode(name=leaf, path=f.name)

    return _to_nodes(root)

def render_code_tree(nodes: List[FileTreeNode], indent: int = 0) -> str:
    lines: List[str] = []
    for node in nodes:
        pad = "  " * indent
        if isinstance(node, FolderNode):
            lines.append(f"{pad}{node.name}/")
            sub = render_code_tree(node.children, indent + 1)
            if sub:
                lines.append(sub)
        else:
            lines.append(f"{pad}{node.name}")
    return "\n".join(lines)

def find_file(files: Optional[List[GeneratedFile]], path: str) -> Optional[GeneratedFile]:
    for f in files or []:
        if f.name == path:
            return f
    return None
