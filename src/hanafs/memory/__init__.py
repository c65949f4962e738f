"""In-memory filesystem with the same interface as the remote provider."""

from hanafs.memory.filesystem import Directory, File, MemoryFileSystem
from hanafs.memory.notifier import ChangeNotifier

__all__ = ["ChangeNotifier", "Directory", "File", "MemoryFileSystem"]
