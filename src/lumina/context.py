from dataclasses import dataclass, field, replace
from pathlib import Path

from .background import resolve_background
from .config import Settings
from .exceptions import LuminaError
from .fs import FileSystem, LocalFileSystem
from .models import Background


@dataclass
class ParseContext:
    """Everything a parse needs besides the form itself.

    Each ``load`` gets a child context with its own directory and include
    chain; the settings, filesystem and error list are shared.
    """

    settings: Settings = field(default_factory=Settings)
    base_dir: Path = field(default_factory=Path.cwd)
    fs: FileSystem = field(default_factory=LocalFileSystem)
    include_chain: tuple[Path, ...] = ()
    errors: list[LuminaError] = field(default_factory=list)

    def resolve_background(self, raw: str | Path) -> Background:
        return resolve_background(
            raw, base_dir=self.base_dir, home_dir=self.settings.home_dir, fs=self.fs
        )

    def including(self, path: Path) -> "ParseContext":
        """Child context for parsing the file at *path* (already resolved)."""
        return replace(
            self,
            base_dir=path.parent,
            include_chain=self.include_chain + (path,),
        )
