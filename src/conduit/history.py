"""In-memory browser history."""

from dataclasses import dataclass, field


@dataclass
class History:
    """Paths pushed by navigation, oldest first."""

    entries: list[str] = field(default_factory=list)

    def push(self, path: str) -> None:
        self.entries.append(path)

    @property
    def current(self) -> str | None:
        return self.entries[-1] if self.entries else None
