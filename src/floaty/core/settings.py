"""Settings document - a single row of user preferences."""

from dataclasses import asdict, dataclass

DEFAULT_SHORTCUT = "CommandOrControl+Shift+N"


@dataclass
class Settings:
    """User preferences for the note window."""

    reopen_on_restart: bool = False
    shortcut_binding: str = DEFAULT_SHORTCUT

    def to_dict(self) -> dict:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: object) -> "Settings":
        """Build settings from parsed JSON. Raises ValueError on a bad shape."""
        if not isinstance(data, dict):
            raise ValueError("settings document must be an object")

        reopen = data.get("reopen_on_restart", False)
        shortcut = data.get("shortcut_binding", DEFAULT_SHORTCUT)
        if not isinstance(reopen, bool):
            raise ValueError("reopen_on_restart must be a boolean")
        if not isinstance(shortcut, str):
            raise ValueError("shortcut_binding must be a string")
        return cls(reopen_on_restart=reopen, shortcut_binding=shortcut)
