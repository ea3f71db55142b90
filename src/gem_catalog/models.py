"""Core data models for the gem catalog browser."""
from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from enum import IntFlag


class GemOrigin(IntFlag):
    """Where a gem comes from. A gem has exactly one origin."""

    STANDARD = 1
    REMOTE = 2
    LOCAL = 4


class GemType(IntFlag):
    ASSET = 1
    CODE = 2
    TOOL = 4


class GemPlatform(IntFlag):
    ANDROID = 1
    IOS = 2
    LINUX = 4
    MACOS = 8
    WINDOWS = 16


@dataclass(frozen=True)
class FlagOption:
    """A single flag value paired with the name shown in the filter panel."""

    value: int
    name: str


def validate_flag_options(options: Sequence[FlagOption]) -> tuple[FlagOption, ...]:
    """Return ``options`` as a tuple after checking every entry is a distinct single bit."""

    seen_values: set[int] = set()
    seen_names: set[str] = set()
    for option in options:
        value = int(option.value)
        if value <= 0 or value & (value - 1):
            raise ValueError(f"Flag option {option.name!r} is not a single bit: {value}")
        if value in seen_values:
            raise ValueError(f"Duplicate flag value {value} for {option.name!r}")
        if not option.name:
            raise ValueError(f"Flag value {value} has no display name")
        if option.name in seen_names:
            raise ValueError(f"Duplicate flag name {option.name!r}")
        seen_values.add(value)
        seen_names.add(option.name)
    return tuple(options)


ORIGIN_OPTIONS = validate_flag_options(
    [
        FlagOption(GemOrigin.STANDARD, "Standard"),
        FlagOption(GemOrigin.REMOTE, "Remote"),
        FlagOption(GemOrigin.LOCAL, "Local"),
    ]
)

TYPE_OPTIONS = validate_flag_options(
    [
        FlagOption(GemType.ASSET, "Asset"),
        FlagOption(GemType.CODE, "Code"),
        FlagOption(GemType.TOOL, "Tool"),
    ]
)

PLATFORM_OPTIONS = validate_flag_options(
    [
        FlagOption(GemPlatform.ANDROID, "Android"),
        FlagOption(GemPlatform.IOS, "iOS"),
        FlagOption(GemPlatform.LINUX, "Linux"),
        FlagOption(GemPlatform.MACOS, "macOS"),
        FlagOption(GemPlatform.WINDOWS, "Windows"),
    ]
)


def flag_names(flags: int, options: Sequence[FlagOption]) -> list[str]:
    """Return display names for every bit of ``flags`` in option order."""

    return [option.name for option in options if int(flags) & int(option.value)]


def parse_flag(name: str, options: Sequence[FlagOption]) -> int:
    """Map a display name back to its flag value (case-insensitive)."""

    wanted = name.strip().casefold()
    for option in options:
        if option.name.casefold() == wanted:
            return int(option.value)
    known = ", ".join(option.name for option in options)
    raise ValueError(f"Unknown value {name!r}; expected one of: {known}")


@dataclass
class ErrorRecord:
    """Structured error payload with translation keys and remediation hints."""

    code: str
    message_key: str
    action_key: str
    context: dict[str, str] = field(default_factory=dict)

    def to_dict(self) -> dict[str, object]:
        return {
            "code": self.code,
            "message_key": self.message_key,
            "action_key": self.action_key,
            "context": dict(self.context),
        }


@dataclass(frozen=True)
class GemInfo:
    """One catalog entry."""

    name: str
    origin: GemOrigin
    types: GemType = GemType(0)
    platforms: GemPlatform = GemPlatform(0)
    features: tuple[str, ...] = ()
    display_name: str = ""
    summary: str = ""
    version: str = ""

    @property
    def label(self) -> str:
        return self.display_name or self.name

    def matches_text(self, text: str) -> bool:
        needle = text.strip().casefold()
        if not needle:
            return True
        haystack = [self.name, self.display_name, self.summary, *self.features]
        return any(needle in value.casefold() for value in haystack)

    def to_dict(self) -> dict[str, object]:
        """Return a YAML/JSON friendly representation."""

        return {
            "name": self.name,
            "display_name": self.label,
            "origin": ", ".join(flag_names(self.origin, ORIGIN_OPTIONS)),
            "types": flag_names(self.types, TYPE_OPTIONS),
            "platforms": flag_names(self.platforms, PLATFORM_OPTIONS),
            "features": list(self.features),
            "summary": self.summary,
            "version": self.version,
        }
