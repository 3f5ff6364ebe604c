"""Router configuration.

RouterConfig is a frozen dataclass — immutable after creation, IDE-autocompletable,
no string-key dict lookups.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

from waypoint.errors import ConfigurationError

# Characters that may appear inside a placeholder name
IDENTIFIER_CHARS = frozenset("abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ0123456789._-")


@dataclass(frozen=True, slots=True)
class RouterConfig:
    """Router configuration. Immutable after creation.

    All fields have sensible defaults. Override what you need::

        config = RouterConfig(case_sensitive=True, path_prefix="/en")
    """

    # Matching
    case_sensitive: bool = False

    # Generation: prepended to every route that does not opt out
    path_prefix: str | None = None

    # Deprecated: extra generation inputs, only used while path_prefix is active
    global_params: Mapping[str, Any] = field(default_factory=dict)

    # Placeholder delimiters, e.g. ("<", ">") for /users/<id>
    delimiters: tuple[str, str] = ("{", "}")

    def __post_init__(self) -> None:
        object.__setattr__(self, "global_params", MappingProxyType(dict(self.global_params)))
        if len(self.delimiters) != 2:
            msg = f"delimiters must be a (left, right) pair, got {self.delimiters!r}"
            raise ConfigurationError(msg)
        for delimiter in self.delimiters:
            if len(delimiter) != 1 or delimiter in IDENTIFIER_CHARS or delimiter == "/":
                msg = (
                    f"Invalid placeholder delimiter {delimiter!r}: must be a single "
                    "character outside letters, digits, '.', '_', '-' and '/'"
                )
                raise ConfigurationError(msg)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "RouterConfig":
        """Build a config from a plain mapping (parsed YAML, JSON, settings dict).

        ``locale_prefix`` is accepted as an alias of ``path_prefix``.
        Unknown keys raise ``ConfigurationError``.
        """
        values = dict(data)
        if "locale_prefix" in values:
            if "path_prefix" in values:
                msg = "Set either 'path_prefix' or 'locale_prefix', not both"
                raise ConfigurationError(msg)
            values["path_prefix"] = values.pop("locale_prefix")

        known = set(cls.__dataclass_fields__)
        unknown = sorted(set(values) - known)
        if unknown:
            msg = f"Unknown router config keys: {', '.join(unknown)}"
            raise ConfigurationError(msg)

        if "delimiters" in values:
            values["delimiters"] = tuple(values["delimiters"])
        return cls(**values)
