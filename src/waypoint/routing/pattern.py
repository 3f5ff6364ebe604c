"""Path template compilation.

Turns a template such as ``/orders/{id}`` into an anchored regular
expression with one capture group per placeholder. Compilation is a pure
function: nothing is cached, the same template always yields an equal
``CompiledPattern``.
"""

import re
from dataclasses import dataclass

from waypoint.errors import InvalidPattern

# Characters a placeholder name (and its captured value) may contain
PARAM_CHARS = r"[a-zA-Z0-9._\-]+"

# Everything a template may contain besides the placeholder delimiters
_TEMPLATE_CHARS = r"\-:./_()a-zA-Z0-9"


@dataclass(frozen=True, slots=True)
class CompiledPattern:
    """An anchored matcher compiled from one path template.

    ``param_names[i]`` is the placeholder bound to regex group ``p{i}``;
    Python group names must be identifiers, placeholder names need not be.
    """

    template: str
    regex: re.Pattern[str]
    param_names: tuple[str, ...]

    def match(self, path: str) -> dict[str, str] | None:
        """Return placeholder values for *path*, or ``None`` if it does not match."""
        m = self.regex.match(path)
        if m is None:
            return None
        return {name: m.group(f"p{i}") for i, name in enumerate(self.param_names)}


def compile_pattern(
    template: str,
    *,
    case_sensitive: bool = False,
    delimiters: tuple[str, str] = ("{", "}"),
) -> CompiledPattern:
    """Compile a path template into an anchored ``CompiledPattern``.

    Examples::

        compile_pattern("/users/{id}").match("/USERS/42")  -> {"id": "42"}
        compile_pattern("/users/{id}", case_sensitive=True).match("/USERS/42")  -> None

    Only well-formed placeholders (``{name}`` with ``name`` drawn from
    letters, digits, ``.``, ``_``, ``-``) become parameters; any other
    delimited text is kept as literal text. Literal text matches itself.

    Raises ``InvalidPattern`` if the template contains a character outside
    the allowed set, or uses the same placeholder name twice.
    """
    left, right = delimiters
    delims = re.escape(left) + re.escape(right)

    bad = re.search(f"[^{_TEMPLATE_CHARS}{delims}]", template)
    if bad is not None:
        raise InvalidPattern(template, f"character {bad.group()!r} is not allowed")

    placeholder = re.compile(re.escape(left) + f"({PARAM_CHARS})" + re.escape(right))

    parts: list[str] = []
    names: list[str] = []
    pos = 0
    for m in placeholder.finditer(template):
        name = m.group(1)
        if name in names:
            raise InvalidPattern(template, f"placeholder {name!r} is used more than once")
        parts.append(re.escape(template[pos : m.start()]))
        parts.append(f"(?P<p{len(names)}>{PARAM_CHARS})")
        names.append(name)
        pos = m.end()
    parts.append(re.escape(template[pos:]))

    # ASCII-only: Unicode case folding would let K, ſ and ı match k, s and i
    flags = re.ASCII if case_sensitive else re.ASCII | re.IGNORECASE
    regex = re.compile("^" + "".join(parts) + r"\Z", flags)
    return CompiledPattern(template=template, regex=regex, param_names=tuple(names))
