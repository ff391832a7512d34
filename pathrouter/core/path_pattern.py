from dataclasses import dataclass
from typing import Optional

from .errors import InvalidPatternError

PARAM_PREFIX = ":"


def normalize_pattern(pattern: str) -> str:
    return pattern if pattern.startswith("/") else f"/{pattern}"


def split_path(path: str) -> list[str]:
    """Split a path into segments after dropping one leading slash.

    Empty segments are kept, so ``"a//b"`` gives ``["a", "", "b"]`` and
    ``"users/"`` gives ``["users", ""]``.
    """
    if path.startswith("/"):
        path = path[1:]
    return path.split("/")


@dataclass(frozen=True)
class Segment:
    """One slash-delimited piece of a pattern.

    Literal: ``users``  (param_name=None)
    Named:   ``:id``    (param_name="id")
    """

    value: str
    param_name: Optional[str] = None

    @property
    def is_param(self) -> bool:
        return self.param_name is not None


@dataclass(frozen=True)
class CompiledPattern:
    pattern: str
    segments: tuple[Segment, ...]

    @property
    def param_names(self) -> tuple[str, ...]:
        return tuple(s.param_name for s in self.segments if s.is_param)

    def test(self, path: str) -> Optional[dict[str, str]]:
        """Return the named bindings for ``path``, or None if it does not match.

        A pattern without named segments returns an empty dict on a match.
        """
        parts = split_path(path)
        if len(parts) != len(self.segments):
            return None

        params: dict[str, str] = {}
        for segment, part in zip(self.segments, parts):
            if segment.is_param:
                params[segment.param_name] = part
            elif segment.value != part:
                return None
        return params


def compile_pattern(pattern: str) -> CompiledPattern:
    normalized = normalize_pattern(pattern)
    segments: list[Segment] = []
    seen: set[str] = set()

    for part in split_path(normalized):
        if not part.startswith(PARAM_PREFIX):
            segments.append(Segment(part))
            continue

        name = part[len(PARAM_PREFIX):]
        if not name:
            raise InvalidPatternError(f"Unnamed parameter segment in pattern {normalized!r}")
        if name in seen:
            raise InvalidPatternError(f"Parameter {name!r} repeated in pattern {normalized!r}")
        seen.add(name)
        segments.append(Segment(part, param_name=name))

    return CompiledPattern(pattern=normalized, segments=tuple(segments))
