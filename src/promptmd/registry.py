"""Function registry: immutable lookup of known functions and its file loader"""

from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml
from loguru import logger
from pydantic import ValidationError

from promptmd.core.models import FunctionSpec


@dataclass(frozen=True)
class FunctionRegistry:
    """Read-only snapshot of the function catalog, in declaration order."""
    functions: tuple[FunctionSpec, ...] = ()

    @classmethod
    def of(cls, specs: Iterable[FunctionSpec | dict[str, Any]]) -> "FunctionRegistry":
        """Build a registry from specs or raw records (validated as FunctionSpec)."""
        return cls(functions=tuple(FunctionSpec.model_validate(s) for s in specs))

    def get(self, function_id: str) -> FunctionSpec | None:
        """Return the first spec whose id matches, else None."""
        return next((s for s in self.functions if s.id == function_id), None)

    def is_valid(self, function_id: str) -> bool:
        return self.get(function_id) is not None

    def ids(self) -> list[str]:
        return [s.id for s in self.functions]

    def search(self, query: str, limit: int = 10) -> list[FunctionSpec]:
        """Case-insensitive substring match on name or description."""
        q = query.lower()
        hits = [s for s in self.functions if q in s.name.lower() or q in s.description.lower()]
        return hits[:limit]

    def __contains__(self, function_id: object) -> bool:
        return isinstance(function_id, str) and self.is_valid(function_id)

    def __iter__(self) -> Iterator[FunctionSpec]:
        return iter(self.functions)

    def __len__(self) -> int:
        return len(self.functions)


EMPTY_REGISTRY = FunctionRegistry()


def resolve_function(function_id: str, registry: FunctionRegistry) -> FunctionSpec | None:
    """Pure placeholder lookup against a registry snapshot."""
    return registry.get(function_id)


def load_registry(path: Path | str) -> FunctionRegistry:
    """Load a registry from a YAML/JSON file: a list of records or {functions: [...]}."""
    path = Path(path)
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid {path.name}: {e}") from e

    if data is None:
        data = []
    if isinstance(data, dict):
        data = data.get("functions") or []
    if not isinstance(data, list):
        raise ValueError(f"Invalid {path.name}: expected a list of functions, got {type(data).__name__}")

    try:
        registry = FunctionRegistry.of(data)
    except ValidationError as e:
        raise ValueError(f"Invalid {path.name}: {e}") from e
    logger.debug(f"Loaded {len(registry)} function(s) from {path}")
    return registry
