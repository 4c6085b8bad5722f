"""
Resolve gateway selectors into the set of stages to audit.

A selector is either a gateway id ("abc123") which selects every stage of that
gateway, or "gateway/stage" ("abc123/prod") which selects a single stage.
Combined with the include/exclude mode this yields, per API family, a mapping
of gateway id -> stage names where an empty list means "all stages".
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Iterable, List, Optional, Set, Tuple

from .diagnostics import Diagnostic, error


class Mode(str, Enum):
    """Whether selectors name what to audit or what to skip."""
    INCLUDE = "include"
    EXCLUDE = "exclude"


VALID_MODES = tuple(m.value for m in Mode)


@dataclass
class SelectionIntent:
    """Parsed selectors.

    A gateway id is in at most one of the two collections: selecting a whole
    gateway drops any stage selectors seen earlier for it.

    Attributes:
        all_stages: Gateway ids selected wholesale
        stages: Gateway id -> stage names selected individually
    """
    all_stages: Set[str] = field(default_factory=set)
    stages: Dict[str, List[str]] = field(default_factory=dict)

    def add_gateway(self, api_id: str) -> None:
        self.all_stages.add(api_id)
        self.stages.pop(api_id, None)

    def add_stage(self, api_id: str, stage_name: str) -> None:
        if api_id in self.all_stages:
            return
        self.stages.setdefault(api_id, []).append(stage_name)


def parse_mode(value: Optional[str]) -> Mode:
    """Parse a mode string, defaulting to include.

    Raises:
        ValueError: If value is not one of VALID_MODES
    """
    if value is None:
        return Mode.INCLUDE
    try:
        return Mode(value.lower())
    except ValueError:
        raise ValueError(
            f"Invalid mode '{value}', expected one of: {', '.join(VALID_MODES)}"
        )


def resolve_selectors(selectors: Iterable[str]) -> Tuple[SelectionIntent, List[Diagnostic]]:
    """Parse selector tokens into a SelectionIntent.

    Malformed tokens are reported and skipped; parsing continues with the
    remaining tokens.

    Args:
        selectors: Tokens of the form "apiId" or "apiId/stageName"

    Returns:
        Tuple of (intent, malformed-token diagnostics)
    """
    intent = SelectionIntent()
    diagnostics: List[Diagnostic] = []

    for token in selectors:
        parts = token.split("/")
        if not all(parts) or len(parts) > 2:
            diagnostics.append(error(f"API gateway syntax is wrong for {token}"))
            continue

        if len(parts) == 1:
            intent.add_gateway(parts[0])
        else:
            intent.add_stage(parts[0], parts[1])

    return intent, diagnostics


def compute_stage_selection(
    intent: SelectionIntent,
    api_ids: Iterable[str],
    mode: Mode,
) -> Dict[str, List[str]]:
    """Decide which gateways of one API family are in scope.

    Gateways named with explicit stages are always kept with those stages.
    Otherwise a gateway is kept (with all stages) when it was named in include
    mode, or when it was not named in exclude mode.

    Args:
        intent: Parsed selectors
        api_ids: Every gateway id of the family, in catalog order
        mode: Include or exclude

    Returns:
        Dict of api id -> stage names (empty list = all stages)
    """
    exclude = mode is Mode.EXCLUDE
    selection: Dict[str, List[str]] = {}

    for api_id in api_ids:
        if api_id in intent.stages:
            selection[api_id] = list(intent.stages[api_id])
        elif (api_id in intent.all_stages) != exclude:
            selection[api_id] = []

    return selection


def stage_in_scope(selected_stages: List[str], stage_name: str, mode: Mode) -> bool:
    """Check whether a fetched stage should be verified.

    An empty selection keeps every stage. Otherwise a named stage is kept in
    include mode and skipped in exclude mode, and the reverse for unnamed ones.
    """
    if not selected_stages:
        return True
    return (stage_name in selected_stages) != (mode is Mode.EXCLUDE)
