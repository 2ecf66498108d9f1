from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple


@dataclass
class LoadContext:
    """
    Shared pipeline context.
    This object is passed between orchestration layers.
    """

    config: Any
    logger: Any

    input_path: Optional[str] = None
    strict: bool = False

    stats: Dict[str, Any] = field(default_factory=dict)
    errors: List[Tuple[int, str]] = field(default_factory=list)

    debug: bool = False
