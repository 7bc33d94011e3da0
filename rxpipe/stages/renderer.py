# rxpipe/stages/renderer.py
"""
Match renderer.

Applies the caller's transformation function to every match of a
MatchList, in order, and joins the fragments with no separator.
Exceptions raised by the transformation are not caught here.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Callable, List

from rxpipe.core.types import MatchList
from rxpipe.logging.logger import get_logger
from rxpipe.logging.tags import RENDERER

logger = get_logger(__name__)

Transformation = Callable[[re.Match], str]


@dataclass
class MatchRenderer:
    """Renders one output string per MatchList."""

    transformation: Transformation
    stage_name: str = field(default="renderer", repr=False)

    def feed(self, match_list: MatchList) -> List[str]:
        fragments = []
        for match in match_list.matches:
            fragment = self.transformation(match)
            if not isinstance(fragment, str):
                raise TypeError(
                    f"transformation must return str, got {type(fragment).__name__} "
                    f"for chunk[{match_list.chunk.index}]"
                )
            fragments.append(fragment)

        output = "".join(fragments)
        logger.debug(f"{RENDERER} Rendered chunk[{match_list.chunk.index}] ({len(output)} chars)")
        return [output]

    def flush(self) -> List[str]:
        return []


__all__ = ["MatchRenderer", "Transformation"]
