"""Decode YAML front matter from a parsed document."""

from __future__ import annotations

import logging
from typing import Any

import yaml

from specdeck.exceptions import FrontMatterDecodeError
from specdeck.schemas.nodes import Node, NodeKind

logger = logging.getLogger(__name__)


def extract_front_matter(root: Node) -> dict[str, Any] | None:
    """Decode the document's leading front matter block.

    Args:
        root: A parsed document.

    Returns:
        The decoded mapping, ``{}`` for an empty block, or ``None`` when the
        document does not start with front matter.

    Raises:
        FrontMatterDecodeError: If the payload is not valid YAML or does not
            decode to a mapping.
    """
    if not root.children or root.children[0].kind is not NodeKind.FRONT_MATTER:
        return None

    raw_value = root.children[0].raw_value or ""
    try:
        decoded = yaml.safe_load(raw_value)
    except yaml.YAMLError as exc:
        raise FrontMatterDecodeError(raw_value, str(exc)) from exc

    if decoded is None:
        return {}
    if not isinstance(decoded, dict):
        raise FrontMatterDecodeError(
            raw_value, f"expected a mapping, got {type(decoded).__name__}"
        )

    logger.debug("Decoded front matter with keys: %s", list(decoded))
    return {str(key): value for key, value in decoded.items()}
