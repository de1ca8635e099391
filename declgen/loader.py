"""Load documentation trees from the JSON files of the documentation parser."""

import json
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from declgen.doclets import DocMeta, DocNode, Doclet
from declgen.exceptions import DocTreeError
from declgen.logging import get_declgen_logger

logger = get_declgen_logger(__name__)

OPTIONS_ROOT = "Options"


def _read_json(path: Path) -> Any:
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except OSError as exc:
        raise DocTreeError(f"Cannot read {path}: {exc}") from exc
    except json.JSONDecodeError as exc:
        raise DocTreeError(f"Invalid JSON in {path}: {exc}") from exc


def load_namespace_trees(path: str | Path) -> dict[str, DocNode]:
    """Load namespace documentation trees keyed by module path.

    Raises:
        DocTreeError: The file is unreadable, not JSON, not an object, or a
            tree does not validate.
    """
    path = Path(path)
    payload = _read_json(path)
    if not isinstance(payload, dict):
        raise DocTreeError(f"{path} must contain an object keyed by module path")

    trees: dict[str, DocNode] = {}
    for module, tree in payload.items():
        try:
            trees[module] = DocNode.model_validate(tree)
        except ValidationError as exc:
            raise DocTreeError(f"Invalid documentation tree for {module} in {path}: {exc}") from exc

    logger.debug("Loaded %d namespace trees from %s", len(trees), path)
    return trees


def load_options_tree(path: str | Path) -> DocNode:
    """Load an options documentation tree.

    A payload without a ``doclet`` key is a bare mapping of top-level
    options; it is wrapped as the children of an ``Options`` root node.

    Raises:
        DocTreeError: The file is unreadable, not JSON, not an object, or
            does not validate.
    """
    path = Path(path)
    payload = _read_json(path)
    if not isinstance(payload, dict):
        raise DocTreeError(f"{path} must contain an options object")

    try:
        if "doclet" in payload:
            return DocNode.model_validate(payload)
        return DocNode(
            doclet=Doclet(),
            children=payload,
            meta=DocMeta(fullname="", name=OPTIONS_ROOT),
        )
    except ValidationError as exc:
        raise DocTreeError(f"Invalid options tree in {path}: {exc}") from exc
