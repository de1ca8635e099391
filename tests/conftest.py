"""Shared documentation-tree builders for declgen tests."""

from collections.abc import Callable
from typing import Any

import pytest

from declgen.declarations import Declaration, DeclarationKind
from declgen.doclets import DocMeta, DocNode, Doclet
from declgen.settings import Settings

NodeBuilder = Callable[..., DocNode]


def _doc(kind: str = "", name: str = "", *children: DocNode, **doclet: Any) -> DocNode:
    """Namespace-tree node; ``name`` is the documented long name."""
    keyed: dict[str, DocNode] = {}
    for child in children:
        key, count = child.name, 1
        while key in keyed:
            count += 1
            key = f"{child.name}({count})"
        keyed[key] = child
    return DocNode(
        doclet=Doclet(kind=kind, name=name, **doclet) if kind else None,
        children=keyed,
        meta=DocMeta(fullname=name, name=name),
    )


def _option(fullname: str, *children: DocNode, **doclet: Any) -> DocNode:
    """Options-tree node addressed by its dotted option path."""
    return DocNode(
        doclet=Doclet(**doclet),
        children={child.meta.name: child for child in children},
        meta=DocMeta(fullname=fullname, name=fullname.rsplit(".", 1)[-1]),
    )


@pytest.fixture
def doc() -> NodeBuilder:
    return _doc


@pytest.fixture
def option() -> NodeBuilder:
    return _option


@pytest.fixture
def test_settings() -> Settings:
    """Default settings isolated from the environment and .env files."""
    return Settings(_env_file=None)


@pytest.fixture
def namespace() -> Declaration:
    return Declaration(DeclarationKind.MODULE, "Highcharts")


@pytest.fixture
def globals_module() -> Declaration:
    return Declaration(DeclarationKind.MODULE)


@pytest.fixture
def series_options_tree() -> DocNode:
    """Options tree with two series types, ``line`` and ``bar``."""
    return DocNode(
        doclet=Doclet(),
        meta=DocMeta(fullname="", name="Options"),
        children={
            "chart": _option(
                "chart",
                _option("chart.type", values='["line", "bar"]', type={"names": ["String"]}),
                _option("chart.width", type={"names": ["Number"]}),
            ),
            "plotOptions": _option(
                "plotOptions",
                _option("plotOptions.line", _option("plotOptions.line.lineWidth", type={"names": ["Number"]})),
                _option("plotOptions.bar", _option("plotOptions.bar.borderRadius", type={"names": ["Number"]})),
            ),
            "series": _option(
                "series",
                _option("series.type", type={"names": ["String"]}),
                _option("series.name", type={"names": ["String"]}),
                _option(
                    "series.line",
                    _option("series.line.data", type={"names": ["Array.<Number>"]}),
                    _option("series.line.lineWidth", type={"names": ["Number"]}),
                    _option("series.line.dashStyle", type={"names": ["String"]}),
                    extends_list=["plotOptions.line"],
                    exclude=["pointWidth", "lineWidth"],
                ),
                _option(
                    "series.bar",
                    _option("series.bar.data", type={"names": ["Array.<Number>"]}),
                    extends_list=["plotOptions.bar"],
                ),
                type={"names": ["Array.<*>"]},
            ),
        },
    )
