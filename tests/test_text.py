"""Tests for description clean-up helpers."""

from declgen.text import extract_urls, remove_examples, remove_links


class TestRemoveExamples:
    def test_example_block_is_removed(self):
        text = "Sets the width.\n\n@example\nchart.setSize(100);\n\nReturns nothing."
        assert remove_examples(text) == "Sets the width.\n\nReturns nothing."

    def test_block_ends_at_next_tag(self):
        text = "Intro.\n@sample highcharts/chart/width\nWidth demo\n@since 2.0"
        assert remove_examples(text) == "Intro.\n@since 2.0"

    def test_text_without_examples_is_unchanged(self):
        assert remove_examples("Plain text.") == "Plain text."


class TestRemoveLinks:
    def test_jsdoc_link_with_label(self):
        links: list[str] = []
        assert remove_links("See {@link Highcharts.Chart|the chart}.", links) == "See the chart."
        assert links == ["Highcharts.Chart"]

    def test_jsdoc_link_with_space_label(self):
        links: list[str] = []
        assert remove_links("See {@link Highcharts.Point point}.", links) == "See point."
        assert links == ["Highcharts.Point"]

    def test_jsdoc_link_without_label(self):
        links: list[str] = []
        assert remove_links("See {@link Highcharts.Series}.", links) == "See Highcharts.Series."
        assert links == ["Highcharts.Series"]

    def test_markdown_link(self):
        links: list[str] = []
        text = "Read [the docs](https://www.highcharts.com/docs) first."
        assert remove_links(text, links) == "Read the docs first."
        assert links == ["https://www.highcharts.com/docs"]


def test_extract_urls():
    text = "Demo at https://jsfiddle.net/gh/abc and (http://example.com/x)."
    assert extract_urls(text) == ["https://jsfiddle.net/gh/abc", "http://example.com/x"]
