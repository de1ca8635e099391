"""Tests for NamespaceGenerator."""

from declgen.declarations import Declaration, DeclarationKind
from declgen.generators import NamespaceGenerator, split_overload
from declgen.settings import Settings


def _generate(tree, namespace, globals_module, settings, product=""):
    generator = NamespaceGenerator(globals_module, namespace, product, settings)
    generator.generate(tree)
    return namespace


def _chart_tree(doc):
    return doc(
        "",
        "",
        doc(
            "class",
            "Highcharts.Chart",
            doc(
                "constructor",
                "Highcharts.Chart",
                parameters={
                    "renderTo": {"types": ["String", "HTMLDOMElement"]},
                    "options": {"types": ["Highcharts.Options"]},
                },
            ),
            doc("member", "Highcharts.Chart#title", types=["Highcharts.SVGElement"]),
            doc(
                "function",
                "Highcharts.Chart#redraw",
                description="Redraws the chart.",
                parameters={"animation": {"isOptional": True, "types": ["Boolean"]}},
                returns={"types": ["void"]},
            ),
            description="The chart class.",
        ),
    )


class TestClasses:
    def test_class_with_members(self, doc, namespace, globals_module, test_settings):
        _generate(_chart_tree(doc), namespace, globals_module, test_settings)

        chart = namespace.get_children("Chart")[0]
        assert chart.kind is DeclarationKind.CLASS
        assert chart.full_name == "Highcharts.Chart"
        assert chart.description == "The chart class."
        assert [child.name for child in chart.get_children()] == ["constructor", "title", "redraw"]

    def test_constructor_parameters_are_mapped(self, doc, namespace, globals_module, test_settings):
        _generate(_chart_tree(doc), namespace, globals_module, test_settings)

        constructor = namespace.get_children("Chart")[0].get_children("constructor")[0]
        assert constructor.kind is DeclarationKind.CONSTRUCTOR
        assert constructor.get_parameter_names() == ["renderTo", "options"]
        assert constructor.get_parameters()[0].types == ["string", "HTMLDOMElement"]

    def test_function_return_types(self, doc, namespace, globals_module, test_settings):
        _generate(_chart_tree(doc), namespace, globals_module, test_settings)

        redraw = namespace.get_children("Chart")[0].get_children("redraw")[0]
        assert redraw.kind is DeclarationKind.FUNCTION
        assert redraw.types == ["void"]
        assert redraw.get_parameters()[0].is_optional

    def test_existing_class_is_reused(self, doc, namespace, globals_module, test_settings):
        tree = doc(
            "",
            "",
            doc("class", "Highcharts.Chart", doc("member", "Highcharts.Chart#title")),
            doc("class", "Highcharts.Chart", doc("member", "Highcharts.Chart#subtitle"), description="Late."),
        )
        _generate(tree, namespace, globals_module, test_settings)

        charts = namespace.get_children("Chart")
        assert len(charts) == 1
        assert charts[0].get_children_names() == ["title", "subtitle"]
        assert charts[0].description == "Late."

    def test_interface_keeps_only_extended_types(self, doc, namespace, globals_module, test_settings):
        tree = doc("", "", doc("interface", "Highcharts.Point", types=["Object", "Highcharts.Base"]))
        _generate(tree, namespace, globals_module, test_settings)

        point = namespace.get_children("Point")[0]
        assert point.kind is DeclarationKind.INTERFACE
        assert point.types == ["Highcharts.Base"]


class TestDeterminism:
    def test_same_tree_gives_same_declarations(self, doc, globals_module, test_settings):
        first = _generate(
            _chart_tree(doc), Declaration(DeclarationKind.MODULE, "Highcharts"), globals_module, test_settings
        )
        second = _generate(
            _chart_tree(doc),
            Declaration(DeclarationKind.MODULE, "Highcharts"),
            Declaration(DeclarationKind.MODULE),
            test_settings,
        )
        assert first.to_dict() == second.to_dict()


class TestMembers:
    def test_type_union_keeps_first_seen_order(self, doc, namespace, globals_module, test_settings):
        tree = doc("", "", doc("member", "Highcharts.color", types=["String", "Color", "String"]))
        _generate(tree, namespace, globals_module, test_settings)

        assert namespace.get_children("color")[0].types == ["string", "Color"]

    def test_undefined_marks_optional(self, doc, namespace, globals_module, test_settings):
        tree = doc("", "", doc("member", "Highcharts.color", types=["String", "undefined"]))
        _generate(tree, namespace, globals_module, test_settings)

        color = namespace.get_children("color")[0]
        assert color.is_optional
        assert color.types == ["string"]

    def test_values_become_literal_types(self, doc, namespace, globals_module, test_settings):
        tree = doc("", "", doc("member", "Highcharts.align", values='["left", "right"]', types=["String"]))
        _generate(tree, namespace, globals_module, test_settings)

        assert namespace.get_children("align")[0].types == ['"left"', '"right"']

    def test_malformed_values_fall_back_to_types(self, doc, namespace, globals_module, test_settings):
        tree = doc("", "", doc("member", "Highcharts.align", values="[not json", types=["String"]))
        _generate(tree, namespace, globals_module, test_settings)

        assert namespace.get_children("align")[0].types == ["string"]

    def test_global_member_goes_to_globals(self, doc, namespace, globals_module, test_settings):
        tree = doc("", "", doc("member", "Window#Highcharts", is_global=True, types=["Highcharts.Static"]))
        _generate(tree, namespace, globals_module, test_settings)

        assert globals_module.get_children_names() == ["Highcharts"]
        assert not namespace.has_children


class TestDescriptions:
    def test_product_prefix(self, doc, namespace, globals_module, test_settings):
        tree = doc(
            "",
            "",
            doc("member", "Highcharts.navigator", description="The navigator.", products=["highstock", "gantt"]),
        )
        _generate(tree, namespace, globals_module, test_settings)

        assert namespace.get_children("navigator")[0].description == "(Highstock, Gantt) The navigator."

    def test_examples_and_links_are_removed(self, doc, namespace, globals_module, test_settings):
        tree = doc(
            "",
            "",
            doc(
                "member",
                "Highcharts.Chart#title",
                description="See {@link https://example.com/title|the title docs}.\n@example\nchart.title",
            ),
        )
        _generate(tree, namespace, globals_module, test_settings)

        title = namespace.get_children("title")[0]
        assert title.description == "See the title docs."
        assert title.see == ["https://api.highcharts.com/class-reference/Highcharts#Chart.title"]

    def test_links_are_skipped_when_disabled(self, doc, namespace, globals_module):
        settings = Settings(_env_file=None, without_links=True)
        tree = doc("", "", doc("member", "Highcharts.title", description="{@link https://example.com}"))
        _generate(tree, namespace, globals_module, settings)

        assert namespace.get_children("title")[0].see == []

    def test_empty_description_inherits_from_sibling(self, doc, namespace, globals_module, test_settings):
        tree = doc(
            "",
            "",
            doc("function", "Highcharts.chart", description="Factory.", parameters={"options": {}}),
            doc("function", "Highcharts.chart", parameters={"renderTo": {}, "options": {}}),
        )
        _generate(tree, namespace, globals_module, test_settings)

        functions = namespace.get_children("chart")
        assert [function.description for function in functions] == ["Factory.", "Factory."]


class TestOverloads:
    def test_optional_first_parameter_splits(self, doc, namespace, globals_module, test_settings):
        tree = doc(
            "",
            "",
            doc("function", "Highcharts.fn", parameters={"a": {"isOptional": True}, "b": {}}),
        )
        _generate(tree, namespace, globals_module, test_settings)

        functions = namespace.get_children("fn")
        assert len(functions) == 2
        assert functions[0].get_parameter_names() == ["a", "b"]
        assert not functions[0].get_parameters()[0].is_optional
        assert functions[1].get_parameter_names() == ["b"]

    def test_constructor_uses_same_rule(self, doc, namespace, globals_module, test_settings):
        tree = doc(
            "",
            "",
            doc(
                "class",
                "Highcharts.Chart",
                doc(
                    "constructor",
                    "Highcharts.Chart",
                    parameters={"renderTo": {"isOptional": True}, "options": {}},
                ),
            ),
        )
        _generate(tree, namespace, globals_module, test_settings)

        constructors = namespace.get_children("Chart")[0].get_children("constructor")
        assert [constructor.get_parameter_names() for constructor in constructors] == [
            ["renderTo", "options"],
            ["options"],
        ]

    def test_no_split_when_second_parameter_optional(self):
        function = Declaration(DeclarationKind.FUNCTION, "fn")
        function.set_parameters(
            Declaration(DeclarationKind.PARAMETER, "a", is_optional=True),
            Declaration(DeclarationKind.PARAMETER, "b", is_optional=True),
        )
        assert split_overload(function) is None
        assert function.get_parameters()[0].is_optional

    def test_no_split_for_rest_parameter(self):
        function = Declaration(DeclarationKind.FUNCTION, "fn")
        function.set_parameters(
            Declaration(DeclarationKind.PARAMETER, "a", is_optional=True),
            Declaration(DeclarationKind.PARAMETER, "rest", is_variable=True),
        )
        assert split_overload(function) is None


class TestEvents:
    def test_events_and_fires(self, doc, namespace, globals_module, test_settings):
        tree = doc(
            "",
            "",
            doc(
                "function",
                "Highcharts.Chart#addSeries",
                events={"addSeries": {"description": "Fired when a series is added.", "types": ["Event"]}},
                fires=["addSeries"],
            ),
        )
        _generate(tree, namespace, globals_module, test_settings)

        add_series = namespace.get_children("addSeries")[0]
        event = add_series.get_children()[0]
        assert event.kind is DeclarationKind.EVENT
        assert event.types == ["Event"]
        assert add_series.events == ["addSeries"]


class TestTypedefs:
    def test_callback_becomes_function_type(self, doc, namespace, globals_module, test_settings):
        tree = doc(
            "",
            "",
            doc(
                "typedef",
                "Highcharts.FormatterCallbackFunction",
                parameters={"value": {"types": ["Number"]}},
                returns={"description": "The label.", "types": ["String"]},
            ),
        )
        _generate(tree, namespace, globals_module, test_settings)

        formatter = namespace.get_children("FormatterCallbackFunction")[0]
        assert formatter.kind is DeclarationKind.FUNCTION_TYPE
        assert formatter.get_parameter_names() == ["value"]
        assert formatter.types == ["string"]
        assert formatter.types_description == "The label."

    def test_callable_with_members_becomes_function_interface(self, doc, namespace, globals_module, test_settings):
        tree = doc(
            "",
            "",
            doc(
                "typedef",
                "Highcharts.Formatter",
                doc("member", "Highcharts.Formatter#cache", types=["Object"]),
                parameters={"context": {"isOptional": True}, "value": {"types": ["Number"]}},
                returns={"types": ["String"]},
            ),
        )
        _generate(tree, namespace, globals_module, test_settings)

        formatter = namespace.get_children("Formatter")[0]
        assert formatter.kind is DeclarationKind.INTERFACE
        signatures = formatter.get_children("")
        assert [signature.get_parameter_names() for signature in signatures] == [["context", "value"], ["value"]]
        assert signatures[0].types == ["string"]
        assert formatter.get_children("cache")[0].types == ["object"]

    def test_object_with_members_becomes_interface(self, doc, namespace, globals_module, test_settings):
        tree = doc(
            "",
            "",
            doc(
                "typedef",
                "Highcharts.PositionObject",
                doc("member", "Highcharts.PositionObject#x", types=["Number"]),
                types=["Object"],
            ),
        )
        _generate(tree, namespace, globals_module, test_settings)

        position = namespace.get_children("PositionObject")[0]
        assert position.kind is DeclarationKind.INTERFACE
        assert position.types == []
        assert position.get_children("x")[0].types == ["number"]

    def test_plain_typedef_becomes_type_alias(self, doc, namespace, globals_module, test_settings):
        tree = doc("", "", doc("typedef", "Highcharts.ColorType", types=["String", "Highcharts.GradientColorObject"]))
        _generate(tree, namespace, globals_module, test_settings)

        color = namespace.get_children("ColorType")[0]
        assert color.kind is DeclarationKind.TYPE
        assert color.types == ["string", "Highcharts.GradientColorObject"]

    def test_nested_typedef_is_hoisted(self, doc, namespace, globals_module, test_settings):
        tree = doc(
            "",
            "",
            doc("class", "Highcharts.Chart", doc("typedef", "Highcharts.Chart.Mode", types=["String"])),
        )
        _generate(tree, namespace, globals_module, test_settings)

        assert namespace.get_children_names() == ["Chart", "Mode"]
        assert not namespace.get_children("Chart")[0].has_children


class TestNamespaces:
    def test_plain_namespace_passes_children_through(self, doc, namespace, globals_module, test_settings):
        tree = doc("", "", doc("namespace", "Highcharts", doc("class", "Highcharts.Chart")))
        _generate(tree, namespace, globals_module, test_settings)

        assert namespace.get_children_names() == ["Chart"]

    def test_scope_marked_namespace_is_declared(self, doc, namespace, globals_module, test_settings):
        tree = doc(
            "",
            "",
            doc("namespace", "Highcharts.Series:", doc("member", "Highcharts.Series:types", types=["Object"])),
        )
        _generate(tree, namespace, globals_module, test_settings)

        scope = namespace.get_children("Series:")[0]
        assert scope.kind is DeclarationKind.NAMESPACE
        assert scope.get_children_names() == ["types"]

    def test_external_becomes_interface_in_external_namespace(self, doc, namespace, globals_module, test_settings):
        tree = doc("", "", doc("external", "external:SVGElement", description="An SVG element."))
        _generate(tree, namespace, globals_module, test_settings)

        external = namespace.get_children("external:")[0]
        assert external.kind is DeclarationKind.NAMESPACE
        svg = external.get_children("SVGElement")[0]
        assert svg.kind is DeclarationKind.INTERFACE
        assert svg.description == "An SVG element."


class TestSkipping:
    def test_unknown_kind_is_skipped(self, doc, namespace, globals_module, test_settings):
        tree = doc("", "", doc("mixin", "Highcharts.Mixin"), doc("member", "Highcharts.kept"))
        _generate(tree, namespace, globals_module, test_settings)

        assert namespace.get_children_names() == ["kept"]

    def test_unknown_kind_returns_none(self, doc, namespace, globals_module, test_settings):
        generator = NamespaceGenerator(globals_module, namespace, settings=test_settings)
        assert generator.generate(doc("mixin", "Highcharts.Mixin")) is None

    def test_other_product_is_skipped(self, doc, namespace, globals_module, test_settings):
        tree = doc(
            "",
            "",
            doc("member", "Highcharts.navigator", products=["highstock"]),
            doc("member", "Highcharts.title", products=["highcharts", "highstock"]),
            doc("member", "Highcharts.credits"),
        )
        _generate(tree, namespace, globals_module, test_settings, product="highcharts")

        assert namespace.get_children_names() == ["title", "credits"]
