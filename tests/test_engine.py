"""Engine-level properties: partitioning, idempotence and preservation."""

import logging
from dataclasses import replace

import pytest

from liveorder.quoted import (
    atom,
    call,
    defn,
    directive,
    literal,
    module_attr,
    use,
    var,
)
from liveorder.style import (
    LIVE_COMPONENT_POLICY,
    LIVE_VIEW_POLICY,
    Detection,
    StyleInvariantError,
    partition,
    reorder_statements,
)


def _live_view_module():
    return [
        directive("require", "Logger"),
        use("MyAppWeb", atom("live_view")),
        module_attr("impl", True),
        defn("handle_event", "save", var("params"), var("socket")),
        call("on_mount", atom("MyHook")),
        defn("format", var("x"), kind="defp"),
        module_attr("doc", "Render"),
        defn("render", var("assigns")),
        defn(
            "handle_event",
            var("e"),
            var("params"),
            var("socket"),
            guard=call("is_binary", var("e")),
        ),
        directive("alias", "MyApp.Users"),
        defn("mount", var("p"), var("s"), var("socket")),
        module_attr("moduledoc", "Page"),
        module_attr("dialyzer", atom("no_return")),
    ]


def _live_component_module():
    return [
        use("MyAppWeb", atom("live_component")),
        call("slot", atom("inner_block")),
        module_attr("doc", "Render"),
        defn("render", var("assigns")),
        call("attr", atom("title"), atom("string")),
        defn("update", var("a"), var("s")),
        module_attr("impl", True),
        defn("handle_event", "close", var("params"), var("socket")),
        defn("helper"),
        defn("mount", var("socket")),
        directive("import", "MyAppWeb.CoreComponents"),
    ]


def _controller_module():
    return [
        module_attr("moduledoc", False),
        use("MyAppWeb", atom("controller")),
        defn("mount", var("socket")),
        defn("render", var("assigns")),
    ]


SAMPLES = [_live_view_module, _live_component_module]


class TestPartition:
    def test_buckets_for_live_view(self):
        statements = _live_view_module()
        detection = Detection(
            policy=LIVE_VIEW_POLICY, declaration=statements[1], index=1
        )

        buckets = partition(statements, detection)

        assert buckets.declaration is statements[1]
        assert buckets.moduledoc == [statements[11]]
        assert buckets.directives == [statements[9], statements[0]]
        assert buckets.hooks == [statements[4]]
        assert [g.name for g in buckets.callbacks] == [
            "mount",
            "handle_event",
            "render",
        ]
        assert buckets.macros == []
        assert buckets.others == [statements[5], statements[12]]

    def test_missing_declaration_is_fatal(self):
        statements = _live_view_module()
        stranger = use("MyAppWeb", atom("live_view"))
        detection = Detection(policy=LIVE_VIEW_POLICY, declaration=stranger, index=1)

        with pytest.raises(StyleInvariantError):
            partition(statements, detection)

    def test_debug_logging(self, caplog):
        statements = _live_component_module()
        detection = Detection(
            policy=LIVE_COMPONENT_POLICY, declaration=statements[0], index=0
        )

        with caplog.at_level(logging.DEBUG, logger="liveorder"):
            partition(statements, detection)

        assert "Partitioned live_component module" in caplog.text


class TestProperties:
    @pytest.mark.parametrize("build", SAMPLES)
    def test_idempotent(self, build):
        once = reorder_statements(build())
        twice = reorder_statements(once)
        assert twice == once

    def test_component_moduledoc_settles_on_second_pass(self):
        alias = directive("alias", "MyApp.Users")
        declaration = use("MyAppWeb", atom("live_component"))
        render = defn("render", var("assigns"))
        mount = defn("mount", var("socket"))

        once = reorder_statements([alias, declaration, render, mount])
        twice = reorder_statements(once)
        thrice = reorder_statements(twice)

        assert once == [declaration, alias, mount, render]
        assert twice == [module_attr("moduledoc", literal(False)), *once]
        assert thrice == twice

    def test_idempotent_without_moduledoc_synthesis(self):
        policy = replace(LIVE_COMPONENT_POLICY, synthesize_moduledoc=False)
        statements = [
            directive("alias", "MyApp.Users"),
            use("MyAppWeb", atom("live_component")),
            defn("render", var("assigns")),
            defn("mount", var("socket")),
        ]

        once = reorder_statements(statements, [policy])

        assert reorder_statements(once, [policy]) == once

    def test_identity_without_archetype(self):
        statements = _controller_module()
        result = reorder_statements(statements)
        assert result is statements
        assert result == _controller_module()

    def test_live_view_preserves_every_statement(self):
        statements = _live_view_module()
        result = reorder_statements(statements)

        assert len(result) == len(statements)
        assert {id(s) for s in result} == {id(s) for s in statements}

    def test_live_component_adds_only_the_moduledoc(self):
        statements = _live_component_module()
        result = reorder_statements(statements)

        assert len(result) == len(statements) + 1
        assert result[0] == module_attr("moduledoc", literal(False))
        assert {id(s) for s in result[1:]} == {id(s) for s in statements}

    @pytest.mark.parametrize("build", SAMPLES)
    def test_markers_stay_with_their_callbacks(self, build):
        statements = build()
        result = reorder_statements(statements)

        for index, statement in enumerate(statements):
            if index == 0 or not _is_def(statement):
                continue
            before = statements[index - 1]
            if _is_marker(before):
                assert result[result.index(statement) - 1] is before

    def test_group_cohesion(self):
        statements = _live_view_module()
        result = reorder_statements(statements)

        events = [s for s in result if _def_name(s) == "handle_event"]
        positions = [_position(result, s) for s in events]
        assert positions == list(range(positions[0], positions[0] + len(events)))
        assert events == [statements[3], statements[8]]

    def test_live_view_full_order(self):
        s = _live_view_module()
        assert reorder_statements(s) == [
            s[11],  # @moduledoc
            s[1],  # use
            s[9],  # alias
            s[0],  # require
            s[4],  # on_mount
            s[10],  # mount
            s[2],  # @impl
            s[3],  # handle_event "save"
            s[8],  # handle_event guarded
            s[6],  # @doc
            s[7],  # render
            s[5],  # defp format
            s[12],  # @dialyzer
        ]

    def test_live_component_full_order(self):
        s = _live_component_module()
        assert reorder_statements(s) == [
            module_attr("moduledoc", literal(False)),
            s[0],  # use
            s[10],  # import
            s[9],  # mount
            s[5],  # update
            s[6],  # @impl
            s[7],  # handle_event
            s[1],  # slot
            s[4],  # attr
            s[2],  # @doc
            s[3],  # render
            s[8],  # helper
        ]


def _is_def(statement) -> bool:
    return getattr(statement, "head", None) == "def"


def _is_marker(statement) -> bool:
    return getattr(statement, "head", None) == "@"


def _def_name(statement):
    if not _is_def(statement):
        return None
    head = statement.args[0]
    if head.head == "when":
        head = head.args[0]
    return head.head


def _position(result, statement) -> int:
    return next(i for i, s in enumerate(result) if s is statement)
