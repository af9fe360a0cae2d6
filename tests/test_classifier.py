"""Tests for statement classification and archetype detection."""

from liveorder.quoted import (
    aliases,
    atom,
    call,
    defn,
    directive,
    keyword_get,
    literal,
    module_attr,
    use,
    var,
)
from liveorder.style import (
    LIVE_COMPONENT_POLICY,
    LIVE_VIEW_POLICY,
    KindTag,
    classify,
    declared_archetype,
    detect,
)


class TestClassify:
    def test_markers(self):
        kind = classify(module_attr("impl", True), LIVE_VIEW_POLICY)
        assert kind.tag is KindTag.METADATA_MARKER
        assert kind.variant == "impl"
        assert not kind.is_moduledoc

    def test_moduledoc_marker(self):
        kind = classify(module_attr("moduledoc", "Docs"), LIVE_VIEW_POLICY)
        assert kind.is_moduledoc

    def test_directives(self):
        for form in ("import", "alias", "require"):
            kind = classify(directive(form, "MyApp.Thing"), LIVE_VIEW_POLICY)
            assert kind.tag is KindTag.DIRECTIVE
            assert kind.variant == form

    def test_callback_in_table(self):
        kind = classify(defn("mount", var("socket")), LIVE_COMPONENT_POLICY)
        assert kind.tag is KindTag.CALLBACK
        assert kind.name == "mount"
        assert kind.guarded is False

    def test_guarded_callback(self):
        clause = defn("handle_event", var("e"), guard=call("is_binary", var("e")))
        kind = classify(clause, LIVE_VIEW_POLICY)
        assert kind.is_callback
        assert kind.name == "handle_event"
        assert kind.guarded is True
        assert kind.describe() == "callback handle_event (guarded)"

    def test_callback_membership_depends_on_table(self):
        handle_info = defn("handle_info", atom("tick"), var("socket"))
        assert classify(handle_info, LIVE_VIEW_POLICY).is_callback
        assert classify(handle_info, LIVE_COMPONENT_POLICY).tag is KindTag.OPAQUE

    def test_private_functions_are_opaque(self):
        helper = defn("mount", var("socket"), kind="defp")
        assert classify(helper, LIVE_VIEW_POLICY).tag is KindTag.OPAQUE

    def test_zero_arity_callback(self):
        render = call("def", var("render"), [(literal(atom("do")), "<div/>")])
        assert classify(render, LIVE_VIEW_POLICY).name == "render"

    def test_hooks_only_for_live_view(self):
        hook = call("on_mount", aliases("MyAppWeb.Auth"))
        assert classify(hook, LIVE_VIEW_POLICY).tag is KindTag.HOOK_DECLARATION
        assert classify(hook, LIVE_COMPONENT_POLICY).tag is KindTag.OPAQUE

    def test_macros_only_for_live_component(self):
        attr = call("attr", atom("title"), atom("string"))
        slot = call("slot", atom("inner_block"))
        assert classify(attr, LIVE_COMPONENT_POLICY).variant == "attr"
        assert classify(slot, LIVE_COMPONENT_POLICY).variant == "slot"
        assert classify(attr, LIVE_VIEW_POLICY).tag is KindTag.OPAQUE

    def test_declaration_matched_by_identity(self):
        declaration = use("MyAppWeb", atom("live_view"))
        twin = use("MyAppWeb", atom("live_view"))
        kind = classify(declaration, LIVE_VIEW_POLICY, declaration)
        assert kind.tag is KindTag.ARCHETYPE_DECLARATION
        assert classify(twin, LIVE_VIEW_POLICY, declaration).tag is KindTag.OPAQUE

    def test_literals_are_opaque(self):
        assert classify("text", LIVE_VIEW_POLICY).tag is KindTag.OPAQUE
        assert classify(atom("ok"), LIVE_VIEW_POLICY).tag is KindTag.OPAQUE


class TestDeclaredArchetype:
    def test_bare_atom(self):
        assert declared_archetype(use("MyAppWeb", atom("live_view"))) == "live_view"

    def test_block_literal(self):
        statement = use("MyAppWeb", literal(atom("live_component")))
        assert declared_archetype(statement) == "live_component"

    def test_keyword_list(self):
        options = [(atom("layout"), False), (literal(atom("do")), atom("live_view"))]
        statement = use("MyAppWeb", options)
        assert declared_archetype(statement) == "live_view"

    def test_keyword_list_without_do(self):
        statement = use("MyAppWeb", [(atom("layout"), False)])
        assert declared_archetype(statement) is None

    def test_keyword_list_with_wrapped_tag(self):
        options = [(literal(atom("do")), literal(atom("live_component")))]
        statement = use("MyAppWeb", options)
        assert declared_archetype(statement) == "live_component"

    def test_keyword_lookup(self):
        options = [(atom("layout"), False), (literal(atom("do")), atom("live_view"))]
        assert keyword_get(options, "do") == atom("live_view")
        assert keyword_get(options, "layout") is False
        assert keyword_get(options, "container") is None
        assert keyword_get(atom("live_view"), "do") is None

    def test_single_argument_use(self):
        assert declared_archetype(call("use", aliases("GenServer"))) is None

    def test_not_a_use(self):
        assert declared_archetype(directive("import", "Phoenix.HTML")) is None


class TestDetect:
    def test_detects_first_known_declaration(self):
        controller = use("MyAppWeb", atom("controller"))
        live_view = use("MyAppWeb", atom("live_view"))
        statements = [controller, live_view]

        detection = detect(statements, [LIVE_VIEW_POLICY, LIVE_COMPONENT_POLICY])

        assert detection is not None
        assert detection.policy is LIVE_VIEW_POLICY
        assert detection.declaration is live_view
        assert detection.index == 1

    def test_unknown_tag(self):
        statements = [use("MyAppWeb", atom("controller"))]
        assert detect(statements, [LIVE_VIEW_POLICY, LIVE_COMPONENT_POLICY]) is None

    def test_does_not_modify_input(self):
        statements = [defn("render", var("a")), use("MyAppWeb", atom("live_view"))]
        snapshot = list(statements)

        detect(statements, [LIVE_VIEW_POLICY])

        assert all(a is b for a, b in zip(statements, snapshot))
        assert len(statements) == len(snapshot)
