"""Tests for the StyleZxPlugin host hooks."""

import threading

import pytest

from stylezx.config import StyleZxConfig
from stylezx.errors import TransformError
from stylezx.events import BundleFinalized, FileDropped, FileUsageChanged, StyleRegistered
from stylezx.plugin import Edit, StyleZxPlugin
from stylezx.registry import class_name, identify
from stylezx.theme import ThemeStore


def _cls(style):
    return class_name(identify(style))


def _collect(bus, event_type):
    events = []
    bus.subscribe(event_type, events.append)
    return events


# ---------------------------------------------------------------------------
# JSX attribute rewriting
# ---------------------------------------------------------------------------


class TestAttributeRewrite:
    def test_string_class_name_is_extended(self, plugin):
        result = plugin.transform_file("App.tsx", '<div className="a" zx={{ p: 20 }}>hi</div>')
        name = _cls({"p": 20})
        assert result.code == f'<div className="a {name}" >hi</div>'
        assert result.identities == frozenset({identify({"p": 20})})

    def test_missing_class_name_is_added(self, plugin):
        result = plugin.transform_file("App.tsx", "<div zx={{ p: 20 }} />")
        name = _cls({"p": 20})
        assert result.code == f'<div className="{name}" />'
        assert result.edits == (Edit(5, 19, f'className="{name}"'),)

    def test_expression_class_name_is_joined(self, plugin):
        source = '<div className={active ? "on" : ""} zx={{ p: 20 }}>x</div>'
        result = plugin.transform_file("App.tsx", source)
        name = _cls({"p": 20})
        assert result.code == (
            f'<div className={{[active ? "on" : "", "{name}"].filter(Boolean).join(" ")}} >x</div>'
        )

    def test_class_name_after_zx(self, plugin):
        result = plugin.transform_file("App.tsx", '<div zx={{ p: 20 }} className="a">x</div>')
        assert result.code == f'<div  className="a {_cls({"p": 20})}">x</div>'

    def test_empty_class_name(self, plugin):
        result = plugin.transform_file("App.tsx", '<div className="" zx={{ p: 20 }} />')
        assert result.code == f'<div className="{_cls({"p": 20})}"  />'

    def test_single_quoted_class_name(self, plugin):
        result = plugin.transform_file("App.tsx", "<div className='a' zx={{ p: 20 }} />")
        assert result.code == f"<div className='a {_cls({'p': 20})}'  />"

    def test_multiline_element(self, plugin):
        source = "<button\n  zx={{\n    px: 20,\n    '&:hover': { opacity: 0.8 },\n  }}\n>\n  Go\n</button>"
        result = plugin.transform_file("Button.jsx", source)
        style = {"px": 20, "&:hover": {"opacity": 0.8}}
        assert result.code == f'<button\n  className="{_cls(style)}"\n>\n  Go\n</button>'
        rule = plugin.registry.lookup(identify(style))
        assert ":hover {\n  opacity: 0.8;\n}" in rule.css

    def test_surrounding_text_is_untouched(self, plugin):
        source = "import React from 'react';\n\nexport const A = () => <p zx={{ m: 0 }}>a</p>;\n"
        result = plugin.transform_file("A.tsx", source)
        assert result.code.startswith("import React from 'react';\n\nexport const A = () => <p ")
        assert result.code.endswith(">a</p>;\n")

    def test_key_order_gives_same_class(self, plugin):
        a = plugin.transform_file("A.tsx", "<a zx={{ p: 1, m: 2 }} />")
        b = plugin.transform_file("B.tsx", "<a zx={{ m: 2, p: 1 }} />")
        assert a.identities == b.identities

    def test_theme_reference_compiles_to_variable(self, plugin):
        plugin.transform_file("A.tsx", "<a zx={{ bg: '$theme.colors.primary' }} />")
        rule = plugin.registry.lookup(identify({"bg": "$theme.colors.primary"}))
        assert "background-color: var(--theme-colors-primary);" in rule.css

    def test_commented_out_markup_is_left_alone(self, plugin):
        source = "const a = 1;\n// <div zx={{ color: theme.x }} />\nconst b = <div zx={{ p: 1 }} />;"
        result = plugin.transform_file("a.tsx", source)
        assert result.code.startswith("const a = 1;\n// <div zx={{ color: theme.x }} />\n")
        assert result.identities == frozenset({identify({"p": 1})})

    def test_markup_in_string_literal_is_left_alone(self, plugin):
        source = 'const doc = "<div zx={{ p: 1 }} />";'
        assert plugin.transform_file("a.tsx", source) is None
        assert len(plugin.registry) == 0


class TestImportInjection:
    def test_dev_import_is_prepended(self, dev_plugin):
        result = dev_plugin.transform_file("App.tsx", "<div zx={{ p: 20 }} />")
        assert result.code.startswith("import 'virtual:style-zx.css';\n<div ")

    def test_no_import_without_declarations(self, dev_plugin):
        assert dev_plugin.transform_file("App.tsx", "<div className='a' />") is None


# ---------------------------------------------------------------------------
# createStyles calls
# ---------------------------------------------------------------------------


class TestCreateStyles:
    def test_call_becomes_class_map(self, plugin):
        source = "const styles = createStyles({ title: { m: 0 }, body: { p: 4 } });"
        result = plugin.transform_file("styles.ts", source)
        title, body = _cls({"m": 0}), _cls({"p": 4})
        assert result.code == f'const styles = {{"title": "{title}", "body": "{body}"}};'
        assert len(result.identities) == 2

    def test_trailing_comma(self, plugin):
        result = plugin.transform_file("s.ts", "createStyles({ a: { m: 0 } },)")
        assert result.code == f'{{"a": "{_cls({"m": 0})}"}}'

    def test_entries_must_be_objects(self, plugin):
        with pytest.raises(TransformError) as excinfo:
            plugin.transform_file("s.ts", "createStyles({ title: 'red' })")
        assert excinfo.value.kind == "InvalidStyleValue"

    def test_empty_call_is_ignored(self, plugin):
        assert plugin.transform_file("s.ts", "createStyles()") is None

    def test_definition_is_ignored(self, plugin):
        source = "export function createStyles(styles) { return styles; }"
        assert plugin.transform_file("lib.ts", source) is None

    def test_mixed_forms(self, plugin):
        source = "const s = createStyles({ a: { m: 0 } });\nconst el = <div zx={{ p: 1 }} />;"
        result = plugin.transform_file("mixed.tsx", source)
        assert result.identities == frozenset({identify({"m": 0}), identify({"p": 1})})


# ---------------------------------------------------------------------------
# Rejection and atomicity
# ---------------------------------------------------------------------------


class TestRejection:
    def test_call_expression(self, plugin):
        source = "const x = 1;\n<div zx={{ color: getColor() }} />"
        with pytest.raises(TransformError) as excinfo:
            plugin.transform_file("src/App.tsx", source)
        err = excinfo.value
        assert err.kind == "CallExpression"
        assert (err.line, err.column) == (2, 19)
        assert str(err).startswith("Error parsing style declaration in src/App.tsx:2:19: ")
        assert "CallExpression" in str(err)

    def test_spread(self, plugin):
        with pytest.raises(TransformError) as excinfo:
            plugin.transform_file("A.tsx", "<div zx={{ ...base }} />")
        assert excinfo.value.kind == "SpreadElement"

    def test_whole_expression_must_be_object(self, plugin):
        with pytest.raises(TransformError) as excinfo:
            plugin.transform_file("A.tsx", "<div zx={styles.card} />")
        assert excinfo.value.kind == "MemberExpression"

    def test_string_attribute(self, plugin):
        with pytest.raises(TransformError) as excinfo:
            plugin.transform_file("A.tsx", '<div zx="p-4" />')
        assert excinfo.value.kind == "JSX string attribute"

    def test_syntax_error(self, plugin):
        with pytest.raises(TransformError) as excinfo:
            plugin.transform_file("A.tsx", "<div zx={{ p: }} />")
        assert excinfo.value.kind == "ParseError"

    def test_failed_file_commits_nothing(self, plugin):
        source = "<div zx={{ p: 1 }} />\n<div zx={{ p: size }} />"
        with pytest.raises(TransformError):
            plugin.transform_file("A.tsx", source)
        assert len(plugin.registry) == 0
        assert "A.tsx" not in plugin.tracker

    def test_failed_retransform_keeps_previous_usage(self, plugin):
        plugin.transform_file("A.tsx", "<div zx={{ p: 1 }} />")
        with pytest.raises(TransformError):
            plugin.transform_file("A.tsx", "<div zx={{ p: 2, m: f() }} />")
        assert plugin.tracker.usage_for("A.tsx") == frozenset({identify({"p": 1})})
        assert len(plugin.registry) == 1


# ---------------------------------------------------------------------------
# Registry and usage bookkeeping
# ---------------------------------------------------------------------------


class TestBookkeeping:
    def test_unhandled_extension(self, plugin):
        assert plugin.transform_file("site.css", "<div zx={{ p: 1 }} />") is None

    def test_no_declarations(self, plugin):
        assert plugin.transform_file("A.tsx", "export const a = 1;") is None
        assert "A.tsx" not in plugin.tracker

    def test_dedup_across_files(self, plugin, bus):
        registered = _collect(bus, StyleRegistered)
        plugin.transform_file("A.tsx", "<a zx={{ p: 20 }} />")
        plugin.transform_file("B.tsx", "<b zx={{ p: 20 }} />")
        assert len(plugin.registry) == 1
        assert [e.path for e in registered] == ["A.tsx"]

    def test_usage_is_replaced(self, plugin, bus):
        changes = _collect(bus, FileUsageChanged)
        plugin.transform_file("A.tsx", "<a zx={{ p: 1 }} /><b zx={{ p: 2 }} />")
        plugin.transform_file("A.tsx", "<b zx={{ p: 2 }} />")
        assert plugin.tracker.usage_for("A.tsx") == frozenset({identify({"p": 2})})
        assert changes[-1].removed == frozenset({identify({"p": 1})})
        assert changes[-1].added == frozenset()
        # Registry is append-only.
        assert identify({"p": 1}) in plugin.registry

    def test_losing_all_declarations_empties_usage(self, plugin):
        plugin.transform_file("A.tsx", "<a zx={{ p: 1 }} />")
        assert plugin.transform_file("A.tsx", "<a />") is None
        assert "A.tsx" in plugin.tracker
        assert plugin.tracker.all_live_identities() == set()

    def test_identical_retransform_emits_no_change(self, plugin, bus):
        changes = _collect(bus, FileUsageChanged)
        plugin.transform_file("A.tsx", "<a zx={{ p: 1 }} />")
        plugin.transform_file("A.tsx", "<a zx={{ p: 1 }} />")
        assert len(changes) == 1

    def test_concurrent_transforms(self, plugin):
        errors = []

        def worker(index):
            try:
                plugin.transform_file(f"F{index}.tsx", "<a zx={{ p: 3 }} />")
            except Exception as exc:  # pragma: no cover - reported below
                errors.append(exc)

        threads = [threading.Thread(target=worker, args=(i,)) for i in range(8)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()
        assert errors == []
        assert len(plugin.registry) == 1
        assert len(plugin.tracker.files()) == 8


class TestDiagnostics:
    def test_malformed_theme_reference_is_located(self, plugin):
        result = plugin.transform_file("A.tsx", "<div zx={{ color: '$theme.colors..primary' }} />")
        assert len(result.diagnostics) == 1
        diagnostic = result.diagnostics[0]
        assert diagnostic.rule == "malformed_theme_reference"
        assert (diagnostic.path, diagnostic.line, diagnostic.column) == ("A.tsx", 1, 6)

    def test_clean_file_has_no_diagnostics(self, plugin):
        result = plugin.transform_file("A.tsx", "<div zx={{ color: '$theme.colors.primary' }} />")
        assert result.diagnostics == ()


# ---------------------------------------------------------------------------
# Live updates and assets
# ---------------------------------------------------------------------------


class TestLiveUpdates:
    def test_on_file_changed(self, plugin):
        assert plugin.on_file_changed("A.tsx", "<a zx={{ p: 1 }} />") == ["virtual:style-zx.css"]
        assert plugin.on_file_changed("A.tsx", "<a zx={{ p: 1 }} />") == []
        assert plugin.on_file_changed("A.tsx", "<a zx={{ p: 2 }} />") == ["virtual:style-zx.css"]

    def test_on_file_changed_unhandled(self, plugin):
        assert plugin.on_file_changed("a.css", ".x {}") == []

    def test_remove_file(self, plugin, bus):
        dropped = _collect(bus, FileDropped)
        plugin.transform_file("A.tsx", "<a zx={{ p: 1 }} />")
        assert plugin.remove_file("A.tsx") == ["virtual:style-zx.css"]
        assert plugin.remove_file("A.tsx") == []
        assert dropped == [FileDropped("A.tsx")]
        assert plugin.tracker.all_live_identities() == set()

    def test_resolve_id(self, plugin):
        assert plugin.resolve_id("virtual:style-zx.css") == "\0virtual:style-zx.css"
        assert plugin.resolve_id("./other.css") is None

    def test_style_asset_lists_live_rules(self, plugin):
        plugin.transform_file("A.tsx", "<a zx={{ p: 1 }} />")
        plugin.transform_file("B.tsx", "<a zx={{ m: 0 }} />")
        css = plugin.resolve_style_asset("\0virtual:style-zx.css")
        first, second = sorted([identify({"p": 1}), identify({"m": 0})])
        assert css.index(f"zx-{first}") < css.index(f"zx-{second}")
        assert css.endswith("}\n")

    def test_style_asset_skips_unused_rules(self, plugin):
        plugin.transform_file("A.tsx", "<a zx={{ p: 1 }} />")
        plugin.transform_file("A.tsx", "<a zx={{ p: 2 }} />")
        css = plugin.resolve_style_asset("virtual:style-zx.css")
        assert _cls({"p": 1}) not in css
        assert _cls({"p": 2}) in css

    def test_unknown_asset(self, plugin):
        assert plugin.resolve_style_asset("other.css") is None

    def test_theme_variables_lead_the_asset(self):
        theme = ThemeStore()
        theme.init({"colors": {"primary": "red"}})
        plugin = StyleZxPlugin(StyleZxConfig(inject_import=False), theme=theme)
        plugin.transform_file("A.tsx", "<a zx={{ bg: '$theme.colors.primary' }} />")
        css = plugin.resolve_style_asset("virtual:style-zx.css")
        assert css.startswith(":root {\n  --theme-colors-primary: red;\n}\n.zx-")


class TestFinalizeBundle:
    def test_unreferenced_rules_are_pruned(self, plugin, bus):
        finalized = _collect(bus, BundleFinalized)
        plugin.transform_file("A.tsx", "<a zx={{ p: 1 }} />")
        plugin.transform_file("B.tsx", "<a zx={{ p: 2 }} />")
        kept = _cls({"p": 1})
        css = plugin.finalize_bundle([f'e.className="{kept}"'])
        assert css == f".{kept} {{\n  padding: 1px;\n}}\n"
        assert finalized == [BundleFinalized(retained=1, dropped=1, size=len(css))]

    def test_rules_only_in_registry_are_candidates(self, plugin):
        plugin.transform_file("A.tsx", "<a zx={{ p: 1 }} />")
        plugin.transform_file("A.tsx", "<a zx={{ p: 2 }} />")
        old = _cls({"p": 1})
        assert old in plugin.finalize_bundle([old])

    def test_empty_bundle(self, plugin):
        assert plugin.finalize_bundle(["nothing here"]) == ""
