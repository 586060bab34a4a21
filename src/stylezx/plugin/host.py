"""Host build hooks: per-file transform, live updates, style asset, bundle finalize."""

from __future__ import annotations

import json
import logging
import re
from dataclasses import dataclass, field
from typing import Iterable

from stylezx.bundle.pruner import partition, render_rules
from stylezx.compiler.css import compile_style
from stylezx.compiler.evaluator import evaluate_object
from stylezx.config import StyleZxConfig
from stylezx.errors import InvalidStyleValue, StyleZxError, TransformError, UnsupportedExpression
from stylezx.events import BundleFinalized, EventBus, FileDropped, FileUsageChanged, StyleRegistered
from stylezx.model.diagnostic import Diagnostic
from stylezx.model.style import CompiledRule, StyleObject
from stylezx.parser import JsxElement, StyleCall, parse_expression, position, scan_elements, scan_style_calls
from stylezx.plugin.edits import Edit, EditConflict, SourceEditor
from stylezx.registry import StyleRegistry, UsageTracker, class_name, identify
from stylezx.theme import ThemeStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TransformResult:
    """Rewritten source for one file.

    ``edits`` are expressed in offsets of the original text and serve as the
    mapping between the original and rewritten code.
    """

    code: str
    edits: tuple[Edit, ...]
    identities: frozenset[str]
    diagnostics: tuple[Diagnostic, ...] = ()


@dataclass
class _FilePlan:
    """Everything computed for a file before anything is committed."""

    path: str
    editor: SourceEditor
    rules: dict[str, CompiledRule] = field(default_factory=dict)
    identities: set[str] = field(default_factory=set)
    diagnostics: list[Diagnostic] = field(default_factory=list)
    declarations: int = 0


class StyleZxPlugin:
    """Entry points a host build pipeline calls into.

    The registry, usage tracker and theme store are the only shared state and
    may be passed in so that several hosts (or tests) can share or isolate
    them. A file is either transformed completely or not at all: every
    declaration is evaluated and compiled before the registry or tracker is
    touched.
    """

    def __init__(
        self,
        config: StyleZxConfig | None = None,
        *,
        registry: StyleRegistry | None = None,
        tracker: UsageTracker | None = None,
        theme: ThemeStore | None = None,
        bus: EventBus | None = None,
    ) -> None:
        self.config = config or StyleZxConfig()
        self.registry = registry if registry is not None else StyleRegistry()
        self.tracker = tracker if tracker is not None else UsageTracker()
        self.theme = theme
        self.bus = bus or EventBus()

    # --- asset ids ------------------------------------------------------------

    @property
    def asset_id(self) -> str:
        return self.config.virtual_module_id

    def resolve_id(self, asset_id: str) -> str | None:
        """Map the public virtual asset id to its internal form."""
        if asset_id == self.asset_id:
            return "\0" + self.asset_id
        return None

    def _is_style_asset(self, asset_id: str) -> bool:
        return asset_id in (self.asset_id, "\0" + self.asset_id)

    # --- planning -------------------------------------------------------------

    def _compile(self, style: StyleObject, plan: _FilePlan) -> str:
        identity = identify(style, self.config.hash_length)
        name = class_name(identity, self.config.class_prefix)
        if identity not in plan.rules and identity not in self.registry:
            plan.rules[identity] = compile_style(
                style,
                name,
                identity=identity,
                theme_prefix=self.config.theme_prefix,
                diagnostics=plan.diagnostics,
            )
        plan.identities.add(identity)
        return name

    def _plan_element(self, source: str, element: JsxElement, plan: _FilePlan) -> None:
        attr = element.attribute(self.config.attribute)
        if attr is None:
            return
        line, column = position(source, attr.start)
        if attr.kind != "expression":
            raise UnsupportedExpression(f"JSX {attr.kind} attribute", line, column)
        value_line, value_column = position(source, attr.value_start)
        node = parse_expression(attr.value_text(source), attr.value_start, value_line, value_column)
        style = evaluate_object(node)
        name = self._plan_style(style, plan, line, column)
        plan.declarations += 1

        class_attr = element.attribute(self.config.class_attribute)
        editor = plan.editor
        if class_attr is None:
            editor.overwrite(attr.start, attr.end, f'{self.config.class_attribute}="{name}"')
            return
        editor.remove(attr.start, attr.end)
        if class_attr.kind == "string":
            quote = source[class_attr.value_start]
            existing = source[class_attr.value_start + 1 : class_attr.value_end - 1]
            joined = f"{existing} {name}" if existing.strip() else name
            editor.overwrite(class_attr.value_start, class_attr.value_end, f"{quote}{joined}{quote}")
        elif class_attr.kind == "expression":
            original = class_attr.value_text(source).strip()
            editor.overwrite(
                class_attr.value_start,
                class_attr.value_end,
                f'[{original}, "{name}"].filter(Boolean).join(" ")',
            )
        else:
            editor.overwrite(class_attr.start, class_attr.end, f'{self.config.class_attribute}="{name}"')

    def _plan_call(self, source: str, call: StyleCall, plan: _FilePlan) -> None:
        text = source[call.arg_start : call.arg_end]
        if not text.strip():
            return
        line, column = position(source, call.arg_start)
        node = parse_expression(text.rstrip().rstrip(","), call.arg_start, line, column)
        entries = evaluate_object(node)
        names: list[str] = []
        for key, style in entries.items():
            if not isinstance(style, dict):
                raise InvalidStyleValue(key, f"{self.config.styles_callee} entries must be style objects")
            entry_name = self._plan_style(style, plan, line, column)
            names.append(f"{json.dumps(key)}: {json.dumps(entry_name)}")
            plan.declarations += 1
        plan.editor.overwrite(call.start, call.end, "{" + ", ".join(names) + "}")

    def _plan_style(self, style: StyleObject, plan: _FilePlan, line: int, column: int) -> str:
        seen = len(plan.diagnostics)
        try:
            name = self._compile(style, plan)
        except InvalidStyleValue as exc:
            # Compiler errors carry no position; anchor them at the declaration.
            exc.line, exc.column = line, column
            raise
        plan.diagnostics[seen:] = [
            d.located(plan.path, line, column) for d in plan.diagnostics[seen:]
        ]
        return name

    def _plan(self, path: str, source: str) -> _FilePlan:
        plan = _FilePlan(path=path, editor=SourceEditor(source))
        has_attribute = re.search(rf"\b{re.escape(self.config.attribute)}\s*=", source) is not None
        has_call = self.config.styles_callee in source
        try:
            if has_attribute:
                for element in scan_elements(source):
                    self._plan_element(source, element, plan)
            if has_call:
                for call in scan_style_calls(source, self.config.styles_callee):
                    self._plan_call(source, call, plan)
        except StyleZxError as exc:
            kind = getattr(exc, "kind", type(exc).__name__)
            raise TransformError(path, kind, str(exc), exc.line, exc.column) from exc
        except EditConflict as exc:
            raise TransformError(path, "OverlappingEdit", str(exc)) from exc
        return plan

    # --- commit ---------------------------------------------------------------

    def _commit_usage(self, path: str, identities: Iterable[str]) -> None:
        previous = self.tracker.usage_for(path)
        current = self.tracker.recompute(path, identities)
        if current != previous:
            self.bus.emit(FileUsageChanged(path, current - previous, previous - current))

    def transform_file(self, path: str, source: str) -> TransformResult | None:
        """Rewrite the style declarations in one source file.

        Returns None when the file is not handled or contains no declarations;
        a file that previously had declarations is then recorded with an empty
        usage set. Raises :class:`TransformError` on any unsupported
        construct, in which case nothing is registered or recorded.
        """
        if not self.config.handles(path):
            return None

        plan = self._plan(path, source)

        if plan.declarations == 0:
            if path in self.tracker:
                self._commit_usage(path, ())
            return None

        for identity in sorted(plan.rules):
            rule = plan.rules[identity]
            if self.registry.register(rule):
                self.bus.emit(StyleRegistered(identity, rule.class_name, path))
        self._commit_usage(path, plan.identities)

        for diagnostic in plan.diagnostics:
            logger.warning("%s", diagnostic)
        if self.config.inject_import:
            plan.editor.prepend(f"import '{self.asset_id}';\n")
        logger.debug(
            "Transformed %s: %d declaration(s), %d class(es)",
            path,
            plan.declarations,
            len(plan.identities),
        )
        return TransformResult(
            code=plan.editor.render(),
            edits=plan.editor.edits,
            identities=frozenset(plan.identities),
            diagnostics=tuple(plan.diagnostics),
        )

    def on_file_changed(self, path: str, source: str) -> list[str]:
        """Re-run the pipeline for a changed file.

        Returns the style asset ids a live session must reload: the virtual
        stylesheet when the file's usage set changed, otherwise nothing.
        """
        if not self.config.handles(path):
            return []
        previous = self.tracker.usage_for(path)
        self.transform_file(path, source)
        if self.tracker.usage_for(path) != previous:
            return [self.asset_id]
        return []

    def remove_file(self, path: str) -> list[str]:
        """Forget a deleted file; returns the asset ids to reload."""
        if path not in self.tracker:
            return []
        had_usage = bool(self.tracker.usage_for(path))
        self.tracker.remove_file(path)
        self.bus.emit(FileDropped(path))
        return [self.asset_id] if had_usage else []

    # --- assets ---------------------------------------------------------------

    def _theme_css(self) -> str:
        if self.theme is None:
            return ""
        css = self.theme.root_css()
        return css + "\n" if css else ""

    def resolve_style_asset(self, asset_id: str) -> str | None:
        """Return the live CSS for every currently referenced class.

        Unknown asset ids resolve to None so the host can try other resolvers.
        """
        if not self._is_style_asset(asset_id):
            return None
        live = self.registry.select(self.tracker.all_live_identities())
        return self._theme_css() + render_rules(live)

    def finalize_bundle(self, artifact_texts: Iterable[str]) -> str:
        """Return the single CSS asset for a final build.

        Every registered rule is a candidate; only those whose class name
        appears in an artifact are kept.
        """
        candidates = self.registry.snapshot()
        retained, dropped = partition(candidates, artifact_texts)
        css = self._theme_css() + render_rules({i: candidates[i] for i in retained})
        logger.info("Bundle styles: %d rule(s) retained, %d dropped", len(retained), len(dropped))
        self.bus.emit(BundleFinalized(len(retained), len(dropped), len(css)))
        return css
