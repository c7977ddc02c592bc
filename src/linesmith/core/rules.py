"""Rule declaration and execution engine for the highlighting pipeline.

Handlers declare the tags they care about with the ``@renders`` decorator.
The :class:`RenderEngine` gathers those declarations into a
:class:`RenderRegistry`, grouped per :class:`RenderPhase` and tag, and walks
the BeautifulSoup tree once per phase, calling every matching handler
depth-first. Handlers bound to the same tag run in registration order.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass
from enum import Enum, auto
from typing import TYPE_CHECKING, Any, cast

from bs4.element import Tag


if TYPE_CHECKING:  # pragma: no cover - typing only
    from .context import RenderContext


class RenderPhase(Enum):
    """Ordered passes executed over the parsed HTML tree.

    ``PRE``
    : collect out-of-band data (meta strings) and normalise nodes before any
      block is rewritten.

    ``BLOCK``
    : rewrite code blocks into highlighted, line-wrapped markup.
    """

    PRE = auto()
    BLOCK = auto()


RuleCallable = Callable[[Any, "RenderContext"], None]


@dataclass(frozen=True)
class RenderRule:
    """Concrete rule registered in the engine."""

    phase: RenderPhase
    tags: tuple[str, ...]
    name: str
    handler: RuleCallable
    auto_mark: bool = True
    nestable: bool = True


@dataclass(frozen=True)
class RuleDefinition:
    """Descriptor installed on handler callables by ``@renders``."""

    phase: RenderPhase
    tags: tuple[str, ...]
    name: str | None = None
    auto_mark: bool = True
    nestable: bool = True

    def bind(self, handler: RuleCallable) -> RenderRule:
        """Create a concrete rule bound to ``handler``."""
        name = self.name or getattr(handler, "__name__", handler.__class__.__name__)
        return RenderRule(
            phase=self.phase,
            tags=self.tags,
            name=name,
            handler=handler,
            auto_mark=self.auto_mark,
            nestable=self.nestable,
        )


class RenderRegistry:
    """Rules grouped by phase and tag."""

    def __init__(self) -> None:
        self._rules: dict[RenderPhase, dict[str, list[RenderRule]]] = {}

    def register(self, rule: RenderRule) -> None:
        """Register a rule for later execution."""
        phase_bucket = self._rules.setdefault(rule.phase, {})
        for tag in rule.tags:
            phase_bucket.setdefault(tag, []).append(rule)

    def iter_phase(self, phase: RenderPhase) -> Iterable[RenderRule]:
        """Iterate over the rules of ``phase``."""
        for tag_rules in self._rules.get(phase, {}).values():
            yield from tag_rules

    def rules_for_phase(self, phase: RenderPhase) -> dict[str, tuple[RenderRule, ...]]:
        """Return the tag to rules mapping for ``phase``."""
        return {tag: tuple(rules) for tag, rules in self._rules.get(phase, {}).items()}


def renders(
    tag: str,
    *tags: str,
    phase: RenderPhase = RenderPhase.BLOCK,
    name: str | None = None,
    auto_mark: bool = True,
    nestable: bool = True,
) -> Callable[[RuleCallable], RuleCallable]:
    """Decorator used to register element handlers."""
    definition = RuleDefinition(
        phase=phase,
        tags=(tag, *tags),
        name=name,
        auto_mark=auto_mark,
        nestable=nestable,
    )

    def decorator(handler: RuleCallable) -> RuleCallable:
        cast(Any, handler).__render_rule__ = definition
        return handler

    return decorator


class RenderEngine:
    """Run registered rules phase by phase over a DOM tree."""

    def __init__(self, registry: RenderRegistry | None = None) -> None:
        self.registry = registry or RenderRegistry()

    def collect_from(self, owner: Any) -> None:
        """Collect decorated callables from a module or object."""
        for attribute in dir(owner):
            handler = getattr(owner, attribute)
            definition = getattr(handler, "__render_rule__", None)
            if isinstance(definition, RuleDefinition):
                self.registry.register(definition.bind(handler))

    def register(self, handler: RuleCallable) -> None:
        """Register a standalone callable decorated with ``@renders``."""
        definition = getattr(handler, "__render_rule__", None)
        if not isinstance(definition, RuleDefinition):
            msg = "Handler must be decorated with @renders"
            raise TypeError(msg)
        self.registry.register(definition.bind(handler))

    def run(self, root: Tag, context: RenderContext) -> None:
        """Execute every phase against ``root``."""
        for phase in RenderPhase:
            context.enter_phase(phase)
            self._walk(root, self.registry.rules_for_phase(phase), context)

    def _walk(
        self,
        node: Tag,
        rules_by_tag: dict[str, tuple[RenderRule, ...]],
        context: RenderContext,
    ) -> None:
        self._apply(rules_by_tag.get(node.name, ()), node, context)
        if context.should_skip_children(node):
            return
        # Handlers may rewrite children, iterate over a snapshot.
        for child in list(node.children):
            if isinstance(child, Tag):
                self._walk(child, rules_by_tag, context)

    def _apply(
        self, rules: tuple[RenderRule, ...], node: Tag, context: RenderContext
    ) -> None:
        # Marks only take effect once every rule bound to the node has run.
        already_processed = context.is_processed(node)
        for rule in rules:
            if rule.auto_mark and already_processed:
                continue
            rule.handler(node, context)
            if rule.auto_mark:
                context.mark_processed(node)
            if not rule.nestable:
                context.suppress_children(node)


__all__ = [
    "RenderEngine",
    "RenderPhase",
    "RenderRegistry",
    "RenderRule",
    "RuleDefinition",
    "renders",
]
