"""Per-mode trie resolution of key tokens into bindings."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Literal, Mapping, Optional, Sequence

from cellpad.runtime.telemetry import span

from .models import ActionRef, Binding
from .registry import KeymapRegistry


@dataclass(slots=True)
class TrieNode:
    bindings: list[str] = field(default_factory=list)
    children: Dict[str, "TrieNode"] = field(default_factory=dict)

    def walk(self, tokens: Sequence[str]) -> Optional["TrieNode"]:
        node: Optional[TrieNode] = self
        for token in tokens:
            node = node.children.get(token) if node is not None else None
        return node


@dataclass(frozen=True, slots=True)
class ResolutionMatch:
    binding: Binding
    action: ActionRef


@dataclass(frozen=True, slots=True)
class ResolutionResult:
    status: Literal["match", "pending", "miss"]
    match: Optional[ResolutionMatch] = None
    consumed: int = 0
    next_expected: tuple[str, ...] = ()
    timeout_ms: Optional[int] = None


class KeymapResolver:
    """Resolves token sequences against tries rebuilt on registry revisions."""

    def __init__(
        self, registry: KeymapRegistry, *, logger_name: str | None = None
    ) -> None:
        self._registry = registry
        self._logger_name = logger_name
        self._tries: Dict[str, tuple[int, TrieNode]] = {}

    def resolve(
        self,
        mode: str,
        tokens: Sequence[str],
        *,
        context: Optional[Mapping[str, bool]] = None,
    ) -> ResolutionResult:
        tokens = tuple(tokens)
        with span(
            "keymaps::resolve",
            logger_name=self._logger_name,
            component="keymaps",
            metadata={"mode": mode, "tokens": " ".join(tokens)},
        ) as handle:
            node = self._trie(mode).walk(tokens)
            if node is None:
                handle.add_metadata("status", "miss")
                return ResolutionResult(status="miss")

            match = self._best_match(node, context or {})
            if match is not None:
                handle.add_metadata("binding_id", match.binding.id)
                return ResolutionResult(
                    status="match", match=match, consumed=len(tokens)
                )

            if node.children:
                handle.add_metadata("status", "pending")
                return ResolutionResult(
                    status="pending",
                    consumed=len(tokens),
                    next_expected=tuple(sorted(node.children)),
                    timeout_ms=self._pending_timeout(node),
                )

            handle.add_metadata("status", "miss")
            return ResolutionResult(status="miss", consumed=len(tokens))

    def reset(self, mode: Optional[str] = None) -> None:
        if mode is None:
            self._tries.clear()
        else:
            self._tries.pop(mode, None)

    def _trie(self, mode: str) -> TrieNode:
        revision = self._registry.revision()
        cached = self._tries.get(mode)
        if cached is not None and cached[0] == revision:
            return cached[1]

        root = TrieNode()
        for binding in self._registry.iter_bindings(mode):
            node = root
            for token in binding.sequence.tokens:
                node = node.children.setdefault(token, TrieNode())
            node.bindings.append(binding.id)
        self._tries[mode] = (revision, root)
        return root

    def _best_match(
        self, node: TrieNode, context: Mapping[str, bool]
    ) -> Optional[ResolutionMatch]:
        allowed = [
            self._registry.get_binding(binding_id) for binding_id in node.bindings
        ]
        allowed = [binding for binding in allowed if binding.allows(context)]
        if not allowed:
            return None
        best = min(allowed, key=lambda b: (-b.priority, -len(b.when), b.id))
        return ResolutionMatch(
            binding=best, action=self._registry.get_action(best.action_id)
        )

    def _pending_timeout(self, node: TrieNode) -> Optional[int]:
        timeouts: list[int] = []
        stack = list(node.children.values())
        while stack:
            current = stack.pop()
            timeouts.extend(
                self._registry.get_binding(binding_id).sequence.timeout_ms
                for binding_id in current.bindings
            )
            stack.extend(current.children.values())
        return min(timeouts) if timeouts else None


__all__ = ["KeymapResolver", "ResolutionResult", "ResolutionMatch", "TrieNode"]
