"""Storage for actions and bindings with conflict detection."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, Iterator, Optional

from cellpad.runtime.telemetry import span

from .models import ActionRef, Binding


@dataclass(slots=True)
class RegistryStats:
    action_count: int
    binding_count: int
    modes: tuple[str, ...]


class KeymapConflictError(RuntimeError):
    """Raised when a binding shares keys and context with an existing one."""

    def __init__(self, binding: Binding, conflicts: Iterable[Binding]):
        conflicts_tuple = tuple(conflicts)
        super().__init__(
            f"Binding '{binding.id}' conflicts with {[b.id for b in conflicts_tuple]}"
        )
        self.binding = binding
        self.conflicts = conflicts_tuple


class KeymapRegistry:
    """Owns action references and the bindings that point at them.

    Bindings are indexed per mode by key signature; every change bumps
    ``revision`` so resolvers know to rebuild their tries.
    """

    def __init__(self, *, logger_name: str | None = None) -> None:
        self._actions: Dict[str, ActionRef] = {}
        self._bindings: Dict[str, Binding] = {}
        self._index: Dict[str, Dict[str, set[str]]] = {}
        self._logger_name = logger_name
        self._revision = 0

    def revision(self) -> int:
        return self._revision

    def get_action(self, action_id: str) -> ActionRef:
        try:
            return self._actions[action_id]
        except KeyError as exc:
            raise KeyError(f"Action '{action_id}' is not registered") from exc

    def get_binding(self, binding_id: str) -> Binding:
        try:
            return self._bindings[binding_id]
        except KeyError as exc:
            raise KeyError(f"Binding '{binding_id}' is not registered") from exc

    def register_action(self, action: ActionRef, *, replace: bool = False) -> ActionRef:
        if not replace and action.id in self._actions:
            raise ValueError(f"Action '{action.id}' already registered")
        self._actions[action.id] = action
        return action

    def register_binding(self, binding: Binding, *, replace: bool = False) -> Binding:
        with span(
            "keymaps::register_binding",
            logger_name=self._logger_name,
            component="keymaps",
            metadata={"binding_id": binding.id, "mode": binding.mode},
        ) as handle:
            if binding.action_id not in self._actions:
                handle.add_metadata("missing_action", binding.action_id)
                raise KeyError(
                    f"Binding '{binding.id}' references unknown action "
                    f"'{binding.action_id}'"
                )

            conflicts = self.detect_conflicts(binding, ignore=(binding.id,))
            if conflicts and not replace:
                raise KeymapConflictError(binding, conflicts)
            if binding.id in self._bindings and not replace:
                raise ValueError(f"Binding id '{binding.id}' already registered")

            stale = list(conflicts)
            if binding.id in self._bindings:
                stale.append(self._bindings[binding.id])
            for old in stale:
                self._unindex(old)
                self._bindings.pop(old.id, None)

            self._bindings[binding.id] = binding
            self._index.setdefault(binding.mode, {}).setdefault(
                binding.key_signature, set()
            ).add(binding.id)
            self._revision += 1
            return binding

    def unregister_binding(self, binding_id: str) -> Optional[Binding]:
        binding = self._bindings.pop(binding_id, None)
        if binding is not None:
            self._unindex(binding)
            self._revision += 1
        return binding

    def iter_bindings(self, mode: Optional[str] = None) -> Iterator[Binding]:
        if mode is None:
            yield from self._bindings.values()
            return
        for ids in self._index.get(mode, {}).values():
            for binding_id in sorted(ids):
                yield self._bindings[binding_id]

    def stats(self) -> RegistryStats:
        return RegistryStats(
            action_count=len(self._actions),
            binding_count=len(self._bindings),
            modes=tuple(sorted(self._index)),
        )

    def detect_conflicts(
        self, binding: Binding, *, ignore: Iterable[str] = ()
    ) -> list[Binding]:
        ignored = set(ignore)
        candidates = self._index.get(binding.mode, {}).get(binding.key_signature, set())
        return [
            self._bindings[other_id]
            for other_id in sorted(candidates)
            if other_id not in ignored
            and _contexts_overlap(binding, self._bindings[other_id])
        ]

    def _unindex(self, binding: Binding) -> None:
        by_signature = self._index.get(binding.mode)
        if not by_signature:
            return
        ids = by_signature.get(binding.key_signature)
        if ids is None:
            return
        ids.discard(binding.id)
        if not ids:
            del by_signature[binding.key_signature]
        if not by_signature:
            del self._index[binding.mode]


def _contexts_overlap(left: Binding, right: Binding) -> bool:
    """Two bindings overlap unless some shared flag demands opposite values."""

    left_map = left.when_map
    right_map = right.when_map
    for flag, expected in left_map.items():
        if flag in right_map and right_map[flag] != expected:
            return False
    if not left.when and not right.when:
        return True
    # A gated binding may shadow an ungated one on purpose.
    if not left.when or not right.when:
        return False
    return dict(left_map) == dict(right_map)


__all__ = ["KeymapRegistry", "KeymapConflictError", "RegistryStats"]
