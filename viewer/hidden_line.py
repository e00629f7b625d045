"""
viewer/hidden_line.py

Hidden-line rendering for 3D models: swap every mesh material for a flat
white one and restore the originals later.

Models and meshes are duck-typed scene-graph nodes:
    model.model_id, model.traverse(fn) or model.children
    mesh.is_mesh, mesh.uuid, mesh.material (one material or a list)
    material.clone(), material.dispose()
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, Hashable, Iterator, List, Optional, Set, Union

from settings import HiddenLineSettings, get_settings

log = logging.getLogger(__name__)


@dataclass
class FlatMaterial:
    """Unlit single-colour material."""
    color: str = "#FFFFFF"
    double_sided: bool = True
    disposed: bool = False

    def clone(self) -> "FlatMaterial":
        return FlatMaterial(self.color, self.double_sided)

    def dispose(self) -> None:
        self.disposed = True


@dataclass
class MaterialBackup:
    mesh_id: Hashable
    original_material: Union[Any, List[Any]]


def _clone_material(material):
    if isinstance(material, list):
        return [m.clone() for m in material]
    return material.clone()


def _dispose_material(material) -> None:
    if isinstance(material, list):
        for m in material:
            m.dispose()
    else:
        material.dispose()


def iter_meshes(model) -> Iterator[Any]:
    """Yield every node under *model* (inclusive) that is a mesh with a material."""
    nodes: List[Any] = []
    if hasattr(model, "traverse"):
        model.traverse(nodes.append)
    else:
        stack = [model]
        while stack:
            node = stack.pop()
            nodes.append(node)
            stack.extend(reversed(getattr(node, "children", None) or []))
    for node in nodes:
        if getattr(node, "is_mesh", False) and getattr(node, "material", None) is not None:
            yield node


class HiddenLineMode:
    """Reversible flat-white material swap, one backup per model.

    Backups are kept after :meth:`disable` and reused by the next
    :meth:`enable`; call :meth:`forget` when the model is disposed.

    Backups live on the instance, not in a module-level map. The viewer
    owns exactly one instance and routes every model through it; a second
    instance would not see the first one's backups.

    Args:
        material_factory: Builds the white material. Defaults to a
            :class:`FlatMaterial` from ``[hidden_line]`` settings.
    """

    def __init__(self, material_factory: Optional[Callable[[], Any]] = None,
                 hidden_line_settings: Optional[HiddenLineSettings] = None):
        if material_factory is None:
            hs = hidden_line_settings or get_settings().settings.hidden_line
            material_factory = lambda: FlatMaterial(hs.color, hs.double_sided)
        self._material_factory = material_factory
        self._backups: Dict[Hashable, List[MaterialBackup]] = {}
        self._active: Set[Hashable] = set()

    def has_backup(self, model_id: Hashable) -> bool:
        return model_id in self._backups

    def is_enabled(self, model_id: Hashable) -> bool:
        return model_id in self._active

    def enable(self, model) -> int:
        """Render *model* in hidden-line mode.

        Returns:
            Number of meshes switched to the white material.
        """
        if model is None:
            log.warning("[HiddenLine] No model to enable")
            return 0
        model_id = model.model_id
        if model_id in self._active:
            log.debug("[HiddenLine] Model %s already in hidden-line mode", model_id)
            return 0

        if model_id not in self._backups:
            backups = [
                MaterialBackup(mesh.uuid, _clone_material(mesh.material))
                for mesh in iter_meshes(model)
            ]
            self._backups[model_id] = backups
            log.debug("[HiddenLine] Backed up materials for %d meshes", len(backups))

        count = 0
        for mesh in iter_meshes(model):
            white = self._material_factory()
            if isinstance(mesh.material, list):
                mesh.material = [white.clone() for _ in mesh.material]
            else:
                mesh.material = white
            count += 1

        self._active.add(model_id)
        log.info("[HiddenLine] Enabled for model %s, converted %d meshes", model_id, count)
        return count

    def disable(self, model) -> int:
        """Restore *model*'s original materials.

        Returns:
            Number of meshes restored.
        """
        if model is None:
            log.warning("[HiddenLine] No model to disable")
            return 0
        model_id = model.model_id
        backups = self._backups.get(model_id)
        if backups is None:
            log.warning("[HiddenLine] No material backups found for model %s", model_id)
            return 0
        if model_id not in self._active:
            return 0

        by_mesh = {b.mesh_id: b for b in backups}
        count = 0
        for mesh in iter_meshes(model):
            backup = by_mesh.get(mesh.uuid)
            if backup is None:
                continue
            _dispose_material(mesh.material)
            mesh.material = backup.original_material
            count += 1

        self._active.discard(model_id)
        log.info("[HiddenLine] Disabled for model %s, restored %d meshes", model_id, count)
        return count

    def toggle(self, model, enable: bool) -> int:
        if enable:
            return self.enable(model)
        return self.disable(model)

    def forget(self, model_id: Hashable) -> None:
        """Drop the backup for a disposed model."""
        self._backups.pop(model_id, None)
        self._active.discard(model_id)
