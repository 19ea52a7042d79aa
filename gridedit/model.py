"""
Scene object model.

Placed objects are kept in insertion order: the last one is drawn on
top and is hit-tested first. Selection is held as an object id, so
clearing the scene can never leave a reference to a removed object.

Objects with a non-positive width or height stay in the scene but are
never drawn or hit; they are not repaired or removed.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import TYPE_CHECKING, Iterator

from pydantic import BaseModel, ConfigDict, Field

from gridcore.graphics.camera import snap_to_grid
from gridedit.events import EditorEvent

if TYPE_CHECKING:
    from gridcore.core.events import EventBus
    from gridedit.assets.registry import AssetRegistry


class SceneObject(BaseModel):
    """One placed image instance, in world units."""

    model_config = ConfigDict(validate_assignment=True, extra='forbid')

    object_id: int = Field(frozen=True)
    asset_key: str = Field(frozen=True)
    x: float = 0.0
    y: float = 0.0
    w: float = 0.0
    h: float = 0.0

    @property
    def is_valid(self) -> bool:
        """Whether the object has a drawable, selectable size."""
        return self.w > 0 and self.h > 0

    @property
    def right(self) -> float:
        return self.x + self.w

    @property
    def bottom(self) -> float:
        return self.y + self.h

    def contains(self, world_x: float, world_y: float) -> bool:
        """Inclusive bounding-box test."""
        return self.x <= world_x <= self.right and self.y <= world_y <= self.bottom

    def handle_contains(self, world_x: float, world_y: float, handle: float) -> bool:
        """Test the square resize handle of side `handle` at the bottom-right corner."""
        return (
            self.right - handle <= world_x <= self.right and
            self.bottom - handle <= world_y <= self.bottom
        )


class Avatar(BaseModel):
    """The play-mode square."""

    model_config = ConfigDict(validate_assignment=True, extra='forbid')

    x: float = 100.0
    y: float = 100.0
    size: float = 40.0

    def move(self, dx: float, dy: float) -> None:
        self.x += dx
        self.y += dy


class HitKind(Enum):
    """What a pointer press landed on."""
    DRAG = auto()
    RESIZE = auto()


@dataclass(frozen=True)
class HitResult:
    obj: SceneObject
    kind: HitKind


class SceneModel:
    """
    Ordered collection of scene objects plus the current selection.

    Usage:
        scene = SceneModel(registry, grid_size=50)
        obj = scene.place_object("k1", 123, 77)   # lands on (100, 50)
        hit = scene.find_top_object_at(110, 60, handle=8)
        scene.select(hit.obj.object_id)
    """

    def __init__(
        self,
        registry: AssetRegistry,
        grid_size: float,
        event_bus: EventBus | None = None,
    ):
        if grid_size <= 0:
            raise ValueError(f"Grid size must be positive, got {grid_size}")
        self.registry = registry
        self.grid_size = grid_size
        self.event_bus = event_bus

        self._objects: list[SceneObject] = []
        self._by_id: dict[int, SceneObject] = {}
        self._next_id = 1
        self._selected_id: int | None = None

    def __len__(self) -> int:
        return len(self._objects)

    def __iter__(self) -> Iterator[SceneObject]:
        return iter(self._objects)

    def __contains__(self, obj: object) -> bool:
        return isinstance(obj, SceneObject) and self._by_id.get(obj.object_id) is obj

    @property
    def objects(self) -> tuple[SceneObject, ...]:
        """All objects, bottom to top."""
        return tuple(self._objects)

    def get(self, object_id: int) -> SceneObject | None:
        return self._by_id.get(object_id)

    # Selection

    @property
    def selected_id(self) -> int | None:
        return self._selected_id

    @property
    def selected(self) -> SceneObject | None:
        """The selected object, or None."""
        if self._selected_id is None:
            return None
        return self._by_id.get(self._selected_id)

    def select(self, object_id: int | None) -> None:
        """Select an object by id. Unknown ids clear the selection."""
        if object_id is not None and object_id not in self._by_id:
            object_id = None
        if object_id == self._selected_id:
            return
        self._selected_id = object_id
        self._publish(EditorEvent.SELECTION_CHANGED, object_id=object_id)

    def clear_selection(self) -> None:
        self.select(None)

    # Mutation

    def place_object(self, asset_key: str, world_x: float, world_y: float) -> SceneObject | None:
        """
        Place a new grid-sized object at the cell containing a world point.

        Returns:
            The new object, or None if the key is not registered
        """
        if asset_key not in self.registry:
            return None

        cell_x, cell_y = snap_to_grid(world_x, world_y, self.grid_size)
        obj = SceneObject(
            object_id=self._next_id,
            asset_key=asset_key,
            x=cell_x,
            y=cell_y,
            w=self.grid_size,
            h=self.grid_size,
        )
        self._next_id += 1
        self._objects.append(obj)
        self._by_id[obj.object_id] = obj
        self._publish(EditorEvent.OBJECT_PLACED, object_id=obj.object_id)
        return obj

    def clear_all(self) -> None:
        """Remove every object and clear the selection."""
        had_selection = self._selected_id is not None
        self._objects.clear()
        self._by_id.clear()
        self._selected_id = None
        if had_selection:
            self._publish(EditorEvent.SELECTION_CHANGED, object_id=None)
        self._publish(EditorEvent.SCENE_CLEARED)

    # Queries

    def find_top_object_at(
        self,
        world_x: float,
        world_y: float,
        handle: float,
    ) -> HitResult | None:
        """
        Hit-test from the topmost object down.

        For each valid object, its resize handle is tested before its
        body, and the first object that matches either way wins.

        Args:
            world_x, world_y: Point in world space
            handle: Resize handle side length in world units
        """
        for obj in reversed(self._objects):
            if not obj.is_valid:
                continue
            if obj.handle_contains(world_x, world_y, handle):
                return HitResult(obj, HitKind.RESIZE)
            if obj.contains(world_x, world_y):
                return HitResult(obj, HitKind.DRAG)
        return None

    def _publish(self, event_type: EditorEvent, **data) -> None:
        if self.event_bus:
            self.event_bus.publish(event_type, **data)
