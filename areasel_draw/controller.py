"""
DrawController - rectangle selection on a map surface

Bounded Context: Draw interaction lifecycle
Responsibilities:
  - Attach one overlay group and one rectangle-only drawing tool
  - Listen for SHAPE_CREATED and keep a single drawn rectangle
  - Normalize the rectangle into a closed [NW, NE, SE, SW, NW] ring
  - Release everything it registered on detach()

Lifecycle:
  DETACHED --attach()--> ATTACHED --detach()--> DETACHED (final)

  attach() on an attached controller returns the live handle.
  detach() more than once is a no-op.

Threading:
  Single UI thread. Events are handled synchronously to completion, so the
  clear-then-add replacement never interleaves with another event.
"""

import weakref
from enum import Enum
from typing import Any, Callable, Optional

from .errors import (
    ControllerClosedError,
    ShapeExtractionFailure,
    ToolInitializationFailure,
)
from .geometry import AreaCoordinates, LatLngBounds
from .logging import LogEvent, StructuredLogger, create_logger
from .surface import (
    RECTANGLE,
    SHAPE_CREATED,
    DrawnShape,
    DrawOptions,
    MapSurface,
    OverlayGroup,
    Subscription,
)

AreaCallback = Callable[[AreaCoordinates], None]


class ControllerState(str, Enum):
    """The two lifecycle states of a draw controller."""
    DETACHED = "detached"
    ATTACHED = "attached"


def extract_area(shape: DrawnShape) -> AreaCoordinates:
    """
    Normalize a drawn shape into area coordinates.

    Raises:
        ShapeExtractionFailure: Unexpected shape kind, bounds that cannot be
            computed, or degenerate bounds
    """
    layer_type = getattr(shape, 'layer_type', None)
    if layer_type != RECTANGLE:
        raise ShapeExtractionFailure(
            f"Expected a '{RECTANGLE}' shape, got '{layer_type}'"
        )

    try:
        bounds = shape.get_bounds()
    except Exception as e:
        raise ShapeExtractionFailure(f"Could not compute shape bounds: {e}") from e

    if not isinstance(bounds, LatLngBounds):
        raise ShapeExtractionFailure(
            f"get_bounds() must return LatLngBounds, got {type(bounds).__name__}"
        )

    return AreaCoordinates.from_bounds(bounds)


class ControllerHandle:
    """
    Handle returned by DrawController.attach().

    Its only operation is detach(). Also usable as a context manager:

        with controller.attach():
            ...  # drawing enabled
        # everything released
    """

    def __init__(self, controller: 'DrawController'):
        self._controller = controller

    @property
    def attached(self) -> bool:
        return self._controller.state is ControllerState.ATTACHED

    def detach(self) -> None:
        """Release the drawing tool and overlay group. Safe to call repeatedly."""
        self._controller._detach()

    def __enter__(self) -> 'ControllerHandle':
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.detach()


class DrawController:
    """
    Bridges drawing tool events into AreaCoordinates callbacks.

    Invariants:
      - at most one shape in the overlay group
      - tool and overlay are both attached or both detached
      - on_area_selected is never called after detach() returns

    Example:
        surface = InMemoryMapSurface()
        controller = DrawController(surface, on_area_selected=print)
        handle = controller.attach()

        surface.draw_rectangle(south=10.0, west=20.0, north=10.5, east=20.5)
        # prints AreaCoordinates([[10.5, 20.0], [10.5, 20.5], ...])

        handle.detach()
    """

    def __init__(
        self,
        surface: MapSurface,
        on_area_selected: AreaCallback,
        options: Optional[DrawOptions] = None,
        logger: Optional[StructuredLogger] = None,
    ):
        """
        Initialize controller (nothing touches the map until attach()).

        Args:
            surface: Live map surface
            on_area_selected: Called with each successfully drawn area
            options: Drawing tool options (default: rectangle, topleft)
            logger: Structured logger (default: areasel.controller)
        """
        self.surface = surface
        self.on_area_selected = on_area_selected
        self.options = options or DrawOptions()
        self.logger = logger or create_logger("controller")

        self._attached = False
        self._closed = False
        self._handle: Optional[ControllerHandle] = None

        self._overlay: Optional[OverlayGroup] = None
        self._tool: Any = None
        self._subscription: Optional[Subscription] = None

        self.last_area: Optional[AreaCoordinates] = None

    @property
    def state(self) -> ControllerState:
        return ControllerState.ATTACHED if self._attached else ControllerState.DETACHED

    @property
    def overlay(self) -> Optional[OverlayGroup]:
        return self._overlay

    @property
    def tool(self) -> Any:
        return self._tool

    def attach(self) -> ControllerHandle:
        """
        Add the overlay group and drawing tool to the surface, then subscribe.

        Returns:
            The controller handle (the same one on repeated calls)

        Raises:
            ToolInitializationFailure: If the surface rejected any step. Steps
                already applied are rolled back before raising.
            ControllerClosedError: If this controller was already detached
        """
        if self._handle is not None and self._attached:
            self.logger.debug(
                event=LogEvent.DRAW_ATTACH_SKIPPED,
                message="Controller already attached, reusing handle"
            )
            return self._handle

        if self._closed:
            raise ControllerClosedError(
                "Controller was detached; create a new controller to draw again"
            )

        overlay = None
        tool = None
        subscription = None
        overlay_added = False
        tool_added = False

        try:
            overlay = self.surface.create_overlay_group()
            self.surface.add_overlay_layer(overlay)
            overlay_added = True

            tool = self.surface.create_drawing_tool(self.options)
            self.surface.add_drawing_tool(tool)
            tool_added = True

            subscription = self.surface.on(SHAPE_CREATED, self._on_shape_created)

        except Exception as e:
            self.logger.error(
                event=LogEvent.TOOL_INITIALIZATION_ERROR,
                message="Failed to attach drawing tool",
                exc_info=e,
                metadata={'overlay_added': overlay_added, 'tool_added': tool_added}
            )
            self._release(
                subscription=None,
                tool=tool if tool_added else None,
                overlay=overlay if overlay_added else None,
            )
            raise ToolInitializationFailure(f"Failed to attach drawing tool: {e}") from e

        self._overlay = overlay
        self._tool = tool
        self._subscription = subscription
        self._attached = True
        self._handle = ControllerHandle(self)

        self.logger.info(
            event=LogEvent.DRAW_ATTACHED,
            message="Drawing tool attached",
            metadata={
                'position': self.options.position,
                'shapes': list(self.options.enabled_shapes),
            }
        )
        return self._handle

    def _detach(self) -> None:
        if not self._attached:
            return

        # Flip first: any event still in flight sees a detached controller
        self._attached = False
        self._closed = True

        subscription, tool, overlay = self._subscription, self._tool, self._overlay
        self._subscription = None
        self._tool = None
        self._overlay = None

        self._release(subscription=subscription, tool=tool, overlay=overlay)

        self.logger.info(
            event=LogEvent.DRAW_DETACHED,
            message="Drawing tool detached"
        )

    def _release(
        self,
        subscription: Optional[Subscription],
        tool: Any,
        overlay: Optional[OverlayGroup],
    ) -> None:
        """Unsubscribe, remove tool, remove overlay; each step runs regardless of the others."""
        steps = []
        if subscription is not None:
            steps.append(('unsubscribe', self.surface.off, subscription))
        if tool is not None:
            steps.append(('remove_drawing_tool', self.surface.remove_drawing_tool, tool))
        if overlay is not None:
            steps.append(('remove_overlay_layer', self.surface.remove_overlay_layer, overlay))

        for name, release, resource in steps:
            try:
                release(resource)
            except Exception as e:
                self.logger.error(
                    event=LogEvent.TEARDOWN_ERROR,
                    message=f"Failed to {name.replace('_', ' ')}",
                    exc_info=e,
                    metadata={'step': name}
                )

    def _on_shape_created(self, shape: DrawnShape) -> None:
        """
        SHAPE_CREATED handler. Never raises.
        """
        if not self._attached:
            self.logger.debug(
                event=LogEvent.DRAW_EVENT_IGNORED,
                message="Shape event after detach ignored"
            )
            return

        layer_type = getattr(shape, 'layer_type', None)
        self.logger.info(
            event=LogEvent.DRAW_SHAPE_CREATED,
            message="Shape drawn",
            metadata={'layer_type': layer_type}
        )

        try:
            # Replace, never accumulate
            self._overlay.clear()
            self._overlay.add(shape.layer)
            area = extract_area(shape)
        except Exception as e:
            self.logger.error(
                event=LogEvent.SHAPE_EXTRACTION_ERROR,
                message="Could not normalize drawn shape",
                exc_info=e,
                metadata={'layer_type': layer_type}
            )
            return

        self.last_area = area
        self.logger.info(
            event=LogEvent.AREA_SELECTED,
            message="Rectangle coordinates",
            metadata={'coordinates': area.to_list()}
        )

        try:
            self.on_area_selected(area)
        except Exception as e:
            self.logger.error(
                event=LogEvent.CALLBACK_ERROR,
                message="Area callback raised",
                exc_info=e
            )


def attach(
    surface: MapSurface,
    on_area_selected: AreaCallback,
    options: Optional[DrawOptions] = None,
    logger: Optional[StructuredLogger] = None,
) -> ControllerHandle:
    """
    Attach a DrawController to a surface.

    While a controller created here is still attached to the same surface,
    further calls return its handle instead of adding a second overlay and
    tool (the first call's callback stays in effect).

    Example:
        >>> handle = attach(surface, on_area_selected=presenter.show)
        >>> ...
        >>> handle.detach()
    """
    controller = _live_controllers.get(id(surface))
    if (
        controller is None
        or controller.surface is not surface
        or controller.state is ControllerState.DETACHED
    ):
        controller = DrawController(
            surface,
            on_area_selected,
            options=options,
            logger=logger,
        )
        _live_controllers[id(surface)] = controller
    return controller.attach()


# id(surface) -> controller created by attach(). Surfaces need not be
# hashable; a live controller holds its surface, so the id stays unique
# for as long as the entry exists.
_live_controllers: "weakref.WeakValueDictionary[int, DrawController]" = (
    weakref.WeakValueDictionary()
)
