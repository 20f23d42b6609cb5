"""
Draw controller error taxonomy.

Setup errors propagate to whoever attached the controller. Per-event errors
are raised inside the shape handler and logged there, never outward.
"""


class AreaSelectorError(Exception):
    """Base class for area selector errors"""
    pass


class ToolInitializationFailure(AreaSelectorError):
    """Raised when the overlay group or drawing tool cannot be attached"""
    pass


class ShapeExtractionFailure(AreaSelectorError):
    """Raised when a drawn shape cannot be normalized into area coordinates"""
    pass


class ControllerClosedError(AreaSelectorError):
    """Raised when attach() is called on a controller that was already detached"""
    pass
