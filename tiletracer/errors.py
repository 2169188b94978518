"""
Exceptions raised by the renderer
"""


class TiletracerError(Exception):
    """Base class for all renderer errors"""


class ConfigurationError(TiletracerError, ValueError):
    """Invalid image size or tuning knob, rejected before rendering starts"""


class SceneContractError(TiletracerError, RuntimeError):
    """A scene object reported a hit without the data needed to shade it"""


class RenderCancelled(TiletracerError):
    """The render pass was cancelled before every tile was processed"""


class ImageWriteError(TiletracerError, OSError):
    """The framebuffer could not be written to disk"""
