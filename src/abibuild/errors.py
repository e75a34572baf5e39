"""Exception hierarchy shared across abibuild components.

Configuration errors are always raised before any compiler runs. Build
errors are raised by the executor once a child compiler has failed.
"""


class AbiBuildError(Exception):
    """Base class for all abibuild errors."""

    pass


class ConfigError(AbiBuildError):
    """Raised when the toolchain or project configuration is unusable."""

    pass


class BuildError(AbiBuildError):
    """Raised when a compilation step fails."""

    pass
