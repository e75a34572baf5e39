"""abibuild - multi-ABI native build orchestrator for the Android NDK."""

__version__ = "0.1.0"
