"""Runtime services shared by every cellpad layer."""

from . import telemetry

__all__ = ["telemetry"]
