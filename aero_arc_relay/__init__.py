"""Startup configuration for the aero-arc MAVLink telemetry relay."""

__version__ = "0.1.0"
