"""
tests.pump_daemon.api_routers

Tests for the pump_daemon API routers.
"""
