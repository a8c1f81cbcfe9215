"""
tests.pump_daemon

Test suite for the pump_daemon package: configuration, metrics, request
models and the API router.
"""
