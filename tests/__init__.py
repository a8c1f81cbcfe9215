"""
tests

Test suite for the pump response decoder project.

This package contains unit tests for the decoder library and the HTTP daemon.

Subpackages:
    - pump_daemon: Tests for the FastAPI daemon, its configuration and metrics
"""
