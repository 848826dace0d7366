"""Unit tests for the translation engine.

This package contains test modules for all components of the engine.
Tests use pytest with asyncio support and replace HTTP calls with in-process doubles.
"""
