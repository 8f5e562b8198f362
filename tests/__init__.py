"""Tests for async_dlna_control."""
