"""
Core application engine for orchestrating playback.

This package contains the primary logic. The `PlaybackPipeline` acts as the
high-level coordinator, the `PlaybackOrchestrator` sequences files, and each
file is handled by its own `PlaybackSession`.
"""
