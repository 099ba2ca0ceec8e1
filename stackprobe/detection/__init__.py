"""Stack inference engine.

Public API lives in `stackprobe.detection.analyzer`:
    analyze(url) -> DetectedProfile | None
    analyze_repository(url) (async)
"""
