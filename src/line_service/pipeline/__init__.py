"""
Pipeline Package - Composition of Line Sources.

This package contains the composition root that nests producers and
decorators into pipelines.

Components:
    - PipelineBuilder: Fluent nesting of LineSource stages
    - build_pipeline: File -> Cache -> Logging from a ServiceConfig
    - build_demo_pipelines: The plain, cached, and cached+logged arrangements

Design Principles:
    - All dependencies injected via constructor
    - No state beyond the stages themselves
"""

from line_service.pipeline.builder import (
    PipelineBuilder,
    build_demo_pipelines,
    build_pipeline,
    create_message_sink,
)

__all__ = [
    "PipelineBuilder",
    "build_demo_pipelines",
    "build_pipeline",
    "create_message_sink",
]
