"""
Trace Module.

This package contains tracing components:
- Trace context and stage records
- ``stage_timer`` for timing a load step
"""

from resource_loader.core.trace.trace_context import StageRecord, TraceContext, stage_timer

__all__ = ['StageRecord', 'TraceContext', 'stage_timer']
