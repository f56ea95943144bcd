"""
SafeCall Infrastructure Layer

External collaborators of the call engine: contact store,
notification sinks, call history and metrics.
"""
