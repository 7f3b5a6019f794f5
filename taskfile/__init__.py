"""Parse Taskfiles, resolve their includes and run their tasks with bash."""

__version__ = "0.8.0"