"""
Task subsystem.

Components:
- task_models.py: data structures (TaskRecord, Priority) and record construction
- codec.py: slot (de)serialization, including the legacy markup recovery path
- task_store.py: the single mutation point for the session's task list
- filters.py: active filter + default priority selection
- repair.py: one-shot delayed rewrite of the slot after load
"""
