"""
Task subsystem.

Components:
- task_models.py: data structures (Task, TaskStatus) and the JSON record codec
- json_store.py: flat-file storage (whole collection rewritten per mutation)
- task_store.py: SQLite-backed storage (one row per task, soft delete)
- task_service.py: create/list/complete/edit/delete/clear over any store
- task_format.py: human-readable rendering of tasks and confirmations
"""
