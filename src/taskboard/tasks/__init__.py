"""
Task subsystem.

Components:
- task_models.py: data structures (Task, Category, priorities, frequencies)
- task_service.py: TaskService (CRUD + hierarchy rules), CategoryService
- hierarchy.py: subtask lookup, progress, descendant closure
- recurrence.py: future instances for recurring tasks
- task_view.py: filtering, ordering and badge counts for the task list
"""
