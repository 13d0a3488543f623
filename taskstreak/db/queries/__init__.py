"""
Database queries, grouped by table:
- users.py: users
- tasks.py: tasks (soft delete via is_active)
- progress.py: daily_progress (one row per task and date)
"""
