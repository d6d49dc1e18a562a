"""
taskboard: an in-memory task manager and lightweight CRM.

All state lives in per-process RecordStores seeded from the JSON files in
fixtures/; see cli/bootstrap.py for how the pieces are wired.
"""
