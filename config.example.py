# config.example.py

"""
Documentation-only module (safe to commit).

Configuration is read from environment variables (optionally via a local .env file).
Nothing is required: every variable has a default.
"""

ENV_VARS = {
    # App / logging
    "TASKBOARD_APP_NAME": "App display name (default: taskboard).",
    "TASKBOARD_LOG_LEVEL": "Console logging level (default: INFO).",
    "TASKBOARD_LOG_DIR": "Directory for taskboard.log (default: .local/taskboard).",
    # Seed data
    "TASKBOARD_SEED_DIR": (
        "Directory holding tasks.json, categories.json, contacts.json, companies.json, "
        "deals.json and leads.json (default: the fixtures shipped with the package)."
    ),
    # Simulated latency
    "TASKBOARD_LATENCY_SCALE": "Multiplier for the per-operation delays; 0 disables them (default: 1).",
    # Recurrence
    "TASKBOARD_RECURRENCE_DAILY_COUNT": "Instances generated for a daily task (default: 7).",
    "TASKBOARD_RECURRENCE_WEEKLY_COUNT": "Instances generated for a weekly task (default: 4).",
    "TASKBOARD_RECURRENCE_MONTHLY_COUNT": "Instances generated for a monthly task (default: 3).",
}
