# config.example.py

"""
Documentation-only module (safe to commit).

The real configuration is loaded from environment variables (optionally via a local .env file,
see .env.example). Real environment variables always win over .env.

This file exists to make the repo self-documenting even without opening .env.example.
"""

ENV_VARS = {
    # App / logging
    "TASKDESK_APP_NAME": "App display name (default: taskdesk).",
    "TASKDESK_LOG_LEVEL": "Console logging level (default: INFO). The log file always gets DEBUG.",
    # Paths
    "TASKDESK_DATA_DIR": "Local data dir for the database and taskdesk.log (default: .local/taskdesk).",
    "TASKDESK_DB_PATH": "SQLite file (default: <data_dir>/todo_list.db).",
    # UI
    "TASKDESK_SHOW_FINISHED": "Show the finished list at startup (true/false, default: false).",
}
