"""System defaults used when configuration leaves a value unset."""

# Blocks that must elapse between announcing a proxy call and executing it.
TIME_DELAY_BLOCKS = 10850

# Scan frequency for the execution job (croniter syntax).
EXECUTION_CRON = "*/15 * * * *"

# Pause after every submitted execution, bounds submissions per tick.
EXECUTION_COOLDOWN_MS = 7000

# Upper bound on waiting for a submitted extrinsic to finalize.
FINALIZATION_TIMEOUT_SECONDS = 300.0

EXECUTION_TASK_NAME = "execution"

UNKNOWN_CANDIDATE_NAME = "(unknown)"
