"""Exit codes used by the CLI."""

VALIDATION_EXIT_CODE = 2
