"""
Centralized Help Text Constants

CLI help text and exit codes shared by the mediaflow subcommands.
"""

# Exit codes for different error types
class ExitCodes:
    SUCCESS = 0
    VALIDATION_FAILED = 1
    INVALID_CONFIGURATION = 3
    FILE_NOT_FOUND = 6
    PERMISSION_ERROR = 7

# Command help texts
VALIDATE_HELP = "Validate a pipeline document before running it."
STEPS_HELP = "List the step kinds a pipeline document may use."

# Option help texts - Validate command
VALIDATE_INPUT_HELP = "Path to the pipeline document (.json, .yaml or .yml)."

VALIDATE_FORMAT_HELP = (
    "Document format. Defaults to the file extension, then to the "
    "configured document_format."
)

VALIDATE_REPORT_HELP = "Also write the JSON report to this path."

VALIDATE_JSON_HELP = "Print the JSON report instead of the human-readable one."

CONFIG_HELP = (
    "Path to configuration file (.yaml). If not specified, looks for:\n"
    "  1. ./.mediaflow/config.yaml (project config)\n"
    "  2. ~/.mediaflow/config.yaml (user config)\n"
    "  3. Built-in defaults"
)

LOG_LEVEL_HELP = "Logging level for detailed output. Use DEBUG for troubleshooting."

# Option help texts - Steps command
STEPS_CATEGORY_HELP = "Only list steps of this category."

# Error messages
FILE_NOT_FOUND_ERROR = "Pipeline file not found: {path}"
PERMISSION_ERROR = "Permission denied reading pipeline file: {path}"
