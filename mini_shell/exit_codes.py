"""Exit status conventions shared by the dispatcher and builtins"""

EXIT_CODE_SUCCESS = 0
EXIT_CODE_GENERAL_ERROR = 1
EXIT_CODE_SYNTAX_ERROR = 2
EXIT_CODE_CANNOT_EXECUTE = 126
EXIT_CODE_COMMAND_NOT_FOUND = 127

# A child killed by signal N reports 128 + N
EXIT_CODE_SIGNAL_BASE = 128
