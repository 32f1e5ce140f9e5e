from __future__ import annotations

from stdiocontext.color import generateColorFunction
from stdiocontext.color import theme

config_debug_color = theme.add_color_param(
    "message-debug-color", "gray", "color of debug messages"
)
config_info_color = theme.add_color_param("message-info-color", "blue", "color of info messages")
config_warning_color = theme.add_color_param(
    "message-warning-color", "yellow", "color of warning messages"
)
config_error_color = theme.add_color_param("message-error-color", "red", "color of error messages")
config_critical_color = theme.add_color_param(
    "message-critical-color", "bold,light-red", "color of critical messages"
)


def debug(msg):
    return generateColorFunction(config_debug_color)(msg)


def info(msg):
    return generateColorFunction(config_info_color)(msg)


def warn(msg):
    return generateColorFunction(config_warning_color)(msg)


def error(msg):
    return generateColorFunction(config_error_color)(msg)


def critical(msg):
    return generateColorFunction(config_critical_color)(msg)
