"""
Default values and fixed names shared by the settings models.
"""

KIND_TEXT = "text"
KIND_TEXTAREA = "textarea"
KIND_CHECKBOX = "checkbox"
KIND_SELECT = "select"
KIND_BUTTON = "button"
KIND_TEXT_WITH_SWITCH = "textWithSwitch"
KIND_HEADER = "header"

KNOWN_KINDS = (
    KIND_TEXT,
    KIND_TEXTAREA,
    KIND_CHECKBOX,
    KIND_SELECT,
    KIND_BUTTON,
    KIND_TEXT_WITH_SWITCH,
    KIND_HEADER,
)

DEFAULT_TEXTAREA_ROWS = 5
DEFAULT_BUTTON_TEXT = "按钮"

# Field names of a composite value inside the value store
SWITCH_TEXT_FIELD = "text"
SWITCH_ENABLED_FIELD = "switch"

DEFAULT_STORAGE_KEY = "config.json"
DEFAULT_LOG_LEVEL = "INFO"
