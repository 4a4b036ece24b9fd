"""
Default key-name translation for KEY options.

A key name is an optional chain of modifier prefixes followed by a key:
"Ctrl-Shift-Left", "Alt-f", "Space", "F11", "q". Modifiers are matched
case-insensitively, key names exactly. Unknown names translate to 0
(no key). Hosts with their own key tables pass their translator to the loader.
"""

KEY_MODIFIER_ALT     = 0x01000000
KEY_MODIFIER_SHIFT   = 0x02000000
KEY_MODIFIER_CTRL    = 0x04000000
KEY_MODIFIER_META    = 0x08000000
KEY_MODIFIER_COMMAND = 0x10000000

MODIFIERS = {
    "alt": KEY_MODIFIER_ALT,
    "shift": KEY_MODIFIER_SHIFT,
    "ctrl": KEY_MODIFIER_CTRL,
    "meta": KEY_MODIFIER_META,
    "command": KEY_MODIFIER_COMMAND,
}

KEYS = {
    "Unset": 0,
    "Left": 0x210000,
    "Right": 0x220000,
    "Up": 0x230000,
    "Down": 0x240000,
    "Space": 0x250000,
    "Enter": 0x260000,
    **{"F%d" % number: 0x270000 + (number - 1) * 0x10000 for number in range(1, 13)},
    "Home": 0x330000,
    "End": 0x340000,
    "Menu": 0x350000,
    "Esc": 0x360000,
    "Page Up": 0x370000,
    "Page Down": 0x380000,
    "Tab": 0x390000,
    "Backspace": 0x3A0000,
    "Mouse Wheel Up": 0x3B0000,
    "Mouse Wheel Down": 0x3C0000,
}


def string_to_key(name, /):
    """
    Translate a key name into its integer code, or 0 when unknown.

    examples
    - string_to_key("Space")      → 0x250000
    - string_to_key("Ctrl-q")     → KEY_MODIFIER_CTRL | ord("q")
    - string_to_key("Hyper-q")    → 0
    """
    if not isinstance(name, str):
        raise TypeError("string_to_key() argument must be a string")

    modifiers = 0
    while True:
        head, separator, tail = name.partition("-")
        if not separator or not tail or head.lower() not in MODIFIERS:
            break
        modifiers |= MODIFIERS[head.lower()]
        name = tail

    if name in KEYS:
        code = KEYS[name]
    elif len(name) == 1 and name.isprintable() and not name.isspace():
        code = ord(name)
    else:
        return 0
    return modifiers | code if code else 0


__all__ = (
    "KEY_MODIFIER_ALT",
    "KEY_MODIFIER_SHIFT",
    "KEY_MODIFIER_CTRL",
    "KEY_MODIFIER_META",
    "KEY_MODIFIER_COMMAND",
    "MODIFIERS",
    "KEYS",
    "string_to_key",
)
