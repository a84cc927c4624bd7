from enum import Enum


class UIStyle(str, Enum):
    BLUE = "blue"
    GREEN = "green"
    YELLOW = "yellow"
    RED = "red"
    CYAN = "cyan"
    MAGENTA = "magenta"
    DIM = "dim"
    WHITE = "white"


class RuleKind(str, Enum):
    ALWAYS = "always"
    GLOB = "glob"
    UNREACHABLE = "unreachable"


RULE_KIND_STYLE = {
    RuleKind.ALWAYS: UIStyle.GREEN.value,
    RuleKind.GLOB: UIStyle.CYAN.value,
    RuleKind.UNREACHABLE: UIStyle.YELLOW.value,
}
