from enum import Enum


class UIStyle(str, Enum):
    BLUE = "blue"
    GREEN = "green"
    YELLOW = "yellow"
    RED = "red"
    CYAN = "cyan"
    DIM = "dim"


def status_style(status: int) -> str:
    if status < 300:
        return UIStyle.GREEN.value
    if status < 500:
        return UIStyle.YELLOW.value
    return UIStyle.RED.value
