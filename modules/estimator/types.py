from enum import Enum


class ViewState(str, Enum):
    SETTINGS = "SETTINGS"
    INPUT = "INPUT"
    RESULTS = "RESULTS"


class NavEvent(str, Enum):
    NEXT = "NEXT"
    CALCULATE = "CALCULATE"
    BACK = "BACK"
    EXPORT = "EXPORT"
    RESET = "RESET"
