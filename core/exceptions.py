"""Domain-specific exceptions"""


class BorrowingPowerError(Exception):
    """Base exception for borrowing power workflows"""

    pass


class ScenarioLimitError(BorrowingPowerError):
    """No room left for another what-if scenario"""

    pass


class ScenarioNotFoundError(BorrowingPowerError):
    """Scenario id is not part of the comparison set"""

    pass


class UnknownOverrideError(BorrowingPowerError):
    """Scenario override names a field the calculator inputs do not have"""

    pass
