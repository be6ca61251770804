class ConfigurationError(ValueError):
    """Raised at startup when required configuration is missing or invalid"""

    def __init__(self, errors):
        self.errors = errors
        super().__init__("\n".join(f"{e.key}: {e.message}" for e in errors))


class FetchFailure(Exception):
    """Base class for everything that stops a location's menu from being posted"""

    def __init__(self, location, message: str):
        self.location = location
        super().__init__(message)


class NoDataForDate(FetchFailure):
    def __init__(self, location, date: str):
        self.date = date
        super().__init__(location, f'No data for location "{location.name}" on "{date}"')


class WeekMismatch(FetchFailure):
    def __init__(self, location, actual, expected: int):
        self.actual = actual
        self.expected = expected
        super().__init__(
            location,
            f'Week number mismatch for location "{location.name}". '
            f'Is {actual}, but should be {expected}'
        )


class MenuFetchError(FetchFailure):
    """Transport, HTTP status or decode error while calling the menu API"""

    def __init__(self, location, reason: str):
        self.reason = reason
        super().__init__(location, f'Failed to fetch menu for location "{location.name}": {reason}')
