"""
Exceptions shared by the eKheti services and flows.
"""


class EkhetiError(Exception):
    """Base class for failures that are reported to the user as JSON."""
    status_code = 502

    def __init__(self, message, status_code=None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code

    def to_dict(self):
        return {'error': self.message}


class WeatherError(EkhetiError):
    pass


class MarketDataError(EkhetiError):
    pass


class NewsError(EkhetiError):
    pass


class FlowError(EkhetiError):
    pass


class KnowledgeBaseError(EkhetiError):
    pass


class CalculatorError(EkhetiError):
    status_code = 400


class ReportError(EkhetiError):
    status_code = 400
