class AppException(Exception):
    """Base exception class for the inventory analytics application."""
    def __init__(self, message, error_code=None, details=None):
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.details = details or {}

    def __str__(self):
        if self.error_code:
            return f"{self.error_code}: {self.message}"
        return self.message

class ValidationException(AppException):
    """Exception raised for invalid products, ledgers or policies."""
    pass

class ConfigurationException(AppException):
    """Exception raised for configuration-related errors."""
    pass

class BusinessLogicException(AppException):
    """Exception raised for business logic errors."""
    pass

class UndefinedMetricException(BusinessLogicException):
    """Raised when a metric has no defined value, e.g. a ratio over zero stock."""
    pass

class ReportGenerationException(BusinessLogicException):
    """Raised when a report cannot be built from the supplied data."""
    pass

class NotFoundException(AppException):
    """Exception raised when a requested product or report is not found."""
    pass

class DataFormatException(AppException):
    """Exception raised for malformed store documents."""
    pass

class ExternalServiceException(AppException):
    """Exception raised when writing an export file fails."""
    pass
