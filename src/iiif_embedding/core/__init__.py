from .base import ApplicationError, ErrorCode, ErrorLevel
from .config import Settings, ValidationOptions, get_settings
from .errors import AnnotationValidationError, ConfigurationError, ReferenceCheckError
