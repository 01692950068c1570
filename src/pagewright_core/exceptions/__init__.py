from pagewright_core.exceptions.input_validation_exception import (
    InputValidationException as InputValidationException,
)
from pagewright_core.exceptions.processing_exception import (
    ProcessingException as ProcessingException,
    DocumentLoadException as DocumentLoadException,
)
