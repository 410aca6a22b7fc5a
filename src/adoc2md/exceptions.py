#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Custom exceptions for the adoc2md library.

Malformed markup never raises: unrecognized constructs are passed through
as literal text. The exceptions defined here cover the conditions a caller
can actually get wrong, namely the shape of the conversion options and the
files and configuration handled by the command line interface.

Exception Hierarchy
-------------------
- Adoc2MdError (base exception)

  - ValidationError (parameter/option validation)
    - InvalidOptionsError (wrong options type passed to convert)
    - ConfigError (unreadable or malformed configuration file)

  - FileError (input/output file access)

"""

from typing import Any


class Adoc2MdError(Exception):
    """Base exception class for all adoc2md-specific errors.

    Parameters
    ----------
    message : str
        Human-readable description of the error
    original_error : Exception, optional
        The original exception that caused this error, if applicable

    Attributes
    ----------
    message : str
        The error message
    original_error : Exception or None
        The wrapped original exception, if any

    """

    def __init__(self, message: str, original_error: Exception | None = None):
        """Initialize the error with a message and optional original exception."""
        super().__init__(message)
        self.message = message
        self.original_error = original_error


class ValidationError(Adoc2MdError):
    """Exception raised for invalid input parameters or options.

    Parameters
    ----------
    message : str
        Description of the validation error
    parameter_name : str, optional
        Name of the invalid parameter
    parameter_value : any, optional
        The invalid value that was provided
    original_error : Exception, optional
        The original exception that caused this error

    Attributes
    ----------
    parameter_name : str or None
        The name of the problematic parameter
    parameter_value : any
        The value that caused the error

    """

    def __init__(
        self,
        message: str,
        parameter_name: str | None = None,
        parameter_value: Any = None,
        original_error: Exception | None = None,
    ):
        """Initialize the validation error with parameter details."""
        super().__init__(message, original_error=original_error)
        self.parameter_name = parameter_name
        self.parameter_value = parameter_value


class InvalidOptionsError(ValidationError):
    """Exception raised when options of the wrong shape are provided.

    This is raised when ``convert`` receives something that is neither a
    ``ConversionOptions`` instance nor a mapping, or when the attribute seed
    inside the options is not a mapping.

    Parameters
    ----------
    converter_name : str
        Name of the component that received invalid options
    expected_type : type
        The expected options type
    received_type : type
        The type that was actually received
    message : str, optional
        Custom error message. If not provided, generates a helpful message
    parameter_name : str, default "options"
        Name of the offending parameter
    original_error : Exception, optional
        The original exception that caused this error

    Attributes
    ----------
    converter_name : str
        Name of the component
    expected_type : type
        Expected options type
    received_type : type
        Received options type

    """

    def __init__(
        self,
        converter_name: str,
        expected_type: type,
        received_type: type,
        message: str | None = None,
        parameter_name: str = "options",
        original_error: Exception | None = None,
    ):
        """Initialize the invalid options error."""
        if message is None:
            message = (
                f"{converter_name} expected {parameter_name} of type '{expected_type.__name__}' "
                f"but received '{received_type.__name__}'."
            )
        super().__init__(
            message, parameter_name=parameter_name, parameter_value=received_type, original_error=original_error
        )
        self.converter_name = converter_name
        self.expected_type = expected_type
        self.received_type = received_type


class ConfigError(ValidationError):
    """Exception raised when a configuration file cannot be loaded.

    Parameters
    ----------
    message : str
        Description of the configuration problem
    config_path : str, optional
        Path of the configuration file
    original_error : Exception, optional
        The original exception that caused this error

    """

    def __init__(self, message: str, config_path: str | None = None, original_error: Exception | None = None):
        """Initialize the configuration error."""
        super().__init__(message, parameter_name="config", parameter_value=config_path, original_error=original_error)
        self.config_path = config_path


class FileError(Adoc2MdError):
    """Exception raised for input and output file errors.

    Parameters
    ----------
    message : str
        Description of the file error
    file_path : str, optional
        Path to the problematic file
    original_error : Exception, optional
        The original exception that caused this error

    Attributes
    ----------
    file_path : str or None
        The path to the file that caused the error

    """

    def __init__(self, message: str, file_path: str | None = None, original_error: Exception | None = None):
        """Initialize the file error with path information."""
        super().__init__(message, original_error=original_error)
        self.file_path = file_path


__all__ = [
    "Adoc2MdError",
    "ValidationError",
    "InvalidOptionsError",
    "ConfigError",
    "FileError",
]
