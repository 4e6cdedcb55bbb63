#  ___              _         _ _
# | _ \__ _ ______ | |__  ___| | |_
# |  _/ _` (_-<_-< | '_ \/ _ \ |  _|
# |_| \__,_/__/__/ |_.__/\___/_|\__|
#
# Passbolt Commander
#

class Error(Exception):
    """Base class for exceptions in this module."""
    def __init__(self, message):
        super().__init__(message)
        self.message = message

    def __str__(self):
        return self.message


class ValidationError(Error):
    """Local input is invalid. Raised before any request is sent."""
    pass


class InvalidLevelError(ValidationError):
    def __init__(self, code):
        super().__init__(f'invalid share permission type, expected one of: -1,1,7,15, got input: {code}')
        self.code = code


class NotFoundError(Error):
    def __init__(self, kind, name, message=None):
        super().__init__(message or f'{kind} "{name}" not found')
        self.kind = kind
        self.name = name


class FolderNotFoundError(NotFoundError):
    def __init__(self, name):
        super().__init__('Folder', name, f'failed to find any shared folder of name: {name}')


class SubjectNotFoundError(NotFoundError):
    def __init__(self, kind, name):
        super().__init__(kind, name, f'failed to find share target, type: {kind}, value: {name}')


class RemoteError(Error):
    """A remote call failed. The underlying message is kept verbatim."""

    def __init__(self, message, operation=None):
        super().__init__(message)
        self.operation = operation

    def __str__(self):
        if self.operation:
            return f'{self.operation}: {self.message}'
        return self.message


class PassboltApiError(RemoteError):
    """Exception raised with failed Passbolt API request
    """

    def __init__(self, result_code, message, operation=None):
        super().__init__(message, operation)
        self.result_code = result_code

    def __str__(self):
        text = f'{self.result_code or ""}: {self.message or ""}'
        if self.operation:
            return f'{self.operation}: {text}'
        return text


class OperationCancelledError(Error):
    def __init__(self, message='Operation cancelled'):
        super().__init__(message)


class DeadlineExceededError(Error):
    def __init__(self, message='Operation deadline exceeded'):
        super().__init__(message)


class CommandError(Error):
    def __init__(self, command, message):
        super().__init__(message)
        self.command = command

    def __str__(self):
        if self.command:
            return f'{self.command}: {self.message}'
        else:
            return super().__str__()
